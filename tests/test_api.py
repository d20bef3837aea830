"""Tests for taskmatch/api.py — Flask JSON API over a session."""

import os
from unittest.mock import patch

import pytest

from taskmatch.api import create_api_app
from taskmatch.committer import CommitResult
from taskmatch.exceptions import CommitFailed
from taskmatch.session import AssignmentSession


@pytest.fixture
def api_env(catalog, directory):
    """Session plus test client with auth disabled."""
    outcomes = []

    def commit_fn(selection):
        if outcomes:
            raise outcomes.pop(0)
        return CommitResult(success=True)

    session = AssignmentSession(catalog, directory, commit_fn)
    app = create_api_app(session, auth_token="")
    app.config["TESTING"] = True
    return app.test_client(), session, outcomes


class TestApiAuth:
    def test_health_no_auth(self, catalog, directory):
        """/health is open even with a token configured."""
        session = AssignmentSession(catalog, directory, lambda s: None)
        client = create_api_app(session, auth_token="s3cret").test_client()
        assert client.get("/health").get_json() == {"status": "ok"}

    def test_requires_token(self, catalog, directory):
        """401 without or with a wrong bearer token."""
        session = AssignmentSession(catalog, directory, lambda s: None)
        client = create_api_app(session, auth_token="s3cret").test_client()
        assert client.get("/tasks?q=h").status_code == 401
        assert client.get("/tasks?q=h", headers={"Authorization": "Bearer nope"}).status_code == 401
        assert client.get("/tasks?q=h", headers={"Authorization": "Bearer s3cret"}).status_code == 200

    def test_token_from_env(self, catalog, directory):
        """TASKMATCH_API_TOKEN is used when no token is passed."""
        session = AssignmentSession(catalog, directory, lambda s: None)
        with patch.dict(os.environ, {"TASKMATCH_API_TOKEN": "env-secret"}):
            client = create_api_app(session).test_client()
        assert client.get("/summary").status_code == 401


class TestApiFlow:
    def test_search(self, api_env):
        """GET /tasks?q= returns prefix matches."""
        client, _, _ = api_env
        data = client.get("/tasks?q=pru").get_json()
        assert data["tasks"] == [{"id": "t4", "name": "Pruning"}]

    def test_search_keeps_selected_task(self, api_env):
        """GET /tasks is read-only: the chosen task survives a lookup."""
        client, session, _ = api_env
        client.post("/tasks/t1/select")
        client.get("/tasks?q=pru")
        assert session.selected_task.id == "t1"
        assert client.get("/recommendations").get_json()["task"]["name"] == "Harvesting"

    def test_blank_search(self, api_env):
        """Blank query returns no tasks."""
        client, _, _ = api_env
        assert client.get("/tasks?q=%20").get_json()["tasks"] == []

    def test_select_task_returns_ranked_workers(self, api_env):
        """Selecting a task returns its recommendations."""
        client, _, _ = api_env
        data = client.post("/tasks/t1/select").get_json()
        assert [w["name"] for w in data["recommendations"]] == ["Ahmad", "Faiz", "Hafiz", "Siti"]

    def test_select_unknown_task(self, api_env):
        """404 for an unknown task id."""
        client, _, _ = api_env
        resp = client.post("/tasks/t99/select")
        assert resp.status_code == 404
        assert "suggestion" in resp.get_json()

    def test_add_without_task(self, api_env):
        """409 when no task is selected."""
        client, _, _ = api_env
        assert client.post("/selection", json={"worker_id": "w1"}).status_code == 409

    def test_add_missing_worker_id(self, api_env):
        """400 when worker_id is missing."""
        client, _, _ = api_env
        client.post("/tasks/t1/select")
        assert client.post("/selection", json={}).status_code == 400

    def test_add_unknown_worker(self, api_env):
        """404 for an unknown worker id."""
        client, _, _ = api_env
        client.post("/tasks/t1/select")
        assert client.post("/selection", json={"worker_id": "w99"}).status_code == 404

    def test_select_review_remove(self, api_env):
        """Select across tasks, review the summary, remove a worker."""
        client, _, _ = api_env
        client.post("/tasks/t1/select")
        client.post("/selection", json={"worker_id": "w1"})
        client.post("/tasks/t4/select")
        client.post("/selection", json={"worker_id": "w6"})

        recs = client.get("/recommendations").get_json()["recommendations"]
        assert recs == [dict(recs[0], selected=True)]

        groups = client.get("/summary").get_json()["groups"]
        assert [g["heading"] for g in groups] == ["HARVESTING", "PRUNING"]

        data = client.delete("/selection/w1").get_json()
        assert [e["id"] for e in data["selection"]] == ["w6"]

    def test_commit_empty(self, api_env):
        """400 on empty commit."""
        client, _, _ = api_env
        resp = client.post("/commit")
        assert resp.status_code == 400
        assert client.get("/selection").get_json()["can_commit"] is False

    def test_commit_success(self, api_env):
        """Successful commit clears the selection."""
        client, session, _ = api_env
        client.post("/tasks/t1/select")
        client.post("/selection", json={"worker_id": "w1"})
        data = client.post("/commit").get_json()
        assert data == {"success": True, "message": "Workers assigned successfully!"}
        assert session.selection == ()

    def test_commit_failure(self, api_env):
        """502 on external failure; selection kept."""
        client, session, outcomes = api_env
        outcomes.append(CommitFailed("upstream timeout"))
        client.post("/tasks/t1/select")
        client.post("/selection", json={"worker_id": "w1"})
        resp = client.post("/commit")
        assert resp.status_code == 502
        assert "upstream timeout" in resp.get_json()["error"]
        assert [e.id for e in session.selection] == ["w1"]
