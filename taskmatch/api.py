"""JSON API — Flask app exposing an assignment session to a front end."""

import hmac
import os

from flask import Flask, jsonify, request

from taskmatch.exceptions import (
    CommitFailed,
    CommitInProgress,
    EmptySelection,
    NoTaskSelected,
    TaskNotFound,
    WorkerNotFound,
)
from taskmatch.log import get_logger
from taskmatch.search import search
from taskmatch.session import AssignmentSession
from taskmatch.summary import summary_rows

logger = get_logger(__name__)


def create_api_app(session: AssignmentSession, auth_token: str | None = None) -> Flask:
    """Create a Flask app bound to one AssignmentSession.

    Args:
        auth_token: Optional bearer token. Falls back to TASKMATCH_API_TOKEN
                    env var. Empty string = no auth.
    """
    app = Flask(__name__)
    token = auth_token if auth_token is not None else os.getenv("TASKMATCH_API_TOKEN", "")

    @app.before_request
    def check_auth():
        if not token or request.endpoint == "health":
            return None
        provided = (request.headers.get("Authorization") or "").removeprefix("Bearer ").strip()
        if provided and hmac.compare_digest(provided, token):
            return None
        logger.warning("API auth failure from %s", request.remote_addr)
        return jsonify({"error": "unauthorized"}), 401

    def _error(exc: Exception, status: int):
        message = str(exc).split("\n")[0]
        body = {"error": message}
        suggestion = getattr(exc, "suggestion", "")
        if suggestion:
            body["suggestion"] = suggestion
        return jsonify(body), status

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/tasks")
    def tasks():
        query = request.args.get("q", "")
        results = search(query, session.catalog)
        return jsonify({"query": query, "tasks": [t.to_dict() for t in results]})

    @app.route("/tasks/<task_id>/select", methods=["POST"])
    def select_task(task_id):
        try:
            task = session.select_task(task_id)
        except TaskNotFound as e:
            return _error(e, 404)
        return jsonify({"task": task.to_dict(), "recommendations": session.recommendations()})

    @app.route("/recommendations")
    def recommendations():
        task = session.selected_task
        return jsonify({
            "task": task.to_dict() if task else None,
            "recommendations": session.recommendations(),
        })

    @app.route("/selection", methods=["GET"])
    def get_selection():
        return jsonify({
            "selection": [e.to_dict() for e in session.selection],
            "can_commit": session.committer.can_commit,
        })

    @app.route("/selection", methods=["POST"])
    def add_selection():
        body = request.get_json(silent=True) or {}
        worker_id = body.get("worker_id")
        if not worker_id:
            return jsonify({"error": "missing worker_id"}), 400
        try:
            session.toggle(worker_id)
        except NoTaskSelected as e:
            return _error(e, 409)
        except WorkerNotFound as e:
            return _error(e, 404)
        return jsonify({"selection": [e.to_dict() for e in session.selection]})

    @app.route("/selection/<worker_id>", methods=["DELETE"])
    def remove_selection(worker_id):
        session.remove(worker_id)
        return jsonify({"selection": [e.to_dict() for e in session.selection]})

    @app.route("/summary")
    def summary():
        return jsonify({"groups": summary_rows(session.summary)})

    @app.route("/commit", methods=["POST"])
    def commit():
        try:
            result = session.commit()
        except EmptySelection as e:
            return _error(e, 400)
        except CommitInProgress as e:
            return _error(e, 409)
        except CommitFailed as e:
            return _error(e, 502)
        return jsonify({"success": result.success, "message": result.message})

    return app
