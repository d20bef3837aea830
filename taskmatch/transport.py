"""HTTP commit transport — posts a grouped selection to an assignment endpoint."""

import os

import httpx

from taskmatch.committer import CommitResult
from taskmatch.exceptions import CommitFailed
from taskmatch.log import get_logger
from taskmatch.selection import SelectedWorker
from taskmatch.summary import group

logger = get_logger(__name__)


def build_payload(selection: tuple[SelectedWorker, ...]) -> dict:
    """Shape the selection as {"assignments": [{task, workers: [{id, name}]}]}, grouped by task."""
    return {
        "assignments": [
            {
                "task": task_name,
                "workers": [{"id": e.id, "name": e.name} for e in entries],
            }
            for task_name, entries in group(selection).items()
        ]
    }


class HttpCommitTransport:
    """Callable commit function for AssignmentCommitter backed by an HTTP POST."""

    def __init__(self, endpoint: str, api_token: str | None = None, timeout: float = 15.0):
        self.endpoint = endpoint
        self.api_token = api_token if api_token is not None else os.environ.get("TASKMATCH_COMMIT_TOKEN", "")
        self.timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    def __call__(self, selection: tuple[SelectedWorker, ...]) -> CommitResult:
        payload = build_payload(selection)
        try:
            resp = httpx.post(
                self.endpoint,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CommitFailed(
                f"endpoint returned {e.response.status_code}: {_error_message(e.response)}",
            ) from e
        except (httpx.ConnectError, httpx.TimeoutException) as e:
            raise CommitFailed(
                f"could not reach {self.endpoint}: {e}",
                suggestion="Check commit.endpoint in taskmatch.yaml and retry.",
            ) from e

        message = ""
        try:
            body = resp.json()
            if isinstance(body, dict):
                message = str(body.get("message", ""))
        except ValueError:
            pass
        logger.debug("Commit endpoint accepted %d workers", len(selection))
        return CommitResult(success=True, message=message)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)
