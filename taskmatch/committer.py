"""Assignment committer — hand the selection to an external commit function."""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from taskmatch.exceptions import CommitFailed, CommitInProgress, EmptySelection
from taskmatch.log import get_logger
from taskmatch.selection import SelectedWorker, SelectionStore

logger = get_logger(__name__)

DEFAULT_SUCCESS_MESSAGE = "Workers assigned successfully!"


@dataclass
class CommitResult:
    success: bool
    message: str = ""
    ignored: bool = False  # resolved after the committer was detached


CommitFn = Callable[[tuple[SelectedWorker, ...]], Optional[CommitResult]]


class AssignmentCommitter:
    """Validates and commits a SelectionStore through `commit_fn`.

    Only one commit may be in flight at a time; a second attempt raises
    CommitInProgress instead of queueing. The store is only modified after
    commit_fn succeeds.
    """

    def __init__(self, store: SelectionStore, commit_fn: CommitFn,
                 success_message: str = DEFAULT_SUCCESS_MESSAGE):
        self.store = store
        self.commit_fn = commit_fn
        self.success_message = success_message
        self._lock = threading.Lock()
        self._in_flight = False
        self._detached = False
        self._pool: ThreadPoolExecutor | None = None

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    @property
    def can_commit(self) -> bool:
        """True when the commit trigger should be enabled."""
        return not self.in_flight and not self.store.is_empty

    def _begin(self) -> tuple[SelectedWorker, ...]:
        with self._lock:
            if self._in_flight:
                raise CommitInProgress()
            selection = self.store.list()
            if not selection:
                logger.info("Commit rejected: empty selection")
                raise EmptySelection()
            self._in_flight = True
            return selection

    def _finish(self) -> None:
        with self._lock:
            self._in_flight = False

    def _run(self, selection: tuple[SelectedWorker, ...]) -> CommitResult:
        logger.info("Committing assignment: workers=%d", len(selection))
        try:
            try:
                outcome = self.commit_fn(selection)
            except CommitFailed as e:
                logger.warning("Assignment commit failed: %s", e.reason)
                raise
            except Exception as e:
                logger.warning("Assignment commit failed: %s", e)
                raise CommitFailed(str(e) or type(e).__name__) from e

            if outcome is not None and not outcome.success:
                reason = outcome.message or "commit rejected"
                logger.warning("Assignment commit rejected: %s", reason)
                raise CommitFailed(reason)

            message = (outcome.message if outcome is not None and outcome.message
                       else self.success_message)

            if self._detached:
                logger.info("Ignoring commit response received after detach")
                return CommitResult(success=True, message=message, ignored=True)

            # Only the committed snapshot goes; anything selected since stays pending
            self.store.discard(selection)
            logger.info("Assignment committed: workers=%d", len(selection))
            return CommitResult(success=True, message=message)
        finally:
            self._finish()

    def commit(self) -> CommitResult:
        """Commit the current selection synchronously.

        Raises EmptySelection before calling commit_fn when nothing is
        selected, CommitInProgress if another commit is pending, and
        CommitFailed (selection untouched) when commit_fn errors or
        reports failure.
        """
        selection = self._begin()
        return self._run(selection)

    def commit_async(self) -> Future:
        """Start a commit on a background thread and return its Future.

        Validation happens immediately in the caller, so EmptySelection and
        CommitInProgress are raised here rather than through the Future.
        """
        selection = self._begin()
        if self._pool is None:
            self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="taskmatch-commit")
        try:
            return self._pool.submit(self._run, selection)
        except RuntimeError:
            self._finish()
            raise

    def detach(self) -> None:
        """Mark the owning view as gone; a late commit response will not touch the store."""
        self._detached = True
        if self._pool is not None:
            self._pool.shutdown(wait=False)
            self._pool = None
