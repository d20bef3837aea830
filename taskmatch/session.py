"""Assignment session — search, recommend, select, review, and commit for one operator."""

from concurrent.futures import Future

from taskmatch.catalog import TaskCatalog, TaskType
from taskmatch.committer import DEFAULT_SUCCESS_MESSAGE, AssignmentCommitter, CommitFn, CommitResult
from taskmatch.directory import WorkerDirectory, WorkerRecord
from taskmatch.events import Event, EventBus
from taskmatch.exceptions import CommitFailed, EmptySelection, NoTaskSelected
from taskmatch.log import get_logger
from taskmatch.ranker import Recommender
from taskmatch.search import search
from taskmatch.selection import SelectedWorker, SelectionStore
from taskmatch.summary import group

logger = get_logger(__name__)


class AssignmentSession:
    """Holds the operator's query, chosen task, and pending selection.

    Search results, recommendations, and the grouped summary are derived
    on every read from the current inputs.
    """

    def __init__(self, catalog: TaskCatalog, directory: WorkerDirectory, commit_fn: CommitFn,
                 events: EventBus | None = None,
                 success_message: str = DEFAULT_SUCCESS_MESSAGE):
        self.catalog = catalog
        self.directory = directory
        self.events = events or EventBus()
        self.recommender = Recommender(directory)
        self.store = SelectionStore()
        self.committer = AssignmentCommitter(self.store, commit_fn, success_message)
        self.query = ""
        self.selected_task: TaskType | None = None

    def _emit(self, event_type: str, **data) -> None:
        self.events.emit(Event(type=event_type, source="session", data=data))

    # Search

    def set_query(self, query: str) -> list[TaskType]:
        """Update the search query. A new query deselects the current task."""
        self.query = query
        self.selected_task = None
        return self.tasks

    @property
    def tasks(self) -> list[TaskType]:
        return search(self.query, self.catalog)

    def select_task(self, task_id: str) -> TaskType:
        """Choose the task to recommend workers for. Raises TaskNotFound."""
        self.selected_task = self.catalog.get(task_id)
        return self.selected_task

    # Recommendations

    def recommended_workers(self) -> list[WorkerRecord]:
        if self.selected_task is None:
            return []
        return self.recommender.recommend(self.selected_task)

    def recommendations(self) -> list[dict]:
        """Ranked workers for the chosen task, each marked with whether it is already selected."""
        rows = []
        for worker in self.recommended_workers():
            row = worker.to_dict()
            row["selected"] = self.store.contains(worker.id)
            rows.append(row)
        return rows

    # Selection

    def toggle(self, worker_id: str) -> None:
        """Select a directory worker for the chosen task; already-selected workers are left as is."""
        if self.selected_task is None:
            raise NoTaskSelected()
        worker = self.directory.get(worker_id)
        if self.store.contains(worker_id):
            return
        self.store.toggle(worker, self.selected_task)
        self._emit("selection.added", worker_id=worker_id, task=self.selected_task.name)

    def remove(self, worker_id: str) -> None:
        if not self.store.contains(worker_id):
            return
        self.store.remove(worker_id)
        self._emit("selection.removed", worker_id=worker_id)

    @property
    def selection(self) -> tuple[SelectedWorker, ...]:
        return self.store.list()

    @property
    def summary(self) -> dict[str, list[SelectedWorker]]:
        return group(self.store.list())

    # Commit

    def _report(self, result: CommitResult, count: int) -> None:
        if result.ignored:
            return
        self._emit("commit.succeeded", message=result.message, workers=count)
        if self.store.is_empty:
            self._emit("selection.cleared")

    def commit(self) -> CommitResult:
        """Commit synchronously, publishing the outcome on the event bus."""
        count = len(self.store)
        try:
            result = self.committer.commit()
        except EmptySelection as e:
            self._emit("commit.rejected", message=e.suggestion)
            raise
        except CommitFailed as e:
            self._emit("commit.failed", message=e.reason)
            raise
        self._report(result, count)
        return result

    def commit_async(self) -> Future:
        """Start a background commit; the outcome is published when the Future resolves."""
        count = len(self.store)
        try:
            future = self.committer.commit_async()
        except EmptySelection as e:
            self._emit("commit.rejected", message=e.suggestion)
            raise

        def _done(f: Future) -> None:
            if f.cancelled():
                return
            error = f.exception()
            if isinstance(error, CommitFailed):
                self._emit("commit.failed", message=error.reason)
            elif error is None:
                self._report(f.result(), count)

        future.add_done_callback(_done)
        return future

    def close(self) -> None:
        """Tear down the session; any in-flight commit response is ignored."""
        self.committer.detach()
