"""Selection store — workers chosen across one or more tasks, pending assignment."""

import threading
from dataclasses import dataclass
from typing import Iterable, Iterator

from taskmatch.catalog import TaskType
from taskmatch.directory import WorkerRecord
from taskmatch.log import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SelectedWorker:
    """A worker record tagged with the task it was selected for."""

    worker: WorkerRecord
    task: str  # TaskType.name at selection time; never re-tagged

    @property
    def id(self) -> str:
        return self.worker.id

    @property
    def name(self) -> str:
        return self.worker.name

    def to_dict(self) -> dict:
        data = self.worker.to_dict()
        data["task"] = self.task
        return data


class SelectionStore:
    """Ordered selection, unique by worker id across all tasks.

    A worker can be pending for at most one task: the first toggle wins and
    later toggles for the same id are ignored, whatever task they name.
    Mutations hold a lock so a background commit can discard entries while
    the operator keeps selecting.
    """

    def __init__(self):
        self._entries: list[SelectedWorker] = []
        self._lock = threading.Lock()

    def toggle(self, worker: WorkerRecord, for_task: TaskType) -> None:
        """Append worker tagged with for_task.name unless its id is already selected."""
        with self._lock:
            if any(e.id == worker.id for e in self._entries):
                logger.debug("Selection unchanged: %s already selected", worker.id)
                return
            self._entries.append(SelectedWorker(worker=worker, task=for_task.name))
        logger.debug("Selected %s for %s", worker.id, for_task.name)

    def remove(self, worker_id: str) -> None:
        """Drop the entry with worker_id. Unknown ids are ignored."""
        with self._lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if e.id != worker_id]
            removed = len(self._entries) != before
        if removed:
            logger.debug("Removed %s from selection", worker_id)

    def discard(self, entries: Iterable[SelectedWorker]) -> int:
        """Drop exactly these entries, matched by identity. Returns how many were dropped.

        An entry for the same worker that was re-selected after `entries`
        was taken is a different object and stays.
        """
        gone = {id(e) for e in entries}
        with self._lock:
            before = len(self._entries)
            self._entries = [e for e in self._entries if id(e) not in gone]
            return before - len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries = []

    def list(self) -> tuple[SelectedWorker, ...]:
        """Read-only snapshot of the selection in insertion order."""
        with self._lock:
            return tuple(self._entries)

    def contains(self, worker_id: str) -> bool:
        with self._lock:
            return any(e.id == worker_id for e in self._entries)

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[SelectedWorker]:
        return iter(self.list())
