"""Task catalog — the fixed set of task types workers are recommended against."""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from taskmatch.exceptions import DataError, TaskNotFound
from taskmatch.log import get_logger
from taskmatch.validation import check_unique_ids, require_text

logger = get_logger(__name__)


@dataclass(frozen=True)
class TaskType:
    id: str
    name: str

    @staticmethod
    def from_dict(raw: dict, source: str = "tasks") -> "TaskType":
        if not isinstance(raw, dict):
            raise DataError(source, f"task entry must be a mapping (got {raw!r})")
        return TaskType(
            id=require_text(raw, "id", source),
            name=require_text(raw, "name", source),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


class TaskCatalog:
    """Ordered, read-only collection of TaskType. Insertion order is preserved."""

    def __init__(self, tasks: Iterable[TaskType | dict] = (), source: str = "tasks"):
        parsed = [t if isinstance(t, TaskType) else TaskType.from_dict(t, source) for t in tasks]
        check_unique_ids([t.to_dict() for t in parsed], source)
        self.source = source
        self._tasks: tuple[TaskType, ...] = tuple(parsed)
        self._by_id = {t.id: t for t in self._tasks}

    @staticmethod
    def load(path: Path) -> "TaskCatalog":
        """Load a catalog from YAML: a list of {id, name} or a mapping with a 'tasks' key."""
        path = Path(path)
        if not path.exists():
            raise DataError(str(path), "file not found",
                            suggestion="Check data.tasks in taskmatch.yaml.")
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise DataError(str(path), f"invalid YAML: {e}")

        if isinstance(raw, dict):
            raw = raw.get("tasks")
        if not isinstance(raw, list):
            raise DataError(str(path), "expected a list of tasks",
                            suggestion="Use a top-level 'tasks:' list of {id, name} entries.")

        catalog = TaskCatalog(raw, source=str(path))
        logger.debug("Loaded %d tasks from %s", len(catalog), path)
        return catalog

    @property
    def tasks(self) -> tuple[TaskType, ...]:
        return self._tasks

    def __iter__(self) -> Iterator[TaskType]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def names(self) -> set[str]:
        return {t.name for t in self._tasks}

    def get(self, task_id: str) -> TaskType:
        """Look up a task by id. Raises TaskNotFound."""
        try:
            return self._by_id[task_id]
        except KeyError:
            raise TaskNotFound(task_id) from None

    def find_by_name(self, name: str) -> TaskType:
        """Look up a task by exact name. Raises TaskNotFound."""
        for task in self._tasks:
            if task.name == name:
                return task
        raise TaskNotFound(name)
