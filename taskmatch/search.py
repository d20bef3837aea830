"""Task search — case-insensitive prefix filter over the task catalog."""

from typing import Iterable

from taskmatch.catalog import TaskType


def search(query: str, catalog: Iterable[TaskType]) -> list[TaskType]:
    """Return catalog tasks whose name starts with the query, ignoring case.

    A blank query yields no tasks rather than the whole catalog. Results keep
    catalog order; nothing is re-ranked.
    """
    prefix = (query or "").strip().lower()
    if not prefix:
        return []
    return [task for task in catalog if task.name.lower().startswith(prefix)]
