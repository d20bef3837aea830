"""Summary grouper — selection partitioned by task, for review and commit."""

from typing import Iterable

from taskmatch.selection import SelectedWorker


def group(selection: Iterable[SelectedWorker]) -> dict[str, list[SelectedWorker]]:
    """Partition the selection by task.

    Groups appear in the order their task is first seen; workers keep their
    selection order within a group. Always recomputed from the input.
    """
    grouped: dict[str, list[SelectedWorker]] = {}
    for entry in selection:
        grouped.setdefault(entry.task, []).append(entry)
    return grouped


def summary_rows(grouped: dict[str, list[SelectedWorker]]) -> list[dict]:
    """Flatten a grouped summary into display rows, one per task heading."""
    rows = []
    for task_name, entries in grouped.items():
        rows.append({
            "task": task_name,
            "heading": task_name.upper(),
            "workers": [
                {
                    "id": e.id,
                    "name": e.name,
                    "availability": e.worker.availability.value,
                    "experience": e.worker.experience,
                }
                for e in entries
            ],
        })
    return rows
