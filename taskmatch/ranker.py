"""Recommendation ranker — select workers for a task, best suitability first."""

from typing import Iterable

from taskmatch.catalog import TaskType
from taskmatch.directory import WorkerDirectory, WorkerRecord
from taskmatch.log import get_logger

logger = get_logger(__name__)


def recommend(task: TaskType, directory: Iterable[WorkerRecord]) -> list[WorkerRecord]:
    """Return workers whose skill equals the task name, ordered by suitability (high to low).

    Skill matching is exact and case-sensitive. Availability is not filtered;
    busy workers are still listed so the operator can judge. sorted() is
    stable, so equal scores keep directory order.
    """
    matches = [w for w in directory if w.skill == task.name]
    return sorted(matches, key=lambda w: w.suitability_score, reverse=True)


class Recommender:
    """Routes a task to the ranked workers of a directory."""

    def __init__(self, directory: WorkerDirectory):
        self.directory = directory

    def recommend(self, task: TaskType, limit: int | None = None) -> list[WorkerRecord]:
        """Ranked workers for task, optionally truncated to the top `limit`.

        Recomputed on every call; results are never cached.
        """
        ranked = recommend(task, self.directory)
        logger.debug("Recommendation: task=%s, matches=%d", task.name, len(ranked))
        if limit is not None:
            ranked = ranked[:max(0, limit)]
        return ranked
