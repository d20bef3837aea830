"""Worker directory — the fixed set of worker records with skill, score, and availability."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from taskmatch.exceptions import DataError, WorkerNotFound
from taskmatch.log import get_logger
from taskmatch.validation import (
    check_unique_ids,
    require_availability,
    require_int,
    require_labels,
    require_text,
)

logger = get_logger(__name__)


class Availability(Enum):
    AVAILABLE = "Available"
    BUSY = "Busy"


@dataclass(frozen=True)
class WorkerRecord:
    id: str
    name: str
    skill: str                # references a TaskType.name
    suitability_score: int    # 0-100, computed upstream
    availability: Availability = Availability.AVAILABLE
    experience: int = 0       # years
    current_tasks: tuple[str, ...] = field(default_factory=tuple)

    @staticmethod
    def from_dict(raw: dict, source: str = "workers") -> "WorkerRecord":
        """Build a record from a mapping. Accepts camelCase keys from exported data."""
        if not isinstance(raw, dict):
            raise DataError(source, f"worker entry must be a mapping (got {raw!r})")
        raw = dict(raw)
        if "suitabilityScore" in raw and "suitability_score" not in raw:
            raw["suitability_score"] = raw.pop("suitabilityScore")
        if "currentTasks" in raw and "current_tasks" not in raw:
            raw["current_tasks"] = raw.pop("currentTasks")

        worker_id = require_text(raw, "id", source)
        where = f"{source}:{worker_id}"
        return WorkerRecord(
            id=worker_id,
            name=require_text(raw, "name", where),
            skill=require_text(raw, "skill", where),
            suitability_score=require_int(raw, "suitability_score", where, minimum=0, maximum=100),
            availability=Availability(require_availability(raw, where)),
            experience=require_int(raw, "experience", where, minimum=0) if "experience" in raw else 0,
            current_tasks=require_labels(raw, "current_tasks", where),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "skill": self.skill,
            "suitability_score": self.suitability_score,
            "availability": self.availability.value,
            "experience": self.experience,
            "current_tasks": list(self.current_tasks),
        }


class WorkerDirectory:
    """Ordered, read-only collection of WorkerRecord. Directory order is the tie-break order."""

    def __init__(self, workers: Iterable[WorkerRecord | dict] = (), source: str = "workers",
                 known_skills: set[str] | None = None, strict_skills: bool = False):
        parsed = [w if isinstance(w, WorkerRecord) else WorkerRecord.from_dict(w, source)
                  for w in workers]
        check_unique_ids([{"id": w.id} for w in parsed], source)

        if known_skills is not None:
            for w in parsed:
                if w.skill in known_skills:
                    continue
                if strict_skills:
                    raise DataError(
                        f"{source}:{w.id}",
                        f"skill '{w.skill}' does not name a catalog task",
                        suggestion="Use a task name from the catalog as the worker's skill.",
                    )
                logger.warning("Worker %s has skill '%s' with no matching task", w.id, w.skill)

        self.source = source
        self._workers: tuple[WorkerRecord, ...] = tuple(parsed)
        self._by_id = {w.id: w for w in self._workers}

    @staticmethod
    def load(path: Path, known_skills: set[str] | None = None,
             strict_skills: bool = False) -> "WorkerDirectory":
        """Load a directory from YAML: a list of workers or a mapping with a 'workers' key."""
        path = Path(path)
        if not path.exists():
            raise DataError(str(path), "file not found",
                            suggestion="Check data.workers in taskmatch.yaml.")
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise DataError(str(path), f"invalid YAML: {e}")

        if isinstance(raw, dict):
            raw = raw.get("workers")
        if not isinstance(raw, list):
            raise DataError(str(path), "expected a list of workers",
                            suggestion="Use a top-level 'workers:' list.")

        directory = WorkerDirectory(raw, source=str(path), known_skills=known_skills,
                                    strict_skills=strict_skills)
        logger.debug("Loaded %d workers from %s", len(directory), path)
        return directory

    @property
    def workers(self) -> tuple[WorkerRecord, ...]:
        return self._workers

    def __iter__(self) -> Iterator[WorkerRecord]:
        return iter(self._workers)

    def __len__(self) -> int:
        return len(self._workers)

    def __contains__(self, worker_id: object) -> bool:
        return worker_id in self._by_id

    def get(self, worker_id: str) -> WorkerRecord:
        """Look up a worker by id. Raises WorkerNotFound."""
        try:
            return self._by_id[worker_id]
        except KeyError:
            raise WorkerNotFound(worker_id) from None
