"""Shared test fixtures."""

import logging

import pytest
import yaml

from taskmatch.catalog import TaskCatalog
from taskmatch.config import ProjectConfig
from taskmatch.directory import WorkerDirectory
from taskmatch.seed import SEED_TASKS, SEED_WORKERS
from taskmatch.selection import SelectionStore


PROJECT_YAML = {
    "project": {"name": "Test Estate"},
    "commit": {"endpoint": "https://assign.example.test/api/assignments", "timeout": 5},
    "logging": {"level": "INFO"},
}


@pytest.fixture(autouse=True)
def _reset_logging():
    """Keep handlers from one test out of the next."""
    yield
    root = logging.getLogger("taskmatch")
    for h in root.handlers[:]:
        h.close()
    root.handlers.clear()


@pytest.fixture
def tmp_project(tmp_path):
    """Create a temporary project directory with taskmatch.yaml."""
    (tmp_path / "taskmatch.yaml").write_text(yaml.dump(PROJECT_YAML))
    return tmp_path


@pytest.fixture
def config(tmp_project):
    """Load a ProjectConfig from the temp project."""
    return ProjectConfig.load(tmp_project)


@pytest.fixture
def catalog():
    return TaskCatalog(SEED_TASKS)


@pytest.fixture
def directory(catalog):
    return WorkerDirectory(SEED_WORKERS, known_skills=catalog.names())


@pytest.fixture
def store():
    return SelectionStore()


@pytest.fixture
def write_data(tmp_project):
    """Factory fixture to write tasks/workers YAML and point taskmatch.yaml at them."""
    def _write(tasks=None, workers=None, **data_opts):
        data = dict(data_opts)
        if tasks is not None:
            (tmp_project / "tasks.yaml").write_text(yaml.dump({"tasks": tasks}))
            data["tasks"] = "tasks.yaml"
        if workers is not None:
            (tmp_project / "workers.yaml").write_text(yaml.dump({"workers": workers}))
            data["workers"] = "workers.yaml"
        raw = dict(PROJECT_YAML, data=data)
        (tmp_project / "taskmatch.yaml").write_text(yaml.dump(raw))
        return tmp_project
    return _write
