"""Project configuration loader — reads taskmatch.yaml + .env."""

import warnings
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv

from taskmatch.catalog import TaskCatalog
from taskmatch.committer import DEFAULT_SUCCESS_MESSAGE
from taskmatch.directory import WorkerDirectory
from taskmatch.exceptions import ConfigError
from taskmatch.seed import SEED_TASKS, SEED_WORKERS

CONFIG_FILENAME = "taskmatch.yaml"


def _section(raw: dict, key: str) -> dict:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(
            f"{CONFIG_FILENAME} {key} must be a mapping",
            suggestion=f"Write '{key}:' as a section of key: value pairs.",
        )
    return value


@dataclass
class DataConfig:
    tasks: str = ""    # empty = built-in seed tasks
    workers: str = ""  # empty = built-in seed workers
    strict_skills: bool = False


@dataclass
class CommitConfig:
    endpoint: str = ""  # empty = no remote endpoint configured
    timeout: float = 15.0
    success_message: str = DEFAULT_SUCCESS_MESSAGE


@dataclass
class ApiConfig:
    host: str = "127.0.0.1"
    port: int = 5050


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = ""  # empty = stderr only


@dataclass
class ProjectConfig:
    name: str
    project_dir: Path
    data: DataConfig = field(default_factory=DataConfig)
    commit: CommitConfig = field(default_factory=CommitConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def load(project_dir: Path) -> "ProjectConfig":
        """Load project configuration from taskmatch.yaml and .env in project_dir."""
        project_dir = Path(project_dir)

        env_file = project_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)
            try:
                mode = env_file.stat().st_mode
                if mode & 0o077:
                    warnings.warn(
                        f".env file at {env_file} is group/other readable (mode {oct(mode)}). "
                        "Run: chmod 600 .env",
                        stacklevel=2,
                    )
            except OSError:
                pass

        config_path = project_dir / CONFIG_FILENAME
        if not config_path.exists():
            raise ConfigError(
                f"{CONFIG_FILENAME} not found in {project_dir}",
                suggestion=f"Create {CONFIG_FILENAME} with at least a 'project: {{name: ...}}' section.",
            )

        try:
            raw = yaml.safe_load(config_path.read_text())
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {CONFIG_FILENAME}: {e}")

        if not isinstance(raw, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must be a YAML mapping")

        project = raw.get("project")
        if not isinstance(project, dict) or not project.get("name"):
            raise ConfigError(
                f"{CONFIG_FILENAME} project.name is required",
                suggestion="Add a 'project' section with a name.",
            )

        data_raw = _section(raw, "data")
        data = DataConfig(
            tasks=data_raw.get("tasks", ""),
            workers=data_raw.get("workers", ""),
            strict_skills=bool(data_raw.get("strict_skills", False)),
        )

        commit_raw = _section(raw, "commit")
        try:
            timeout = float(commit_raw.get("timeout", 15.0))
        except (TypeError, ValueError):
            raise ConfigError(
                f"{CONFIG_FILENAME} commit.timeout must be a number",
                suggestion="Use a timeout in seconds, e.g. 'timeout: 15'.",
            )
        commit = CommitConfig(
            endpoint=commit_raw.get("endpoint", ""),
            timeout=timeout,
            success_message=commit_raw.get("success_message", DEFAULT_SUCCESS_MESSAGE),
        )

        api_raw = _section(raw, "api")
        try:
            port = int(api_raw.get("port", 5050))
        except (TypeError, ValueError):
            raise ConfigError(
                f"{CONFIG_FILENAME} api.port must be an integer",
                suggestion="Use a port number, e.g. 'port: 5050'.",
            )
        api = ApiConfig(host=api_raw.get("host", "127.0.0.1"), port=port)

        log_raw = _section(raw, "logging")
        logging_config = LoggingConfig(
            level=log_raw.get("level", "INFO"),
            file=log_raw.get("file", ""),
        )

        return ProjectConfig(
            name=project["name"],
            project_dir=project_dir,
            data=data,
            commit=commit,
            api=api,
            logging=logging_config,
        )

    def _resolve(self, path: str) -> Path:
        p = Path(path)
        return p if p.is_absolute() else self.project_dir / p

    def load_catalog(self) -> TaskCatalog:
        """The configured task catalog, or the built-in seed tasks."""
        if not self.data.tasks:
            return TaskCatalog(SEED_TASKS, source="seed:tasks")
        return TaskCatalog.load(self._resolve(self.data.tasks))

    def load_directory(self, catalog: TaskCatalog | None = None) -> WorkerDirectory:
        """The configured worker directory, or the built-in seed workers.

        When a catalog is given, worker skills are checked against its task names.
        """
        known = catalog.names() if catalog is not None else None
        if not self.data.workers:
            return WorkerDirectory(SEED_WORKERS, source="seed:workers",
                                   known_skills=known, strict_skills=self.data.strict_skills)
        return WorkerDirectory.load(self._resolve(self.data.workers), known_skills=known,
                                    strict_skills=self.data.strict_skills)

    def log_path(self) -> Path | None:
        return self._resolve(self.logging.file) if self.logging.file else None
