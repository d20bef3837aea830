"""Shared exceptions for taskmatch."""


class ConfigError(Exception):
    """Raised when project configuration is invalid or missing."""

    def __init__(self, message: str, suggestion: str = ""):
        self.message = message
        self.suggestion = suggestion
        full = message
        if suggestion:
            full += f"\n  Try: {suggestion}"
        super().__init__(full)


class DataError(Exception):
    """Raised when catalog or directory records fail validation."""

    def __init__(self, source: str, reason: str, suggestion: str = ""):
        self.source = source
        self.reason = reason
        self.suggestion = suggestion
        msg = f"Invalid data in '{source}': {reason}"
        if suggestion:
            msg += f"\n  Try: {suggestion}"
        super().__init__(msg)


class TaskNotFound(Exception):
    """Raised when a task id or name is not in the catalog."""

    def __init__(self, key: str, suggestion: str = ""):
        self.key = key
        self.suggestion = suggestion or "Run 'taskmatch search <prefix>' to see matching tasks."
        msg = f"Task '{key}' not found in catalog"
        msg += f"\n  Try: {self.suggestion}"
        super().__init__(msg)


class WorkerNotFound(Exception):
    """Raised when a worker id is not in the directory."""

    def __init__(self, worker_id: str, suggestion: str = ""):
        self.worker_id = worker_id
        self.suggestion = suggestion or "Run 'taskmatch recommend <task>' to see worker ids."
        msg = f"Worker '{worker_id}' not found in directory"
        msg += f"\n  Try: {self.suggestion}"
        super().__init__(msg)


class NoTaskSelected(Exception):
    """Raised when a worker is toggled before a task has been chosen."""

    def __init__(self, suggestion: str = ""):
        self.suggestion = suggestion or "Search for a task and select it first."
        msg = "No task selected"
        msg += f"\n  Try: {self.suggestion}"
        super().__init__(msg)


class EmptySelection(Exception):
    """Raised when a commit is attempted with no workers selected."""

    def __init__(self, suggestion: str = ""):
        self.suggestion = suggestion or "Please select at least one worker."
        msg = "No workers selected"
        msg += f"\n  Try: {self.suggestion}"
        super().__init__(msg)


class CommitFailed(Exception):
    """Raised when the external commit call rejects or errors. Selection is kept."""

    def __init__(self, reason: str, suggestion: str = ""):
        self.reason = reason
        self.suggestion = suggestion
        msg = f"Assignment commit failed: {reason}"
        if suggestion:
            msg += f"\n  Try: {suggestion}"
        super().__init__(msg)


class CommitInProgress(Exception):
    """Raised when a commit is attempted while another one is still in flight."""

    def __init__(self, suggestion: str = ""):
        self.suggestion = suggestion or "Wait for the pending assignment to finish."
        msg = "An assignment commit is already in progress"
        msg += f"\n  Try: {self.suggestion}"
        super().__init__(msg)
