"""Event system — in-memory pub/sub used as the notification channel for the UI layer."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from taskmatch.log import get_logger

logger = get_logger(__name__)


@dataclass
class Event:
    type: str       # e.g. "selection.added", "commit.failed"
    source: str     # e.g. "session"
    data: dict = field(default_factory=dict)
    timestamp: str = ""  # auto-filled if empty


class EventBus:
    """Dispatches events to registered handlers and keeps a bounded history."""

    def __init__(self, history_size: int = 100):
        self.history_size = history_size
        self._history: list[Event] = []
        self._handlers: dict[str, list[Callable]] = {}

    def emit(self, event: Event) -> None:
        """Record an event and dispatch to type-specific, then wildcard, handlers."""
        if not event.timestamp:
            event.timestamp = datetime.now(timezone.utc).isoformat()

        self._history.append(event)
        if len(self._history) > self.history_size:
            del self._history[:-self.history_size]

        for handler in self._handlers.get(event.type, []) + self._handlers.get("*", []):
            try:
                handler(event)
            except Exception:
                logger.warning("Event handler exception swallowed: event=%s, handler=%s",
                               event.type, getattr(handler, "__name__", repr(handler)))

    def on(self, event_type: str, handler: Callable) -> None:
        """Register a handler for an event type. Use '*' for all events."""
        self._handlers.setdefault(event_type, []).append(handler)

    def off(self, event_type: str, handler: Callable) -> None:
        """Remove a handler for an event type."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def recent(self, event_type: str | None = None, limit: int = 50) -> list[Event]:
        """Recent events, newest first, optionally filtered by type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return list(reversed(events))[:limit]

    def clear(self) -> None:
        self._history.clear()
