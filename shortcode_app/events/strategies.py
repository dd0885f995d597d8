"""
Event sink strategies for structured diagnostics.

The registry reports what happens to it (load/save failures, cleanup counts,
misses, creations, clicks) through an injected sink instead of a global
logger, so tests can capture or silence it.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import logging
import threading

from pydantic import BaseModel, Field


class LogEntry(BaseModel):
    """One diagnostic message"""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    level: str
    message: str
    data: Optional[Dict[str, Any]] = None


class EventSink(ABC):
    """
    Abstract base class for diagnostic sinks.

    Sinks are fire-and-forget: callers never act on their outcome.
    """

    @abstractmethod
    def info(self, message: str, **data: Any) -> None:
        pass

    @abstractmethod
    def warn(self, message: str, **data: Any) -> None:
        pass

    @abstractmethod
    def error(self, message: str, **data: Any) -> None:
        pass


class LoggingEventSink(EventSink):
    """
    Sink that forwards to the standard logging module.

    Structured data is passed both in the message and as `extra` so log
    formatters that understand it can pick it up.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("shortcode_app.events")

    def _log(self, level: int, message: str, data: Dict[str, Any]) -> None:
        if data:
            self.logger.log(level, "%s %s", message, data, extra={"event_data": data})
        else:
            self.logger.log(level, message)

    def info(self, message: str, **data: Any) -> None:
        self._log(logging.INFO, message, data)

    def warn(self, message: str, **data: Any) -> None:
        self._log(logging.WARNING, message, data)

    def error(self, message: str, **data: Any) -> None:
        self._log(logging.ERROR, message, data)


class MemoryEventSink(EventSink):
    """
    Sink that keeps every entry in memory.

    Used by tests and by anything that wants to show recent diagnostics.
    """

    def __init__(self):
        self._logs: List[LogEntry] = []
        self._lock = threading.Lock()

    def _append(self, level: str, message: str, data: Dict[str, Any]) -> None:
        entry = LogEntry(level=level, message=message, data=data or None)
        with self._lock:
            self._logs.append(entry)

    def info(self, message: str, **data: Any) -> None:
        self._append("info", message, data)

    def warn(self, message: str, **data: Any) -> None:
        self._append("warn", message, data)

    def error(self, message: str, **data: Any) -> None:
        self._append("error", message, data)

    def get_logs(self, level: Optional[str] = None) -> List[LogEntry]:
        with self._lock:
            logs = list(self._logs)
        if level is not None:
            logs = [entry for entry in logs if entry.level == level]
        return logs

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [entry.message for entry in self.get_logs(level)]

    def clear_logs(self) -> None:
        with self._lock:
            self._logs.clear()


class NullEventSink(EventSink):
    """
    Null Object Pattern - sink that drops everything.
    """

    def info(self, message: str, **data: Any) -> None:
        pass

    def warn(self, message: str, **data: Any) -> None:
        pass

    def error(self, message: str, **data: Any) -> None:
        pass


def emit(sink: EventSink, level: str, message: str, **data: Any) -> None:
    """
    Send one diagnostic to `sink` without letting the sink fail the caller.

    Args:
        sink: Destination sink
        level: "info", "warn" or "error"
        message: Human-readable message
        **data: Structured context
    """
    try:
        getattr(sink, level)(message, **data)
    except Exception:
        logging.getLogger(__name__).exception("Event sink failed while reporting: %s", message)
