"""
Event sink module for registry diagnostics.
Implements Strategy Pattern so diagnostics can go to logging, memory, or nowhere.
"""

from .strategies import EventSink, LogEntry, LoggingEventSink, MemoryEventSink, NullEventSink, emit

__all__ = [
    "EventSink",
    "LogEntry",
    "LoggingEventSink",
    "MemoryEventSink",
    "NullEventSink",
    "emit",
]
