# annomath/host/__init__.py

"""
Host runtime boundary.

`api` defines the abstract interfaces the engine consumes; `memory` provides
an in-memory implementation with JSON project files.
"""

from .api import (
    EVENT_BEFORE_STOP,
    EVENT_RUN,
    EVENT_STOP,
    FunctionEntity,
    FunctionKind,
    HostError,
    HostRuntime,
    LoggingNotifier,
    Notifier,
)
from .memory import MemoryFunction, MemoryHost, ProjectFormatError, RecordingNotifier, load_project, save_project

__all__ = [
    "EVENT_RUN",
    "EVENT_BEFORE_STOP",
    "EVENT_STOP",
    "FunctionEntity",
    "FunctionKind",
    "HostError",
    "HostRuntime",
    "LoggingNotifier",
    "Notifier",
    "MemoryFunction",
    "MemoryHost",
    "ProjectFormatError",
    "RecordingNotifier",
    "load_project",
    "save_project",
]
