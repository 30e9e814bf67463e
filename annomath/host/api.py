# annomath/host/api.py

"""
Interfaces the engine needs from the host visual-programming runtime.

The host owns function storage, block-tree serialization and the event
loop. The engine only needs to:
- enumerate user-defined functions and look them up by id
- read and replace a function's serialized body, then commit it
- subscribe to the run / beforeStop / stop lifecycle events
- surface alerts and non-fatal advisories to the user
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional

logger = logging.getLogger(__name__)

# --- Lifecycle Events ---
EVENT_RUN = "run"
EVENT_BEFORE_STOP = "beforeStop"
EVENT_STOP = "stop"

# Serialized block tree; opaque to the engine except for whole-body replacement
SerializedBody = Any

# --- Custom Exception ---
class HostError(RuntimeError):
    """Raised by a host runtime when a function cannot be read, written or committed."""
    pass

# --- Function Entities ---

class FunctionKind(str, Enum):
    """Kind of a user-defined function, using the host's type names."""
    VALUE = "value"       # Returns a value
    STATEMENT = "normal"  # Runs for its side effects


class FunctionEntity(ABC):
    """
    A user-defined function as exposed by the host.

    The identity must stay stable across body replacement so snapshots can be
    matched back to their function.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable identity of the function."""
        pass

    @property
    @abstractmethod
    def kind(self) -> FunctionKind:
        """Whether the function returns a value or is a statement."""
        pass

    @property
    @abstractmethod
    def annotation(self) -> str:
        """Free-text description written by the author ("" if none)."""
        pass

    @property
    @abstractmethod
    def formal_params(self) -> List[Any]:
        """Declared formal parameter slots, in order, in the host's own representation."""
        pass

    @abstractmethod
    def get_body(self) -> SerializedBody:
        """Return the current body as a serializable tree."""
        pass

    @abstractmethod
    def set_body(self, body: SerializedBody) -> None:
        """Replace the whole body with a serializable tree."""
        pass

# --- Notification Channel ---

class Notifier(ABC):
    """User-visible output channel of the host."""

    @abstractmethod
    def alert(self, message: str) -> None:
        """Show a (sanitized) alert produced by a statement program."""
        pass

    @abstractmethod
    def advise(self, message: str) -> None:
        """Show a non-fatal advisory, e.g. that an expression was skipped."""
        pass


class LoggingNotifier(Notifier):
    """Notifier that routes alerts and advisories to the logging system."""

    def __init__(self, name: str = "annomath.notify"):
        self._logger = logging.getLogger(name)

    def alert(self, message: str) -> None:
        self._logger.info(f"[alert] {message}")

    def advise(self, message: str) -> None:
        self._logger.warning(f"[advisory] {message}")

# --- Host Runtime ---

class HostRuntime(ABC):
    """The host runtime as seen by the rewrite engine."""

    @abstractmethod
    def functions(self) -> Iterable[FunctionEntity]:
        """Iterate over every user-defined function."""
        pass

    @abstractmethod
    def get_function(self, function_id: str) -> Optional[FunctionEntity]:
        """Look up a function by id, returning None if it no longer exists."""
        pass

    @abstractmethod
    def commit(self, entity: FunctionEntity) -> None:
        """Persist a mutated body back into the host's storage."""
        pass

    @property
    @abstractmethod
    def notifier(self) -> Notifier:
        """Channel for alerts and advisories."""
        pass

    @abstractmethod
    def add_event_listener(self, event: str, callback: Callable[[], Any]) -> None:
        """Subscribe to a lifecycle event (run, beforeStop, stop)."""
        pass
