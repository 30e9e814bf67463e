# annomath/host/memory.py

"""
In-memory host runtime.

A small, dependency-free implementation of the host interfaces used by the
CLI and the test-suite. It keeps functions in insertion order, records every
commit and alert, dispatches lifecycle events synchronously, and reads and
writes a JSON project file of the form:

    {"functions": [
        {"id": "f1", "type": "value", "description": "@min 1,5,3@",
         "params": ["p_a"], "content": [[{"type": "function_create_value"}]]}
    ]}

`content` may also be a JSON-encoded string, as some hosts store it.
"""

import copy
import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Set, Union

from .api import (
    FunctionEntity,
    FunctionKind,
    HostError,
    HostRuntime,
    Notifier,
    SerializedBody,
)

logger = logging.getLogger(__name__)

# --- Custom Exception ---
class ProjectFormatError(ValueError):
    """Raised when a project file does not have the expected structure."""
    pass

# --- Entities ---

class MemoryFunction(FunctionEntity):
    """A function whose body is held as a plain Python tree."""

    def __init__(
        self,
        function_id: str,
        kind: Union[FunctionKind, str] = FunctionKind.VALUE,
        annotation: str = "",
        formal_params: Optional[List[Any]] = None,
        body: SerializedBody = None,
    ):
        self._id = function_id
        self._kind = FunctionKind(kind)
        self._annotation = annotation or ""
        self._formal_params = list(formal_params or [])
        self._body = body if body is not None else []

    @property
    def id(self) -> str:
        return self._id

    @property
    def kind(self) -> FunctionKind:
        return self._kind

    @property
    def annotation(self) -> str:
        return self._annotation

    @property
    def formal_params(self) -> List[Any]:
        return list(self._formal_params)

    def get_body(self) -> SerializedBody:
        return copy.deepcopy(self._body)

    def set_body(self, body: SerializedBody) -> None:
        self._body = copy.deepcopy(body)

    def to_dict(self) -> Dict[str, Any]:
        """Serializes the function in project-file form."""
        return {
            "id": self._id,
            "type": self._kind.value,
            "description": self._annotation,
            "params": list(self._formal_params),
            "content": copy.deepcopy(self._body),
        }

    def __repr__(self) -> str:
        return f"MemoryFunction(id={self._id!r}, kind={self._kind.value!r}, annotation={self._annotation!r})"

# --- Notifier ---

class RecordingNotifier(Notifier):
    """Collects alerts and advisories instead of displaying them."""

    def __init__(self):
        self.alerts: List[str] = []
        self.advisories: List[str] = []

    def alert(self, message: str) -> None:
        logger.debug(f"Recorded alert: {message}")
        self.alerts.append(message)

    def advise(self, message: str) -> None:
        logger.debug(f"Recorded advisory: {message}")
        self.advisories.append(message)

# --- Host ---

class MemoryHost(HostRuntime):
    """
    Host runtime backed by a dictionary of MemoryFunction objects.

    Args:
        functions: Initial functions (kept in the given order).
        notifier: Output channel; a RecordingNotifier is created if omitted.
        failing_commits: Function ids whose commit raises HostError (for
                         exercising per-entity failure handling).
    """

    def __init__(
        self,
        functions: Optional[Iterable[MemoryFunction]] = None,
        notifier: Optional[Notifier] = None,
        failing_commits: Optional[Set[str]] = None,
    ):
        self._functions: Dict[str, MemoryFunction] = {}
        for func in functions or []:
            self.add_function(func)
        self._notifier = notifier if notifier is not None else RecordingNotifier()
        self._listeners: Dict[str, List[Callable[[], Any]]] = defaultdict(list)
        self.failing_commits: Set[str] = set(failing_commits or ())
        self.commit_log: List[str] = []

    # --- Function registry ---

    def add_function(self, func: MemoryFunction) -> None:
        if func.id in self._functions:
            logger.warning(f"Function '{func.id}' is already registered. Overwriting.")
        self._functions[func.id] = func

    def remove_function(self, function_id: str) -> None:
        self._functions.pop(function_id, None)

    def functions(self) -> Iterable[MemoryFunction]:
        return list(self._functions.values())

    def get_function(self, function_id: str) -> Optional[MemoryFunction]:
        return self._functions.get(function_id)

    def commit(self, entity: FunctionEntity) -> None:
        if entity.id in self.failing_commits:
            raise HostError(f"Commit rejected for function '{entity.id}'")
        if entity.id not in self._functions:
            raise HostError(f"Unknown function '{entity.id}'")
        self.commit_log.append(entity.id)
        logger.debug(f"Committed function '{entity.id}'")

    # --- Notifications and events ---

    @property
    def notifier(self) -> Notifier:
        return self._notifier

    def add_event_listener(self, event: str, callback: Callable[[], Any]) -> None:
        self._listeners[event].append(callback)

    def dispatch_event(self, event: str) -> None:
        """Synchronously invokes every listener registered for an event."""
        logger.debug(f"Dispatching event '{event}' to {len(self._listeners[event])} listener(s)")
        for callback in list(self._listeners[event]):
            callback()

# --- Project Files ---

def _function_from_dict(entry: Dict[str, Any]) -> MemoryFunction:
    if not isinstance(entry, dict) or "id" not in entry:
        raise ProjectFormatError(f"Function entry must be an object with an 'id': {entry!r}")
    content = entry.get("content", [])
    if isinstance(content, str):
        try:
            content = json.loads(content) if content.strip() else []
        except json.JSONDecodeError as e:
            raise ProjectFormatError(f"Function '{entry['id']}' has invalid JSON content: {e}") from e
    try:
        kind = FunctionKind(entry.get("type", FunctionKind.VALUE.value))
    except ValueError as e:
        raise ProjectFormatError(f"Function '{entry['id']}' has unknown type {entry.get('type')!r}") from e
    return MemoryFunction(
        function_id=str(entry["id"]),
        kind=kind,
        annotation=entry.get("description") or "",
        formal_params=entry.get("params") or [],
        body=content,
    )


def load_project(path: Union[str, Path], notifier: Optional[Notifier] = None) -> MemoryHost:
    """
    Loads a JSON project file into a MemoryHost.

    Raises:
        FileNotFoundError: If the file does not exist.
        ProjectFormatError: If the file is not valid JSON or lacks a 'functions' list.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ProjectFormatError(f"Project file '{path}' is not valid JSON: {e}") from e

    entries = data.get("functions") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        raise ProjectFormatError(f"Project file '{path}' must contain a 'functions' list.")
    host = MemoryHost((_function_from_dict(entry) for entry in entries), notifier=notifier)
    logger.info(f"Loaded {len(entries)} function(s) from {path}")
    return host


def save_project(host: MemoryHost, path: Union[str, Path]) -> None:
    """Writes every function of a MemoryHost to a JSON project file."""
    path = Path(path)
    data = {"functions": [func.to_dict() for func in host.functions()]}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    logger.info(f"Saved {len(data['functions'])} function(s) to {path}")
