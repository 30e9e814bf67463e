# tests/conftest.py

"""
Shared fixtures: in-memory functions with realistic block bodies.
"""

import pytest

from annomath.host.api import FunctionKind
from annomath.host.memory import MemoryFunction, MemoryHost, RecordingNotifier


def original_value_body(marker: str):
    """A value-returning definition returning a constant, tagged with `marker`."""
    return [[{
        "type": "function_create_value",
        "x": 100, "y": 60,
        "params": [{"type": "stringParam_a1"}, None, None, {"type": "number", "params": [marker]}],
        "statements": [[{"type": "set_variable", "params": ["v", {"type": "text", "params": [marker]}]}]],
    }]]


def original_statement_body(marker: str):
    return [[
        {"type": "function_create", "x": 20, "y": 20, "params": [{"type": "stringParam_s1"}]},
        {"type": "dialog", "params": [marker, "speak"]},
    ]]


def make_value(function_id: str, annotation: str, params=("stringParam_a1",)) -> MemoryFunction:
    return MemoryFunction(function_id, FunctionKind.VALUE, annotation, list(params), original_value_body(function_id))


def make_statement(function_id: str, annotation: str, params=("stringParam_s1",)) -> MemoryFunction:
    return MemoryFunction(function_id, FunctionKind.STATEMENT, annotation, list(params), original_statement_body(function_id))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def host(notifier) -> MemoryHost:
    """A host with matching and non-matching functions of both kinds."""
    return MemoryHost([
        make_value("f_min", "@min 1,5,3@"),
        make_value("f_dot", "@a 와 b 의 내적@", params=("stringParam_a1", "stringParam_b1")),
        make_value("f_plain", "just a helper"),
        make_statement("f_alert", "@msg 을/를 알람으로 띄우기@"),
        make_statement("f_quiet", ""),
    ], notifier=notifier)
