# tests/test_coercion.py

import math

import numpy as np
import pytest

from annomath.core.coercion import (
    format_number,
    ieee_divide,
    ieee_exp,
    ieee_pow,
    param_at,
    parse_number_list,
    safe_parse_float,
    safe_split,
    safe_to_string,
    sanitize_text,
)

# --- Test Cases ---

@pytest.mark.parametrize("value, expected", [
    (None, ""),
    ("abc", "abc"),
    (True, "true"),
    (False, "false"),
    (3, "3"),
    (2.5, "2.5"),
    ({"a": 1}, ""),
    ([1, 2], ""),
])
def test_safe_to_string(value, expected):
    """Host values of any type become text without raising."""
    assert safe_to_string(value) == expected

def test_sanitize_text_strips_markup_characters():
    """Markup-sensitive characters are removed, everything else is kept."""
    assert sanitize_text("<b>'hi' & \"bye\"</b>") == "bhi  bye/b"
    assert sanitize_text(None) == ""

def test_safe_split():
    """The string form of the value is split on the separator."""
    assert safe_split("1,2,3") == ["1", "2", "3"]
    assert safe_split("a;b", ";") == ["a", "b"]
    assert safe_split(None) == [""]

@pytest.mark.parametrize("value, expected", [
    ("3.5", 3.5),
    (" 12px ", 12.0),
    ("-4", -4.0),
    ("1-2", 1.0),
    (".5", 0.5),
    (7, 7.0),
])
def test_safe_parse_float_prefix(value, expected):
    """The longest numeric prefix survives sanitization."""
    assert safe_parse_float(value) == expected

def test_safe_parse_float_default():
    """Non-numeric or empty input yields the caller's default."""
    assert safe_parse_float("abc") == 0.0
    assert safe_parse_float("", default=10) == 10
    assert safe_parse_float(None, default=1) == 1
    assert safe_parse_float("--", default=2) == 2

def test_parse_number_list():
    """Comma separated items are parsed individually; falsy input uses the fallback."""
    assert parse_number_list("2,9,-4") == [2.0, 9.0, -4.0]
    assert parse_number_list("1,x,3") == [1.0, 0.0, 3.0]
    assert parse_number_list("") == [0.0, 0.0, 0.0]
    assert parse_number_list(None, fallback="1,1", default=1.0) == [1.0, 1.0]

def test_param_at():
    """Missing or falsy parameters fall back."""
    params = ["a", "", None]
    assert param_at(params, 0) == "a"
    assert param_at(params, 1, "x") == "x"
    assert param_at(params, 2, "y") == "y"
    assert param_at(params, 5, "z") == "z"
    assert param_at(None, 0, "w") == "w"

@pytest.mark.parametrize("value, expected", [
    (4.0, "4"),
    (-0.0, "0"),
    (0.1, "0.1"),
    (-2.5, "-2.5"),
    (math.inf, "Infinity"),
    (-math.inf, "-Infinity"),
    (math.nan, "NaN"),
    (1e21, "1e+21"),
    (1.5e-5, "0.000015"),
    (1e-6, "0.000001"),
    (5e-7, "5e-7"),
    (-1.5e-7, "-1.5e-7"),
    (1e-8, "1e-8"),
    (np.float64(32.0), "32"),
])
def test_format_number(value, expected):
    """Numbers render the way the host displays them."""
    assert format_number(value) == expected

def test_ieee_helpers_never_raise():
    """Division, power and exp follow IEEE semantics instead of raising."""
    assert ieee_divide(10, 0) == math.inf
    assert ieee_divide(-10, 0) == -math.inf
    assert math.isnan(ieee_divide(0, 0))
    assert ieee_pow(2, 10) == 1024.0
    assert math.isnan(ieee_pow(-8, 1 / 3))
    assert ieee_exp(1000) == math.inf
