# annomath/core/coercion.py

"""
Numeric primitives shared by every program in the engine.

Values arriving from the host runtime are untrusted: they may be strings,
numbers, booleans, None or arbitrary objects. The helpers here coerce them
into floats, lists of floats or display-safe text without ever raising, so
that a bad argument degrades to a caller-supplied default instead of breaking
the host's execution loop.

The IEEE helpers wrap numpy float64 arithmetic with floating point error
reporting silenced. They give inf/nan results where plain Python floats
would raise ZeroDivisionError, OverflowError or ValueError.
"""

import logging
import math
import re
from decimal import Decimal
from typing import Any, List

import numpy as np

logger = logging.getLogger(__name__)

# --- Constants ---
# Characters that survive numeric sanitization (digits, decimal point, minus sign)
_NON_NUMERIC_CHARS = re.compile(r"[^0-9.\-]")
# Longest numeric prefix accepted after sanitization (mirrors a JS-style parseFloat)
_NUMERIC_PREFIX = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")
# Characters stripped from text before it is shown to the user
_UNSAFE_TEXT_CHARS = re.compile(r"[<>'\"&]")
_EXPONENT_PADDING = re.compile(r"e([+-])0*(\d)")

# --- String Coercion ---

def safe_to_string(value: Any) -> str:
    """
    Converts a host value to text without trusting its type.

    Args:
        value: Any value passed in from the host runtime.

    Returns:
        The string itself for str input, a JS-style rendering for numbers and
        booleans, and an empty string for None or any other object.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool): # Check bool before int (bool is an int subclass)
        return "true" if value else "false"
    if isinstance(value, (int, float, np.integer, np.floating)):
        return format_number(value)
    # Objects and other types get a safe default
    return ""


def sanitize_text(value: Any) -> str:
    """Removes markup-sensitive characters (< > ' " &) from text meant for display."""
    return _UNSAFE_TEXT_CHARS.sub("", safe_to_string(value))


def safe_split(value: Any, separator: str = ",") -> List[str]:
    """Splits the string form of a value on a separator."""
    return safe_to_string(value).split(separator)

# --- Numeric Coercion ---

def safe_parse_float(value: Any, default: float = 0.0) -> float:
    """
    Parses a number from untrusted input, falling back to a default.

    Every character other than digits, '.' and '-' is removed first, then
    the longest numeric prefix is parsed (so "12px" gives 12 and "1-2"
    gives 1). Never raises.

    Args:
        value: Any value passed in from the host runtime.
        default: Value returned when nothing numeric can be parsed.

    Returns:
        The parsed float, or `default`.

    Example:
        >>> safe_parse_float(" 3.5cm ")
        3.5
        >>> safe_parse_float("abc", default=1)
        1
    """
    text = safe_to_string(value).strip()
    if text == "":
        return default
    sanitized = _NON_NUMERIC_CHARS.sub("", text)
    match = _NUMERIC_PREFIX.match(sanitized)
    if match is None:
        return default
    return float(match.group(0))


def parse_number_list(value: Any, fallback: str = "0,0,0", default: float = 0.0) -> List[float]:
    """
    Parses a comma separated list of numbers.

    Args:
        value: Raw parameter value. Falsy values (None, "", 0) use `fallback`.
        fallback: Text parsed when `value` is falsy.
        default: Per-item default for entries that are not numeric.

    Returns:
        A list with one float per comma separated item (never empty).
    """
    source = value if value else fallback
    return [safe_parse_float(item, default) for item in safe_split(source)]


def param_at(params: Any, index: int, fallback: Any = None) -> Any:
    """Returns params[index], or `fallback` when missing or falsy."""
    try:
        value = params[index]
    except (IndexError, KeyError, TypeError):
        return fallback
    return value if value else fallback

# --- Number Formatting ---

def format_number(value: Any) -> str:
    """
    Renders a number the way the host runtime displays numbers.

    Integral values print without a decimal point, negative zero prints as
    "0", and non-finite values print as Infinity, -Infinity or NaN.
    """
    x = float(value)
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "Infinity" if x > 0 else "-Infinity"
    if x == 0:
        return "0"
    if x.is_integer() and abs(x) < 1e21:
        return str(int(x))
    if 1e-6 <= abs(x) < 1e-4:
        # Python switches to exponent notation earlier than the host does
        return format(Decimal(repr(x)), "f")
    return _EXPONENT_PADDING.sub(r"e\1\2", repr(x))

# --- IEEE-754 Arithmetic Helpers ---

def ieee_divide(numerator: float, denominator: float) -> float:
    """Divides with IEEE semantics: x/0 is a signed infinity and 0/0 is NaN."""
    with np.errstate(all="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


def ieee_pow(base: float, exponent: float) -> float:
    """Raises to a power, giving inf on overflow and NaN for complex results."""
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def ieee_exp(x: float) -> float:
    """Exponential that overflows to inf instead of raising."""
    with np.errstate(all="ignore"):
        return float(np.exp(np.float64(x)))


def ieee_apply(func: Any, *args: float) -> float:
    """Applies a numpy ufunc to float arguments with error reporting silenced."""
    with np.errstate(all="ignore"):
        return float(func(*(np.float64(a) for a in args)))
