# annomath/core/complex_math.py

"""
Complex number arithmetic over a plain (real, imag) pair of floats.

Python's builtin `complex` raises on division by zero and has its own
parsing rules, so the engine carries its own representation:
- parsing accepts "3.5", "i", "-i", "3i", "3+4i", "2-i"
- division by a zero denominator yields (inf, inf)
- 0 raised to any power yields 0 (avoids log(0))
"""

import logging
import math
import re
from typing import Any, NamedTuple

import numpy as np

from .coercion import format_number, ieee_apply, ieee_divide, ieee_exp, safe_to_string

logger = logging.getLogger(__name__)

# --- Representation ---

class ComplexNumber(NamedTuple):
    """A complex value as two IEEE-754 doubles. No normalization is applied."""
    real: float
    imag: float


ZERO = ComplexNumber(0.0, 0.0)

# One anchored pattern: either a pure imaginary ("i", "-2.5i") or a real part
# with an optional signed imaginary part ("3", "3+4i", "3-i").
_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_COMPLEX_PATTERN = re.compile(
    rf"^(?:(?P<im_only>[+-]?{_NUMBER}?)i"
    rf"|(?P<re>[+-]?{_NUMBER})(?:(?P<im_sign>[+-])(?P<im>{_NUMBER}?)i)?)$"
)

# --- Parsing and Formatting ---

def _coefficient(sign: str, digits: str) -> float:
    """Builds an imaginary coefficient, defaulting an omitted magnitude to 1."""
    magnitude = float(digits) if digits else 1.0
    return -magnitude if sign == "-" else magnitude


def parse_complex(value: Any) -> ComplexNumber:
    """
    Parses a complex literal.

    Args:
        value: Text such as "3+4i", "-i" or "2.5". Non-string input is
               converted with `safe_to_string`.

    Returns:
        The parsed ComplexNumber, or (0, 0) when the text is not a
        recognized literal.
    """
    text = re.sub(r"\s+", "", safe_to_string(value))
    match = _COMPLEX_PATTERN.match(text)
    if match is None:
        logger.debug(f"Unrecognized complex literal '{text}', using 0.")
        return ZERO

    im_only = match.group("im_only")
    if im_only is not None:
        sign = im_only[:1] if im_only[:1] in "+-" else ""
        digits = im_only[1:] if sign else im_only
        return ComplexNumber(0.0, _coefficient(sign, digits))

    real = float(match.group("re"))
    if match.group("im_sign") is None:
        return ComplexNumber(real, 0.0)
    return ComplexNumber(real, _coefficient(match.group("im_sign"), match.group("im")))


def format_complex(z: ComplexNumber) -> str:
    """
    Formats a complex value.

    Only unit imaginary parts of a pure imaginary number are shortened
    ("i" / "-i"); "1+1i" keeps its coefficient.
    """
    real, imag = z
    if imag == 0:
        return format_number(real)
    if real == 0:
        if imag == 1:
            return "i"
        if imag == -1:
            return "-i"
        return f"{format_number(imag)}i"
    if imag > 0:
        return f"{format_number(real)}+{format_number(imag)}i"
    return f"{format_number(real)}{format_number(imag)}i" # Sign is embedded in imag

# --- Arithmetic ---

def add(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    return ComplexNumber(z1[0] + z2[0], z1[1] + z2[1])


def subtract(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    return ComplexNumber(z1[0] - z2[0], z1[1] - z2[1])


def multiply(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    a, b = z1
    c, d = z2
    return ComplexNumber(a * c - b * d, a * d + b * c)


def divide(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    """Divides using the conjugate of the denominator; a zero denominator gives (inf, inf)."""
    a, b = z1
    c, d = z2
    denominator = c * c + d * d
    if denominator == 0:
        return ComplexNumber(math.inf, math.inf)
    return ComplexNumber(
        ieee_divide(a * c + b * d, denominator),
        ieee_divide(b * c - a * d, denominator),
    )


def power(z1: ComplexNumber, z2: ComplexNumber) -> ComplexNumber:
    """
    Principal-branch complex exponentiation, z1 ** z2 = exp(z2 * ln z1).

    z1 == 0 short-circuits to 0 for every exponent.
    """
    a, b = z1
    if a == 0 and b == 0:
        return ZERO
    c, d = z2
    log_modulus = math.log(math.hypot(a, b))
    argument = math.atan2(b, a)
    # w = z2 * ln(z1)
    w_real = c * log_modulus - d * argument
    w_imag = d * log_modulus + c * argument
    scale = ieee_exp(w_real)
    return ComplexNumber(scale * ieee_apply(np.cos, w_imag), scale * ieee_apply(np.sin, w_imag))
