# annomath/core/programs.py

"""
The expression program table.

Every supported rewrite target is one `Operation` tag mapped to a `Program`:
a canonical template (documentation of what is computed, written over the
runtime parameter array p[0], p[1]), a handler taking the parameter array,
and an effect telling the dispatcher whether the result is a value to return
or a message to show as an alert.

Handlers coerce their parameters with the helpers in `coercion`, so they do
not raise on bad input. Out-of-domain numeric input yields NaN.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Sequence

import numpy as np

from . import complex_math
from .arithmetic import ArithmeticEvaluator
from .coercion import (
    format_number,
    ieee_apply,
    ieee_divide,
    ieee_exp,
    ieee_pow,
    param_at,
    parse_number_list,
    safe_parse_float,
    safe_to_string,
    sanitize_text,
)
from .special import (
    NAMED_CONSTANTS,
    gamma_euler,
    gamma_hankel,
    gamma_integral,
    gamma_recursive,
    gamma_stirling,
    gamma_weierstrass,
    lower_incomplete_gamma,
    regularized_lower_gamma,
    regularized_upper_gamma,
    upper_incomplete_gamma,
)

logger = logging.getLogger(__name__)

# --- Operation Tags ---

class Operation(str, Enum):
    """One tag per supported program, fixed when a catalog rule is defined."""
    ALERT_TEST = "alert.test"
    ALERT_TEST2 = "alert.test2"
    ALERT_PARAM = "alert.param"
    LIST_MIN = "list.min"
    LIST_MAX = "list.max"
    EXP = "scalar.exp"
    POWER = "scalar.pow"
    LOG_BASE = "scalar.log"
    ATAN2 = "scalar.atan2"
    VECTOR_DOT = "vector.dot"
    VECTOR_CROSS = "vector.cross"
    SINH = "hyperbolic.sinh"
    COSH = "hyperbolic.cosh"
    TANH = "hyperbolic.tanh"
    COTH = "hyperbolic.coth"
    SECH = "hyperbolic.sech"
    CSCH = "hyperbolic.csch"
    ARSINH = "hyperbolic.arsinh"
    ARCOSH = "hyperbolic.arcosh"
    ARTANH = "hyperbolic.artanh"
    ARCOTH = "hyperbolic.arcoth"
    ARSECH = "hyperbolic.arsech"
    ARCSCH = "hyperbolic.arcsch"
    GAMMA_INTEGRAL = "gamma.integral"
    GAMMA_EULER = "gamma.euler"
    GAMMA_WEIERSTRASS = "gamma.weierstrass"
    GAMMA_HANKEL = "gamma.hankel"
    GAMMA_RECURSIVE = "gamma.recursive"
    GAMMA_STIRLING = "gamma.stirling"
    LOWER_INCOMPLETE_GAMMA = "gamma.lower_incomplete"
    UPPER_INCOMPLETE_GAMMA = "gamma.upper_incomplete"
    REGULARIZED_LOWER_GAMMA = "gamma.regularized_lower"
    REGULARIZED_UPPER_GAMMA = "gamma.regularized_upper"
    CONST_PI = "constant.pi"
    CONST_E = "constant.e"
    CONST_GOLDEN_RATIO = "constant.golden_ratio"
    CONST_OMEGA = "constant.omega"
    COMPLEX_ADD = "complex.add"
    COMPLEX_SUBTRACT = "complex.subtract"
    COMPLEX_MULTIPLY = "complex.multiply"
    COMPLEX_DIVIDE = "complex.divide"
    COMPLEX_POWER = "complex.power"
    ARITHMETIC = "arithmetic.evaluate"

# --- Program Model ---

class NumericOptions(NamedTuple):
    """Tunable numerical parameters passed to every handler."""
    euler_terms: int = 100
    weierstrass_terms: int = 100
    integral_upper: float = 20.0
    integral_step: float = 0.01
    default_value: float = 0.0


Handler = Callable[[Sequence[Any], NumericOptions], Any]

EFFECT_VALUE = "value"
EFFECT_ALERT = "alert"


@dataclass(frozen=True)
class Program:
    """A precompiled expression program."""
    operation: Operation
    template: str
    handler: Handler
    effect: str = EFFECT_VALUE
    description: str = ""

# --- Parameter Helpers ---

def _scalar(p: Sequence[Any], index: int = 0, default: float = 0.0) -> float:
    return safe_parse_float(param_at(p, index), default)


def _pad(values: List[float], size: int) -> np.ndarray:
    """First `size` values as a float64 array, zero-filled on the right."""
    out = np.zeros(size, dtype=np.float64)
    n = min(size, len(values))
    out[:n] = values[:n]
    return out


def _pair(p: Sequence[Any]) -> tuple:
    """(s, x) for the incomplete gamma family, read from one "s,x" parameter."""
    values = parse_number_list(param_at(p, 0), fallback="1,1", default=1.0)
    s = values[0]
    x = values[1] if len(values) > 1 else 1.0
    return s, x

# --- Handlers: alerts ---

def _alert_test(p, options):
    return "알람 실행"


def _alert_test2(p, options):
    return "테스트"


def _alert_param(p, options):
    return sanitize_text(param_at(p, 0, ""))

# --- Handlers: lists and vectors ---

def _list_min(p, options):
    return min(parse_number_list(param_at(p, 0)))


def _list_max(p, options):
    return max(parse_number_list(param_at(p, 0)))


def _vector_dot(p, options):
    """Dot product; missing components of the second vector count as 0."""
    v1 = parse_number_list(param_at(p, 0))
    v2 = parse_number_list(param_at(p, 1))
    with np.errstate(all="ignore"):
        return float(np.dot(np.asarray(v1, dtype=np.float64), _pad(v2, len(v1))))


def _vector_cross(p, options):
    """Cross product of two 3D vectors, returned as "x,y,z"."""
    v1 = _pad(parse_number_list(param_at(p, 0)), 3)
    v2 = _pad(parse_number_list(param_at(p, 1)), 3)
    with np.errstate(all="ignore"):
        cross = np.cross(v1, v2)
    return ",".join(format_number(c) for c in cross)

# --- Handlers: scalar functions ---

def _exp(p, options):
    return ieee_exp(_scalar(p))


def _power(p, options):
    return ieee_pow(_scalar(p, 0), _scalar(p, 1))


def _log_base(p, options):
    """log base p[0] of p[1]; the base defaults to 10 and the argument to 1."""
    value = ieee_apply(np.log, _scalar(p, 1, default=1.0))
    base = ieee_apply(np.log, _scalar(p, 0, default=10.0))
    return ieee_divide(value, base)


def _atan2(p, options):
    coords = parse_number_list(param_at(p, 0), fallback="0,0")
    y = coords[0]
    x = coords[1] if len(coords) > 1 else 0.0
    return math.atan2(y, x)


def _ufunc(ufunc) -> Handler:
    return lambda p, options: ieee_apply(ufunc, _scalar(p))


def _reciprocal_of(ufunc) -> Handler:
    """1 / f(x), e.g. coth = 1/tanh."""
    return lambda p, options: ieee_divide(1.0, ieee_apply(ufunc, _scalar(p)))


def _of_reciprocal(ufunc) -> Handler:
    """f(1 / x), e.g. arcoth(x) = artanh(1/x)."""
    return lambda p, options: ieee_apply(ufunc, ieee_divide(1.0, _scalar(p)))

# --- Handlers: gamma family ---

def _gamma_integral(p, options):
    return gamma_integral(_scalar(p, default=1.0), options.integral_upper, options.integral_step)


def _gamma_euler(p, options):
    return gamma_euler(_scalar(p, default=1.0), options.euler_terms)


def _gamma_weierstrass(p, options):
    return gamma_weierstrass(_scalar(p, default=1.0), options.weierstrass_terms)


def _gamma_of(func) -> Handler:
    return lambda p, options: func(_scalar(p, default=1.0))


def _incomplete(func) -> Handler:
    return lambda p, options: func(*_pair(p))

# --- Handlers: constants ---

def _constant(name: str) -> Handler:
    value = NAMED_CONSTANTS[name]
    return lambda p, options: value

# --- Handlers: complex arithmetic ---

def _complex_binary(func) -> Handler:
    def handler(p, options):
        z1 = complex_math.parse_complex(param_at(p, 0, "0"))
        z2 = complex_math.parse_complex(param_at(p, 1, "0"))
        return complex_math.format_complex(func(z1, z2))
    return handler

# --- Handlers: restricted arithmetic ---

_EVALUATOR = ArithmeticEvaluator()


def _arithmetic(p, options):
    """Evaluates p[0] as a restricted arithmetic expression (raises ExpressionRejected)."""
    return _EVALUATOR.evaluate_strict(safe_to_string(param_at(p, 0, "")), options.default_value)

# --- Program Table ---

_PROGRAM_LIST: List[Program] = [
    Program(Operation.ALERT_TEST, 'alert("알람 실행")', _alert_test, EFFECT_ALERT, "Fixed test alert"),
    Program(Operation.ALERT_TEST2, 'alert("테스트")', _alert_test2, EFFECT_ALERT, "Fixed second test alert"),
    Program(Operation.ALERT_PARAM, "alert(sanitize(p[0]))", _alert_param, EFFECT_ALERT, "Alert with the first argument"),
    Program(Operation.LIST_MIN, "min(list(p[0]))", _list_min, description="Minimum of a comma separated list"),
    Program(Operation.LIST_MAX, "max(list(p[0]))", _list_max, description="Maximum of a comma separated list"),
    Program(Operation.EXP, "exp(p[0])", _exp, description="Natural exponential"),
    Program(Operation.POWER, "pow(p[0], p[1])", _power, description="p[0] raised to p[1]"),
    Program(Operation.LOG_BASE, "log(p[1]) / log(p[0])", _log_base, description="Logarithm of p[1] in base p[0]"),
    Program(Operation.ATAN2, "atan2(list(p[0]))", _atan2, description="atan2(y, x) from a 'y,x' list"),
    Program(Operation.VECTOR_DOT, "dot(list(p[0]), list(p[1]))", _vector_dot, description="Vector dot product"),
    Program(Operation.VECTOR_CROSS, "cross(list(p[0]), list(p[1]))", _vector_cross, description="3D vector cross product"),
    Program(Operation.SINH, "sinh(p[0])", _ufunc(np.sinh), description="Hyperbolic sine"),
    Program(Operation.COSH, "cosh(p[0])", _ufunc(np.cosh), description="Hyperbolic cosine"),
    Program(Operation.TANH, "tanh(p[0])", _ufunc(np.tanh), description="Hyperbolic tangent"),
    Program(Operation.COTH, "1 / tanh(p[0])", _reciprocal_of(np.tanh), description="Hyperbolic cotangent"),
    Program(Operation.SECH, "1 / cosh(p[0])", _reciprocal_of(np.cosh), description="Hyperbolic secant"),
    Program(Operation.CSCH, "1 / sinh(p[0])", _reciprocal_of(np.sinh), description="Hyperbolic cosecant"),
    Program(Operation.ARSINH, "asinh(p[0])", _ufunc(np.arcsinh), description="Inverse hyperbolic sine"),
    Program(Operation.ARCOSH, "acosh(p[0])", _ufunc(np.arccosh), description="Inverse hyperbolic cosine"),
    Program(Operation.ARTANH, "atanh(p[0])", _ufunc(np.arctanh), description="Inverse hyperbolic tangent"),
    Program(Operation.ARCOTH, "atanh(1 / p[0])", _of_reciprocal(np.arctanh), description="Inverse hyperbolic cotangent"),
    Program(Operation.ARSECH, "acosh(1 / p[0])", _of_reciprocal(np.arccosh), description="Inverse hyperbolic secant"),
    Program(Operation.ARCSCH, "asinh(1 / p[0])", _of_reciprocal(np.arcsinh), description="Inverse hyperbolic cosecant"),
    Program(Operation.GAMMA_INTEGRAL, "gamma.integral(p[0])", _gamma_integral, description="Gamma by numerical integration"),
    Program(Operation.GAMMA_EULER, "gamma.euler(p[0])", _gamma_euler, description="Gamma by Euler's infinite product"),
    Program(Operation.GAMMA_WEIERSTRASS, "gamma.weierstrass(p[0])", _gamma_weierstrass, description="Gamma by the Weierstrass product"),
    Program(Operation.GAMMA_HANKEL, "gamma.hankel(p[0])", _gamma_of(gamma_hankel), description="Gamma by reflection and Stirling"),
    Program(Operation.GAMMA_RECURSIVE, "gamma.recursive(p[0])", _gamma_of(gamma_recursive), description="Gamma by recurrence and continuation"),
    Program(Operation.GAMMA_STIRLING, "gamma.stirling(p[0])", _gamma_of(gamma_stirling), description="Gamma by Stirling's series"),
    Program(Operation.LOWER_INCOMPLETE_GAMMA, "gamma.lower(list(p[0]))", _incomplete(lower_incomplete_gamma), description="Lower incomplete gamma of 's,x'"),
    Program(Operation.UPPER_INCOMPLETE_GAMMA, "gamma.upper(list(p[0]))", _incomplete(upper_incomplete_gamma), description="Upper incomplete gamma of 's,x'"),
    Program(Operation.REGULARIZED_LOWER_GAMMA, "gamma.P(list(p[0]))", _incomplete(regularized_lower_gamma), description="Regularized lower incomplete gamma"),
    Program(Operation.REGULARIZED_UPPER_GAMMA, "gamma.Q(list(p[0]))", _incomplete(regularized_upper_gamma), description="Regularized upper incomplete gamma"),
    Program(Operation.CONST_PI, "pi", _constant("pi"), description="Pi"),
    Program(Operation.CONST_E, "e", _constant("e"), description="Euler's number"),
    Program(Operation.CONST_GOLDEN_RATIO, "(1 + sqrt(5)) / 2", _constant("golden_ratio"), description="Golden ratio"),
    Program(Operation.CONST_OMEGA, "0.5671432904097838", _constant("omega"), description="Omega constant"),
    Program(Operation.COMPLEX_ADD, "complex(p[0]) + complex(p[1])", _complex_binary(complex_math.add), description="Complex addition"),
    Program(Operation.COMPLEX_SUBTRACT, "complex(p[0]) - complex(p[1])", _complex_binary(complex_math.subtract), description="Complex subtraction"),
    Program(Operation.COMPLEX_MULTIPLY, "complex(p[0]) * complex(p[1])", _complex_binary(complex_math.multiply), description="Complex multiplication"),
    Program(Operation.COMPLEX_DIVIDE, "complex(p[0]) / complex(p[1])", _complex_binary(complex_math.divide), description="Complex division"),
    Program(Operation.COMPLEX_POWER, "complex(p[0]) ** complex(p[1])", _complex_binary(complex_math.power), description="Complex exponentiation"),
    Program(Operation.ARITHMETIC, "p[0]", _arithmetic, description="Restricted arithmetic on the first argument"),
]

PROGRAMS: Dict[Operation, Program] = {program.operation: program for program in _PROGRAM_LIST}

# Canonical template text -> operation, for bodies that carry only the template
TEMPLATE_INDEX: Dict[str, Operation] = {program.template: program.operation for program in _PROGRAM_LIST}


def get_program(operation: Operation) -> Program:
    """Returns the program registered for an operation tag."""
    return PROGRAMS[operation]


def list_operations() -> List[str]:
    """Returns the sorted list of operation tag strings."""
    return sorted(op.value for op in PROGRAMS)
