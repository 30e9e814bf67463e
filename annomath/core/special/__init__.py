# annomath/core/special/__init__.py

"""
Special-function library.

Contains:
- Named constants (pi, e, golden ratio, Omega)
- Gamma estimators (integral, Euler product, Weierstrass product, Hankel,
  recursive continuation, Stirling series)
- Incomplete gamma family (lower, upper, regularized lower/upper)
"""

from typing import Callable, Dict

from .constants import E, EULER_MASCHERONI, GOLDEN_RATIO, NAMED_CONSTANTS, OMEGA, PI
from .gamma import (
    complete_gamma,
    gamma_euler,
    gamma_hankel,
    gamma_integral,
    gamma_recursive,
    gamma_stirling,
    gamma_weierstrass,
    stirling_base,
)
from .incomplete import (
    lower_incomplete_gamma,
    regularized_lower_gamma,
    regularized_upper_gamma,
    upper_incomplete_gamma,
)

# Name -> estimator, one entry per catalog gamma variant
GAMMA_ESTIMATORS: Dict[str, Callable[..., float]] = {
    "integral": gamma_integral,
    "euler": gamma_euler,
    "weierstrass": gamma_weierstrass,
    "hankel": gamma_hankel,
    "recursive": gamma_recursive,
    "stirling": gamma_stirling,
}

# Name -> (s, x) function for the incomplete family
INCOMPLETE_GAMMA_FUNCTIONS: Dict[str, Callable[[float, float], float]] = {
    "lower": lower_incomplete_gamma,
    "upper": upper_incomplete_gamma,
    "regularized_lower": regularized_lower_gamma,
    "regularized_upper": regularized_upper_gamma,
}

__all__ = [
    "PI", "E", "GOLDEN_RATIO", "OMEGA", "EULER_MASCHERONI", "NAMED_CONSTANTS",
    "complete_gamma", "stirling_base",
    "gamma_integral", "gamma_euler", "gamma_weierstrass",
    "gamma_hankel", "gamma_recursive", "gamma_stirling",
    "lower_incomplete_gamma", "upper_incomplete_gamma",
    "regularized_lower_gamma", "regularized_upper_gamma",
    "GAMMA_ESTIMATORS", "INCOMPLETE_GAMMA_FUNCTIONS",
]
