# annomath/core/special/incomplete.py

"""
Incomplete gamma functions.

- lower:              gamma(s, x) = integral_0^x t**(s-1) e**(-t) dt
- upper:              Gamma(s, x) = Gamma(s) - gamma(s, x)
- regularized lower:  P(s, x) = gamma(s, x) / Gamma(s)
- regularized upper:  Q(s, x) = Gamma(s, x) / Gamma(s)

The lower integral is a Riemann sum with step min(0.01, x/1000). The
complete Gamma(s) comes from `complete_gamma` (Stirling above 10, iterative
product below). All four return NaN when s <= 0 or x < 0.
"""

import logging
import math

from ..coercion import ieee_divide
from .gamma import complete_gamma, gamma_integrand_sum

logger = logging.getLogger(__name__)


def _out_of_domain(s: float, x: float) -> bool:
    return s <= 0 or x < 0


def _lower_sum(s: float, x: float) -> float:
    """Riemann sum of the lower integral; 0 for x == 0."""
    if x <= 0:
        return 0.0
    step = min(0.01, x / 1000)
    return gamma_integrand_sum(s, x, step)


def lower_incomplete_gamma(s: float, x: float) -> float:
    """
    Lower incomplete gamma gamma(s, x).

    Args:
        s: Shape parameter, must be positive.
        x: Upper integration limit, must be non-negative.

    Returns:
        The integral value, 0.0 for x == 0, NaN outside the domain.
    """
    if _out_of_domain(s, x):
        return math.nan
    if x == 0:
        return 0.0
    return _lower_sum(s, x)


def upper_incomplete_gamma(s: float, x: float) -> float:
    """Upper incomplete gamma Gamma(s, x) = Gamma(s) - gamma(s, x)."""
    if _out_of_domain(s, x):
        return math.nan
    return complete_gamma(s) - _lower_sum(s, x)


def regularized_lower_gamma(s: float, x: float) -> float:
    """Regularized lower incomplete gamma P(s, x), in [0, 1] up to integration error."""
    if _out_of_domain(s, x):
        return math.nan
    if x == 0:
        return 0.0
    return ieee_divide(_lower_sum(s, x), complete_gamma(s))


def regularized_upper_gamma(s: float, x: float) -> float:
    """Regularized upper incomplete gamma Q(s, x) = 1 - P(s, x)."""
    if _out_of_domain(s, x):
        return math.nan
    gamma_s = complete_gamma(s)
    return ieee_divide(gamma_s - _lower_sum(s, x), gamma_s)
