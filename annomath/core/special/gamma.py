# annomath/core/special/gamma.py

"""
Gamma function estimators.

Each estimator is a separate numerical method and is exposed as its own
catalog operation. They are not expected to agree with each other to more
than a few percent; each has its own reference behaviour:

- gamma_integral:     Riemann sum of the Euler integral over (0, upper]
- gamma_euler:        Euler's limit product truncated at `terms`
- gamma_weierstrass:  Weierstrass product truncated at `terms`
- gamma_hankel:       reflection + Stirling (used for z <= 0), Stirling otherwise
- gamma_recursive:    recurrence / analytic continuation dispatcher
- gamma_stirling:     Stirling's series with three correction terms

All functions take a real argument and return a float. Out-of-domain input
returns NaN rather than raising.
"""

import logging
import math

import numpy as np

from ..coercion import ieee_apply, ieee_divide, ieee_exp, ieee_pow
from .constants import EULER_MASCHERONI

logger = logging.getLogger(__name__)

# --- Defaults ---
DEFAULT_PRODUCT_TERMS = 100
DEFAULT_INTEGRAL_UPPER = 20.0
DEFAULT_INTEGRAL_STEP = 0.01

# Number of integration points evaluated per numpy batch
_CHUNK_SIZE = 1 << 16

# --- Shared Building Blocks ---

def gamma_integrand_sum(s: float, upper: float, step: float) -> float:
    """
    Right Riemann sum of t**(s-1) * exp(-t) * step for t = step, 2*step, ... <= upper.

    The sample points are produced by repeated addition of `step` (the same
    accumulation a `t += step` loop performs), so the number of samples near
    `upper` follows floating point drift exactly.

    Args:
        s: Shape parameter (exponent is s - 1).
        upper: Upper integration bound (inclusive).
        step: Integration step, must be positive.

    Returns:
        The accumulated sum. 0.0 when no sample point lies in range, NaN for a
        non-finite upper bound.
    """
    if not math.isfinite(upper):
        logger.warning(f"Refusing to integrate up to non-finite bound {upper}.")
        return math.nan
    if not step > 0:
        return 0.0

    total = 0.0
    t_last = 0.0
    with np.errstate(all="ignore"):
        while True:
            increments = np.full(_CHUNK_SIZE, step, dtype=np.float64)
            increments[0] = t_last + step
            t = np.cumsum(increments)
            inside = t[t <= upper] # t is increasing, so this is a prefix
            if inside.size:
                total += float(np.sum(np.power(inside, s - 1.0) * np.exp(-inside) * step))
            if inside.size < _CHUNK_SIZE:
                break
            t_last = float(t[-1])
    return total


def stirling_base(x: float) -> float:
    """Leading Stirling term sqrt(2*pi/x) * (x/e)**x, without corrections."""
    return ieee_apply(np.sqrt, ieee_divide(2 * math.pi, x)) * ieee_pow(x / math.e, x)


def complete_gamma(s: float) -> float:
    """
    Complete gamma used by the incomplete-gamma family.

    Stirling's leading term for s > 10, otherwise the iterative product
    (s-1)(s-2)...  taken while the running value stays above 2.
    """
    if s > 10:
        return stirling_base(s)
    result = 1.0
    t = s
    while t > 2:
        t -= 1
        result *= t
    return result

# --- Estimators ---

def gamma_integral(z: float, upper: float = DEFAULT_INTEGRAL_UPPER, step: float = DEFAULT_INTEGRAL_STEP) -> float:
    """
    Gamma via direct numerical integration of t**(z-1) * exp(-t) over (0, upper].

    Args:
        z: Argument. Must be positive.
        upper: Truncation point of the infinite integral (default 20).
        step: Riemann step (default 0.01).

    Returns:
        Approximation of Gamma(z), or NaN for z <= 0.

    Example:
        >>> round(gamma_integral(5), 1)
        24.0
    """
    if z <= 0:
        return math.nan
    return gamma_integrand_sum(z, upper, step)


def gamma_euler(z: float, terms: int = DEFAULT_PRODUCT_TERMS) -> float:
    """
    Gamma via Euler's limit: n! * n**z / (z (z+1) ... (z+n)), truncated at n = terms.

    Returns NaN for z <= 0.
    """
    if z <= 0:
        return math.nan
    factorial = 1.0
    for i in range(1, terms + 1):
        factorial *= i
    numerator = factorial * ieee_pow(terms, z)
    denominator = 1.0
    for k in range(terms + 1):
        denominator *= z + k
    return ieee_divide(numerator, denominator)


def gamma_weierstrass(z: float, terms: int = DEFAULT_PRODUCT_TERMS) -> float:
    """
    Gamma via the Weierstrass product.

    1/Gamma(z) = z * e**(gamma*z) * prod_{n=1..terms} (1 + z/n) * e**(-z/n)

    Returns NaN for z <= 0.
    """
    if z <= 0:
        return math.nan
    product = 1.0
    for n in range(1, terms + 1):
        product *= (1 + z / n) * ieee_exp(-z / n)
    reciprocal = z * ieee_exp(EULER_MASCHERONI * z) * product
    return ieee_divide(1.0, reciprocal)


def gamma_hankel(z: float) -> float:
    """
    Gamma estimate named after the Hankel contour representation.

    For z > 0 this is Stirling's leading term. For z <= 0 the argument is
    shifted up by n = floor(-z) + 1 and combined with the reflection factor
    pi / sin(pi z).
    """
    if z <= 0:
        n = math.floor(-z) + 1
        result = ieee_divide(math.pi, ieee_apply(np.sin, math.pi * z))
        for k in range(n):
            result = ieee_divide(result, z + k)
        return ieee_divide(result, stirling_base(z + n))
    return stirling_base(z)


def gamma_recursive(z: float) -> float:
    """
    Gamma through the recurrence Gamma(z+1) = z * Gamma(z) and analytic continuation.

    - z > 10:       Stirling's leading term
    - z < 0:        reflection formula with Stirling for Gamma(1 - z)
    - 0 <= z < 1:   shift up (divide by z) and apply Stirling
    - z == 1 or 2:  1
    - otherwise:    iterative product down to 2
    """
    x = z
    if x > 10:
        return stirling_base(x)
    if x < 0:
        reflected = 1 - x
        denominator = (
            ieee_apply(np.sin, math.pi * x)
            * ieee_apply(np.sqrt, 2 * math.pi / reflected)
            * ieee_pow(reflected / math.e, reflected)
        )
        return ieee_divide(math.pi, denominator)
    if x < 1:
        result = 1.0
        while x < 1:
            result = ieee_divide(result, x)
            x += 1
        return result * stirling_base(x)
    if x == 1 or x == 2:
        return 1.0
    result = 1.0
    while x > 2:
        x -= 1
        result *= x
    return result


def gamma_stirling(z: float) -> float:
    """
    Gamma via Stirling's series.

    Gamma(z) ~ sqrt(2 pi / z) (z/e)**z (1 + 1/(12z) + 1/(288z^2) - 139/(51840z^3))

    The correction terms are only applied for z > 0.5. Returns NaN for z <= 0.

    Example:
        >>> round(gamma_stirling(5), 2)
        24.0
    """
    if z <= 0:
        return math.nan
    term1 = math.sqrt(2 * math.pi / z)
    term2 = ieee_pow(z / math.e, z)

    correction = 1.0
    if z > 0.5:
        correction += 1 / (12 * z)
        correction += 1 / (288 * z * z)
        correction -= 139 / (51840 * ieee_pow(z, 3))

    return term1 * term2 * correction
