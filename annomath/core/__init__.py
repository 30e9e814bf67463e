# annomath/core/__init__.py

"""
Core Engine Package for annomath.

Contains modules for:
- Numeric coercion and IEEE-safe arithmetic helpers
- Complex number arithmetic
- Special functions (gamma estimators, incomplete gamma, constants)
- The restricted arithmetic evaluator
- The expression program table and dispatcher
- The annotation pattern catalog
- Definition rewriting and the apply/undo transaction engine
"""

from . import coercion
from . import complex_math
from . import special
from . import arithmetic
from . import programs
from . import dispatch
from . import catalog
from . import rewriter
from . import transactions

__all__ = [
    "coercion",
    "complex_math",
    "special",
    "arithmetic",
    "programs",
    "dispatch",
    "catalog",
    "rewriter",
    "transactions",
]
