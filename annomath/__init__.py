# annomath/__init__.py

"""
annomath: annotation-driven, sandboxed math expression substitution.

Scans the annotations of user-defined functions in a block-based programming
host, rewrites matching functions into calls to a restricted evaluator, and
restores the original definitions afterwards.
"""

from .version import __version__
from .core.arithmetic import ArithmeticEvaluator, ExpressionRejected, evaluate_expression
from .core.catalog import CATALOG, PatternRule, match_rules
from .core.dispatch import ExpressionDispatcher
from .core.programs import NumericOptions, Operation
from .core.transactions import EngineState, RewriteEngine

__all__ = [
    "__version__",
    "ArithmeticEvaluator",
    "ExpressionRejected",
    "evaluate_expression",
    "CATALOG",
    "PatternRule",
    "match_rules",
    "ExpressionDispatcher",
    "NumericOptions",
    "Operation",
    "EngineState",
    "RewriteEngine",
]
