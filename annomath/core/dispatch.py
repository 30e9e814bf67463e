# annomath/core/dispatch.py

"""
Executes expression programs on behalf of rewritten functions.

The dispatcher is the only place where a program runs against call-site
arguments. It resolves what it is given (an Operation tag, a tag string, a
canonical template, or free arithmetic text over p[0], p[1], ...), runs the
handler, and guarantees that no exception reaches the host: rejected or failing
programs produce one advisory through the notifier and a neutral default.
"""

import logging
import re
from typing import Any, Optional, Sequence, Union

from .arithmetic import ArithmeticEvaluator, ExpressionRejected, number_literal
from .coercion import param_at, safe_parse_float, sanitize_text
from .programs import (
    EFFECT_ALERT,
    NumericOptions,
    Operation,
    Program,
    PROGRAMS,
    TEMPLATE_INDEX,
)
from ..host.api import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)

DEFAULT_ADVISORY_MESSAGE = "execution skipped: unsupported expression"

# p[0], p[1], ... inside free arithmetic text
_PARAM_REFERENCE = re.compile(r"\bp\s*\[\s*(\d+)\s*\]")

ProgramRef = Union[Operation, str]


class ExpressionDispatcher:
    """
    Runs programs against parameter arrays.

    Args:
        notifier: Channel for alerts and the unsupported-expression advisory.
                  Defaults to a LoggingNotifier.
        options: Numerical options forwarded to every handler.
        advisory_message: Text of the advisory shown when a program is skipped.

    Example:
        >>> dispatcher = ExpressionDispatcher()
        >>> dispatcher.execute(Operation.VECTOR_DOT, ["1,2,3", "4,5,6"])
        32.0
    """

    def __init__(
        self,
        notifier: Optional[Notifier] = None,
        options: Optional[NumericOptions] = None,
        advisory_message: str = DEFAULT_ADVISORY_MESSAGE,
    ):
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.options = options if options is not None else NumericOptions()
        self.advisory_message = advisory_message
        self._evaluator = ArithmeticEvaluator()

    # --- Resolution ---

    @staticmethod
    def resolve(program: ProgramRef) -> Optional[Program]:
        """
        Maps a program reference to a registered Program.

        Returns None when the reference is free text that should be evaluated
        as restricted arithmetic instead.
        """
        if isinstance(program, Operation):
            return PROGRAMS[program]
        if not isinstance(program, str):
            return None
        text = program.strip()
        try:
            return PROGRAMS[Operation(text)]
        except ValueError:
            pass
        operation = TEMPLATE_INDEX.get(text)
        return PROGRAMS[operation] if operation is not None else None

    # --- Execution ---

    def execute(self, program: Any, params: Optional[Sequence[Any]] = None) -> Any:
        """
        Runs a program with a runtime parameter array.

        Args:
            program: An Operation, an operation tag string, a canonical
                     template, or restricted arithmetic text using p[i].
            params: Call-site arguments bound to p[0], p[1], ...

        Returns:
            The handler's value (number or string), None for alert programs,
            or the configured default when the program is skipped.
        """
        params = list(params or [])
        resolved = self.resolve(program)
        try:
            if resolved is None:
                return self._evaluate_text(program, params)
            result = resolved.handler(params, self.options)
        except ExpressionRejected as e:
            logger.warning(f"Unsupported expression {program!r}: {e}")
            return self._skip()
        except Exception as e:
            logger.error(f"Program {program!r} failed with params {params!r}: {e}", exc_info=True)
            return self._skip()

        if resolved.effect == EFFECT_ALERT:
            message = sanitize_text(result)
            logger.debug(f"Program {resolved.operation.value} raised alert '{message}'")
            self.notifier.alert(message)
            return None
        return result

    def _evaluate_text(self, program: Any, params: Sequence[Any]) -> float:
        if not isinstance(program, str):
            raise ExpressionRejected(f"unsupported program type {type(program).__name__}")

        def bind(match: re.Match) -> str:
            value = safe_parse_float(param_at(params, int(match.group(1))), self.options.default_value)
            return f"({number_literal(value)})"

        text = _PARAM_REFERENCE.sub(bind, program)
        return self._evaluator.evaluate_strict(text, self.options.default_value)

    def _skip(self) -> float:
        self.notifier.advise(self.advisory_message)
        return self.options.default_value
