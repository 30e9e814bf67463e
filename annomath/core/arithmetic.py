# annomath/core/arithmetic.py

"""
Restricted arithmetic evaluator.

Evaluates a small calculator language without handing any text to `eval`:

- numbers (digits and decimal points), + - * /, parentheses, whitespace
- whitelisted unary/variadic math functions (see SAFE_FUNCTIONS)
- the constants pi and e (an optional "Math." prefix is accepted, so
  "Math.sqrt(16)" and "Math.PI" work as well)

The expression is reduced textually: the innermost parenthesized group is
evaluated and its text replaced by the numeric result until no parentheses
remain, then the flat remainder is evaluated with two precedence tiers
(* and / left-to-right, then + and - left-to-right). Division by zero gives a
signed infinity. Anything outside this grammar is rejected.
"""

import logging
import math
import re
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .coercion import ieee_apply, ieee_divide, ieee_pow
from .special.constants import E, PI

logger = logging.getLogger(__name__)

# --- Custom Exception ---
class ExpressionRejected(ValueError):
    """Raised when an expression contains tokens outside the calculator grammar."""
    pass

# --- Whitelisted Functions ---

def _round_half_up(x: float) -> float:
    return ieee_apply(np.floor, x + 0.5)


def _minimum(*args: float) -> float:
    if not args:
        return math.inf
    if any(math.isnan(a) for a in args):
        return math.nan
    return min(args)


def _maximum(*args: float) -> float:
    if not args:
        return -math.inf
    if any(math.isnan(a) for a in args):
        return math.nan
    return max(args)


def _unary(ufunc: Callable) -> Callable[[float], float]:
    return lambda x: ieee_apply(ufunc, x)

# name -> (callable, allowed argument count or None for variadic)
SAFE_FUNCTIONS: Dict[str, Tuple[Callable[..., float], Optional[int]]] = {
    "abs": (_unary(np.abs), 1),
    "floor": (_unary(np.floor), 1),
    "ceil": (_unary(np.ceil), 1),
    "round": (_round_half_up, 1),
    "min": (_minimum, None),
    "max": (_maximum, None),
    "pow": (ieee_pow, 2),
    "sqrt": (_unary(np.sqrt), 1),
    "sin": (_unary(np.sin), 1),
    "cos": (_unary(np.cos), 1),
    "tan": (_unary(np.tan), 1),
    "log": (_unary(np.log), 1), # Natural logarithm
}

SAFE_CONSTANTS: Dict[str, float] = {
    "pi": PI,
    "PI": PI,
    "e": E,
    "E": E,
}

# --- Patterns ---
_MATH_PREFIX = re.compile(r"\bMath\.")
_CONSTANT = re.compile(r"\b(" + "|".join(SAFE_CONSTANTS) + r")\b(?!\s*\()")
# Tokens of the full (unreduced) grammar, used for up-front validation
_TOKEN = re.compile(
    r"\s*(?:(?P<number>[\d.]+)|(?P<name>[A-Za-z_]\w*)|(?P<op>[-+*/])"
    r"|(?P<lparen>\()|(?P<rparen>\))|(?P<comma>,))"
)
# Innermost group: parentheses with no parentheses inside, optionally called
_INNERMOST = re.compile(r"(?P<name>[A-Za-z_]\w*)?\s*\((?P<body>[^()]*)\)")
# Flat grammar: alternating numbers (sign allowed) and operators
_FLAT_NUMBER = re.compile(r"\s*(?P<value>[-+]?(?:inf|nan|[\d.]+))")
_FLAT_OPERATOR = re.compile(r"\s*(?P<op>[-+*/])")

_OPERAND_FOLLOWERS = {None, "op", "lparen", "comma"}


def number_literal(value: float) -> str:
    """Renders a float as text the flat tokenizer reads back exactly."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)), "f")


class ArithmeticEvaluator:
    """
    Evaluates expressions of the restricted calculator grammar.

    The evaluator is stateless and reentrant; one instance can be shared.
    """

    def evaluate(self, expression: str, default: float = 0.0) -> float:
        """
        Evaluates an expression, returning `default` if it is rejected.

        Args:
            expression: Expression text, e.g. "(2+3)*4" or "Math.sqrt(16)".
            default: Value returned for rejected expressions and used for
                     malformed numeric tokens such as "1.2.3".

        Returns:
            The numeric result as a float.
        """
        try:
            return self.evaluate_strict(expression, default)
        except ExpressionRejected as e:
            logger.warning(f"Expression rejected: '{expression}' ({e}). Using default {default}.")
            return default

    def evaluate_strict(self, expression: str, default: float = 0.0) -> float:
        """
        Evaluates an expression, raising ExpressionRejected if it is outside the grammar.

        Raises:
            ExpressionRejected: On disallowed characters or names, unbalanced
                                parentheses, misplaced commas or a broken
                                operand/operator sequence.
        """
        if not isinstance(expression, str):
            raise ExpressionRejected(f"expected text, got {type(expression).__name__}")
        text = self._substitute_constants(expression)
        self._validate(text)
        logger.debug(f"Evaluating restricted expression: '{text}'")
        return self._reduce(text, default)

    # --- Preparation ---

    @staticmethod
    def _substitute_constants(expression: str) -> str:
        text = _MATH_PREFIX.sub("", expression)
        return _CONSTANT.sub(lambda m: number_literal(SAFE_CONSTANTS[m.group(1)]), text)

    @staticmethod
    def _validate(text: str) -> None:
        """Checks token kinds and their placement before any reduction happens."""
        stack: List[str] = []
        previous: Optional[str] = None
        pos = 0
        end = len(text.rstrip())
        if end == 0:
            raise ExpressionRejected("empty expression")

        while pos < end:
            match = _TOKEN.match(text, pos)
            if match is None:
                raise ExpressionRejected(f"disallowed character {text[pos:].lstrip()[:1]!r}")
            kind = match.lastgroup
            token = match.group(kind)

            if kind == "name":
                if token not in SAFE_FUNCTIONS:
                    raise ExpressionRejected(f"disallowed name '{token}'")
                if previous not in _OPERAND_FOLLOWERS:
                    raise ExpressionRejected(f"unexpected call to '{token}'")
                following = _TOKEN.match(text, match.end())
                if following is None or following.lastgroup != "lparen":
                    raise ExpressionRejected(f"'{token}' must be called")
                stack.append("call")
                pos = following.end()
                previous = "lparen"
                continue
            if kind == "number" and previous not in _OPERAND_FOLLOWERS:
                raise ExpressionRejected(f"unexpected number '{token}'")
            if kind == "lparen":
                if previous not in _OPERAND_FOLLOWERS:
                    raise ExpressionRejected("unexpected '('")
                stack.append("group")
            if kind == "rparen":
                if not stack:
                    raise ExpressionRejected("unbalanced ')'")
                opened = stack.pop()
                if previous in ("op", "comma") or (previous == "lparen" and opened == "group"):
                    raise ExpressionRejected("empty or incomplete parentheses")
            if kind == "comma" and (not stack or stack[-1] != "call" or previous not in ("number", "rparen")):
                raise ExpressionRejected("misplaced ','")
            previous = kind
            pos = match.end()

        if stack:
            raise ExpressionRejected("unbalanced '('")

    # --- Reduction ---

    def _reduce(self, text: str, default: float) -> float:
        """Resolves innermost groups and calls until the text is flat, then evaluates it."""
        while True:
            match = _INNERMOST.search(text)
            if match is None:
                return self._evaluate_flat(text, default)
            name = match.group("name")
            body = match.group("body")
            if name is None:
                value = self._evaluate_flat(body, default)
            else:
                value = self._call(name, body, default)
            text = self._splice(text, match.start(), match.end(), value)

    def _call(self, name: str, body: str, default: float) -> float:
        func, arity = SAFE_FUNCTIONS[name]
        args = [self._evaluate_flat(arg, default) for arg in body.split(",")] if body.strip() else []
        if arity is not None and len(args) != arity:
            raise ExpressionRejected(f"'{name}' takes {arity} argument(s), got {len(args)}")
        return func(*args)

    @staticmethod
    def _splice(text: str, start: int, end: int, value: float) -> str:
        """Replaces text[start:end] with a literal, folding a preceding sign into it."""
        head = text[:start].rstrip()
        literal = number_literal(value)
        if literal.startswith("-") and head[-1:] in ("-", "+"):
            # x - (-y) -> x + y ; x + (-y) -> x - y
            head = head[:-1] + ("+" if head[-1] == "-" else "-")
            literal = literal[1:]
        return f"{head}{literal}{text[end:]}"

    @staticmethod
    def _evaluate_flat(text: str, default: float) -> float:
        """Evaluates a parenthesis-free expression with * / before + -."""
        numbers: List[float] = []
        operators: List[str] = []
        pos = 0
        end = len(text.rstrip())
        expect_number = True
        while pos < end:
            pattern = _FLAT_NUMBER if expect_number else _FLAT_OPERATOR
            match = pattern.match(text, pos)
            if match is None:
                raise ExpressionRejected(f"unexpected token near '{text[pos:].strip()}'")
            if expect_number:
                numbers.append(_parse_number(match.group("value"), default))
            else:
                operators.append(match.group("op"))
            expect_number = not expect_number
            pos = match.end()
        if not numbers or expect_number:
            raise ExpressionRejected("expression ends without an operand")

        # Pass 1: multiplication and division, left to right
        terms = [numbers[0]]
        additive_ops: List[str] = []
        for op, operand in zip(operators, numbers[1:]):
            if op == "*":
                terms[-1] = terms[-1] * operand
            elif op == "/":
                terms[-1] = ieee_divide(terms[-1], operand)
            else:
                additive_ops.append(op)
                terms.append(operand)

        # Pass 2: addition and subtraction, left to right
        result = terms[0]
        for op, operand in zip(additive_ops, terms[1:]):
            result = result + operand if op == "+" else result - operand
        return result


def _parse_number(token: str, default: float) -> float:
    try:
        return float(token)
    except ValueError:
        logger.debug(f"Malformed numeric token '{token}', using default {default}.")
        return default

# --- Module-level convenience ---
_DEFAULT_EVALUATOR = ArithmeticEvaluator()


def evaluate_expression(expression: str, default: float = 0.0) -> float:
    """
    Safely evaluate a restricted arithmetic expression.

    Args:
        expression: The expression string to evaluate.
        default: Value returned when the expression is rejected.

    Returns:
        The result as a float.

    Example:
        >>> evaluate_expression("2+3*4")
        14.0
        >>> evaluate_expression("10/0")
        inf
    """
    return _DEFAULT_EVALUATOR.evaluate(expression, default)
