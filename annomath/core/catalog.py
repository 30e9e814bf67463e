# annomath/core/catalog.py

"""
The annotation pattern catalog.

Each PatternRule pairs a regular expression over a function's annotation with
the Operation it rewrites the function into, the number of formal parameter
slots the rewritten body keeps, and the function kinds it applies to.

Rules are immutable and tried in catalog order. Matching is a case-sensitive
search anywhere in the annotation; every rule is attempted on every pass, so
one function may match several rules. The Korean tokens are the notation
authors write and are matched verbatim.
"""

import logging
import re
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

from .programs import Operation, PROGRAMS
from ..host.api import FunctionKind

logger = logging.getLogger(__name__)

_VALUE_ONLY: FrozenSet[FunctionKind] = frozenset({FunctionKind.VALUE})
_STATEMENT_ONLY: FrozenSet[FunctionKind] = frozenset({FunctionKind.STATEMENT})
_ANY_KIND: FrozenSet[FunctionKind] = frozenset(FunctionKind)


@dataclass(frozen=True)
class PatternRule:
    """One catalog entry."""
    name: str
    pattern: "re.Pattern"
    operation: Operation
    arity: int = 1
    kinds: FrozenSet[FunctionKind] = _VALUE_ONLY

    @property
    def template(self) -> str:
        """Canonical expression template of the rule's program."""
        return PROGRAMS[self.operation].template

    def applies_to(self, kind: FunctionKind) -> bool:
        return kind in self.kinds

    def matches(self, annotation: Optional[str]) -> bool:
        if not annotation:
            return False
        return self.pattern.search(annotation) is not None


def _rule(name: str, pattern: str, operation: Operation, arity: int = 1,
          kinds: FrozenSet[FunctionKind] = _VALUE_ONLY) -> PatternRule:
    return PatternRule(name, re.compile(pattern), operation, arity, kinds)


def _keyword(word: str) -> str:
    """`@word <anything>@`, e.g. "@sinh x@"."""
    return rf"@{word}\s+([^@]+)@"


def _gamma(words: str) -> str:
    """`@감마 함수 <words> <anything>@` with flexible whitespace between tokens."""
    return r"@감마\s+함수\s+" + r"\s+".join(words.split()) + r"\s+([^@]+)@"


def _complex(word: str) -> str:
    return rf"@\s*([^@\s]+)\s*와\s*([^@\s]+)\s*의\s*복소수\s*{word}@"

# --- Catalog ---

CATALOG: Tuple[PatternRule, ...] = (
    # Test alerts (substring markers, any kind)
    _rule("test", r"@test@", Operation.ALERT_TEST, 0, _ANY_KIND),
    _rule("test2", r"@test2@", Operation.ALERT_TEST2, 0, _ANY_KIND),

    # Lists and scalars
    _rule("min", _keyword("min"), Operation.LIST_MIN),
    _rule("max", _keyword("max"), Operation.LIST_MAX),
    _rule("exp", _keyword("exp"), Operation.EXP),

    # Vectors
    _rule("dot", r"@\s*([^@\s]+)\s*와\s*([^@\s]+)\s*의\s*내적@", Operation.VECTOR_DOT, 2),
    _rule("cross", r"@\s*([^@\s]+)\s*와\s*([^@\s]+)\s*의\s*외적@", Operation.VECTOR_CROSS, 2),

    # Powers
    _rule("power", r"@\s*([^@\s]+)\s*\*\*\s*([^@\s]+)\s*@", Operation.POWER, 2),
    _rule("power_korean", r"@\s*([^@\s]+)\s*을/를\s*([^@\s]+)\s*번\s*제곱하기@", Operation.POWER, 2),

    # Alert with the first argument (statements only)
    _rule("alert", r"@\s*([^@]+)\s*을/를\s*알람으로\s*띄우기@", Operation.ALERT_PARAM, 1, _STATEMENT_ONLY),

    # Hyperbolic family
    _rule("sinh", _keyword("sinh"), Operation.SINH),
    _rule("cosh", _keyword("cosh"), Operation.COSH),
    _rule("tanh", _keyword("tanh"), Operation.TANH),
    _rule("coth", _keyword("coth"), Operation.COTH),
    _rule("sech", _keyword("sech"), Operation.SECH),
    _rule("csch", _keyword("csch"), Operation.CSCH),
    _rule("arsinh", _keyword("arsinh"), Operation.ARSINH),
    _rule("arcosh", _keyword("arcosh"), Operation.ARCOSH),
    _rule("artanh", _keyword("artanh"), Operation.ARTANH),
    _rule("arcoth", _keyword("arcoth"), Operation.ARCOTH),
    _rule("arsech", _keyword("arsech"), Operation.ARSECH),
    _rule("arcsch", _keyword("arcsch"), Operation.ARCSCH),
    _rule("atan2", _keyword("atan2"), Operation.ATAN2),

    # Gamma estimators
    _rule("gamma_integral", _gamma("적분 정의"), Operation.GAMMA_INTEGRAL),
    _rule("gamma_euler", _gamma("오일러 무한 곱"), Operation.GAMMA_EULER),
    _rule("gamma_weierstrass", _gamma("바이어슈트라스 무한 곱"), Operation.GAMMA_WEIERSTRASS),
    _rule("gamma_hankel", _gamma("한켈 경로 적분"), Operation.GAMMA_HANKEL),
    _rule("gamma_recursive", _gamma("재귀 관계와 해석적 연속"), Operation.GAMMA_RECURSIVE),
    _rule("gamma_stirling", _gamma("스털링 근사"), Operation.GAMMA_STIRLING),

    # Logarithm: "@log base ( value )@"; only the first slot is kept
    _rule("log", r"@log\s+[^(]+\s*\(\s*[^)]+\s*\)@", Operation.LOG_BASE),

    # Incomplete gamma family, argument "s,x"
    _rule("lower_incomplete_gamma", r"@하불완전\s+감마\s+함수\s+([^@]+)@", Operation.LOWER_INCOMPLETE_GAMMA),
    _rule("upper_incomplete_gamma", r"@상불완전\s+감마\s+함수\s+([^@]+)@", Operation.UPPER_INCOMPLETE_GAMMA),
    _rule("regularized_lower_gamma", r"@하정규화\s+불완전\s+감마\s+함수\s+([^@]+)@", Operation.REGULARIZED_LOWER_GAMMA),
    _rule("regularized_upper_gamma", r"@상정규화\s+불완전\s+감마\s+함수\s+([^@]+)@", Operation.REGULARIZED_UPPER_GAMMA),

    # Named constants
    _rule("pi", r"@파이값@", Operation.CONST_PI, 0),
    _rule("e", r"@e@", Operation.CONST_E, 0),
    _rule("golden_ratio", r"@황금비@", Operation.CONST_GOLDEN_RATIO, 0),
    _rule("omega", r"@오메가@", Operation.CONST_OMEGA, 0),

    # Complex arithmetic: "@X 와 Y 의 복소수 덧셈@"
    _rule("complex_add", _complex("덧셈"), Operation.COMPLEX_ADD, 2),
    _rule("complex_subtract", _complex("뺄셈"), Operation.COMPLEX_SUBTRACT, 2),
    _rule("complex_multiply", _complex("곱셈"), Operation.COMPLEX_MULTIPLY, 2),
    _rule("complex_divide", _complex("나눗셈"), Operation.COMPLEX_DIVIDE, 2),
    _rule("complex_power", _complex("거듭제곱"), Operation.COMPLEX_POWER, 2),

    # Restricted calculator over the first argument
    _rule("calculator", r"@계산\s+([^@]+)@", Operation.ARITHMETIC),
)

RULES_BY_NAME = {rule.name: rule for rule in CATALOG}


def get_rule(name: str) -> PatternRule:
    """
    Returns the rule with the given name.

    Raises:
        KeyError: If no rule has that name.
    """
    try:
        return RULES_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown catalog rule '{name}'. Available: {', '.join(RULES_BY_NAME)}") from None


def match_rules(
    annotation: Optional[str],
    kind: Union[FunctionKind, str],
    disabled: Iterable[str] = (),
) -> List[PatternRule]:
    """
    Returns every enabled rule matching an annotation, in catalog order.

    Args:
        annotation: The function's annotation text.
        kind: The function's kind; rules not applicable to it are skipped.
        disabled: Rule names to ignore.

    Example:
        >>> [r.name for r in match_rules("@min 1,5,3@", FunctionKind.VALUE)]
        ['min']
    """
    if not annotation:
        return []
    kind = FunctionKind(kind)
    disabled = set(disabled)
    matched = [
        rule for rule in CATALOG
        if rule.name not in disabled and rule.applies_to(kind) and rule.matches(annotation)
    ]
    if matched:
        logger.debug(f"Annotation {annotation!r} matched rules: {[r.name for r in matched]}")
    return matched
