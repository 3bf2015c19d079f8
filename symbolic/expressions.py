# symbolic/expressions.py
import numbers
from dataclasses import dataclass, field
from typing import List, Optional

from core.evaluation_types import EvalError, EvalResult, Number
from core.exceptions import ExpressionSyntaxError
from core.safe_math import MATH_NAMESPACE
from symbolic.ast_nodes import Node, iter_names
from symbolic.evaluator import PARAMETER_NAMES, evaluate
from symbolic.parser import parse_expr


@dataclass(frozen=True, eq=False)
class CompiledEvaluator:
    """
    Transfer function f(t, i, x, y) compiled from one expression.

    Calling it never raises: a successful evaluation returns ``Number`` and
    any failure is returned as ``EvalError``.
    """
    source: str
    tree: Node = field(repr=False)

    def __call__(self, t, i, x, y) -> EvalResult:
        try:
            value = evaluate(self.tree, {"t": t, "i": i, "x": x, "y": y})
            if not isinstance(value, numbers.Real):
                return EvalError("TypeError", f"expression evaluated to {value!r}, not a number")
            return Number(float(value))
        except Exception as e:
            return EvalError.from_exception(e)


def compile_expr(source: str) -> Optional[CompiledEvaluator]:
    """
    Compile a single expression over t, i, x and y into an evaluator.

    Names are looked up when the evaluator is called, so an unknown
    identifier still compiles and fails on each call instead.

    :param source: The expression text, e.g. "sin(t) + x".
    :return: The evaluator, or None if the text is not a valid expression.
    """
    try:
        return CompiledEvaluator(source, parse_expr(source))
    except (ExpressionSyntaxError, RecursionError):
        return None


def unresolved_names(evaluator: CompiledEvaluator) -> List[str]:
    """Identifiers in the expression that match no parameter and no namespace entry."""
    seen: List[str] = []
    for name in iter_names(evaluator.tree):
        if name not in PARAMETER_NAMES and name not in MATH_NAMESPACE and name not in seen:
            seen.append(name)
    return seen
