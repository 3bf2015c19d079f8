# symbolic/evaluator.py
import math
import operator
from typing import Any, Callable, Dict, Mapping

from core.exceptions import EvaluationError, NotCallableError, UnresolvedNameError
from core.safe_math import MATH_NAMESPACE, to_int32, to_uint32
from symbolic.ast_nodes import Binary, Call, Conditional, Logical, Name, Node, Num, Unary

PARAMETER_NAMES = ("t", "i", "x", "y")


def _shift_count(b) -> int:
    return to_uint32(b) & 31


def _to_number(v) -> float:
    if callable(v):
        raise TypeError("cannot convert a function to a number")
    return float(v)


def _checked(op: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    """Arithmetic that raises OverflowError when finite operands give an infinite result."""
    def apply(a, b):
        result = op(a, b)
        if isinstance(result, float) and math.isinf(result) and math.isfinite(a) and math.isfinite(b):
            raise OverflowError("numerical result out of range")
        return result
    return apply


def truthy(v: Any) -> bool:
    """Zero and NaN are false; everything else is true."""
    return bool(v) and v == v


_BINARY_OPS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": _checked(operator.add),
    "-": _checked(operator.sub),
    "*": _checked(operator.mul),
    "/": _checked(operator.truediv),
    "%": math.fmod,
    "**": math.pow,
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "&": lambda a, b: to_int32(a) & to_int32(b),
    "|": lambda a, b: to_int32(a) | to_int32(b),
    "^": lambda a, b: to_int32(a) ^ to_int32(b),
    "<<": lambda a, b: to_int32(to_int32(a) << _shift_count(b)),
    ">>": lambda a, b: to_int32(a) >> _shift_count(b),
    ">>>": lambda a, b: to_uint32(a) >> _shift_count(b),
}

_UNARY_OPS: Dict[str, Callable[[Any], Any]] = {
    "-": operator.neg,
    "+": _to_number,
    "!": lambda v: not truthy(v),
    "~": lambda v: ~to_int32(v),
}


def lookup(ident: str, params: Mapping[str, Any]) -> Any:
    """Resolve a name against the parameters first, then the maths namespace."""
    if ident in params:
        return params[ident]
    if ident in MATH_NAMESPACE:
        return MATH_NAMESPACE[ident]
    raise UnresolvedNameError(f"'{ident}' is not defined")


def evaluate(node: Node, params: Mapping[str, Any]) -> Any:
    """
    Evaluate an expression tree for one set of parameter values.

    :param node: Root of a tree produced by symbolic.parser.parse_expr.
    :param params: Mapping of parameter name to value, e.g. {"t": 0.5, "i": 3, "x": 3, "y": 0}.
    :return: The raw value of the expression (a number, a boolean or a namespace function).
    :raises Exception: Whatever the operation raises; callers decide how to report it.
    """
    if isinstance(node, Num):
        return node.value
    if isinstance(node, Name):
        return lookup(node.ident, params)
    if isinstance(node, Binary):
        return _BINARY_OPS[node.op](evaluate(node.left, params), evaluate(node.right, params))
    if isinstance(node, Unary):
        return _UNARY_OPS[node.op](evaluate(node.operand, params))
    if isinstance(node, Logical):
        left = evaluate(node.left, params)
        if truthy(left) == (node.op == "&&"):
            return evaluate(node.right, params)
        return left
    if isinstance(node, Conditional):
        if truthy(evaluate(node.test, params)):
            return evaluate(node.then, params)
        return evaluate(node.orelse, params)
    if isinstance(node, Call):
        func = evaluate(node.func, params)
        if not callable(func):
            raise NotCallableError(f"{func!r} is not a function")
        return func(*[evaluate(arg, params) for arg in node.args])
    raise EvaluationError(f"Unknown node type {type(node).__name__}")
