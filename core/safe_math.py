# core/safe_math.py
"""
The fixed maths namespace that expressions see unqualified.

Mirrors the JavaScript ``Math`` object: names are case sensitive, constants
are upper case. ``random`` is left out so evaluators stay deterministic.
"""
import math
from types import MappingProxyType
from typing import Mapping

import numpy as np

_UINT32 = 0x100000000


def to_uint32(value) -> int:
    """Truncate a number to an unsigned 32-bit integer (NaN and infinities become 0)."""
    value = float(value)
    if not math.isfinite(value):
        return 0
    return math.trunc(value) % _UINT32


def to_int32(value) -> int:
    """Truncate a number to a signed 32-bit integer."""
    n = to_uint32(value)
    return n - _UINT32 if n >= 0x80000000 else n


def _integral(fn):
    """Wrap an integer rounding function; NaN and infinities pass through unchanged."""
    def rounded(x):
        x = float(x)
        if not math.isfinite(x):
            return x
        return float(fn(x))
    return rounded


def _round_half_up(x):
    # half-way cases round towards +infinity
    f = math.floor(x)
    return f + 1 if x - f >= 0.5 else f


def _sign(x):
    if math.isnan(x):
        return math.nan
    return float((x > 0) - (x < 0))


def _clz32(x):
    return float(32 - to_uint32(x).bit_length())


def _imul(a, b):
    return float(to_int32(to_int32(a) * to_int32(b)))


def _max(*args):
    if any(math.isnan(a) for a in args):
        return math.nan
    return float(max(args)) if args else -math.inf


def _min(*args):
    if any(math.isnan(a) for a in args):
        return math.nan
    return float(min(args)) if args else math.inf


_ALLOWED_FUNCS = {
    "abs": abs,
    "acos": math.acos, "acosh": math.acosh,
    "asin": math.asin, "asinh": math.asinh,
    "atan": math.atan, "atan2": math.atan2, "atanh": math.atanh,
    "cbrt": lambda x: float(np.cbrt(x)),
    "ceil": _integral(math.ceil),
    "clz32": _clz32,
    "cos": math.cos, "cosh": math.cosh,
    "exp": math.exp, "expm1": math.expm1,
    "floor": _integral(math.floor),
    "fround": lambda x: float(np.float32(x)),
    "hypot": math.hypot,
    "imul": _imul,
    "log": math.log, "log10": math.log10, "log1p": math.log1p, "log2": math.log2,
    "max": _max, "min": _min,
    "pow": math.pow,
    "round": _integral(_round_half_up),
    "sign": _sign,
    "sin": math.sin, "sinh": math.sinh,
    "sqrt": math.sqrt,
    "tan": math.tan, "tanh": math.tanh,
    "trunc": _integral(math.trunc),
}

_CONSTANTS = {
    "E": math.e,
    "LN10": math.log(10),
    "LN2": math.log(2),
    "LOG10E": math.log10(math.e),
    "LOG2E": math.log2(math.e),
    "PI": math.pi,
    "SQRT1_2": math.sqrt(0.5),
    "SQRT2": math.sqrt(2),
}

MATH_NAMESPACE: Mapping[str, object] = MappingProxyType({**_ALLOWED_FUNCS, **_CONSTANTS})
