# core/evaluation_types.py
from dataclasses import dataclass
from typing import Union

@dataclass(frozen=True)
class Number:
    """Successful evaluation result."""
    value: float

    @property
    def ok(self) -> bool:
        return True

@dataclass(frozen=True)
class EvalError:
    """
    Failed evaluation result, returned in place of a number.

    Attributes:
        kind: Name of the error class that stopped evaluation (e.g. "UnresolvedNameError").
        message: Human readable description.
    """
    kind: str
    message: str

    @property
    def ok(self) -> bool:
        return False

    @classmethod
    def from_exception(cls, exc: BaseException) -> "EvalError":
        return cls(kind=type(exc).__name__, message=str(exc))

EvalResult = Union[Number, EvalError]
