# core/exceptions.py
from typing import Optional

class TixyError(Exception):
    """Base exception for tixy errors."""
    pass

class ExpressionSyntaxError(TixyError):
    """Raised when source text cannot be parsed as an expression."""

    def __init__(self, message: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} (at column {position + 1})"
        super().__init__(message)
        self.position = position

class EvaluationError(TixyError):
    """Raised while evaluating an expression tree."""
    pass

class UnresolvedNameError(EvaluationError):
    """Raised when an identifier matches no parameter and no namespace entry."""
    pass

class NotCallableError(EvaluationError):
    """Raised when a call targets something that is not a function."""
    pass

class ConfigError(TixyError):
    """Raised when a render configuration cannot be loaded or validated."""
    pass
