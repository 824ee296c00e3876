# core/exceptions.py
from typing import Optional


class MathVizError(Exception):
    """Base exception for MathViz engine errors."""
    pass


class ParseError(MathVizError):
    """Raised when an expression string is syntactically malformed."""

    def __init__(self, message: str, source: str = "", position: Optional[int] = None):
        super().__init__(message)
        self.source = source
        self.position = position


class EvaluationError(MathVizError):
    """Raised when an expression references a variable that has no binding."""
    pass


class DifferentiationError(MathVizError):
    """Raised when an expression contains a construct that cannot be differentiated."""
    pass


class InputFormatError(MathVizError):
    """Raised when JSON/CSV sample input does not have the expected shape."""
    pass


class ConfigError(InputFormatError):
    """Raised when a YAML job file fails schema validation."""
    pass


class DomainError(MathVizError):
    """Raised when a sampling domain is empty or has non-finite bounds."""
    pass
