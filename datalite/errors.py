"""
Exception types raised by Datalite.

Unification failure is not an error and never raises; everything here is
fatal for the operation that raised it.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .knowledge import Rule
    from .terms import Atom


class DataliteError(Exception):
    """Base class for all Datalite errors"""


class ValidationError(DataliteError):
    """A program was rejected before evaluation started"""

    def __init__(self, message: str, rule: Optional['Rule'] = None):
        super().__init__(message)
        self.rule = rule


class RangeRestrictionError(ValidationError):
    """A rule head uses a variable its body never binds"""


class UnsupportedNegationError(ValidationError):
    """A rule contains a negated literal, which the solver cannot evaluate"""


class GroundingError(DataliteError):
    """
    A non-ground atom was used where a fact was required.

    This signals a malformed knowledge base, not bad user input.
    """

    def __init__(self, message: str, fact: Optional['Atom'] = None):
        super().__init__(message)
        self.fact = fact


class IterationLimitError(DataliteError):
    """The solver exceeded its configured iteration cap"""

    def __init__(self, message: str, iterations: int):
        super().__init__(message)
        self.iterations = iterations


class ParseError(DataliteError, ValueError):
    """Source text does not follow the Datalite syntax"""

    def __init__(self, message: str, line: int = 0, column: int = 0):
        if line:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.line = line
        self.column = column


class ConfigError(DataliteError, ValueError):
    """A configuration value is not usable"""
