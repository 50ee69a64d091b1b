"""Exception hierarchy for pgmflow.

Every expected failure in the library is reported by raising one of the
classes below.  Each one also derives from the closest builtin exception so
that callers may catch either the specific class or, for example, a plain
:class:`ValueError`.
"""

from __future__ import annotations

from typing import Iterable, List, Optional


class PGMError(Exception):
    """Base class for all pgmflow errors.

    Raised directly for general failures that have no dedicated subclass,
    such as asking the identity factor for a value.
    """


class IncompleteAssignmentError(PGMError, ValueError):
    """An assignment is missing variables that the operation requires.

    Parameters
    ----------
    missing : iterable of Variable, optional
        The variables that were not assigned.
    """

    def __init__(self, missing: Optional[Iterable] = None,
                 message: Optional[str] = None) -> None:
        self.missing: List = list(missing) if missing is not None else []
        if message is None:
            names = [str(v) for v in self.missing]
            message = f"Missing assignments to the required variables: {names}"
        super().__init__(message)


class InvalidScopeError(PGMError, ValueError):
    """A scope did not satisfy the constraints of an operation."""


class DivideByZeroError(PGMError, ZeroDivisionError):
    """A non-zero value was divided by zero, or a zero total was normalized."""


class MissingParentError(PGMError, ValueError):
    """A parent variable was referenced before it was added to a model."""


class DuplicateVariableError(PGMError, ValueError):
    """A variable appeared twice where it may appear only once."""


class DuplicateAssignmentError(PGMError, ValueError):
    """A variable was assigned a value twice."""


class OutOfRangeError(PGMError, ValueError):
    """A value lies outside the domain of its variable."""


class NotACPDError(PGMError, ValueError):
    """A conditional probability distribution was required."""


class InvalidInitializationError(PGMError, ValueError):
    """An initialization policy is incompatible with the variable(s)."""


class NonPositiveProbabilityError(PGMError, ValueError):
    """A table contained a negative (or, for CPDs, non-positive) entry."""


class NotEnoughDataError(PGMError, ValueError):
    """Not enough data was provided to perform an estimate."""
