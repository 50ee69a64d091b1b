"""Core module for pgmflow.

This module contains the variables and assignments every other layer is
built on, the library settings, and the error hierarchy.
"""

from .config import Settings, get_settings, make_rng
from .errors import (
    DivideByZeroError,
    DuplicateAssignmentError,
    DuplicateVariableError,
    IncompleteAssignmentError,
    InvalidInitializationError,
    InvalidScopeError,
    MissingParentError,
    NonPositiveProbabilityError,
    NotACPDError,
    NotEnoughDataError,
    OutOfRangeError,
    PGMError,
)
from .variable import Assignment, Variable, all_assignments, binary, discrete

__all__ = [
    "Variable",
    "Assignment",
    "binary",
    "discrete",
    "all_assignments",
    "Settings",
    "get_settings",
    "make_rng",
    "PGMError",
    "IncompleteAssignmentError",
    "InvalidScopeError",
    "DivideByZeroError",
    "MissingParentError",
    "DuplicateVariableError",
    "DuplicateAssignmentError",
    "OutOfRangeError",
    "NotACPDError",
    "InvalidInitializationError",
    "NonPositiveProbabilityError",
    "NotEnoughDataError",
]
