"""Factors: functions from a scope of discrete variables to non-negative reals.

Provides:

* :class:`Factor` – the abstract contract shared by every factor.
* :class:`IdentityFactor` / :data:`IDENTITY` – the multiplicative unit with
  an empty scope.  It stands in for scalar (zero-dimensional) results, so
  products and eliminations can be folded starting from it.
* :class:`TableFactor` – a dense table over an ordered scope, optionally
  flagged as a conditional probability distribution (CPD).

Factors are immutable.  Every operation returns a new factor (or one of its
operands, unchanged) and tables are exposed as read-only arrays.

The table axes follow the scope order, so the flat index of a table entry is
exactly the position of its assignment in
:func:`~pgmflow.core.variable.all_assignments`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

import numpy as np

from pgmflow.core.config import get_settings, make_rng
from pgmflow.core.errors import (
    DivideByZeroError,
    IncompleteAssignmentError,
    InvalidScopeError,
    NonPositiveProbabilityError,
    NotACPDError,
    PGMError,
)
from pgmflow.core.variable import Assignment, Variable


# ------------------------------------------------------------------ #
#  Factor ABC
# ------------------------------------------------------------------ #

class Factor(ABC):
    """Abstract base class for factors.

    Operator overloads are provided for factor algebra:

    - ``__mul__``: factor product
    - ``__truediv__``: factor division
    """

    # ----- constructors ---------------------------------------------------

    @staticmethod
    def identity() -> "IdentityFactor":
        """Return the identity factor."""
        return IDENTITY

    @staticmethod
    def new(scope: Sequence[Variable], table) -> "TableFactor":
        """Create a general (non-CPD) factor over *scope*."""
        return TableFactor(scope, table, is_cpd=False)

    @staticmethod
    def cpd(
        var: Variable,
        parents: Sequence[Variable],
        table,
    ) -> "TableFactor":
        """Create the CPD ``P(var | parents)``.

        Parameters
        ----------
        var : Variable
            The child variable.  It becomes the last axis of the table.
        parents : sequence of Variable
            The conditioning variables, in table-axis order.
        table : array-like
            Array of shape ``(|parent_0|, ..., |parent_k|, |var|)``.

        Raises
        ------
        InvalidScopeError
            If the table has the wrong number of axes or an axis does not
            match its variable's cardinality.
        NonPositiveProbabilityError
            If any entry is not strictly positive.
        NotACPDError
            If some conditional distribution does not sum to 1.
        """
        scope = list(parents) + [var]
        values = np.asarray(table, dtype=np.float64)
        if values.ndim != len(scope):
            raise InvalidScopeError(
                f"CPD table has {values.ndim} axes but {len(parents)} "
                f"parent(s) + 1 child require {len(scope)}"
            )
        return TableFactor(scope, values, is_cpd=True)

    # ----- contract -------------------------------------------------------

    @abstractmethod
    def scope(self) -> List[Variable]:
        """Return a copy of the ordered scope."""

    @abstractmethod
    def is_identity(self) -> bool:
        pass

    @abstractmethod
    def is_cpd(self) -> bool:
        pass

    @abstractmethod
    def value(self, assignment: Assignment) -> float:
        """Look up the entry selected by *assignment*."""

    @abstractmethod
    def product(self, other: "Factor") -> "Factor":
        """Factor product ``psi(X, Y, Z) = phi1(X, Y) * phi2(Y, Z)``."""

    @abstractmethod
    def divide(self, other: "Factor") -> "Factor":
        """Factor division ``psi(X, Y) = phi1(X, Y) / phi2(Y)``."""

    @abstractmethod
    def reduce(self, assignment: Assignment) -> "Factor":
        """Fix every scope variable that *assignment* assigns."""

    @abstractmethod
    def marginalize(self, var: Variable) -> "Factor":
        """Sum *var* out of the factor."""

    @abstractmethod
    def normalize(self) -> "Factor":
        """Scale the entries so they sum to 1."""

    @abstractmethod
    def sample_cpd(
        self,
        assignment: Assignment,
        rng: Union[None, int, np.random.Generator] = None,
    ) -> int:
        """Draw a state of the child variable given its parents."""

    def __mul__(self, other: "Factor") -> "Factor":
        return self.product(other)

    def __truediv__(self, other: "Factor") -> "Factor":
        return self.divide(other)


# ------------------------------------------------------------------ #
#  Identity
# ------------------------------------------------------------------ #

class IdentityFactor(Factor):
    """The factor with empty scope; the unit of product and division."""

    def scope(self) -> List[Variable]:
        return []

    def is_identity(self) -> bool:
        return True

    def is_cpd(self) -> bool:
        return True

    def value(self, assignment: Assignment) -> float:
        raise PGMError("The identity factor has no value")

    def product(self, other: Factor) -> Factor:
        return other

    def divide(self, other: Factor) -> Factor:
        if other.is_identity():
            return self
        raise InvalidScopeError(
            "Cannot divide the identity factor by a non-identity factor"
        )

    def reduce(self, assignment: Assignment) -> Factor:
        return self

    def marginalize(self, var: Variable) -> Factor:
        return self

    def normalize(self) -> Factor:
        return self

    def sample_cpd(self, assignment, rng=None) -> int:
        raise PGMError("The identity factor has no variable to sample")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IdentityFactor)

    def __hash__(self) -> int:
        return hash(IdentityFactor)

    def __repr__(self) -> str:
        return "IdentityFactor()"


IDENTITY = IdentityFactor()


# ------------------------------------------------------------------ #
#  TableFactor
# ------------------------------------------------------------------ #

class TableFactor(Factor):
    """A factor stored as a dense table over an ordered scope.

    Parameters
    ----------
    scope : sequence of Variable
        Distinct variables indexing the axes of *table*.
    table : array-like
        An N-dimensional array whose shape equals the scope cardinalities.
    is_cpd : bool
        If *True*, the table must be a CPD of the last scope variable given
        the others: strictly positive, with every slice along the last axis
        summing to 1 (within the active ``cpd_tolerance``).
    """

    def __init__(
        self,
        scope: Sequence[Variable],
        table,
        is_cpd: bool = False,
    ) -> None:
        scope = list(scope)
        values = np.array(table, dtype=np.float64)

        if not scope:
            raise InvalidScopeError("Scope may not be empty")
        if len(set(scope)) != len(scope):
            raise InvalidScopeError(
                f"Scope variables must be distinct, got {[str(v) for v in scope]}"
            )
        expected = tuple(v.cardinality for v in scope)
        if values.shape != expected:
            raise InvalidScopeError(
                f"Table shape {values.shape} does not match "
                f"scope cardinalities {expected}"
            )
        if np.any(values < 0):
            raise NonPositiveProbabilityError(
                "Factor tables may not contain negative values"
            )
        if is_cpd:
            _check_cpd(values)

        self._init(scope, values, is_cpd)

    def _init(self, scope: List[Variable], values: np.ndarray,
              cpd: bool) -> None:
        values.setflags(write=False)
        self._scope = scope
        self._values = values
        self._cpd = cpd

    @classmethod
    def _trusted(cls, scope: List[Variable], values: np.ndarray,
                 cpd: bool) -> "TableFactor":
        """Wrap results of factor operations without re-validating them."""
        factor = cls.__new__(cls)
        factor._init(scope, np.ascontiguousarray(values, dtype=np.float64),
                     cpd)
        return factor

    # ----- accessors ------------------------------------------------------

    @property
    def values(self) -> np.ndarray:
        """The read-only table, axes in scope order."""
        return self._values

    def scope(self) -> List[Variable]:
        return list(self._scope)

    def is_identity(self) -> bool:
        return False

    def is_cpd(self) -> bool:
        return self._cpd

    def value(self, assignment: Assignment) -> float:
        """Return the table entry selected by *assignment*.

        *assignment* may assign variables outside the scope; they are
        ignored.

        Raises
        ------
        IncompleteAssignmentError
            If some scope variable is unassigned.
        """
        return float(self._values[self._index(assignment, self._scope)])

    # ----- algebra --------------------------------------------------------

    def product(self, other: Factor) -> Factor:
        """Point-wise product over the union of both scopes.

        The scope of the result is this factor's scope followed by the
        variables only *other* mentions.

        Raises
        ------
        InvalidScopeError
            If the two scopes do not intersect.
        """
        if other.is_identity():
            return self

        other_scope = other.scope()
        new_scope = self.scope()
        new_scope.extend(v for v in other_scope if v not in self._scope)
        if len(new_scope) == len(self._scope) + len(other_scope):
            raise InvalidScopeError(
                "The product of factors with disjoint scopes is undefined"
            )

        a = self._broadcast_into(new_scope)
        b = other._broadcast_into(new_scope)
        return TableFactor._trusted(new_scope, a * b, False)

    def divide(self, other: Factor) -> Factor:
        """Divide by a factor whose scope is a subset of this one.

        ``0 / 0`` is defined as 0.

        Raises
        ------
        InvalidScopeError
            If ``other.scope()`` is not a subset of this scope.
        DivideByZeroError
            If a non-zero entry is divided by zero.
        """
        if other.is_identity():
            return self
        if any(v not in self._scope for v in other.scope()):
            raise InvalidScopeError(
                "The denominator's scope must be a subset of the numerator's"
            )

        num = self._values
        den = np.broadcast_to(other._broadcast_into(self._scope), num.shape)
        zeros = den == 0
        if np.any(zeros & (num != 0)):
            raise DivideByZeroError("Division of a non-zero value by zero")

        out = np.zeros_like(num)
        np.divide(num, den, out=out, where=~zeros)
        return TableFactor._trusted(self.scope(), out, False)

    def reduce(self, assignment: Assignment) -> Factor:
        """Slice the table at the states *assignment* gives its variables.

        Returns :data:`IDENTITY` if every scope variable is assigned and
        this factor itself if none are.
        """
        index = tuple(
            assignment.get(v) if v in assignment else slice(None)
            for v in self._scope
        )
        new_scope = [v for v in self._scope if v not in assignment]
        if not new_scope:
            return IDENTITY
        if len(new_scope) == len(self._scope):
            return self
        return TableFactor._trusted(new_scope, self._values[index], False)

    def marginalize(self, var: Variable) -> Factor:
        """Sum *var* out, keeping the remaining axes in order.

        A variable outside the scope leaves the factor unchanged.
        Summing out the last remaining variable yields :data:`IDENTITY`.
        """
        if var not in self._scope:
            return self
        axis = self._scope.index(var)
        new_scope = [v for v in self._scope if v != var]
        if not new_scope:
            return IDENTITY
        return TableFactor._trusted(
            new_scope, self._values.sum(axis=axis), self._cpd
        )

    def normalize(self) -> Factor:
        """Return a copy whose entries sum to 1.

        Raises
        ------
        DivideByZeroError
            If the entries sum to 0.
        """
        total = self._values.sum()
        if total == 0:
            raise DivideByZeroError("Cannot normalize a factor with zero mass")
        return TableFactor._trusted(
            self.scope(), self._values / total, len(self._scope) == 1
        )

    def sample_cpd(
        self,
        assignment: Assignment,
        rng: Union[None, int, np.random.Generator] = None,
    ) -> int:
        """Draw the last scope variable given the values of the others.

        The row selected by the parents is normalized and sampled by
        inverse-CDF.

        Raises
        ------
        IncompleteAssignmentError
            If a parent (any scope variable but the last) is unassigned.
        """
        rng = make_rng(rng)
        row = self._values[self._index(assignment, self._scope[:-1])]
        total = row.sum()
        if total <= 0:
            raise DivideByZeroError(
                "Cannot sample from a conditional slice with zero mass"
            )
        cdf = np.cumsum(row / total)
        draw = int(np.searchsorted(cdf, rng.random(), side="right"))
        return min(draw, row.shape[0] - 1)

    # ----- helpers --------------------------------------------------------

    @staticmethod
    def _index(assignment: Assignment, variables: Sequence[Variable]) -> tuple:
        missing = [v for v in variables if v not in assignment]
        if missing:
            raise IncompleteAssignmentError(missing)
        return tuple(assignment.get(v) for v in variables)

    def _broadcast_into(self, target: Sequence[Variable]) -> np.ndarray:
        """Reshape values so axes align with *target* (size-1 for missing)."""
        src_axes = [self._scope.index(v) for v in target if v in self._scope]
        shape = [v.cardinality if v in self._scope else 1 for v in target]
        return np.transpose(self._values, src_axes).reshape(shape)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TableFactor):
            return NotImplemented
        return (
            self._scope == other._scope
            and self._cpd == other._cpd
            and np.array_equal(self._values, other._values)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"TableFactor(scope={[str(v) for v in self._scope]}, "
            f"shape={self._values.shape}, cpd={self._cpd})"
        )


def _check_cpd(values: np.ndarray, tolerance: Optional[float] = None) -> None:
    """Validate that *values* is a CPD over its last axis."""
    if np.any(values <= 0):
        raise NonPositiveProbabilityError(
            "CPD entries must be strictly positive"
        )
    tol = tolerance if tolerance is not None else get_settings().cpd_tolerance
    sums = values.sum(axis=-1)
    if not np.allclose(sums, 1.0, rtol=0.0, atol=tol):
        raise NotACPDError(
            "Each conditional distribution of a CPD must sum to 1, "
            f"got sums {np.round(sums, 6).ravel().tolist()}"
        )
