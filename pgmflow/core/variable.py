"""Discrete random variables and assignments to them.

Provides:

* :class:`Variable` – a lightweight, immutable handle for a discrete random
  variable with a fixed cardinality.
* :func:`binary` / :func:`discrete` – factories that hand out process-unique
  variable ids.
* :class:`Assignment` – a partial or total mapping from variables to states.
* :func:`all_assignments` – every full assignment to a scope, in row-major
  (last variable fastest) order, matching the axis order of factor tables.

Variable ids come from a single process-wide counter.  Creation is
serialized by a lock, which is the only synchronization point in the
library; everything else is single-threaded.
"""

from __future__ import annotations

import itertools
import math
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from pgmflow.core.errors import DuplicateAssignmentError, OutOfRangeError

_id_counter = itertools.count()
_id_lock = threading.Lock()


def _next_id() -> int:
    with _id_lock:
        return next(_id_counter)


@dataclass(frozen=True)
class Variable:
    """A discrete random variable.

    Two variables are the same variable only if they share an ``id``;
    cardinality does not take part in equality or hashing.
    """

    id: int
    cardinality: int = field(compare=False)

    def __str__(self) -> str:
        return f"X{self.id}"


def discrete(cardinality: int) -> Variable:
    """Create a new discrete variable with states ``0 .. cardinality - 1``.

    Raises
    ------
    ValueError
        If *cardinality* is less than 1.
    """
    if cardinality < 1:
        raise ValueError(
            f"cardinality must be at least 1, got {cardinality}"
        )
    return Variable(_next_id(), int(cardinality))


def binary() -> Variable:
    """Create a new binary variable (cardinality 2)."""
    return discrete(2)


class Assignment:
    """A partial or total assignment of states to variables.

    Each variable may be assigned at most once; re-assigning requires an
    explicit :meth:`unset` first.

    Examples
    --------
    >>> a, b = binary(), discrete(3)
    >>> assn = Assignment()
    >>> assn.set(a, 1)
    >>> assn.get(a), assn.get(b)
    (1, None)
    """

    def __init__(self) -> None:
        self._values: Dict[Variable, int] = {}

    @classmethod
    def from_dict(cls, values: Mapping[Variable, int]) -> "Assignment":
        """Build an assignment from a ``{variable: state}`` mapping."""
        assn = cls()
        for var, val in values.items():
            assn.set(var, val)
        return assn

    def set(self, var: Variable, value: int) -> None:
        """Assign *value* to *var*.

        Raises
        ------
        OutOfRangeError
            If *value* is not a valid state of *var*.
        DuplicateAssignmentError
            If *var* is already assigned.
        """
        value = int(value)
        if not 0 <= value < var.cardinality:
            raise OutOfRangeError(
                f"Value {value} is out of range for variable {var} "
                f"with cardinality {var.cardinality}"
            )
        if var in self._values:
            raise DuplicateAssignmentError(
                f"Variable {var} is already assigned"
            )
        self._values[var] = value

    def get(self, var: Variable) -> Optional[int]:
        return self._values.get(var)

    def unset(self, var: Variable) -> None:
        self._values.pop(var, None)

    def variables(self) -> List[Variable]:
        return list(self._values)

    def items(self) -> Iterable[Tuple[Variable, int]]:
        return self._values.items()

    def copy(self) -> "Assignment":
        new = Assignment()
        new._values = dict(self._values)
        return new

    def __contains__(self, var: object) -> bool:
        return var in self._values

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Assignment):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        body = ", ".join(f"{v}={s}" for v, s in self._values.items())
        return f"Assignment({body})"


class AllAssignments:
    """Restartable iterable over every full assignment to a scope.

    Iteration order is row-major: the last variable of the scope varies
    fastest, exactly like the flat index of a C-ordered numpy table whose
    axes follow the scope.
    """

    def __init__(self, scope: Sequence[Variable]) -> None:
        self._scope: Tuple[Variable, ...] = tuple(scope)

    def __iter__(self) -> Iterator[Assignment]:
        ranges = [range(v.cardinality) for v in self._scope]
        for states in itertools.product(*ranges):
            assn = Assignment()
            assn._values = dict(zip(self._scope, states))
            yield assn

    def __len__(self) -> int:
        return math.prod(v.cardinality for v in self._scope)


def all_assignments(scope: Sequence[Variable]) -> AllAssignments:
    """Return every full assignment to *scope* (last variable fastest)."""
    return AllAssignments(scope)
