"""Tests for pgmflow/core/variable.py.

Covers:
- Variable creation, identity and cardinality
- Assignment set/get/unset and its errors
- all_assignments ordering and size
"""

from __future__ import annotations

import threading

import numpy as np
import pytest

from pgmflow.core.errors import DuplicateAssignmentError, OutOfRangeError
from pgmflow.core.variable import (
    Assignment,
    Variable,
    all_assignments,
    binary,
    discrete,
)


class TestVariable:
    """Variable factories and value semantics."""

    def test_binary_cardinality(self) -> None:
        assert binary().cardinality == 2

    def test_discrete_cardinality(self) -> None:
        assert discrete(5).cardinality == 5

    def test_ids_are_unique(self) -> None:
        variables = [binary() for _ in range(50)]
        assert len({v.id for v in variables}) == 50

    def test_equality_by_id(self) -> None:
        v = discrete(3)
        assert v == Variable(v.id, 3)
        assert v != discrete(3)
        assert hash(v) == hash(Variable(v.id, 3))

    def test_zero_cardinality_raises(self) -> None:
        with pytest.raises(ValueError, match="cardinality"):
            discrete(0)

    def test_str(self) -> None:
        v = binary()
        assert str(v) == f"X{v.id}"

    def test_immutable(self) -> None:
        v = binary()
        with pytest.raises(AttributeError):
            v.cardinality = 3

    def test_concurrent_creation_unique(self) -> None:
        """Variables created from several threads never share an id."""
        created = []
        lock = threading.Lock()

        def worker() -> None:
            local = [binary() for _ in range(200)]
            with lock:
                created.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({v.id for v in created}) == len(created) == 1600


class TestAssignment:
    """Partial assignments of states to variables."""

    def test_set_and_get(self) -> None:
        a, b = binary(), discrete(3)
        assn = Assignment()
        assn.set(a, 1)
        assert assn.get(a) == 1
        assert assn.get(b) is None
        assert a in assn and b not in assn
        assert len(assn) == 1

    def test_out_of_range(self) -> None:
        v = discrete(3)
        with pytest.raises(OutOfRangeError, match="out of range"):
            Assignment().set(v, 3)
        with pytest.raises(OutOfRangeError):
            Assignment().set(v, -1)

    def test_duplicate_assignment(self) -> None:
        v = binary()
        assn = Assignment()
        assn.set(v, 0)
        with pytest.raises(DuplicateAssignmentError):
            assn.set(v, 1)

    def test_unset_then_set(self) -> None:
        v = binary()
        assn = Assignment()
        assn.set(v, 0)
        assn.unset(v)
        assert v not in assn
        assn.set(v, 1)
        assert assn.get(v) == 1

    def test_unset_absent_is_noop(self) -> None:
        assn = Assignment()
        assn.unset(binary())
        assert len(assn) == 0

    def test_from_dict_and_equality(self) -> None:
        a, b = binary(), binary()
        assn = Assignment.from_dict({a: 0, b: 1})
        other = Assignment()
        other.set(b, 1)
        other.set(a, 0)
        assert assn == other
        assert assn.variables() == [a, b]

    def test_copy_is_independent(self) -> None:
        a = binary()
        assn = Assignment.from_dict({a: 1})
        copy = assn.copy()
        copy.unset(a)
        assert assn.get(a) == 1

    def test_repr(self) -> None:
        a = binary()
        assert repr(Assignment.from_dict({a: 1})) == f"Assignment(X{a.id}=1)"


class TestAllAssignments:
    """Enumeration of every full assignment to a scope."""

    def test_count(self) -> None:
        scope = [binary(), discrete(3), discrete(4)]
        assignments = list(all_assignments(scope))
        assert len(assignments) == len(all_assignments(scope)) == 24

    def test_last_variable_fastest(self) -> None:
        a, b = binary(), discrete(3)
        states = [(x.get(a), x.get(b)) for x in all_assignments([a, b])]
        assert states == [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]

    def test_matches_table_flat_index(self) -> None:
        scope = [discrete(2), discrete(3), discrete(2)]
        shape = tuple(v.cardinality for v in scope)
        for flat, assn in enumerate(all_assignments(scope)):
            idx = tuple(assn.get(v) for v in scope)
            assert np.ravel_multi_index(idx, shape) == flat

    def test_restartable(self) -> None:
        scope = [binary(), binary()]
        it = all_assignments(scope)
        assert list(it) == list(it)

    def test_distinct(self) -> None:
        scope = [discrete(3), discrete(2)]
        seen = {tuple(sorted((v.id, s) for v, s in x.items()))
                for x in all_assignments(scope)}
        assert len(seen) == 6

    def test_empty_scope(self) -> None:
        assignments = list(all_assignments([]))
        assert len(assignments) == 1
        assert len(assignments[0]) == 0
