"""Tests for pgmflow/models/undirected.py.

Covers:
- Partition function and probabilities on the misconception network
- Conditioning against the unconditioned joint
- Builder validation
- Conversion from a directed model
"""

from __future__ import annotations

import networkx as nx
import numpy as np
import pytest

from pgmflow.core.errors import (
    DuplicateVariableError,
    IncompleteAssignmentError,
    InvalidInitializationError,
    InvalidScopeError,
)
from pgmflow.core.variable import Assignment, all_assignments, binary
from pgmflow.factors.factor import Factor
from pgmflow.factors.initialization import Binomial, Random, Table, Uniform
from pgmflow.models.generators import build_tree
from pgmflow.models.undirected import UndirectedModel, UndirectedModelBuilder


class TestMisconception:
    """The four-variable loop from Koller & Friedman."""

    def test_partition(self, misconception) -> None:
        assert misconception.model.partition == pytest.approx(7_201_840)

    @pytest.mark.parametrize(
        "states, expected, tol",
        [
            ((0, 0, 0, 0), 0.04, 0.01),
            ((0, 1, 1, 0), 0.69, 0.01),
            ((1, 0, 0, 1), 0.14, 0.01),
            ((1, 1, 0, 1), 0.014, 0.001),
        ],
    )
    def test_probability(self, misconception, states, expected, tol) -> None:
        m = misconception
        assn = Assignment.from_dict(dict(zip([m.a, m.b, m.c, m.d], states)))
        assert m.model.probability(assn) == pytest.approx(expected, abs=tol)

    def test_sums_to_one(self, misconception) -> None:
        model = misconception.model
        total = sum(model.probability(a) for a in all_assignments(model.variables()))
        assert total == pytest.approx(1.0)

    def test_incomplete(self, misconception) -> None:
        with pytest.raises(IncompleteAssignmentError):
            misconception.model.probability(
                Assignment.from_dict({misconception.a: 0})
            )

    def test_names(self, misconception) -> None:
        assert misconception.model.lookup_variable("C") == misconception.c
        assert misconception.model.lookup_name(misconception.d) == "D"

    def test_markov_network(self, misconception) -> None:
        m = misconception
        graph = m.model.markov_network()
        assert isinstance(graph, nx.Graph)
        assert graph.number_of_edges() == 4
        assert not graph.has_edge(m.a, m.c)


class TestCondition:
    """Conditioning an undirected model."""

    def test_condition(self, misconception) -> None:
        m = misconception
        conditioned = m.model.condition(Assignment.from_dict({m.a: 0, m.c: 1}))
        assert conditioned.num_variables() == 2
        assert conditioned.variables() == [m.b, m.d]
        assert conditioned.lookup_variable("A") is None
        assert conditioned.partition == pytest.approx(5_300_530)
        p = conditioned.probability(Assignment.from_dict({m.b: 0, m.d: 0}))
        assert p == pytest.approx(300_000 / 5_300_530)

    def test_matches_joint(self, misconception) -> None:
        """P(b, d | a, c) computed both ways agrees."""
        m = misconception
        evidence = Assignment.from_dict({m.a: 1, m.c: 0})
        conditioned = m.model.condition(evidence)

        joint = {}
        for assn in all_assignments([m.b, m.d]):
            full = assn.copy()
            full.set(m.a, 1)
            full.set(m.c, 0)
            joint[(assn.get(m.b), assn.get(m.d))] = m.model.probability(full)
        norm = sum(joint.values())

        for assn in all_assignments([m.b, m.d]):
            key = (assn.get(m.b), assn.get(m.d))
            assert conditioned.probability(assn) == pytest.approx(joint[key] / norm)

    def test_fully_reduced_factors_dropped(self, misconception) -> None:
        m = misconception
        conditioned = m.model.condition(Assignment.from_dict({m.a: 0, m.b: 1}))
        assert len(conditioned.factors()) == 3
        assert all(not f.is_identity() for f in conditioned.factors())


class TestBuilder:
    """UndirectedModelBuilder."""

    def test_unused_variable(self) -> None:
        a, b, c = binary(), binary(), binary()
        builder = (
            UndirectedModelBuilder()
            .with_named_variable(a, "A")
            .with_named_variable(c, "C")
            .with_factor([a, b], Uniform())
        )
        with pytest.raises(InvalidScopeError, match="do not appear"):
            builder.build()

    def test_factor_only_variables_named(self) -> None:
        a, b = binary(), binary()
        model = (
            UndirectedModelBuilder()
            .with_named_variable(a, "A")
            .with_factor([a, b], Uniform())
            .build()
        )
        assert model.variables() == [a, b]
        assert model.lookup_name(b) == str(b)

    def test_duplicate_variable(self) -> None:
        a = binary()
        builder = (
            UndirectedModelBuilder()
            .with_named_variable(a, "A")
            .with_named_variable(a, "B")
        )
        with pytest.raises(DuplicateVariableError):
            builder.build()

    def test_bad_factor_latches(self) -> None:
        a, b = binary(), binary()
        builder = (
            UndirectedModelBuilder()
            .with_factor([a, b], Binomial(0.5))
            .with_factor([a], Uniform())
        )
        with pytest.raises(InvalidInitializationError, match="Binomial"):
            builder.build()

    def test_random_factors(self, rng) -> None:
        a, b, c = binary(), binary(), binary()
        model = (
            UndirectedModelBuilder(rng=rng)
            .with_factor([a, b], Random())
            .with_factor([b, c], Random())
            .build()
        )
        total = sum(model.probability(x) for x in all_assignments(model.variables()))
        assert total == pytest.approx(1.0)


class TestFromDirected:
    """Bag-of-CPDs conversion."""

    def test_partition_is_one(self, student) -> None:
        model = UndirectedModel.from_directed(student.model)
        assert model.partition == pytest.approx(1.0)

    def test_same_distribution(self, student) -> None:
        undirected = UndirectedModel.from_directed(student.model)
        for assn in all_assignments(student.model.variables()):
            assert undirected.probability(assn) == pytest.approx(
                student.model.probability(assn)
            )

    def test_names_carried(self, student) -> None:
        model = UndirectedModel.from_directed(student.model)
        assert model.lookup_variable("SAT") == student.s

    def test_generated_tree(self) -> None:
        model = UndirectedModel.from_directed(build_tree(7, num_states=3, seed=4))
        assert model.partition == pytest.approx(1.0)

    def test_table_factor(self) -> None:
        a, b = binary(), binary()
        f = Factor.new([a, b], np.array([[1.0, 3.0], [2.0, 4.0]]))
        model = UndirectedModelBuilder().with_factor([b, a], Table(f)).build()
        assert model.partition == pytest.approx(10.0)
