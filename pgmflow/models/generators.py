"""Random network construction utilities for pgmflow."""

from __future__ import annotations

from typing import Optional

import numpy as np

from pgmflow.core.variable import discrete
from pgmflow.factors.factor import Factor
from pgmflow.factors.initialization import Table
from pgmflow.models.directed import DirectedModel, DirectedModelBuilder


def _dirichlet_cpt(rng: np.random.Generator, rows: int, num_states: int) -> np.ndarray:
    cpt = np.empty((rows, num_states))
    for s in range(rows):
        cpt[s] = rng.dirichlet(np.ones(num_states))
    return cpt


def build_tree(
    num_nodes: int,
    num_states: int = 2,
    seed: Optional[int] = None,
) -> DirectedModel:
    """Build a tree-structured Bayesian network.

    Node ``i`` has children ``2i + 1`` and ``2i + 2``.  Variables are named
    ``"X0" .. "X{n-1}"`` and every CPD row is drawn from a flat Dirichlet.
    """
    if num_nodes < 1:
        raise ValueError(f"num_nodes must be at least 1, got {num_nodes}")
    rng = np.random.default_rng(seed)
    nodes = [discrete(num_states) for _ in range(num_nodes)]
    builder = DirectedModelBuilder()

    prior = rng.dirichlet(np.ones(num_states))
    builder.with_named_variable(
        nodes[0], "X0", [], Table(Factor.cpd(nodes[0], [], prior))
    )
    for i in range(1, num_nodes):
        parent = nodes[(i - 1) // 2]
        cpt = _dirichlet_cpt(rng, num_states, num_states)
        builder.with_named_variable(
            nodes[i], f"X{i}", [parent],
            Table(Factor.cpd(nodes[i], [parent], cpt)),
        )

    return builder.build()


def build_chain(
    num_nodes: int,
    num_states: int = 2,
    seed: Optional[int] = None,
) -> DirectedModel:
    """Build a chain-structured Bayesian network (Markov chain)."""
    if num_nodes < 1:
        raise ValueError(f"num_nodes must be at least 1, got {num_nodes}")
    rng = np.random.default_rng(seed)
    nodes = [discrete(num_states) for _ in range(num_nodes)]
    builder = DirectedModelBuilder()

    prior = rng.dirichlet(np.ones(num_states))
    builder.with_named_variable(
        nodes[0], "X0", [], Table(Factor.cpd(nodes[0], [], prior))
    )
    for i in range(1, num_nodes):
        cpt = _dirichlet_cpt(rng, num_states, num_states)
        builder.with_named_variable(
            nodes[i], f"X{i}", [nodes[i - 1]],
            Table(Factor.cpd(nodes[i], [nodes[i - 1]], cpt)),
        )

    return builder.build()
