"""Gibbs sampling over the factors of a model.

The sampler keeps a single chain state.  Each call to
:meth:`GibbsSampler.sample` performs one sweep over the free (unobserved)
variables in model order, redrawing each from its full conditional given
the current values of all other variables.  Observed variables never
change.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, Union

import numpy as np

from pgmflow.core.config import make_rng
from pgmflow.core.variable import Assignment, Variable
from pgmflow.factors.factor import IDENTITY, Factor
from pgmflow.models.directed import DirectedModel
from pgmflow.models.undirected import UndirectedModel
from pgmflow.samplers.base import Sampler
from pgmflow.samplers.likelihood import LikelihoodWeightedSampler

RngLike = Union[None, int, np.random.Generator]


class GibbsSampler(Sampler):
    """Single-site Gibbs sampler.

    Use :meth:`for_directed` or :meth:`for_undirected` rather than the
    constructor.

    Args:
        factors: Factors whose product is proportional to the target
            distribution.
        free: Variables to resample, in sweep order.
        state: Initial full assignment, evidence included.
        rng: Seed or generator.
    """

    def __init__(
        self,
        factors: Sequence[Factor],
        free: Sequence[Variable],
        state: Assignment,
        rng: RngLike = None,
    ) -> None:
        self._free: List[Variable] = list(free)
        self._state = state
        self._rng = make_rng(rng)
        # factors touching each free variable
        self._blankets: Dict[Variable, List[Factor]] = {
            var: [f for f in factors if var in f.scope()] for var in self._free
        }

    @classmethod
    def for_directed(
        cls, model: DirectedModel, evidence: Assignment, rng: RngLike = None
    ) -> "GibbsSampler":
        """Chain over a Bayesian network, seeded by one likelihood-weighted draw."""
        rng = make_rng(rng)
        seed = LikelihoodWeightedSampler(model, evidence, rng).weighted_sample()
        free = [v for v in model.variables() if v not in evidence]
        return cls(model.factors(), free, seed.assignment, rng)

    @classmethod
    def for_undirected(
        cls, model: UndirectedModel, evidence: Assignment, rng: RngLike = None
    ) -> "GibbsSampler":
        """Chain over a Markov network, seeded uniformly at random."""
        rng = make_rng(rng)
        state = Assignment()
        free = []
        for var in model.variables():
            if var in evidence:
                state.set(var, evidence.get(var))
            else:
                state.set(var, int(rng.integers(var.cardinality)))
                free.append(var)
        return cls(model.factors(), free, state, rng)

    @property
    def state(self) -> Assignment:
        """A copy of the current chain state."""
        return self._state.copy()

    def sample(self) -> Assignment:
        """Run one sweep and return a copy of the new state."""
        for var in self._free:
            self._state.unset(var)
            conditional = IDENTITY
            for factor in self._blankets[var]:
                conditional = conditional * factor.reduce(self._state)
            value = conditional.normalize().sample_cpd(Assignment(), self._rng)
            self._state.set(var, value)
        return self._state.copy()
