"""Forward (ancestral) sampling from a Bayesian network."""

from __future__ import annotations

from typing import Union

import numpy as np

from pgmflow.core.config import make_rng
from pgmflow.core.variable import Assignment
from pgmflow.models.directed import DirectedModel
from pgmflow.samplers.base import Sampler


class ForwardSampler(Sampler):
    """Samples every variable from its CPD in topological order.

    Args:
        model: The network to sample from.
        rng: Seed or generator.  When *None*, one is created from the
            active :class:`~pgmflow.core.config.Settings`.
    """

    def __init__(
        self,
        model: DirectedModel,
        rng: Union[None, int, np.random.Generator] = None,
    ) -> None:
        self.model = model
        self._rng = make_rng(rng)

    def sample(self) -> Assignment:
        assignment = Assignment()
        for var in self.model.topological_order():
            value = self.model.cpd(var).sample_cpd(assignment, self._rng)
            assignment.set(var, value)
        return assignment
