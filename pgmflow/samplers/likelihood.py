"""Likelihood-weighted sampling from a Bayesian network."""

from __future__ import annotations

from typing import Union

import numpy as np

from pgmflow.core.config import make_rng
from pgmflow.core.variable import Assignment
from pgmflow.models.directed import DirectedModel
from pgmflow.samplers.base import WeightedSample, WeightedSampler


class LikelihoodWeightedSampler(WeightedSampler):
    """Forward sampling with the evidence variables clamped.

    Observed variables are set to their evidence value instead of being
    sampled, and the sample weight is multiplied by the probability of that
    value given the already-sampled parents.

    Args:
        model: The network to sample from.
        evidence: Observed values.  Variables outside the model are ignored.
        rng: Seed or generator.
    """

    def __init__(
        self,
        model: DirectedModel,
        evidence: Assignment,
        rng: Union[None, int, np.random.Generator] = None,
    ) -> None:
        self.model = model
        self.evidence = evidence.copy()
        self._rng = make_rng(rng)

    def weighted_sample(self) -> WeightedSample:
        assignment = Assignment()
        weight = 1.0
        for var in self.model.topological_order():
            cpd = self.model.cpd(var)
            if var in self.evidence:
                assignment.set(var, self.evidence.get(var))
                weight *= cpd.value(assignment)
            else:
                assignment.set(var, cpd.sample_cpd(assignment, self._rng))
        return WeightedSample(assignment, weight)
