"""Approximate inference by likelihood-weighted importance sampling."""

from __future__ import annotations

from typing import Iterable, Union

import numpy as np

from pgmflow.core.variable import Assignment, Variable
from pgmflow.factors.factor import Factor
from pgmflow.inference.base import ConditionalInferenceEngine, check_query
from pgmflow.logging import get_logger
from pgmflow.models.directed import DirectedModel
from pgmflow.samplers.likelihood import LikelihoodWeightedSampler

logger = get_logger(__name__)


class ImportanceSamplingEngine(ConditionalInferenceEngine):
    """Estimates ``P(query | evidence)`` from weighted samples.

    Every call to :meth:`infer` draws *samples* fresh likelihood-weighted
    samples and sums their weights per query configuration.

    Args:
        model: The network to query.
        evidence: Observed values.
        samples: Number of weighted samples per query.
        rng: Seed or generator.

    Raises:
        ValueError: If *samples* is not positive.
    """

    def __init__(
        self,
        model: DirectedModel,
        evidence: Assignment,
        samples: int,
        rng: Union[None, int, np.random.Generator] = None,
    ) -> None:
        if samples <= 0:
            raise ValueError(f"samples must be positive, got {samples}")
        self.model = model
        self.samples = samples
        self._sampler = LikelihoodWeightedSampler(model, evidence, rng)

    def infer(self, query: Iterable[Variable]) -> Factor:
        query = check_query(query, self.model.variables())
        logger.debug(
            "Importance sampling %d samples for %s",
            self.samples,
            [str(v) for v in query],
        )
        table = np.zeros(tuple(v.cardinality for v in query))
        for _ in range(self.samples):
            assignment, weight = self._sampler.weighted_sample()
            table[tuple(assignment.get(v) for v in query)] += weight
        return Factor.new(query, table).normalize()
