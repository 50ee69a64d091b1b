"""Approximate inference by Markov chain Monte Carlo.

:class:`McmcEngine` drives any :class:`~pgmflow.samplers.base.Sampler`
(typically a :class:`~pgmflow.samplers.gibbs.GibbsSampler`) and estimates
query distributions from the empirical frequencies of its samples.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np

from pgmflow.core.errors import InvalidScopeError
from pgmflow.core.variable import Variable
from pgmflow.factors.factor import Factor
from pgmflow.inference.base import ConditionalInferenceEngine
from pgmflow.logging import get_logger
from pgmflow.samplers.base import Sampler

logger = get_logger(__name__)


class McmcEngine(ConditionalInferenceEngine):
    """Frequency estimates from a Markov chain.

    The first *burnin* samples are drawn and discarded at construction.
    Each :meth:`infer` call then continues the same chain for *samples*
    more draws.

    Args:
        sampler: The chain.  Evidence is whatever the sampler holds fixed.
        burnin: Number of samples to discard up front.
        samples: Number of samples counted per query.

    Raises:
        ValueError: If *samples* is not positive or *burnin* is negative.
    """

    def __init__(self, sampler: Sampler, burnin: int, samples: int) -> None:
        if samples <= 0:
            raise ValueError(f"samples must be positive, got {samples}")
        if burnin < 0:
            raise ValueError(f"burnin must be non-negative, got {burnin}")
        self.sampler = sampler
        self.samples = samples

        logger.debug("Burning in %d samples", burnin)
        for _ in range(burnin):
            sampler.sample()

    def infer(self, query: Iterable[Variable]) -> Factor:
        """Estimate the distribution over *query*.

        Raises:
            InvalidScopeError: If the query is empty or a query variable is
                missing from the sampler's assignments.
        """
        query = list(dict.fromkeys(query))
        if not query:
            raise InvalidScopeError("The query must contain at least one variable")
        logger.debug(
            "Counting %d MCMC samples for %s",
            self.samples,
            [str(v) for v in query],
        )

        table = np.zeros(tuple(v.cardinality for v in query))
        for i in range(self.samples):
            assignment = self.sampler.sample()
            if i == 0:
                unknown = [str(v) for v in query if v not in assignment]
                if unknown:
                    raise InvalidScopeError(
                        f"Query variables {unknown} are not sampled by the chain"
                    )
            table[tuple(assignment.get(v) for v in query)] += 1
        return Factor.new(query, table).normalize()
