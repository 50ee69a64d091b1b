"""Maximum-likelihood estimation of CPD parameters.

For a CPD ``P(x | u)`` the maximum-likelihood estimate from complete data is

    theta_{x|u} = M[u, x] / M[u]

where ``M[u, x]`` counts the samples agreeing with both ``u`` and ``x`` and
``M[u]`` counts those agreeing with ``u``.
"""

from __future__ import annotations

from typing import Iterable, List

import numpy as np

from pgmflow.core.errors import (
    DivideByZeroError,
    IncompleteAssignmentError,
    NotACPDError,
    NotEnoughDataError,
)
from pgmflow.core.variable import Assignment, Variable
from pgmflow.estimators.base import Estimator
from pgmflow.factors.factor import Factor
from pgmflow.factors.initialization import Table
from pgmflow.logging import get_logger
from pgmflow.models.directed import DirectedModel, DirectedModelBuilder

logger = get_logger(__name__)


class LocalMLEstimator(Estimator):
    """Estimates a single CPD with the same scope as *factor*.

    Parameters
    ----------
    factor : Factor
        A CPD; only its scope is used.

    Raises
    ------
    NotACPDError
        If *factor* is the identity or not a CPD.
    """

    def __init__(self, factor: Factor) -> None:
        if factor.is_identity() or not factor.is_cpd():
            raise NotACPDError("Maximum-likelihood estimation requires a CPD")
        self._scope: List[Variable] = factor.scope()

    def estimate(self, dataset: Iterable[Assignment]) -> Factor:
        """Count configurations in *dataset* and return the estimated CPD.

        Raises
        ------
        IncompleteAssignmentError
            If a sample leaves a scope variable unassigned.
        NotEnoughDataError
            If *dataset* is empty.
        DivideByZeroError
            If some parent configuration never occurs.
        NonPositiveProbabilityError
            If some child state never occurs under an observed parent
            configuration (CPD entries must be strictly positive).
        """
        counts = np.zeros(tuple(v.cardinality for v in self._scope))
        n = 0
        for sample in dataset:
            missing = [v for v in self._scope if v not in sample]
            if missing:
                raise IncompleteAssignmentError(missing)
            counts[tuple(sample.get(v) for v in self._scope)] += 1
            n += 1

        if n == 0:
            raise NotEnoughDataError("Cannot estimate a CPD from an empty dataset")

        totals = counts.sum(axis=-1, keepdims=True)
        if np.any(totals == 0):
            raise DivideByZeroError(
                "Some parent configuration does not occur in the dataset"
            )

        logger.debug("Estimated CPD of %s from %d samples", self._scope[-1], n)
        return Factor.cpd(self._scope[-1], self._scope[:-1], counts / totals)


class ModelMLEstimator(Estimator):
    """Re-estimates every CPD of a Bayesian network.

    The returned model has the same variables, names and structure as
    *model*.
    """

    def __init__(self, model: DirectedModel) -> None:
        self.model = model
        self._estimators = [
            (var, LocalMLEstimator(model.cpd(var)))
            for var in model.topological_order()
        ]

    def estimate(self, dataset: Iterable[Assignment]) -> DirectedModel:
        data = list(dataset)
        builder = DirectedModelBuilder()
        for var, estimator in self._estimators:
            cpd = estimator.estimate(data)
            builder.with_named_variable(
                var, self.model.lookup_name(var), cpd.scope()[:-1], Table(cpd)
            )
        return builder.build()
