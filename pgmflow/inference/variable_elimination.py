"""Exact inference by sum-product variable elimination.

The engine converts its model to a bag of factors, conditions it on the
evidence once, and fixes an elimination order up front.  Each call to
:meth:`VariableEliminationEngine.infer` then eliminates every non-query
variable in that order:

1. Collect the factors that mention the variable.
2. Multiply them together.
3. Sum the variable out and put the result back.

The product of what remains is normalized and returned.  Cost is
exponential in the width of the elimination order.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from pgmflow.core.variable import Assignment, Variable
from pgmflow.factors.factor import IDENTITY, Factor
from pgmflow.inference.base import ConditionalInferenceEngine, check_query
from pgmflow.logging import get_logger
from pgmflow.models.base import Model
from pgmflow.models.directed import DirectedModel
from pgmflow.models.undirected import UndirectedModel

logger = get_logger(__name__)


def max_cardinality_elimination_order(model: Model) -> List[Variable]:
    """Order the variables of *model* by the max-cardinality heuristic.

    Variables are marked one at a time, each time picking the unmarked
    variable with the most marked neighbours in the Markov network (ties go
    to the variable that comes first in ``model.variables()``).  The
    elimination order is the reverse of the marking order.

    Parameters
    ----------
    model : Model
        Any model; neighbours are read from :meth:`Model.markov_network`.

    Returns
    -------
    list of Variable
        Every variable of the model, first-eliminated first.
    """
    graph = model.markov_network()
    variables = model.variables()
    marked: List[Variable] = []
    is_marked = set()

    while len(marked) < len(variables):
        best: Optional[Variable] = None
        best_count = -1
        for var in variables:
            if var in is_marked:
                continue
            count = sum(1 for n in graph.neighbors(var) if n in is_marked)
            if count > best_count:
                best, best_count = var, count
        marked.append(best)
        is_marked.add(best)

    marked.reverse()
    return marked


class VariableEliminationEngine(ConditionalInferenceEngine):
    """Sum-product variable elimination over a conditioned model.

    Parameters
    ----------
    model : UndirectedModel
        The model to query.  Use :meth:`for_directed` to start from a
        Bayesian network.
    evidence : Assignment
        Observed values; the model is conditioned on them once.
    """

    def __init__(self, model: UndirectedModel, evidence: Assignment) -> None:
        self._model = model.condition(evidence)
        self._order = max_cardinality_elimination_order(self._model)
        logger.debug(
            "Elimination order: %s", [str(v) for v in self._order]
        )

    @classmethod
    def for_directed(
        cls, model: DirectedModel, evidence: Assignment
    ) -> "VariableEliminationEngine":
        return cls(UndirectedModel.from_directed(model), evidence)

    @classmethod
    def for_undirected(
        cls, model: UndirectedModel, evidence: Assignment
    ) -> "VariableEliminationEngine":
        return cls(model, evidence)

    @property
    def model(self) -> UndirectedModel:
        """The evidence-conditioned model."""
        return self._model

    @property
    def order(self) -> List[Variable]:
        """The elimination order (a copy)."""
        return list(self._order)

    def infer(self, query: Iterable[Variable]) -> Factor:
        """Compute ``P(query | evidence)``.

        Raises
        ------
        InvalidScopeError
            If the query is empty, mentions an observed or unknown
            variable, or splits into parts that share no factor.
        """
        query = check_query(query, self._model.variables())
        targets = set(query)
        factors = self._model.factors()

        for var in self._order:
            if var in targets:
                continue

            involved: List[Factor] = []
            remaining: List[Factor] = []
            for f in factors:
                if var in f.scope():
                    involved.append(f)
                else:
                    remaining.append(f)

            if not involved:
                continue

            psi = IDENTITY
            for f in involved:
                psi = psi.product(f)
            remaining.append(psi.marginalize(var))
            factors = remaining

        joint = IDENTITY
        for f in factors:
            joint = joint.product(f)
        return joint.normalize()
