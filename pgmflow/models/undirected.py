"""Undirected (Markov) network models.

An :class:`UndirectedModel` is a bag of factors defining the Gibbs
distribution

    P(x) = 1/Z * prod_k phi_k(x_k)

The partition function ``Z`` is computed once per model by summing the
factor product over every full assignment.  This is exponential in the
number of variables and bounds the size of models this class can handle.
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Union

import numpy as np

from pgmflow.core.config import make_rng
from pgmflow.core.errors import DuplicateVariableError, InvalidScopeError, PGMError
from pgmflow.core.variable import Assignment, Variable, all_assignments
from pgmflow.factors.factor import Factor
from pgmflow.factors.initialization import Initialization
from pgmflow.logging import get_logger
from pgmflow.models.base import Model, NameTable
from pgmflow.models.directed import DirectedModel

logger = get_logger(__name__)


def _partition_function(
    variables: Sequence[Variable], factors: Sequence[Factor]
) -> float:
    assignments = all_assignments(variables)
    logger.debug(
        "Computing partition function over %d variables (%d assignments)",
        len(variables),
        len(assignments),
    )
    total = 0.0
    for assn in assignments:
        total += math.prod(f.value(assn) for f in factors)
    return total


class UndirectedModel(Model):
    """Markov network: a set of factors with a partition function.

    Parameters
    ----------
    variables : sequence of Variable
        The model's variables, in declaration order.
    factors : sequence of Factor
        Factors over subsets of *variables*.  Identity factors are dropped.
    names : NameTable
        Names of the variables.
    """

    def __init__(
        self,
        variables: Sequence[Variable],
        factors: Sequence[Factor],
        names: NameTable,
    ) -> None:
        super().__init__(names)
        self._variables: List[Variable] = list(variables)
        self._factors: List[Factor] = [f for f in factors if not f.is_identity()]
        self._partition = _partition_function(self._variables, self._factors)

    @classmethod
    def from_directed(cls, model: DirectedModel) -> "UndirectedModel":
        """Reinterpret the CPDs of *model* as undirected factors.

        Both models define the same distribution; the partition function
        of the result is 1 up to rounding.
        """
        return cls(model.variables(), model.factors(), model._names.copy())

    @property
    def partition(self) -> float:
        """The partition function ``Z``."""
        return self._partition

    def variables(self) -> List[Variable]:
        return list(self._variables)

    def factors(self) -> List[Factor]:
        return list(self._factors)

    def probability(self, assignment: Assignment) -> float:
        """Normalized probability of a full *assignment*.

        Raises
        ------
        IncompleteAssignmentError
            If some factor's scope is not covered by *assignment*.
        """
        unnormalized = math.prod(f.value(assignment) for f in self._factors)
        return unnormalized / self._partition

    def condition(self, evidence: Assignment) -> "UndirectedModel":
        """Reduce every factor by *evidence* and drop the observed variables."""
        observed = [v for v in self._variables if v in evidence]
        return UndirectedModel(
            [v for v in self._variables if v not in evidence],
            [f.reduce(evidence) for f in self._factors],
            self._names.without(observed),
        )

    def __repr__(self) -> str:
        return (
            f"UndirectedModel(variables={len(self._variables)}, "
            f"factors={len(self._factors)}, partition={self._partition:.6g})"
        )


class UndirectedModelBuilder:
    """Incrementally assemble an :class:`UndirectedModel`.

    Variables may be declared by name, or implicitly by appearing in a
    factor; implicit variables are named after their id.  As with
    :class:`~pgmflow.models.directed.DirectedModelBuilder`, the first error
    is recorded and raised by :meth:`build`.
    """

    def __init__(
        self, rng: Union[None, int, np.random.Generator] = None
    ) -> None:
        self._variables: List[Variable] = []
        self._factors: List[Factor] = []
        self._names = NameTable()
        self._rng = make_rng(rng)
        self._error: Optional[PGMError] = None

    def with_variable(self, var: Variable) -> "UndirectedModelBuilder":
        return self.with_named_variable(var, str(var))

    def with_named_variable(
        self, var: Variable, name: str
    ) -> "UndirectedModelBuilder":
        """Declare *var* under *name*."""
        if self._error is not None:
            return self
        try:
            if var in self._names:
                raise DuplicateVariableError(
                    f"Variable {var} was already declared"
                )
            self._names.add(var, name)
        except PGMError as exc:
            logger.debug("Undirected builder stopped at '%s': %s", name, exc)
            self._error = exc
            return self
        self._variables.append(var)
        return self

    def with_factor(
        self, scope: Sequence[Variable], init: Initialization
    ) -> "UndirectedModelBuilder":
        """Add a factor over *scope* built by *init*."""
        if self._error is not None:
            return self
        try:
            factor = init.build_factor(list(scope), rng=self._rng)
        except PGMError as exc:
            logger.debug("Undirected builder stopped at a factor: %s", exc)
            self._error = exc
            return self
        self._factors.append(factor)
        return self

    def build(self) -> UndirectedModel:
        """Return the model, or raise the first recorded error.

        Raises
        ------
        InvalidScopeError
            If a declared variable appears in no factor.
        """
        if self._error is not None:
            raise self._error

        covered = {v for f in self._factors for v in f.scope()}
        unused = [str(v) for v in self._variables if v not in covered]
        if unused:
            raise InvalidScopeError(
                f"Declared variables {unused} do not appear in any factor"
            )

        variables = list(self._variables)
        names = self._names.copy()
        for factor in self._factors:
            for var in factor.scope():
                if var not in names:
                    names.add(var, str(var))
                    variables.append(var)

        return UndirectedModel(variables, self._factors, names)
