"""Directed (Bayesian) network models.

A :class:`DirectedModel` stores one CPD per variable, keyed by the variable
and kept in insertion order.  Because every parent must be added before its
children, insertion order is also a topological order of the DAG.

Models are assembled with :class:`DirectedModelBuilder`:

>>> d, i = binary(), binary()
>>> g = binary()
>>> model = (
...     DirectedModelBuilder()
...     .with_named_variable(d, "Difficulty", [], Binomial(0.6))
...     .with_named_variable(i, "Intelligence", [], Binomial(0.7))
...     .with_named_variable(g, "Grade", [i, d], Random())
...     .build()
... )
"""

from __future__ import annotations

import math
from typing import Dict, List, Optional, Sequence, Union

import networkx as nx
import numpy as np

from pgmflow.core.config import make_rng
from pgmflow.core.errors import (
    DuplicateVariableError,
    InvalidScopeError,
    MissingParentError,
    PGMError,
)
from pgmflow.core.variable import Assignment, Variable
from pgmflow.factors.factor import Factor, TableFactor
from pgmflow.factors.initialization import Initialization, Table
from pgmflow.logging import get_logger
from pgmflow.models.base import Model, NameTable

logger = get_logger(__name__)


class DirectedModel(Model):
    """Bayesian network: a DAG of CPDs.

    Instances are immutable; use :class:`DirectedModelBuilder` to create
    them.

    Parameters
    ----------
    cpds : dict
        Mapping ``variable -> CPD`` in topological order.  The CPD of each
        variable has the variable as the last scope entry.
    names : NameTable
        Names of the variables.
    """

    def __init__(self, cpds: Dict[Variable, Factor], names: NameTable) -> None:
        super().__init__(names)
        self._cpds: Dict[Variable, Factor] = dict(cpds)

    # ------------------------------------------------------------------ #
    #  Structure
    # ------------------------------------------------------------------ #

    def variables(self) -> List[Variable]:
        return list(self._cpds)

    def topological_order(self) -> List[Variable]:
        """Return the variables parents-first (their insertion order)."""
        return list(self._cpds)

    def factors(self) -> List[Factor]:
        return list(self._cpds.values())

    def cpd(self, var: Variable) -> Factor:
        """Return the CPD of *var*.

        Raises
        ------
        InvalidScopeError
            If *var* is not part of the model.
        """
        try:
            return self._cpds[var]
        except KeyError:
            raise InvalidScopeError(
                f"Variable {var} is not part of the model"
            ) from None

    def parents(self, var: Variable) -> List[Variable]:
        return self.cpd(var).scope()[:-1]

    def to_networkx(self) -> nx.DiGraph:
        """Return the DAG with edges ``parent -> child``.

        Each node carries ``name`` and ``cardinality`` attributes.
        """
        graph = nx.DiGraph()
        for var in self._cpds:
            graph.add_node(
                var, name=self.lookup_name(var), cardinality=var.cardinality
            )
        for var in self._cpds:
            graph.add_edges_from((p, var) for p in self.parents(var))
        return graph

    # ------------------------------------------------------------------ #
    #  Semantics
    # ------------------------------------------------------------------ #

    def probability(self, assignment: Assignment) -> float:
        """Joint probability by the chain rule.

        Raises
        ------
        IncompleteAssignmentError
            If *assignment* leaves some variable unassigned.
        """
        return math.prod(cpd.value(assignment) for cpd in self._cpds.values())

    def condition(self, evidence: Assignment) -> "DirectedModel":
        """Reduce every CPD by *evidence* and drop the observed variables.

        Each unobserved variable keeps the parents that remain after the
        reduction; the result is rebuilt through :class:`DirectedModelBuilder`
        without re-checking row sums, so it does not depend on the active
        ``cpd_tolerance``.
        """
        builder = DirectedModelBuilder()
        for var, cpd in self._cpds.items():
            if var in evidence:
                continue
            reduced = cpd.reduce(evidence)
            parents = reduced.scope()[:-1]
            if reduced is not cpd:
                # slices of validated rows keep their row sums
                reduced = TableFactor._trusted(reduced.scope(), reduced.values, True)
            builder.with_named_variable(
                var, self.lookup_name(var), parents, Table(reduced)
            )
        return builder.build()

    def __repr__(self) -> str:
        names = [self.lookup_name(v) for v in self._cpds]
        return f"DirectedModel(variables={names})"


class DirectedModelBuilder:
    """Incrementally assemble a :class:`DirectedModel`.

    Every ``with_*`` method returns the builder so calls can be chained.
    The first error is recorded and all later calls are ignored; it is
    raised by :meth:`build`.

    Parameters
    ----------
    rng : int or numpy.random.Generator, optional
        Randomness handed to initialization policies such as
        :class:`~pgmflow.factors.initialization.Random`.
    """

    def __init__(
        self, rng: Union[None, int, np.random.Generator] = None
    ) -> None:
        self._cpds: Dict[Variable, Factor] = {}
        self._names = NameTable()
        self._rng = make_rng(rng)
        self._error: Optional[PGMError] = None

    def with_variable(
        self,
        var: Variable,
        parents: Sequence[Variable],
        init: Initialization,
    ) -> "DirectedModelBuilder":
        """Add *var*, named after its id."""
        return self.with_named_variable(var, str(var), parents, init)

    def with_named_variable(
        self,
        var: Variable,
        name: str,
        parents: Sequence[Variable],
        init: Initialization,
    ) -> "DirectedModelBuilder":
        """Add *var* with a CPD conditioned on *parents*.

        Recorded errors
        ---------------
        DuplicateVariableError
            *var* (or *name*) was already added, or *parents* repeats a
            variable.
        MissingParentError
            A parent has not been added yet.
        InvalidInitializationError, InvalidScopeError, ...
            Whatever *init* raises while building the CPD.
        """
        if self._error is not None:
            return self

        try:
            parents = list(parents)
            if var in self._cpds:
                raise DuplicateVariableError(
                    f"Variable {var} was already added"
                )
            missing = [str(p) for p in parents if p not in self._cpds]
            if missing:
                raise MissingParentError(
                    f"Parents {missing} of '{name}' must be added first"
                )
            if len(set(parents)) != len(parents):
                raise DuplicateVariableError(
                    f"Parents of '{name}' contain a duplicate"
                )
            cpd = init.build_cpd(var, parents, rng=self._rng)
            self._names.add(var, name)
        except PGMError as exc:
            logger.debug("Directed builder stopped at '%s': %s", name, exc)
            self._error = exc
            return self

        self._cpds[var] = cpd
        return self

    def build(self) -> DirectedModel:
        """Return the model, or raise the first recorded error."""
        if self._error is not None:
            raise self._error
        logger.debug("Built directed model with %d variables", len(self._cpds))
        return DirectedModel(self._cpds, self._names.copy())
