"""Shared model interface and the variable name table."""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import networkx as nx

from pgmflow.core.errors import DuplicateVariableError
from pgmflow.core.variable import Assignment, Variable
from pgmflow.factors.factor import Factor


class NameTable:
    """Bidirectional mapping between variables and their names."""

    def __init__(self) -> None:
        self._by_name: Dict[str, Variable] = {}
        self._by_var: Dict[Variable, str] = {}

    def add(self, var: Variable, name: str) -> None:
        """Register *var* under *name*.

        Raises
        ------
        DuplicateVariableError
            If the variable or the name is already registered.
        """
        if var in self._by_var:
            raise DuplicateVariableError(f"Variable {var} is already named")
        if name in self._by_name:
            raise DuplicateVariableError(f"Name '{name}' is already in use")
        self._by_var[var] = name
        self._by_name[name] = var

    def variable(self, name: str) -> Optional[Variable]:
        return self._by_name.get(name)

    def name(self, var: Variable) -> Optional[str]:
        return self._by_var.get(var)

    def __contains__(self, var: object) -> bool:
        return var in self._by_var

    def without(self, variables: Iterable[Variable]) -> "NameTable":
        """Return a copy that omits *variables*."""
        dropped = set(variables)
        table = NameTable()
        for var, name in self._by_var.items():
            if var not in dropped:
                table.add(var, name)
        return table

    def copy(self) -> "NameTable":
        return self.without(())


class Model(ABC):
    """A probabilistic graphical model over discrete variables.

    Subclasses keep their variables in a fixed order.  For directed models
    that order is topological; for undirected models it is declaration
    order.
    """

    def __init__(self, names: NameTable) -> None:
        self._names = names

    @abstractmethod
    def variables(self) -> List[Variable]:
        """Return the model's variables in model order."""

    @abstractmethod
    def factors(self) -> List[Factor]:
        """Return the factors whose product defines the model."""

    @abstractmethod
    def probability(self, assignment: Assignment) -> float:
        """Return the probability of a full *assignment*."""

    @abstractmethod
    def condition(self, evidence: Assignment) -> "Model":
        """Return the model reduced by *evidence*."""

    def num_variables(self) -> int:
        return len(self.variables())

    def lookup_variable(self, name: str) -> Optional[Variable]:
        """Return the variable called *name*, or *None*."""
        return self._names.variable(name)

    def lookup_name(self, var: Variable) -> Optional[str]:
        """Return the name of *var*, or *None*."""
        return self._names.name(var)

    def markov_network(self) -> nx.Graph:
        """Return the undirected graph induced by the factor scopes.

        Two variables are adjacent when some factor mentions both.
        Nodes are added in model order.
        """
        graph = nx.Graph()
        graph.add_nodes_from(self.variables())
        for factor in self.factors():
            graph.add_edges_from(itertools.combinations(factor.scope(), 2))
        return graph
