"""Initialization policies for the factors of a model.

Builders do not take raw tables; they take an :class:`Initialization`
describing how the table of a CPD or a general factor should be produced.

Policies
--------
* :class:`Uniform` – every conditional distribution is uniform.
* :class:`Random` – entries drawn uniformly in ``[1, 100)`` and normalized.
* :class:`Binomial` – ``[p, 1 - p]`` for a parentless binary variable.
* :class:`Multinomial` – an explicit distribution for a parentless variable.
* :class:`Table` – a prebuilt factor, checked against the requested scope.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence, Union

import numpy as np

from pgmflow.core.config import make_rng
from pgmflow.core.errors import InvalidInitializationError, InvalidScopeError
from pgmflow.core.variable import Variable
from pgmflow.factors.factor import Factor

RngLike = Union[None, int, np.random.Generator]


def _shape(variables: Sequence[Variable]) -> tuple:
    return tuple(v.cardinality for v in variables)


def _require_scope(scope: Sequence[Variable]) -> List[Variable]:
    scope = list(scope)
    if not scope:
        raise InvalidScopeError("Cannot initialize a factor over an empty scope")
    return scope


class Initialization(ABC):
    """Strategy that produces the table of a CPD or a factor."""

    @abstractmethod
    def build_cpd(
        self,
        var: Variable,
        parents: Sequence[Variable],
        rng: RngLike = None,
    ) -> Factor:
        """Build the CPD ``P(var | parents)``."""

    @abstractmethod
    def build_factor(
        self,
        scope: Sequence[Variable],
        rng: RngLike = None,
    ) -> Factor:
        """Build a general factor over *scope*."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Uniform(Initialization):
    """Uniform tables: ``1/|var|`` for CPDs and ``1/prod(|scope|)`` for factors."""

    def build_cpd(self, var, parents, rng=None) -> Factor:
        shape = _shape(list(parents) + [var])
        return Factor.cpd(var, parents, np.full(shape, 1.0 / var.cardinality))

    def build_factor(self, scope, rng=None) -> Factor:
        scope = _require_scope(scope)
        shape = _shape(scope)
        return Factor.new(scope, np.full(shape, 1.0 / np.prod(shape)))


class Random(Initialization):
    """Random tables with entries drawn uniformly from ``[1, 100)``.

    CPD tables are normalized along the child axis so that every
    conditional distribution sums to 1; factor tables are normalized
    globally.
    """

    def build_cpd(self, var, parents, rng=None) -> Factor:
        rng = make_rng(rng)
        table = rng.uniform(1.0, 100.0, size=_shape(list(parents) + [var]))
        table /= table.sum(axis=-1, keepdims=True)
        return Factor.cpd(var, parents, table)

    def build_factor(self, scope, rng=None) -> Factor:
        scope = _require_scope(scope)
        rng = make_rng(rng)
        table = rng.uniform(1.0, 100.0, size=_shape(scope))
        return Factor.new(scope, table / table.sum())


class Binomial(Initialization):
    """Distribution ``[p, 1 - p]`` of a binary variable without parents.

    Parameters
    ----------
    p : float
        Probability of state 0.
    """

    def __init__(self, p: float) -> None:
        self.p = float(p)

    def _table(self, var: Variable) -> np.ndarray:
        if var.cardinality != 2:
            raise InvalidInitializationError(
                f"Binomial initialization requires a binary variable, "
                f"{var} has cardinality {var.cardinality}"
            )
        return np.array([self.p, 1.0 - self.p])

    def build_cpd(self, var, parents, rng=None) -> Factor:
        if len(parents) > 0:
            raise InvalidInitializationError(
                "Binomial initialization is only valid for a variable "
                "without parents"
            )
        return Factor.cpd(var, [], self._table(var))

    def build_factor(self, scope, rng=None) -> Factor:
        scope = _require_scope(scope)
        if len(scope) != 1:
            raise InvalidInitializationError(
                "Binomial initialization is only valid for a single-variable "
                "factor"
            )
        return Factor.new(scope, self._table(scope[0]))

    def __repr__(self) -> str:
        return f"Binomial(p={self.p})"


class Multinomial(Initialization):
    """Explicit distribution of a variable without parents.

    Parameters
    ----------
    probabilities : sequence of float
        One probability per state of the variable.
    """

    def __init__(self, probabilities: Sequence[float]) -> None:
        self.probabilities = np.asarray(probabilities, dtype=np.float64)
        if self.probabilities.ndim != 1:
            raise InvalidInitializationError(
                "Multinomial probabilities must be a flat sequence"
            )

    def _table(self, var: Variable) -> np.ndarray:
        if self.probabilities.shape[0] != var.cardinality:
            raise InvalidInitializationError(
                f"Multinomial has {self.probabilities.shape[0]} probabilities "
                f"but {var} has cardinality {var.cardinality}"
            )
        return self.probabilities

    def build_cpd(self, var, parents, rng=None) -> Factor:
        if len(parents) > 0:
            raise InvalidInitializationError(
                "Multinomial initialization is only valid for a variable "
                "without parents"
            )
        return Factor.cpd(var, [], self._table(var))

    def build_factor(self, scope, rng=None) -> Factor:
        scope = _require_scope(scope)
        if len(scope) != 1:
            raise InvalidInitializationError(
                "Multinomial initialization is only valid for a "
                "single-variable factor"
            )
        return Factor.new(scope, self._table(scope[0]))

    def __repr__(self) -> str:
        return f"Multinomial({self.probabilities.tolist()})"


class Table(Initialization):
    """Use a prebuilt factor as-is.

    The factor's scope must match the requested one.  For a CPD the scope
    must be ``parents + [var]`` exactly, and the factor must be a CPD.
    """

    def __init__(self, factor: Factor) -> None:
        self.factor = factor

    def build_cpd(self, var, parents, rng=None) -> Factor:
        expected = list(parents) + [var]
        if self.factor.scope() != expected:
            raise InvalidScopeError(
                f"Table scope {[str(v) for v in self.factor.scope()]} does "
                f"not match {[str(v) for v in expected]}; a CPD table lists "
                f"the parents in declaration order followed by the child"
            )
        if not self.factor.is_cpd():
            raise InvalidInitializationError(
                f"Table for {var} must be a CPD"
            )
        return self.factor

    def build_factor(self, scope, rng=None) -> Factor:
        scope = _require_scope(scope)
        actual = self.factor.scope()
        if len(actual) != len(scope) or set(actual) != set(scope):
            raise InvalidScopeError(
                f"Table scope {[str(v) for v in actual]} does not match "
                f"{[str(v) for v in scope]}"
            )
        return self.factor

    def __repr__(self) -> str:
        return f"Table({self.factor!r})"
