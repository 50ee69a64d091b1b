"""Common interface of the conditional inference engines."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List

from pgmflow.core.errors import InvalidScopeError
from pgmflow.core.variable import Variable
from pgmflow.factors.factor import Factor


class ConditionalInferenceEngine(ABC):
    """Answers queries ``P(query | evidence)`` for a fixed evidence set."""

    @abstractmethod
    def infer(self, query: Iterable[Variable]) -> Factor:
        """Return the normalized distribution over *query*."""


def check_query(
    query: Iterable[Variable], known: Iterable[Variable]
) -> List[Variable]:
    """De-duplicate *query* and check it against the *known* variables.

    Raises
    ------
    InvalidScopeError
        If *query* is empty or names a variable outside *known*.
    """
    query = list(dict.fromkeys(query))
    if not query:
        raise InvalidScopeError("The query must contain at least one variable")
    known = set(known)
    unknown = [str(v) for v in query if v not in known]
    if unknown:
        raise InvalidScopeError(
            f"Query variables {unknown} are not part of the model"
        )
    return query
