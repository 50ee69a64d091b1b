"""Estimator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

from pgmflow.core.variable import Assignment


class Estimator(ABC):
    """Learns parameters from a dataset of full assignments."""

    @abstractmethod
    def estimate(self, dataset: Iterable[Assignment]) -> Any:
        """Return the estimate for *dataset*.

        Every call is independent of the previous ones.
        """
