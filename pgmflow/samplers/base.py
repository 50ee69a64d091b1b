"""Sampler interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple

from pgmflow.core.variable import Assignment


class WeightedSample(NamedTuple):
    """A full assignment together with its importance weight."""

    assignment: Assignment
    weight: float


class Sampler(ABC):
    """Draws full assignments from a model."""

    @abstractmethod
    def sample(self) -> Assignment:
        """Draw one full assignment."""


class WeightedSampler(ABC):
    """Draws full assignments paired with importance weights."""

    @abstractmethod
    def weighted_sample(self) -> WeightedSample:
        """Draw one weighted assignment."""
