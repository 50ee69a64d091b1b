"""Inference algorithms for pgmflow."""

from pgmflow.inference.base import ConditionalInferenceEngine
from pgmflow.inference.importance_sampling import ImportanceSamplingEngine
from pgmflow.inference.mcmc import McmcEngine
from pgmflow.inference.variable_elimination import (
    VariableEliminationEngine,
    max_cardinality_elimination_order,
)

__all__ = [
    "ConditionalInferenceEngine",
    "VariableEliminationEngine",
    "max_cardinality_elimination_order",
    "ImportanceSamplingEngine",
    "McmcEngine",
]
