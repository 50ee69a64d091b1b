"""Samplers for approximate inference."""

from pgmflow.samplers.base import Sampler, WeightedSample, WeightedSampler
from pgmflow.samplers.forward import ForwardSampler
from pgmflow.samplers.gibbs import GibbsSampler
from pgmflow.samplers.likelihood import LikelihoodWeightedSampler

__all__ = [
    "Sampler",
    "WeightedSampler",
    "WeightedSample",
    "ForwardSampler",
    "LikelihoodWeightedSampler",
    "GibbsSampler",
]
