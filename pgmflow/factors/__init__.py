"""Factor representation and initialization policies."""

from pgmflow.factors.factor import IDENTITY, Factor, IdentityFactor, TableFactor
from pgmflow.factors.initialization import (
    Binomial,
    Initialization,
    Multinomial,
    Random,
    Table,
    Uniform,
)

__all__ = [
    "Factor",
    "IdentityFactor",
    "TableFactor",
    "IDENTITY",
    "Initialization",
    "Uniform",
    "Random",
    "Binomial",
    "Multinomial",
    "Table",
]
