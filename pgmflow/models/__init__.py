"""Directed and undirected graphical models."""

from pgmflow.models.base import Model, NameTable
from pgmflow.models.directed import DirectedModel, DirectedModelBuilder
from pgmflow.models.generators import build_chain, build_tree
from pgmflow.models.undirected import UndirectedModel, UndirectedModelBuilder

__all__ = [
    "Model",
    "NameTable",
    "DirectedModel",
    "DirectedModelBuilder",
    "UndirectedModel",
    "UndirectedModelBuilder",
    "build_chain",
    "build_tree",
]
