"""Pytest configuration and shared fixtures for pgmflow tests.

This module provides:
- A deterministic numpy RNG
- The Student network (binary grade) used by the inference tests
- The misconception Markov network
"""

from __future__ import annotations

import os
from dataclasses import dataclass

import numpy as np
import pytest

from pgmflow import (
    Binomial,
    DirectedModel,
    DirectedModelBuilder,
    Factor,
    Table,
    UndirectedModel,
    UndirectedModelBuilder,
    Variable,
    binary,
)


@dataclass
class Student:
    model: DirectedModel
    d: Variable
    i: Variable
    g: Variable
    s: Variable
    l: Variable


@dataclass
class Misconception:
    model: UndirectedModel
    a: Variable
    b: Variable
    c: Variable
    d: Variable


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Deterministic numpy RNG; override the seed with TEST_RNG_SEED."""
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture
def student() -> Student:
    """Difficulty, Intelligence, Grade, SAT and Letter, all binary."""
    d, i, g, s, l = binary(), binary(), binary(), binary(), binary()
    model = (
        DirectedModelBuilder()
        .with_named_variable(d, "Difficulty", [], Binomial(0.6))
        .with_named_variable(i, "Intelligence", [], Binomial(0.7))
        .with_named_variable(
            g, "Grade", [i, d],
            Table(Factor.cpd(g, [i, d], [[[0.3, 0.7], [0.05, 0.95]],
                                         [[0.9, 0.1], [0.5, 0.5]]])),
        )
        .with_named_variable(
            s, "SAT", [i],
            Table(Factor.cpd(s, [i], [[0.95, 0.05], [0.2, 0.8]])),
        )
        .with_named_variable(
            l, "Letter", [g],
            Table(Factor.cpd(l, [g], [[0.9, 0.1], [0.4, 0.6]])),
        )
        .build()
    )
    return Student(model, d, i, g, s, l)


@pytest.fixture
def misconception() -> Misconception:
    """Four-variable loop A - B - C - D - A with Z = 7,201,840."""
    a, b, c, d = binary(), binary(), binary(), binary()
    model = (
        UndirectedModelBuilder()
        .with_named_variable(a, "A")
        .with_named_variable(b, "B")
        .with_named_variable(c, "C")
        .with_named_variable(d, "D")
        .with_factor([a, b], Table(Factor.new([a, b], [[30, 5], [1, 10]])))
        .with_factor([b, c], Table(Factor.new([b, c], [[100, 1], [1, 100]])))
        .with_factor([c, d], Table(Factor.new([c, d], [[1, 100], [100, 1]])))
        .with_factor([d, a], Table(Factor.new([d, a], [[100, 1], [1, 100]])))
        .build()
    )
    return Misconception(model, a, b, c, d)
