"""Tests for pgmflow/inference/importance_sampling.py and mcmc.py.

Covers:
- Importance sampling and MCMC agree with variable elimination on the
  Student network
- Argument and query validation
"""

from __future__ import annotations

import numpy as np
import pytest

from pgmflow.core.config import Settings
from pgmflow.core.errors import InvalidScopeError
from pgmflow.core.variable import Assignment, binary
from pgmflow.inference.base import ConditionalInferenceEngine
from pgmflow.inference.importance_sampling import ImportanceSamplingEngine
from pgmflow.inference.mcmc import McmcEngine
from pgmflow.inference.variable_elimination import VariableEliminationEngine
from pgmflow.samplers.forward import ForwardSampler
from pgmflow.samplers.gibbs import GibbsSampler

STUDENT_POSTERIOR = 0.02919708


def _evidence(student) -> Assignment:
    return Assignment.from_dict({student.d: 0, student.l: 1, student.s: 0})


class TestImportanceSampling:
    """Likelihood-weighted importance sampling."""

    def test_student(self, student, rng) -> None:
        engine = ImportanceSamplingEngine(
            student.model, _evidence(student), samples=10000, rng=rng
        )
        assert isinstance(engine, ConditionalInferenceEngine)
        result = engine.infer([student.i])
        assert result.value(Assignment.from_dict({student.i: 1})) == pytest.approx(
            STUDENT_POSTERIOR, abs=0.01
        )

    def test_agrees_with_variable_elimination(self, student, rng) -> None:
        s = student
        evidence = Assignment.from_dict({s.l: 0})
        exact = VariableEliminationEngine.for_directed(s.model, evidence).infer([s.g])
        approx = ImportanceSamplingEngine(
            s.model, evidence, samples=10000, rng=rng
        ).infer([s.g])
        np.testing.assert_allclose(approx.values, exact.values, atol=0.02)

    def test_scope_follows_query(self, student) -> None:
        engine = ImportanceSamplingEngine(student.model, Assignment(), samples=10, rng=0)
        result = engine.infer([student.l, student.d, student.l])
        assert result.scope() == [student.l, student.d]
        assert result.values.sum() == pytest.approx(1.0)

    def test_seed_from_settings(self, student) -> None:
        with Settings(seed=123):
            first = ImportanceSamplingEngine(
                student.model, Assignment(), samples=50
            ).infer([student.g])
        with Settings(seed=123):
            second = ImportanceSamplingEngine(
                student.model, Assignment(), samples=50
            ).infer([student.g])
        assert first == second

    def test_invalid_samples(self, student) -> None:
        with pytest.raises(ValueError, match="positive"):
            ImportanceSamplingEngine(student.model, Assignment(), samples=0)

    def test_invalid_query(self, student) -> None:
        engine = ImportanceSamplingEngine(student.model, Assignment(), samples=10, rng=0)
        with pytest.raises(InvalidScopeError):
            engine.infer([])
        with pytest.raises(InvalidScopeError):
            engine.infer([binary()])


class TestMcmc:
    """Gibbs-driven MCMC."""

    def test_student(self, student, rng) -> None:
        sampler = GibbsSampler.for_directed(student.model, _evidence(student), rng)
        engine = McmcEngine(sampler, burnin=10000, samples=10000)
        assert isinstance(engine, ConditionalInferenceEngine)
        result = engine.infer([student.i])
        assert result.value(Assignment.from_dict({student.i: 1})) == pytest.approx(
            STUDENT_POSTERIOR, abs=0.01
        )

    def test_undirected(self, misconception, rng) -> None:
        m = misconception
        evidence = Assignment.from_dict({m.a: 0, m.c: 1})
        sampler = GibbsSampler.for_undirected(m.model, evidence, rng)
        engine = McmcEngine(sampler, burnin=1000, samples=10000)
        result = engine.infer([m.b])
        np.testing.assert_allclose(result.values, [30 / 530, 500 / 530], atol=0.02)

    def test_any_sampler(self, student, rng) -> None:
        """Forward samples give the prior marginals."""
        engine = McmcEngine(ForwardSampler(student.model, rng), burnin=0, samples=20000)
        result = engine.infer([student.d])
        np.testing.assert_allclose(result.values, [0.6, 0.4], atol=0.02)

    def test_invalid_arguments(self, student) -> None:
        sampler = ForwardSampler(student.model, rng=0)
        with pytest.raises(ValueError, match="samples"):
            McmcEngine(sampler, burnin=0, samples=0)
        with pytest.raises(ValueError, match="burnin"):
            McmcEngine(sampler, burnin=-1, samples=10)

    def test_invalid_query(self, student) -> None:
        engine = McmcEngine(ForwardSampler(student.model, rng=0), burnin=0, samples=5)
        with pytest.raises(InvalidScopeError):
            engine.infer([])
        with pytest.raises(InvalidScopeError, match="not sampled"):
            engine.infer([binary()])
