"""Tests for pgmflow package import and basic smoke tests."""

import importlib
import subprocess
import sys

import pytest


class TestImport:
    """Test that pgmflow can be imported."""

    def test_import_pgmflow(self) -> None:
        """Test importing the pgmflow package."""
        import pgmflow

        assert isinstance(pgmflow.__version__, str)
        assert len(pgmflow.__version__) > 0

    def test_reimport(self) -> None:
        """Test that pgmflow can be reimported."""
        import pgmflow

        importlib.reload(pgmflow)
        assert pgmflow.__version__

    def test_public_api(self) -> None:
        """Every name in __all__ resolves."""
        import pgmflow

        for name in pgmflow.__all__:
            assert hasattr(pgmflow, name), name


class TestEndToEnd:
    """The public API composes end to end."""

    def test_student_query(self) -> None:
        from pgmflow import (
            Assignment,
            Binomial,
            DirectedModelBuilder,
            Random,
            VariableEliminationEngine,
            binary,
            discrete,
        )

        d, i, g = binary(), binary(), discrete(3)
        model = (
            DirectedModelBuilder(rng=0)
            .with_named_variable(d, "Difficulty", [], Binomial(0.6))
            .with_named_variable(i, "Intelligence", [], Binomial(0.7))
            .with_named_variable(g, "Grade", [i, d], Random())
            .build()
        )
        engine = VariableEliminationEngine.for_directed(
            model, Assignment.from_dict({g: 2})
        )
        result = engine.infer([model.lookup_variable("Intelligence")])
        assert result.values.sum() == pytest.approx(1.0)


class TestCLISmoke:
    """Interpreter smoke tests for the pgmflow package."""

    def test_python_c_version(self) -> None:
        """Test that version string is valid semver-like."""
        result = subprocess.run(
            [sys.executable, "-c", "import pgmflow; print(pgmflow.__version__)"],
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0
        version = result.stdout.strip()
        parts = version.split(".")
        assert len(parts) >= 3, f"Version {version!r} is not semver-like"
