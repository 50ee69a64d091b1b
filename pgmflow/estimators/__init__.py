"""Parameter estimation for pgmflow models."""

from pgmflow.estimators.base import Estimator
from pgmflow.estimators.mle import LocalMLEstimator, ModelMLEstimator

__all__ = ["Estimator", "LocalMLEstimator", "ModelMLEstimator"]
