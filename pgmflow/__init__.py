"""pgmflow: discrete probabilistic graphical models.

This package provides discrete random variables and factors, directed
(Bayesian) and undirected (Markov) network models, exact inference by
variable elimination, approximate inference by importance sampling and
Gibbs/MCMC, and maximum-likelihood parameter estimation.
"""

try:
    from pgmflow._version import version as __version__
except ImportError:
    __version__ = "0.1.0"

from .core.config import Settings
from .core.errors import (
    DivideByZeroError,
    DuplicateAssignmentError,
    DuplicateVariableError,
    IncompleteAssignmentError,
    InvalidInitializationError,
    InvalidScopeError,
    MissingParentError,
    NonPositiveProbabilityError,
    NotACPDError,
    NotEnoughDataError,
    OutOfRangeError,
    PGMError,
)
from .core.variable import Assignment, Variable, all_assignments, binary, discrete
from .estimators import Estimator, LocalMLEstimator, ModelMLEstimator
from .factors import (
    IDENTITY,
    Binomial,
    Factor,
    Initialization,
    Multinomial,
    Random,
    Table,
    TableFactor,
    Uniform,
)
from .inference import (
    ConditionalInferenceEngine,
    ImportanceSamplingEngine,
    McmcEngine,
    VariableEliminationEngine,
)
from .models import (
    DirectedModel,
    DirectedModelBuilder,
    UndirectedModel,
    UndirectedModelBuilder,
)
from .samplers import (
    ForwardSampler,
    GibbsSampler,
    LikelihoodWeightedSampler,
    Sampler,
    WeightedSample,
    WeightedSampler,
)

__all__ = [
    "Variable",
    "Assignment",
    "binary",
    "discrete",
    "all_assignments",
    "Factor",
    "TableFactor",
    "IDENTITY",
    "Initialization",
    "Uniform",
    "Random",
    "Binomial",
    "Multinomial",
    "Table",
    "DirectedModel",
    "DirectedModelBuilder",
    "UndirectedModel",
    "UndirectedModelBuilder",
    "ConditionalInferenceEngine",
    "VariableEliminationEngine",
    "ImportanceSamplingEngine",
    "McmcEngine",
    "Sampler",
    "WeightedSampler",
    "WeightedSample",
    "ForwardSampler",
    "LikelihoodWeightedSampler",
    "GibbsSampler",
    "Estimator",
    "LocalMLEstimator",
    "ModelMLEstimator",
    "Settings",
    "PGMError",
    "IncompleteAssignmentError",
    "InvalidScopeError",
    "DivideByZeroError",
    "MissingParentError",
    "DuplicateVariableError",
    "DuplicateAssignmentError",
    "OutOfRangeError",
    "NotACPDError",
    "InvalidInitializationError",
    "NonPositiveProbabilityError",
    "NotEnoughDataError",
]
