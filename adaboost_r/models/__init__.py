"""
AdaBoostR weak learner models
"""

from .weak_learner_components import (
    WeakLearner,
    TrainingExample,
    WeightedSampleSnapshot,
    FeatureSubsetSelector,
    BasisVectorBuilder,
    WeightedErrorFunction,
    GradientComputer,
    AdaptiveStepOptimizer,
    OptimizationResult,
    TrainingSetTransformer,
    Correlation,
    estimate_correlations,
    InvalidConfiguration,
    InputLengthMismatch,
    NonConvergenceWarning
)
from .base import WeakLearnerBase

__all__ = [
    'WeakLearnerBase',
    'WeakLearner',
    'TrainingExample',
    'WeightedSampleSnapshot',
    'FeatureSubsetSelector',
    'BasisVectorBuilder',
    'WeightedErrorFunction',
    'GradientComputer',
    'AdaptiveStepOptimizer',
    'OptimizationResult',
    'TrainingSetTransformer',
    'Correlation',
    'estimate_correlations',
    'InvalidConfiguration',
    'InputLengthMismatch',
    'NonConvergenceWarning'
]
