"""
AdaBoostR weak learner

Weak regression learners for AdaBoost-style boosting: each learner picks a
random subset of the input features, builds a linear (optionally quadratic)
basis and fits its coefficients by adaptive batch gradient descent against
a weighted squared-error loss.
"""

from .models import (
    WeakLearnerBase,
    WeakLearner,
    TrainingExample,
    WeightedSampleSnapshot,
    TrainingSetTransformer,
    Correlation,
    estimate_correlations,
    OptimizationResult,
    InvalidConfiguration,
    InputLengthMismatch,
    NonConvergenceWarning
)

__all__ = [
    'WeakLearnerBase',
    'WeakLearner',
    'TrainingExample',
    'WeightedSampleSnapshot',
    'TrainingSetTransformer',
    'Correlation',
    'estimate_correlations',
    'OptimizationResult',
    'InvalidConfiguration',
    'InputLengthMismatch',
    'NonConvergenceWarning'
]

__version__ = '0.1.0'
