"""
Weak Learner Components Package

This package contains the modular components of the AdaBoostR weak learner:
feature subset selection, basis construction, weighted error and gradient
computation, the adaptive step optimizer and the WeakLearner facade, plus
the training set normalization utility.
"""

from .exceptions import InvalidConfiguration, InputLengthMismatch, NonConvergenceWarning
from .training_data import TrainingExample, WeightedSampleSnapshot
from .data_transforms import basis_length, validate_raw_input
from .feature_subset import FeatureSubsetSelector
from .basis_builder import BasisVectorBuilder
from .error_function import WeightedErrorFunction
from .gradient_computer import GradientComputer
from .step_optimizer import AdaptiveStepOptimizer, OptimizationResult
from .training_set_transformer import TrainingSetTransformer, Correlation, estimate_correlations
from .weak_learner_core import WeakLearner

__all__ = [
    'InvalidConfiguration',
    'InputLengthMismatch',
    'NonConvergenceWarning',
    'TrainingExample',
    'WeightedSampleSnapshot',
    'basis_length',
    'validate_raw_input',
    'FeatureSubsetSelector',
    'BasisVectorBuilder',
    'WeightedErrorFunction',
    'GradientComputer',
    'AdaptiveStepOptimizer',
    'OptimizationResult',
    'TrainingSetTransformer',
    'Correlation',
    'estimate_correlations',
    'WeakLearner'
]
