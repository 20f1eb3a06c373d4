"""
Weak Learner Core Module

This module contains the WeakLearner class that composes the subset
selector, basis builder, error function, gradient computer and adaptive
step optimizer into the weak regression learner used by AdaBoostR.
"""

import json
from collections.abc import Sequence
import numpy as np
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from ..base import WeakLearnerBase
from .basis_builder import BasisVectorBuilder
from .data_transforms import _check_non_negative, validate_raw_input
from .error_function import WeightedErrorFunction
from .exceptions import InputLengthMismatch
from .feature_subset import FeatureSubsetSelector
from .gradient_computer import GradientComputer
from .step_optimizer import (
    ALPHA, GROWTH_FACTOR, MAX_ITERATIONS, PATIENCE, SHRINK_FACTOR, TAU,
    AdaptiveStepOptimizer, OptimizationResult, validate_optimizer_params
)
from .training_data import WeightedSampleSnapshot

SUBSET_SIZE = 5     # Size of random subset of features
LAMBDA = 0.0        # Regularization term for non-bias coefficients


class WeakLearner(WeakLearnerBase):
    """
    Weak regression learner for AdaBoostR

    A learner is bound to a training set at construction. Its feature subset
    and zero-initialized theta are fixed there; ``train()`` fits theta by
    adaptive gradient descent against the weighted squared error, reading
    the relative weights current at the time of the call.
    """

    _structural_params = ('subset_size', 'use_quadratic_basis')
    _tunable_params = ('regularization', 'initial_step_size', 'tolerance', 'growth_factor',
                       'shrink_factor', 'patience', 'max_iterations', 'max_seconds', 'verbose')

    def __init__(self,
                 training_set: Union[Iterable, WeightedSampleSnapshot],
                 subset_size: int = SUBSET_SIZE,
                 use_quadratic_basis: bool = False,
                 regularization: float = LAMBDA,
                 initial_step_size: float = ALPHA,
                 tolerance: float = TAU,
                 random_source: Optional[np.random.Generator] = None,
                 max_iterations: int = MAX_ITERATIONS,
                 max_seconds: Optional[float] = None,
                 growth_factor: float = GROWTH_FACTOR,
                 shrink_factor: float = SHRINK_FACTOR,
                 patience: int = PATIENCE,
                 verbose: bool = False):
        """
        Initialize WeakLearner

        Parameters:
        -----------
        training_set : iterable of TrainingExample or WeightedSampleSnapshot
            Weighted training samples; kept by reference and re-read on every train()
        subset_size : int
            Number of raw features sampled for this learner
        use_quadratic_basis : bool
            Whether to add pairwise products of the selected features
        regularization : float
            L2 penalty on non-bias coefficients
        initial_step_size : float
            Starting gradient-descent step size
        tolerance : float
            Relative-change convergence threshold
        random_source : np.random.Generator, optional
            Source for the feature subset draw; required when subset_size
            is smaller than the raw feature count
        max_iterations : int
            Optimizer iteration budget
        max_seconds : float, optional
            Optimizer wall-time budget
        growth_factor : float
            Step size multiplier after an improving step
        shrink_factor : float
            Step size multiplier after a rejected step
        patience : int
            Consecutive small steps required for convergence
        verbose : bool
            Print optimizer progress
        """
        super().__init__()

        # train() snapshots the set again, so one-shot iterables are kept as a list
        if not isinstance(training_set, (Sequence, WeightedSampleSnapshot)):
            training_set = list(training_set)
        self.training_set = training_set
        self.subset_size = subset_size
        self.use_quadratic_basis = bool(use_quadratic_basis)
        self.regularization = regularization
        self.initial_step_size = initial_step_size
        self.tolerance = tolerance
        self.max_iterations = max_iterations
        self.max_seconds = max_seconds
        self.growth_factor = growth_factor
        self.shrink_factor = shrink_factor
        self.patience = patience
        self.verbose = verbose

        self._validate_params(self.get_params())

        snapshot = self._take_snapshot()
        self.n_features = snapshot.n_features

        # Fix subset, basis and theta
        selector = FeatureSubsetSelector(subset_size, random_source)
        self.subset = selector.select(self.n_features)
        self.basis_builder = BasisVectorBuilder(len(self.subset), self.use_quadratic_basis)
        self.theta = np.zeros(self.basis_builder.length)

        self.optimization_result_ = None
        self.converged_ = None
        self.training_history_ = []

    def _validate_params(self, params: Dict[str, Any]) -> None:
        _check_non_negative("regularization", params['regularization'])
        validate_optimizer_params(
            params['initial_step_size'], params['tolerance'], params['growth_factor'],
            params['shrink_factor'], params['patience'], params['max_iterations'],
            params['max_seconds']
        )

    def _take_snapshot(self) -> WeightedSampleSnapshot:
        if isinstance(self.training_set, WeightedSampleSnapshot):
            return self.training_set
        return WeightedSampleSnapshot.from_examples(self.training_set)

    @property
    def basis_length(self) -> int:
        return self.basis_builder.length

    def get_subset(self) -> np.ndarray:
        """Get the feature indices this learner is trained on"""
        return self.subset.copy()

    def get_theta(self) -> np.ndarray:
        """Get a copy of the current parameter vector"""
        return self.theta.copy()

    def train(self) -> OptimizationResult:
        """
        Train theta by adaptive gradient descent.

        Restarts from the current theta, so calling it again continues
        training against the weights current at the time of the call.

        Returns:
        --------
        result : OptimizationResult
            Convergence status and diagnostics; ``result.converged`` is False
            when the iteration or time budget ran out
        """
        snapshot = self._take_snapshot()
        if snapshot.n_features != self.n_features:
            raise InputLengthMismatch(
                f"Training set now has {snapshot.n_features} features, "
                f"but the learner was built on {self.n_features}"
            )

        design_matrix = self.basis_builder.build_matrix(snapshot.X[:, self.subset])
        error_function = WeightedErrorFunction(design_matrix, snapshot.y, snapshot.weights)
        gradient_computer = GradientComputer(
            design_matrix, snapshot.y, snapshot.weights, regularization=self.regularization
        )
        optimizer = AdaptiveStepOptimizer(
            error_function,
            gradient_computer,
            initial_step_size=self.initial_step_size,
            tolerance=self.tolerance,
            growth_factor=self.growth_factor,
            shrink_factor=self.shrink_factor,
            patience=self.patience,
            max_iterations=self.max_iterations,
            max_seconds=self.max_seconds,
            verbose=self.verbose
        )

        result = optimizer.optimize(self.theta)
        self.theta[:] = result.theta

        self.optimization_result_ = result
        self.converged_ = result.converged
        self.training_history_.extend(result.history)
        self.is_fitted = True
        return result

    def predict(self, raw_input: np.ndarray) -> Union[float, np.ndarray]:
        """
        Predict from raw (unselected) input

        Parameters:
        -----------
        raw_input : array-like, shape=(n_features,) or (n_samples, n_features)
            Raw input vector(s) with the original feature count

        Returns:
        --------
        prediction : float or np.ndarray, shape=(n_samples,)
            basis · theta for each input
        """
        X, is_single = validate_raw_input(raw_input, self.n_features)

        if is_single:
            basis = self.basis_builder.build(X[0, self.subset])
            return float(basis @ self.theta)

        design_matrix = self.basis_builder.build_matrix(X[:, self.subset])
        return design_matrix @ self.theta

    def get_training_history(self) -> List[Dict]:
        """
        Get per-step optimizer logs from all train() calls

        Returns:
        --------
        history : List[Dict]
            One entry per committed step
        """
        return [entry.copy() for entry in self.training_history_]

    def save_history_to_json(self, file_path: str) -> None:
        """
        Save optimizer logs to JSON file

        Parameters:
        -----------
        file_path : str
            Path to save the JSON file
        """
        payload = {
            'timestamp': datetime.now().isoformat(),
            'subset': self.subset.tolist(),
            'theta': self.theta.tolist(),
            'combination_coefficient': self.combination_coefficient,
            'state': self.state,
            'result': self.optimization_result_.to_dict() if self.optimization_result_ else None,
            'history': self.get_training_history(),
        }

        with open(file_path, 'w') as f:
            json.dump(payload, f, ensure_ascii=False, indent=4)

        print(f"Training history saved to {file_path}")

    def print_training_summary(self) -> None:
        """
        Print training summary
        """
        print(f"\n=== WeakLearner Training Summary ===")
        print(f"State: {self.state}")
        print(f"Subset: {self.subset.tolist()}")
        print(f"Quadratic basis: {self.use_quadratic_basis} (length {self.basis_length})")
        print(f"Regularization: {self.regularization}")
        print(f"Combination coefficient: {self.combination_coefficient}")

        result = self.optimization_result_
        if result is not None:
            print(f"Status: {result.status}")
            print(f"Iterations: {result.n_iterations} ({result.n_commits} committed)")
            print(f"Error: {result.initial_error:.6f} -> {result.error:.6f}")
        print(f"Theta: {np.array2string(self.theta, precision=4)}")

    def __repr__(self) -> str:
        return (f"WeakLearner(subset={self.subset.tolist()}, "
                f"use_quadratic_basis={self.use_quadratic_basis}, state='{self.state}')")
