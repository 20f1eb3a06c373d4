"""
Training Data

This module contains the weighted training example used by the outer
boosting driver and the immutable snapshot that a weak learner trains on.
"""

import numpy as np
from typing import Iterable, Optional, Sequence

from .exceptions import InvalidConfiguration, InputLengthMismatch


class TrainingExample:
    """
    重み付き学習サンプル

    Attributes:
    -----------
    input_vector : np.ndarray, shape=(n_features,)
        入力特徴量
    target : float
        ターゲット値
    relative_weight : float
        ブースティングの現在ラウンドにおけるサンプルの相対重み
    """

    def __init__(self, input_vector: Sequence[float], target: float, relative_weight: float = 1.0):
        self.input_vector = np.array(input_vector, dtype=np.float64)
        self.target = float(target)
        self.relative_weight = float(relative_weight)

    def set_input(self, index: int, value: float) -> None:
        self.input_vector[index] = value

    def set_target(self, value: float) -> None:
        self.target = float(value)

    def set_relative_weight(self, value: float) -> None:
        if value < 0:
            raise InvalidConfiguration(f"relative_weight must be non-negative, got {value}")
        self.relative_weight = float(value)

    def __repr__(self) -> str:
        return (f"TrainingExample(input_vector={self.input_vector.tolist()}, "
                f"target={self.target}, relative_weight={self.relative_weight})")


class WeightedSampleSnapshot:
    """
    Read-only copy of a weighted training set.

    The outer driver rewrites sample weights between boosting rounds; a weak
    learner freezes a snapshot at the start of each ``train()`` call so that
    learners trained concurrently never observe a half-updated weight set.

    Attributes:
    -----------
    X : np.ndarray, shape=(n_samples, n_features)
        Input vectors (non-writeable)
    y : np.ndarray, shape=(n_samples,)
        Targets (non-writeable)
    weights : np.ndarray, shape=(n_samples,)
        Relative weights (non-writeable)
    """

    def __init__(self, X: np.ndarray, y: np.ndarray, weights: np.ndarray):
        self.X = _frozen_copy(X)
        self.y = _frozen_copy(y)
        self.weights = _frozen_copy(weights)

    @classmethod
    def from_examples(cls, training_set: Iterable) -> 'WeightedSampleSnapshot':
        """
        Build a snapshot from objects exposing ``input_vector``, ``target``
        and ``relative_weight``.
        """
        examples = list(training_set)
        if len(examples) == 0:
            raise InvalidConfiguration("Training set must contain at least one sample")

        n_features = len(examples[0].input_vector)
        X = np.empty((len(examples), n_features), dtype=np.float64)
        y = np.empty(len(examples), dtype=np.float64)
        weights = np.empty(len(examples), dtype=np.float64)

        for i, sample in enumerate(examples):
            if len(sample.input_vector) != n_features:
                raise InputLengthMismatch(
                    f"Sample {i} has {len(sample.input_vector)} features, expected {n_features}"
                )
            X[i] = sample.input_vector
            y[i] = sample.target
            weights[i] = sample.relative_weight

        return cls.from_arrays(X, y, weights)

    @classmethod
    def from_arrays(cls, X: np.ndarray, y: np.ndarray,
                    sample_weight: Optional[np.ndarray] = None) -> 'WeightedSampleSnapshot':
        """
        Build a snapshot from a feature matrix, targets and optional weights.
        Weights default to uniform ``1 / n_samples``.
        """
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64).ravel()

        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if X.ndim != 2:
            raise InvalidConfiguration(f"X must be 2D array, got {X.ndim}D")
        if X.shape[0] == 0:
            raise InvalidConfiguration("Training set must contain at least one sample")
        if X.shape[1] == 0:
            raise InvalidConfiguration("Samples must have at least one feature")
        if X.shape[0] != y.shape[0]:
            raise InputLengthMismatch(
                f"X ({X.shape[0]} samples) and y ({y.shape[0]} samples) have different numbers of samples"
            )

        if sample_weight is None:
            weights = np.full(X.shape[0], 1.0 / X.shape[0])
        else:
            weights = np.asarray(sample_weight, dtype=np.float64).ravel()
            if weights.shape[0] != X.shape[0]:
                raise InputLengthMismatch(
                    f"sample_weight has {weights.shape[0]} entries, expected {X.shape[0]}"
                )

        if not (np.all(np.isfinite(X)) and np.all(np.isfinite(y)) and np.all(np.isfinite(weights))):
            raise InvalidConfiguration("Training set contains inf or NaN values")
        if np.any(weights < 0):
            raise InvalidConfiguration("Relative weights must be non-negative")

        return cls(X, y, weights)

    @property
    def n_samples(self) -> int:
        return self.X.shape[0]

    @property
    def n_features(self) -> int:
        return self.X.shape[1]

    def __len__(self) -> int:
        return self.n_samples

    def __repr__(self) -> str:
        return f"WeightedSampleSnapshot(n_samples={self.n_samples}, n_features={self.n_features})"


def _frozen_copy(arr: np.ndarray) -> np.ndarray:
    copied = np.array(arr, dtype=np.float64, copy=True)
    copied.flags.writeable = False
    return copied
