"""
Training Set Transformer

Normalization of training set data into a fixed range before boosting.

Each input feature is mapped with the affine transformation
    x_i = offset_i + scale_i * v_i
so that v_i lies in [N1, N2], and the target with
    y = offset_t + scale_t * w
so that w lies in [N1, N2].

Also provides an estimate of the single-variable linear relationship
between each feature and the target, usable as a seeding heuristic for
gradient descent.
"""

import numpy as np
from typing import Iterable, List

from .exceptions import InputLengthMismatch, InvalidConfiguration
from .training_data import WeightedSampleSnapshot

N1 = 0
N2 = 3


class TrainingSetTransformer:
    """
    学習データの正規化を担当するクラス

    Attributes:
    -----------
    input_offset : np.ndarray, shape=(n_features,)
        各特徴量のオフセット (min - scale * N1)
    input_scale : np.ndarray, shape=(n_features,)
        各特徴量のスケール (max - min) / (N2 - N1)
    target_offset : float
        ターゲットのオフセット
    target_scale : float
        ターゲットのスケール
    """

    def __init__(self, training_set: Iterable):
        snapshot = WeightedSampleSnapshot.from_examples(training_set)

        input_min = np.min(snapshot.X, axis=0)
        input_max = np.max(snapshot.X, axis=0)
        target_min = float(np.min(snapshot.y))
        target_max = float(np.max(snapshot.y))

        self.input_scale = (input_max - input_min) / (N2 - N1)
        self.input_offset = input_min - self.input_scale * N1
        self.target_scale = (target_max - target_min) / (N2 - N1)
        self.target_offset = target_min - self.target_scale * N1

    def transform_value(self, index: int, value: float) -> float:
        """1つの特徴量の値を正規化（スケール0の次元は除算しない）"""
        if not 0 <= index < len(self.input_scale):
            raise InputLengthMismatch(
                f"Feature index {index} out of range for {len(self.input_scale)} fitted features"
            )
        value = value - self.input_offset[index]
        if self.input_scale[index] > 0:
            value /= self.input_scale[index]
        return float(value)

    def transform_target(self, target: float) -> float:
        """ターゲット値を正規化"""
        target = target - self.target_offset
        if self.target_scale > 0:
            target /= self.target_scale
        return float(target)

    def transform(self, training_set: Iterable) -> None:
        """
        サンプルの入力とターゲットをその場で正規化

        Parameters:
        -----------
        training_set : iterable of TrainingExample
            正規化対象のサンプル
        """
        samples = list(training_set)
        n_features = len(self.input_scale)
        for sample in samples:
            if len(sample.input_vector) != n_features:
                raise InputLengthMismatch(
                    f"Expected {n_features} features, got {len(sample.input_vector)}"
                )

        for sample in samples:
            sample.set_target(self.transform_target(sample.target))
            for i in range(len(sample.input_vector)):
                sample.set_input(i, self.transform_value(i, sample.input_vector[i]))

    def to_real_target(self, normalized_target: float) -> float:
        """正規化されたターゲット値を元のスケールに戻す"""
        return float(self.target_offset + self.target_scale * normalized_target)

    def __repr__(self) -> str:
        return (f"TrainingSetTransformer(n_features={len(self.input_scale)}, "
                f"target_offset={self.target_offset:.4g}, target_scale={self.target_scale:.4g})")


class Correlation:
    """
    Estimated linear relationship between one input feature and the target.

    Attributes:
    -----------
    index : int
        Raw feature index
    offset : float
        Intercept of the weighted least-squares fit
    factor : float
        Slope of the weighted least-squares fit
    """

    def __init__(self, index: int, offset: float, factor: float):
        self.index = index
        self.offset = offset
        self.factor = factor

    def __repr__(self) -> str:
        return f"Correlation(index={self.index}, offset={self.offset:.4g}, factor={self.factor:.4g})"


def estimate_correlations(training_set: Iterable) -> List[Correlation]:
    """
    Estimate a weighted single-variable least-squares fit of the target
    against every input feature.

    Parameters:
    -----------
    training_set : iterable of TrainingExample
        Samples providing inputs, targets and relative weights

    Returns:
    --------
    correlations : list of Correlation
        One entry per raw feature, sorted by non-decreasing factor
    """
    snapshot = WeightedSampleSnapshot.from_examples(training_set)
    weights = snapshot.weights
    total_weight = float(np.sum(weights))
    if total_weight <= 0:
        raise InvalidConfiguration("Total relative weight must be positive to estimate correlations")

    X = snapshot.X
    y = snapshot.y
    y_mean = float(np.sum(y * weights)) / total_weight
    x_mean = (weights @ X) / total_weight
    x2_mean = (weights @ (X * X)) / total_weight
    xy_mean = (weights @ (X * y[:, np.newaxis])) / total_weight

    estimated = []
    for i in range(X.shape[1]):
        factor = 0.0
        dev = x_mean[i] * x_mean[i] - x2_mean[i]
        if dev != 0:
            factor = float((x_mean[i] * y_mean - xy_mean[i]) / dev)
        estimated.append(Correlation(i, y_mean - factor * float(x_mean[i]), factor))

    return sorted(estimated, key=lambda c: c.factor)
