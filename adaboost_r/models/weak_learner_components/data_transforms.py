"""
Data Transform Utilities

This module contains validation helpers and small shape computations
shared by the weak learner components.
"""

import numpy as np
from typing import Tuple

from .exceptions import InvalidConfiguration, InputLengthMismatch


def basis_length(n_features: int, use_quadratic_basis: bool = False) -> int:
    """
    基底ベクトルの長さを計算

    Parameters:
    -----------
    n_features : int
        選択された特徴量の数 k
    use_quadratic_basis : bool, default=False
        2次の交差項を含めるかどうか

    Returns:
    --------
    length : int
        1 + k（線形）または 1 + k + k(k+1)/2（2次）
    """
    length = 1 + n_features
    if use_quadratic_basis:
        length += n_features * (n_features + 1) // 2
    return length


def validate_raw_input(raw_input: np.ndarray, n_features: int) -> Tuple[np.ndarray, bool]:
    """
    Validate raw input vectors passed to ``predict``.

    Parameters:
    -----------
    raw_input : array-like, shape=(n_features,) or (n_samples, n_features)
        Raw (unselected) feature vector(s)
    n_features : int
        Raw feature count established at construction

    Returns:
    --------
    X : np.ndarray, shape=(n_samples, n_features)
        Validated 2D input
    is_single : bool
        True if a single 1D vector was passed
    """
    X = np.asarray(raw_input, dtype=np.float64)
    is_single = X.ndim == 1
    if is_single:
        X = X.reshape(1, -1)
    if X.ndim != 2:
        raise InputLengthMismatch(f"raw_input must be 1D or 2D, got {X.ndim}D")
    if X.shape[1] != n_features:
        raise InputLengthMismatch(
            f"raw_input has {X.shape[1]} features, but the learner was built on {n_features}"
        )
    return X, is_single


def _check_positive(name: str, value: float) -> None:
    if value is None or not np.isfinite(value) or value <= 0:
        raise InvalidConfiguration(f"{name} must be positive, got {value}")


def _check_non_negative(name: str, value: float) -> None:
    if value is None or not np.isfinite(value) or value < 0:
        raise InvalidConfiguration(f"{name} must be non-negative, got {value}")


def _check_int_at_least(name: str, value: int, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value < minimum:
        raise InvalidConfiguration(f"{name} must be an integer >= {minimum}, got {value}")
