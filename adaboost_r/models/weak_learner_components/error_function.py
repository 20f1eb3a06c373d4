"""
Weighted Error Function

This module evaluates the weighted squared-error loss minimised by the
weak learner, for the stored parameters or for a hypothetical step.
"""

import numpy as np


class WeightedErrorFunction:
    """
    重み付き二乗誤差を計算するクラス

    E(theta) = Σ 0.5 * (phi_i · theta - y_i)^2 * w_i

    Attributes:
    -----------
    design_matrix : np.ndarray, shape=(n_samples, basis_length)
        基底ベクトルを並べた行列
    targets : np.ndarray, shape=(n_samples,)
        ターゲット値
    weights : np.ndarray, shape=(n_samples,)
        サンプルの相対重み
    """

    def __init__(self, design_matrix: np.ndarray, targets: np.ndarray, weights: np.ndarray):
        self.design_matrix = design_matrix
        self.targets = targets
        self.weights = weights

    def residuals(self, theta: np.ndarray) -> np.ndarray:
        """予測値とターゲットの差 (phi · theta - y)"""
        return self.design_matrix @ theta - self.targets

    def error(self, theta: np.ndarray) -> float:
        """
        パラメータ theta における誤差

        Parameters:
        -----------
        theta : array-like, shape=(basis_length,)
            評価するパラメータベクトル

        Returns:
        --------
        error : float
            重み付き二乗誤差
        """
        diff = self.residuals(theta)
        return float(np.sum(0.5 * diff * diff * self.weights))

    def error_at_step(self, theta: np.ndarray, gradient: np.ndarray, step_size: float) -> float:
        """
        theta - step_size * gradient における誤差（theta 自体は変更しない）

        Parameters:
        -----------
        theta : array-like, shape=(basis_length,)
            現在のパラメータ
        gradient : array-like, shape=(basis_length,)
            勾配方向
        step_size : float
            ステップ幅 alpha

        Returns:
        --------
        error : float
            候補点での誤差
        """
        return self.error(theta - step_size * gradient)
