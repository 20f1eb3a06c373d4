"""
Gradient Computer

This module handles computation of the regularized, unit-normalized
gradient of the weighted squared-error loss over the whole training set.
"""

import numpy as np


class GradientComputer:
    """
    勾配の計算を担当するクラス

    Attributes:
    -----------
    design_matrix : np.ndarray, shape=(n_samples, basis_length)
        基底ベクトルを並べた行列
    targets : np.ndarray, shape=(n_samples,)
        ターゲット値
    weights : np.ndarray, shape=(n_samples,)
        サンプルの相対重み
    regularization : float
        バイアス以外の係数に対する L2 正則化係数 lambda
    """

    def __init__(self, design_matrix: np.ndarray, targets: np.ndarray, weights: np.ndarray,
                 regularization: float = 0.0):
        self.design_matrix = design_matrix
        self.targets = targets
        self.weights = weights
        self.regularization = regularization

    def compute_raw_gradient(self, theta: np.ndarray) -> np.ndarray:
        """
        正規化前の勾配を計算

        g_j = Σ (phi_i · theta - y_i) * phi_ij * w_i + lambda * theta_j  (j != 0)

        Parameters:
        -----------
        theta : array-like, shape=(basis_length,)
            現在のパラメータ

        Returns:
        --------
        gradient : np.ndarray, shape=(basis_length,)
            正規化前の勾配
        """
        diff = self.design_matrix @ theta - self.targets
        gradient = self.design_matrix.T @ (diff * self.weights)

        # バイアス項は正則化しない
        gradient[1:] += self.regularization * theta[1:]
        return gradient

    def compute_gradient(self, theta: np.ndarray) -> np.ndarray:
        """
        単位ノルムに正規化した勾配を計算

        ノルムが 0 の場合（停留点）は零ベクトルを返す

        Parameters:
        -----------
        theta : array-like, shape=(basis_length,)
            現在のパラメータ

        Returns:
        --------
        gradient : np.ndarray, shape=(basis_length,)
            正規化後の勾配
        """
        gradient = self.compute_raw_gradient(theta)
        norm = self.gradient_norm(gradient)
        if norm == 0:
            return np.zeros_like(gradient)
        return gradient / norm

    @staticmethod
    def gradient_norm(gradient: np.ndarray) -> float:
        return float(np.sqrt(np.sum(gradient * gradient)))
