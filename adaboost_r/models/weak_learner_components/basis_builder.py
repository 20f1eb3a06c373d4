"""
Basis Vector Builder

This module maps a subset-restricted feature vector to the basis vector
the linear model operates on: a bias term, the linear terms and,
optionally, every pairwise product f_i * f_j with i <= j.
"""

import numpy as np

from .data_transforms import basis_length
from .exceptions import InputLengthMismatch


class BasisVectorBuilder:
    """
    Builds basis vectors of a fixed length.

    A single output buffer is allocated at construction and refilled by
    ``build``; the returned array is overwritten by the next call.
    """

    def __init__(self, n_features: int, use_quadratic_basis: bool = False):
        self.n_features = n_features
        self.use_quadratic_basis = use_quadratic_basis
        self.length = basis_length(n_features, use_quadratic_basis)

        # Row-major (i, j) pairs with i <= j
        self._quad_i, self._quad_j = np.triu_indices(n_features)
        self._buffer = np.empty(self.length, dtype=np.float64)
        self._buffer[0] = 1.0

    def build(self, features: np.ndarray) -> np.ndarray:
        """
        Fill the reusable buffer with the basis vector of one sample.

        Parameters:
        -----------
        features : array-like, shape=(n_features,)
            Feature values already restricted to the subset

        Returns:
        --------
        basis : np.ndarray, shape=(length,)
            The internal buffer
        """
        features = np.asarray(features, dtype=np.float64)
        if features.shape != (self.n_features,):
            raise InputLengthMismatch(
                f"Expected {self.n_features} subset features, got shape {features.shape}"
            )

        k = self.n_features
        self._buffer[1:1 + k] = features
        if self.use_quadratic_basis:
            np.multiply(features[self._quad_i], features[self._quad_j], out=self._buffer[1 + k:])
        return self._buffer

    def build_matrix(self, X_subset: np.ndarray) -> np.ndarray:
        """
        Build the design matrix for a batch of samples.

        Parameters:
        -----------
        X_subset : array-like, shape=(n_samples, n_features)
            Subset-restricted feature matrix

        Returns:
        --------
        design_matrix : np.ndarray, shape=(n_samples, length)
        """
        X_subset = np.asarray(X_subset, dtype=np.float64)
        if X_subset.ndim != 2 or X_subset.shape[1] != self.n_features:
            raise InputLengthMismatch(
                f"Expected (n_samples, {self.n_features}) subset features, got shape {X_subset.shape}"
            )

        n_samples = X_subset.shape[0]
        k = self.n_features
        design_matrix = np.empty((n_samples, self.length), dtype=np.float64)
        design_matrix[:, 0] = 1.0
        design_matrix[:, 1:1 + k] = X_subset
        if self.use_quadratic_basis:
            design_matrix[:, 1 + k:] = X_subset[:, self._quad_i] * X_subset[:, self._quad_j]
        return design_matrix

    def __repr__(self) -> str:
        return (f"BasisVectorBuilder(n_features={self.n_features}, "
                f"use_quadratic_basis={self.use_quadratic_basis}, length={self.length})")
