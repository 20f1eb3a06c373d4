"""
Feature Subset Selector

This module chooses the fixed-size set of raw feature indices a weak
learner is trained on.
"""

import numpy as np
from typing import Optional

from .data_transforms import _check_int_at_least
from .exceptions import InvalidConfiguration


class FeatureSubsetSelector:
    """
    特徴量サブセットの選択を担当するクラス

    Attributes:
    -----------
    subset_size : int
        選択する特徴量の数
    random_source : np.random.Generator or None
        外部から注入される乱数生成器（内部では生成しない）
    """

    def __init__(self, subset_size: int, random_source: Optional[np.random.Generator] = None):
        _check_int_at_least("subset_size", subset_size, 1)
        self.subset_size = int(subset_size)
        self.random_source = random_source

    def select(self, raw_feature_count: int) -> np.ndarray:
        """
        特徴量インデックスを選択

        Parameters:
        -----------
        raw_feature_count : int
            元の特徴量の総数

        Returns:
        --------
        subset : np.ndarray, shape=(min(subset_size, raw_feature_count),)
            重複のない特徴量インデックス（読み取り専用）
        """
        _check_int_at_least("raw_feature_count", raw_feature_count, 1)

        if self.subset_size >= raw_feature_count:
            # 全特徴量を自然順で使用（乱数は使わない）
            subset = np.arange(raw_feature_count)
        else:
            if self.random_source is None:
                raise InvalidConfiguration(
                    f"A random_source is required to draw {self.subset_size} of {raw_feature_count} features"
                )
            subset = self.random_source.choice(raw_feature_count, size=self.subset_size, replace=False)

        subset = np.asarray(subset, dtype=np.intp)
        subset.flags.writeable = False
        return subset
