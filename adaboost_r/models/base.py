"""
弱学習器の基底クラスモジュール

このモジュールは、AdaBoostR で使用する弱学習器の抽象基底クラスを提供します。
弱学習器は学習データに束縛された状態で生成され、train() で学習し、
predict() で予測を行います。
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Any, Dict, List, Optional

from .weak_learner_components.exceptions import InvalidConfiguration, InputLengthMismatch


class WeakLearnerBase(ABC):
    """
    弱学習器の抽象基底クラス

    Attributes:
    -----------
    combination_coefficient : float
        外側のブースティングループが設定する結合係数
    is_fitted : bool
        train() が一度でも完了したかどうか
    """

    # set_params で変更可能なパラメータ名
    _tunable_params: tuple = ()
    # 生成時に固定され、変更できないパラメータ名
    _structural_params: tuple = ()

    def __init__(self):
        self.combination_coefficient = 0.0
        self.is_fitted = False
        self._coefficient_assigned = False

    @abstractmethod
    def train(self) -> Any:
        """
        束縛された学習データで学習

        Returns:
        --------
        result : Any
            学習結果
        """
        pass

    @abstractmethod
    def predict(self, raw_input: np.ndarray):
        """
        予測

        Parameters:
        -----------
        raw_input : array-like, shape=(n_features,) or (n_samples, n_features)
            入力特徴量

        Returns:
        --------
        y_pred : float or np.ndarray
            予測値
        """
        pass

    def get_combination_coefficient(self) -> float:
        """結合係数を取得"""
        return self.combination_coefficient

    def set_combination_coefficient(self, value: float) -> None:
        """結合係数を設定（外側のブースティングループ用）"""
        self.combination_coefficient = float(value)
        self._coefficient_assigned = True

    @property
    def state(self) -> str:
        """
        ライフサイクル上の状態

        "created" → "trained" → "ready"
        """
        if not self.is_fitted:
            return "created"
        if self._coefficient_assigned:
            return "ready"
        return "trained"

    def evaluate(self, X: np.ndarray, y: np.ndarray, metrics: List[str] = ['mse'],
                 sample_weight: Optional[np.ndarray] = None) -> Dict[str, float]:
        """
        モデルの評価

        Parameters:
        -----------
        X : array-like, shape=(n_samples, n_features)
            入力特徴量
        y : array-like, shape=(n_samples,)
            真のターゲット値
        metrics : list of str, default=['mse']
            使用する評価指標のリスト（mse, rmse, mae, r2, weighted_error）
        sample_weight : array-like, shape=(n_samples,), optional
            weighted_error で使用する重み（省略時は均等重み）

        Returns:
        --------
        results : dict
            各評価指標の値
        """
        X = np.asarray(X, dtype=np.float64)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        y = np.asarray(y, dtype=np.float64).ravel()

        # サンプル数の一致を確認
        if X.shape[0] != y.shape[0]:
            raise InputLengthMismatch(
                f"X ({X.shape[0]} samples) and y ({y.shape[0]} samples) have different numbers of samples"
            )

        # 予測
        y_pred = np.asarray(self.predict(X), dtype=np.float64)

        # 結果格納用辞書
        results = {}

        for metric in metrics:
            if metric.lower() == 'mse':
                # 平均二乗誤差
                results['mse'] = float(np.mean((y - y_pred) ** 2))

            elif metric.lower() == 'rmse':
                # 平方根平均二乗誤差
                results['rmse'] = float(np.sqrt(np.mean((y - y_pred) ** 2)))

            elif metric.lower() == 'mae':
                # 平均絶対誤差
                results['mae'] = float(np.mean(np.abs(y - y_pred)))

            elif metric.lower() == 'r2':
                # 決定係数（ターゲットが定数の場合は nan）
                ss_tot = np.sum((y - np.mean(y)) ** 2)
                ss_res = np.sum((y - y_pred) ** 2)
                results['r2'] = float(1 - ss_res / ss_tot) if ss_tot > 0 else float('nan')

            elif metric.lower() == 'weighted_error':
                # 学習時と同じ重み付き二乗誤差
                if sample_weight is None:
                    weights = np.full(y.shape[0], 1.0 / y.shape[0])
                else:
                    weights = np.asarray(sample_weight, dtype=np.float64).ravel()
                results['weighted_error'] = float(np.sum(0.5 * (y_pred - y) ** 2 * weights))

            else:
                raise ValueError(f"Unknown metric: {metric}")

        return results

    def get_params(self) -> Dict[str, Any]:
        """
        モデルパラメータの取得

        Returns:
        --------
        params : dict
            モデルパラメータ
        """
        names = self._structural_params + self._tunable_params
        return {name: getattr(self, name) for name in names}

    def set_params(self, **params) -> 'WeakLearnerBase':
        """
        モデルパラメータの設定

        特徴量サブセットと基底は生成時に固定されるため、構造パラメータは変更できません。

        Parameters:
        -----------
        **params : dict
            設定するパラメータ

        Returns:
        --------
        self : WeakLearnerBase
            パラメータを更新したモデル
        """
        for key in params:
            if key in self._structural_params:
                raise InvalidConfiguration(f"Parameter '{key}' is fixed at construction")
            if key not in self._tunable_params:
                raise InvalidConfiguration(f"Invalid parameter: {key}")

        self._validate_params({**self.get_params(), **params})
        for key, value in params.items():
            setattr(self, key, value)
        return self

    def _validate_params(self, params: Dict[str, Any]) -> None:
        """サブクラスでパラメータを検証"""
        pass
