"""
弱学習器インターフェース確認用モジュール

このモジュールは、人工的な重み付き回帰データの生成と、WeakLearner の
共通インターフェース（生成・学習・予測・評価）を確認するための
ユーティリティを提供します。
"""

import numpy as np
import pandas as pd
from typing import Dict, List, Optional, Tuple
import time

from ..models.weak_learner_components import TrainingExample, WeakLearner


def generate_weighted_regression_data(n_samples: int = 200, n_features: int = 5,
                                      noise: float = 0.1, quadratic: bool = False,
                                      test_size: float = 0.2,
                                      random_state: Optional[int] = None) -> Tuple:
    """
    重み付き回帰データを生成

    Parameters:
    -----------
    n_samples : int, default=200
        サンプル数
    n_features : int, default=5
        特徴量の数
    noise : float, default=0.1
        ターゲットに加えるノイズの標準偏差
    quadratic : bool, default=False
        ターゲットに2次の交差項を含めるかどうか
    test_size : float, default=0.2
        テストデータの割合
    random_state : int, optional
        乱数シード

    Returns:
    --------
    X_train : array-like, shape=(n_train, n_features)
        訓練用入力特徴量
    y_train : array-like, shape=(n_train,)
        訓練用ターゲット値
    w_train : array-like, shape=(n_train,)
        訓練用の相対重み（均等、合計1）
    X_test : array-like, shape=(n_test, n_features)
        テスト用入力特徴量
    y_test : array-like, shape=(n_test,)
        テスト用ターゲット値
    """
    rng = np.random.default_rng(random_state)

    # 入力特徴量を生成
    X = rng.uniform(0.0, 3.0, size=(n_samples, n_features))

    # 線形部分
    coefficients = rng.normal(size=n_features)
    y = 1.0 + X @ coefficients

    # 2次部分
    if quadratic and n_features >= 2:
        y += 0.5 * X[:, 0] * X[:, 1] - 0.25 * X[:, 0] ** 2

    # ノイズを追加
    y += rng.normal(scale=noise, size=n_samples)

    # 訓練データとテストデータに分割
    n_test = int(n_samples * test_size)
    n_train = n_samples - n_test

    X_train, X_test = X[:n_train], X[n_train:]
    y_train, y_test = y[:n_train], y[n_train:]
    w_train = np.full(n_train, 1.0 / n_train)

    return X_train, y_train, w_train, X_test, y_test


def build_training_set(X: np.ndarray, y: np.ndarray,
                       weights: Optional[np.ndarray] = None) -> List[TrainingExample]:
    """
    配列から TrainingExample のリストを作成

    Parameters:
    -----------
    X : array-like, shape=(n_samples, n_features)
        入力特徴量
    y : array-like, shape=(n_samples,)
        ターゲット値
    weights : array-like, shape=(n_samples,), optional
        相対重み（省略時は均等重み）

    Returns:
    --------
    training_set : list of TrainingExample
    """
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64).ravel()
    if weights is None:
        weights = np.full(X.shape[0], 1.0 / X.shape[0])

    return [TrainingExample(X[i], y[i], weights[i]) for i in range(X.shape[0])]


def run_weak_learner_interface(model_params: Dict = None, n_samples: int = 200,
                               n_features: int = 5, noise: float = 0.1,
                               quadratic_data: bool = False,
                               random_state: int = 42) -> Dict:
    """
    WeakLearner のインターフェースを一通り実行

    Parameters:
    -----------
    model_params : dict, optional
        WeakLearner のパラメータ（random_source 省略時は random_state から生成）
    n_samples : int, default=200
        サンプル数
    n_features : int, default=5
        特徴量の数
    noise : float, default=0.1
        ノイズの標準偏差
    quadratic_data : bool, default=False
        2次の項を含むデータを生成するかどうか
    random_state : int, default=42
        乱数シード

    Returns:
    --------
    results : dict
        実行結果
    """
    # デフォルトパラメータ
    if model_params is None:
        model_params = {
            'subset_size': 3,
            'use_quadratic_basis': False,
            'regularization': 0.0,
        }

    # データを生成
    X_train, y_train, w_train, X_test, y_test = generate_weighted_regression_data(
        n_samples=n_samples,
        n_features=n_features,
        noise=noise,
        quadratic=quadratic_data,
        random_state=random_state
    )
    training_set = build_training_set(X_train, y_train, w_train)

    # モデルを初期化
    model_params = dict(model_params)
    model_params.setdefault('random_source', np.random.default_rng(random_state))
    model = WeakLearner(training_set, **model_params)

    # 学習時間を計測
    start_time = time.time()
    result = model.train()
    train_time = time.time() - start_time

    # 予測時間を計測
    start_time = time.time()
    model.predict(X_test)
    predict_time = time.time() - start_time

    # 評価
    eval_results = model.evaluate(X_test, y_test, metrics=['mse', 'rmse', 'mae', 'r2'])

    return {
        'model_class': type(model).__name__,
        'subset': model.get_subset().tolist(),
        'basis_length': model.basis_length,
        'train_time': train_time,
        'predict_time': predict_time,
        'converged': result.converged,
        'status': result.status,
        'n_iterations': result.n_iterations,
        'training_error': result.error,
        'evaluation': eval_results,
        'history': result.history
    }


def compare_configurations(configs: Dict[str, Dict], n_samples: int = 200, n_features: int = 5,
                           noise: float = 0.1, quadratic_data: bool = False,
                           random_state: int = 42) -> pd.DataFrame:
    """
    複数のパラメータ設定を比較

    Parameters:
    -----------
    configs : dict
        設定名 → WeakLearner パラメータ
    n_samples : int, default=200
        サンプル数
    n_features : int, default=5
        特徴量の数
    noise : float, default=0.1
        ノイズの標準偏差
    quadratic_data : bool, default=False
        2次の項を含むデータを生成するかどうか
    random_state : int, default=42
        乱数シード

    Returns:
    --------
    results : pd.DataFrame
        設定ごとの結果（index は設定名）
    """
    rows = []
    for name, params in configs.items():
        print(f"Testing {name}...")
        result = run_weak_learner_interface(
            model_params=params,
            n_samples=n_samples,
            n_features=n_features,
            noise=noise,
            quadratic_data=quadratic_data,
            random_state=random_state
        )
        rows.append({
            'config': name,
            'basis_length': result['basis_length'],
            'converged': result['converged'],
            'status': result['status'],
            'n_iterations': result['n_iterations'],
            'training_error': result['training_error'],
            'train_time': result['train_time'],
            **result['evaluation']
        })

    return pd.DataFrame(rows).set_index('config')
