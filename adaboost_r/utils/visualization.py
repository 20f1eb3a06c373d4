"""
実験結果の保存・可視化ユーティリティモジュール

このモジュールは、弱学習器の学習過程と設定比較の結果を保存・可視化するための
ユーティリティ関数を提供します。
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
import os
import json
from typing import Dict, List, Optional
import datetime


def create_results_directory(base_dir: str = "results") -> str:
    """
    実験結果を保存するディレクトリを作成

    Parameters:
    -----------
    base_dir : str, default="results"
        基本ディレクトリ名

    Returns:
    --------
    results_dir : str
        作成された結果ディレクトリのパス
    """
    # タイムスタンプを含むディレクトリ名を生成
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    results_dir = os.path.join(base_dir, f"experiment_{timestamp}")

    # ディレクトリを作成
    os.makedirs(results_dir, exist_ok=True)
    os.makedirs(os.path.join(results_dir, "figures"), exist_ok=True)
    os.makedirs(os.path.join(results_dir, "raw_data"), exist_ok=True)

    return results_dir


def save_experiment_config(config: Dict, results_dir: str) -> None:
    """
    実験設定を保存

    Parameters:
    -----------
    config : dict
        実験設定
    results_dir : str
        結果ディレクトリのパス
    """
    with open(os.path.join(results_dir, "experiment_config.json"), 'w') as f:
        json.dump(config, f, indent=2)


def plot_optimization_history(history: List[Dict],
                              title: str = "Gradient Descent Progress",
                              save_path: Optional[str] = None) -> None:
    """
    勾配降下の誤差とステップ幅の推移をプロット

    Parameters:
    -----------
    history : list of dict
        OptimizationResult.history（確定したステップごとの記録）
    title : str, default="Gradient Descent Progress"
        プロットのタイトル
    save_path : str, optional
        保存先のパス
    """
    df = pd.DataFrame(history)
    if df.empty:
        return

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    # 誤差
    sns.lineplot(data=df, x='iteration', y='error', ax=axes[0], marker='o')
    axes[0].set_yscale('log')
    axes[0].set_title('Weighted Error')
    axes[0].grid(True, linestyle='--', alpha=0.7)

    # ステップ幅
    sns.lineplot(data=df, x='iteration', y='step_size', ax=axes[1], marker='o')
    axes[1].set_yscale('log')
    axes[1].set_title('Step Size')
    axes[1].grid(True, linestyle='--', alpha=0.7)

    fig.suptitle(title)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close(fig)


def plot_configuration_comparison(results: pd.DataFrame,
                                  metrics: List[str] = ['mse', 'rmse', 'mae', 'r2'],
                                  title: str = "Weak Learner Configuration Comparison",
                                  save_path: Optional[str] = None) -> None:
    """
    設定ごとの評価指標をヒートマップで表示

    Parameters:
    -----------
    results : pd.DataFrame
        compare_configurations の結果
    metrics : list of str
        表示する評価指標
    title : str, default="Weak Learner Configuration Comparison"
        プロットのタイトル
    save_path : str, optional
        保存先のパス
    """
    columns = [m for m in metrics if m in results.columns]
    df = results[columns].astype(float)

    plt.figure(figsize=(10, max(3, 0.6 * len(df) + 2)))
    sns.heatmap(df, annot=True, fmt=".4f", cmap="YlGnBu")
    plt.title(title)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close()


def plot_predictions(y_true: np.ndarray, y_pred: np.ndarray,
                     title: str = "Actual vs Predicted",
                     save_path: Optional[str] = None) -> None:
    """
    実測値と予測値の散布図

    Parameters:
    -----------
    y_true : array-like
        実測値
    y_pred : array-like
        予測値
    title : str, default="Actual vs Predicted"
        プロットのタイトル
    save_path : str, optional
        保存先のパス
    """
    y_true = np.asarray(y_true).ravel()
    y_pred = np.asarray(y_pred).ravel()

    plt.figure(figsize=(6, 6))
    plt.scatter(y_true, y_pred, alpha=0.6)

    low = min(y_true.min(), y_pred.min())
    high = max(y_true.max(), y_pred.max())
    plt.plot([low, high], [low, high], 'r--', linewidth=1)

    plt.xlabel('Actual')
    plt.ylabel('Predicted')
    plt.title(title)
    plt.grid(True, linestyle='--', alpha=0.7)

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close()
