"""
弱学習器の設定比較実験モジュール

線形基底と2次基底、および正則化係数の組み合わせで WeakLearner を学習し、
予測性能と収束の様子を比較します。
"""

import numpy as np
import os
import json
from typing import Dict, List, Optional

from ..models.weak_learner_components import WeakLearner
from ..utils.model_interface import (
    build_training_set,
    compare_configurations,
    generate_weighted_regression_data
)
from ..utils.visualization import (
    create_results_directory,
    plot_configuration_comparison,
    plot_optimization_history,
    plot_predictions,
    save_experiment_config
)


def build_configurations(subset_size: int = 3,
                         regularizations: List[float] = [0.0, 0.01, 0.1],
                         max_iterations: int = 10000) -> Dict[str, Dict]:
    """
    比較する設定を作成

    Parameters:
    -----------
    subset_size : int, default=3
        特徴量サブセットのサイズ
    regularizations : list of float
        試す正則化係数
    max_iterations : int, default=10000
        勾配降下の反復上限

    Returns:
    --------
    configs : dict
        設定名 → WeakLearner パラメータ
    """
    configs = {}
    for use_quadratic_basis in (False, True):
        basis_name = "quadratic" if use_quadratic_basis else "linear"
        for regularization in regularizations:
            configs[f"{basis_name}_lambda{regularization}"] = {
                'subset_size': subset_size,
                'use_quadratic_basis': use_quadratic_basis,
                'regularization': regularization,
                'max_iterations': max_iterations,
            }
    return configs


def run_configuration_sweep(n_samples: int = 300,
                            n_features: int = 5,
                            subset_size: int = 3,
                            noise: float = 0.1,
                            quadratic_data: bool = True,
                            regularizations: List[float] = [0.0, 0.01, 0.1],
                            max_iterations: int = 10000,
                            random_state: int = 42,
                            output_dir: Optional[str] = "results") -> Dict:
    """
    設定の組み合わせごとに WeakLearner を学習して比較

    Parameters:
    -----------
    n_samples : int, default=300
        サンプル数
    n_features : int, default=5
        特徴量の数
    subset_size : int, default=3
        特徴量サブセットのサイズ
    noise : float, default=0.1
        ノイズの標準偏差
    quadratic_data : bool, default=True
        2次の項を含むデータを生成するかどうか
    regularizations : list of float
        試す正則化係数
    max_iterations : int, default=10000
        勾配降下の反復上限
    random_state : int, default=42
        乱数シード
    output_dir : str or None, default="results"
        結果の出力先（None の場合は保存しない）

    Returns:
    --------
    results : dict
        'table'（DataFrame）と 'results_dir'
    """
    configs = build_configurations(subset_size, regularizations, max_iterations)

    table = compare_configurations(
        configs,
        n_samples=n_samples,
        n_features=n_features,
        noise=noise,
        quadratic_data=quadratic_data,
        random_state=random_state
    )

    results = {'table': table, 'results_dir': None}
    if output_dir is None:
        return results

    results_dir = create_results_directory(output_dir)
    results['results_dir'] = results_dir

    save_experiment_config({
        'n_samples': n_samples,
        'n_features': n_features,
        'subset_size': subset_size,
        'noise': noise,
        'quadratic_data': quadratic_data,
        'regularizations': regularizations,
        'max_iterations': max_iterations,
        'random_state': random_state,
        'configs': configs
    }, results_dir)

    table.to_csv(os.path.join(results_dir, "raw_data", "configuration_comparison.csv"))
    with open(os.path.join(results_dir, "raw_data", "configuration_comparison.json"), 'w') as f:
        json.dump(json.loads(table.to_json(orient='index')), f, indent=2)

    plot_configuration_comparison(
        table,
        save_path=os.path.join(results_dir, "figures", "configuration_comparison.png")
    )

    # 最良設定の学習過程と予測を可視化
    best_name = table['mse'].idxmin()
    X_train, y_train, w_train, X_test, y_test = generate_weighted_regression_data(
        n_samples=n_samples,
        n_features=n_features,
        noise=noise,
        quadratic=quadratic_data,
        random_state=random_state
    )
    learner = WeakLearner(
        build_training_set(X_train, y_train, w_train),
        random_source=np.random.default_rng(random_state),
        **configs[best_name]
    )
    result = learner.train()
    plot_optimization_history(
        result.history,
        title=f"Gradient Descent Progress ({best_name})",
        save_path=os.path.join(results_dir, "figures", "best_optimization_history.png")
    )
    plot_predictions(
        y_test,
        learner.predict(X_test),
        title=f"Actual vs Predicted ({best_name})",
        save_path=os.path.join(results_dir, "figures", "best_predictions.png")
    )
    learner.save_history_to_json(os.path.join(results_dir, "raw_data", "best_history.json"))

    return results


def main() -> None:
    results = run_configuration_sweep()
    print(results['table'].to_string())
    print(f"\nResults saved to {results['results_dir']}")


if __name__ == "__main__":
    main()
