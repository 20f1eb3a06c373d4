"""
適応ステップ勾配降下のテスト
"""

import warnings

import numpy as np
import pytest

from adaboost_r.models.weak_learner_components import (
    AdaptiveStepOptimizer,
    BasisVectorBuilder,
    GradientComputer,
    InvalidConfiguration,
    NonConvergenceWarning,
    WeightedErrorFunction,
)


def _build_optimizer(X, y, weights, quadratic=False, regularization=0.0, **kwargs):
    builder = BasisVectorBuilder(X.shape[1], quadratic)
    design_matrix = builder.build_matrix(X)
    error_function = WeightedErrorFunction(design_matrix, y, weights)
    gradient_computer = GradientComputer(design_matrix, y, weights, regularization)
    optimizer = AdaptiveStepOptimizer(error_function, gradient_computer, **kwargs)
    return optimizer, error_function, builder.length


def _linear_problem(n_samples=50, seed=3):
    rng = np.random.default_rng(seed)
    X = rng.uniform(0.0, 3.0, size=(n_samples, 3))
    y = 0.5 + X @ np.array([1.0, -2.0, 0.5]) + rng.normal(scale=0.05, size=n_samples)
    weights = np.full(n_samples, 1.0 / n_samples)
    return X, y, weights


def test_two_point_line_converges():
    """target = 2 * x0 + 1 の2点から theta = [1, 2] に収束"""
    X = np.array([[-1.0], [1.0]])
    y = 2.0 * X[:, 0] + 1.0
    optimizer, _, length = _build_optimizer(X, y, np.array([0.5, 0.5]), max_iterations=10000)

    result = optimizer.optimize(np.zeros(length))

    print(f"  theta={result.theta}, status={result.status}, iterations={result.n_iterations}")
    assert result.converged
    assert result.status == "converged"
    np.testing.assert_allclose(result.theta, [1.0, 2.0], atol=1e-2)


def test_committed_errors_strictly_decrease():
    """確定したステップでは誤差が厳密に減少する"""
    X, y, weights = _linear_problem()
    optimizer, _, length = _build_optimizer(X, y, weights, max_iterations=3000)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergenceWarning)
        result = optimizer.optimize(np.zeros(length))

    errors = [result.initial_error] + [entry['error'] for entry in result.history]
    assert len(errors) > 1
    assert all(later < earlier for earlier, later in zip(errors, errors[1:]))
    assert result.error == pytest.approx(errors[-1])
    assert result.n_commits == len(result.history)


def test_optimize_does_not_mutate_input():
    """入力の theta は変更されない"""
    X, y, weights = _linear_problem()
    optimizer, _, length = _build_optimizer(X, y, weights, max_iterations=50)

    theta = np.zeros(length)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergenceWarning)
        optimizer.optimize(theta)
    np.testing.assert_array_equal(theta, np.zeros(length))


def test_iteration_budget_reports_non_convergence():
    """反復上限に達すると非収束を報告し、最良の theta を返す"""
    X, y, weights = _linear_problem()
    optimizer, error_function, length = _build_optimizer(X, y, weights, max_iterations=5)

    with pytest.warns(NonConvergenceWarning):
        result = optimizer.optimize(np.zeros(length))

    assert not result.converged
    assert result.status == "max_iterations"
    assert result.n_iterations == 5
    assert result.error <= result.initial_error
    assert error_function.error(result.theta) == pytest.approx(result.error)


def test_time_budget_reports_non_convergence():
    """時間上限に達すると非収束を報告する"""
    X, y, weights = _linear_problem()
    optimizer, _, length = _build_optimizer(X, y, weights, max_seconds=1e-9)

    with pytest.warns(NonConvergenceWarning):
        result = optimizer.optimize(np.zeros(length))

    assert not result.converged
    assert result.status == "max_time"


def test_stationary_start_stops_immediately():
    """勾配が零なら停留点として即座に終了"""
    X = np.array([[1.0], [2.0]])
    y = np.zeros(2)
    optimizer, _, length = _build_optimizer(X, y, np.array([0.5, 0.5]))

    result = optimizer.optimize(np.zeros(length))

    assert result.converged
    assert result.status == "stationary"
    assert result.n_iterations == 0
    np.testing.assert_array_equal(result.theta, np.zeros(length))


def test_step_size_adapts():
    """改善で alpha *= growth、失敗で alpha *= shrink"""
    X = np.array([[-1.0], [1.0]])
    y = 2.0 * X[:, 0] + 1.0
    optimizer, _, length = _build_optimizer(X, y, np.array([0.5, 0.5]),
                                            initial_step_size=0.1, max_iterations=1)

    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergenceWarning)
        result = optimizer.optimize(np.zeros(length))
    assert result.n_commits == 1
    assert result.step_size == pytest.approx(0.12)

    # 大きすぎるステップは却下される
    optimizer, _, length = _build_optimizer(X, y, np.array([0.5, 0.5]),
                                            initial_step_size=100.0, max_iterations=1)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergenceWarning)
        result = optimizer.optimize(np.zeros(length))
    assert result.n_commits == 0
    assert result.step_size == pytest.approx(50.0)
    np.testing.assert_array_equal(result.theta, np.zeros(length))


def test_custom_patience_and_factors():
    """growth/shrink/patience は設定可能"""
    X, y, weights = _linear_problem()
    optimizer, _, length = _build_optimizer(X, y, weights, growth_factor=1.5,
                                            shrink_factor=0.25, patience=3,
                                            max_iterations=20000)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NonConvergenceWarning)
        result = optimizer.optimize(np.zeros(length))
    assert result.status == "converged"
    assert result.history[-1]['small_change_count'] == 3


@pytest.mark.parametrize("params", [
    {'initial_step_size': 0.0},
    {'tolerance': -0.1},
    {'growth_factor': 1.0},
    {'shrink_factor': 1.0},
    {'shrink_factor': 0.0},
    {'patience': 0},
    {'max_iterations': 0},
    {'max_seconds': -1.0},
])
def test_invalid_optimizer_parameters(params):
    """不正なハイパーパラメータは InvalidConfiguration"""
    X, y, weights = _linear_problem()
    with pytest.raises(InvalidConfiguration):
        _build_optimizer(X, y, weights, **params)
