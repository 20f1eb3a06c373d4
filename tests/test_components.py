"""
弱学習器コンポーネントのテスト

特徴量サブセット選択、基底ベクトル、重み付き誤差、勾配計算の
各コンポーネントを個別に検証します。
"""

import numpy as np
import pytest

from adaboost_r.models.weak_learner_components import (
    BasisVectorBuilder,
    FeatureSubsetSelector,
    GradientComputer,
    InputLengthMismatch,
    InvalidConfiguration,
    TrainingExample,
    WeightedErrorFunction,
    WeightedSampleSnapshot,
    basis_length,
)


def test_subset_covers_all_features_without_randomness():
    """サブセットサイズが特徴量数以上なら全特徴量を自然順で返す"""
    selector = FeatureSubsetSelector(subset_size=5)
    subset = selector.select(3)
    assert subset.tolist() == [0, 1, 2]

    selector = FeatureSubsetSelector(subset_size=4)
    assert selector.select(4).tolist() == [0, 1, 2, 3]


def test_subset_random_draw_is_reproducible():
    """同じシードなら同じサブセットが選ばれる"""
    first = FeatureSubsetSelector(3, np.random.default_rng(7)).select(10)
    second = FeatureSubsetSelector(3, np.random.default_rng(7)).select(10)

    assert first.tolist() == second.tolist()
    assert len(set(first.tolist())) == 3
    assert all(0 <= i < 10 for i in first)
    print(f"  selected subset: {first.tolist()}")


def test_subset_is_read_only():
    """選択されたサブセットは変更できない"""
    subset = FeatureSubsetSelector(2, np.random.default_rng(0)).select(6)
    with pytest.raises(ValueError):
        subset[0] = 5


def test_subset_invalid_configuration():
    """不正な設定は InvalidConfiguration"""
    with pytest.raises(InvalidConfiguration):
        FeatureSubsetSelector(0)
    with pytest.raises(InvalidConfiguration):
        FeatureSubsetSelector(-2)
    with pytest.raises(InvalidConfiguration):
        FeatureSubsetSelector(2).select(0)
    # 抽選が必要なのに乱数生成器がない
    with pytest.raises(InvalidConfiguration):
        FeatureSubsetSelector(2).select(5)


@pytest.mark.parametrize("k", [1, 2, 3, 5])
def test_basis_length(k):
    """基底ベクトル長は 1 + k（線形）または 1 + k + k(k+1)/2（2次）"""
    features = np.arange(1, k + 1, dtype=float)

    linear = BasisVectorBuilder(k, use_quadratic_basis=False)
    assert linear.length == 1 + k
    assert linear.build(features).shape == (1 + k,)

    quadratic = BasisVectorBuilder(k, use_quadratic_basis=True)
    assert quadratic.length == 1 + k + k * (k + 1) // 2
    assert quadratic.build(features).shape == (quadratic.length,)
    assert basis_length(k, True) == quadratic.length


def test_quadratic_basis_terms():
    """2次基底は bias, 線形項, f_i*f_j (i <= j) の順"""
    builder = BasisVectorBuilder(2, use_quadratic_basis=True)
    basis = builder.build(np.array([2.0, 3.0]))
    np.testing.assert_allclose(basis, [1.0, 2.0, 3.0, 4.0, 6.0, 9.0])

    matrix = builder.build_matrix(np.array([[2.0, 3.0], [1.0, -1.0]]))
    np.testing.assert_allclose(matrix, [[1.0, 2.0, 3.0, 4.0, 6.0, 9.0],
                                        [1.0, 1.0, -1.0, 1.0, -1.0, 1.0]])


def test_basis_buffer_is_reused():
    """build は同じバッファを再利用する"""
    builder = BasisVectorBuilder(2)
    first = builder.build(np.array([1.0, 2.0]))
    second = builder.build(np.array([3.0, 4.0]))
    assert first is second
    np.testing.assert_allclose(second, [1.0, 3.0, 4.0])


def test_basis_rejects_wrong_length():
    """長さの合わない入力は InputLengthMismatch"""
    builder = BasisVectorBuilder(3)
    with pytest.raises(InputLengthMismatch):
        builder.build(np.array([1.0, 2.0]))
    with pytest.raises(InputLengthMismatch):
        builder.build_matrix(np.ones((4, 2)))


def _simple_problem():
    design_matrix = np.array([[1.0, -1.0], [1.0, 1.0], [1.0, 2.0]])
    targets = np.array([-1.0, 3.0, 4.0])
    weights = np.array([0.2, 0.5, 0.3])
    return design_matrix, targets, weights


def test_weighted_error_value():
    """誤差は Σ 0.5 * diff^2 * weight"""
    design_matrix, targets, weights = _simple_problem()
    error_function = WeightedErrorFunction(design_matrix, targets, weights)

    theta = np.array([0.5, 1.0])
    diff = design_matrix @ theta - targets
    expected = np.sum(0.5 * diff ** 2 * weights)
    assert error_function.error(theta) == pytest.approx(expected)


def test_error_at_step_does_not_mutate_theta():
    """仮の theta - alpha * g での誤差評価は theta を変更しない"""
    design_matrix, targets, weights = _simple_problem()
    error_function = WeightedErrorFunction(design_matrix, targets, weights)

    theta = np.array([0.0, 0.0])
    gradient = np.array([-0.6, -0.8])
    value = error_function.error_at_step(theta, gradient, 0.5)

    np.testing.assert_array_equal(theta, [0.0, 0.0])
    assert value == pytest.approx(error_function.error(np.array([0.3, 0.4])))


def test_gradient_is_unit_norm():
    """非零の勾配は正規化後にノルム1"""
    design_matrix, targets, weights = _simple_problem()
    computer = GradientComputer(design_matrix, targets, weights, regularization=0.1)

    gradient = computer.compute_gradient(np.array([0.3, -0.2]))
    assert np.linalg.norm(gradient) == pytest.approx(1.0, abs=1e-9)


def test_raw_gradient_regularizes_all_but_bias():
    """正則化項はバイアス以外に加わる"""
    design_matrix, targets, weights = _simple_problem()
    plain = GradientComputer(design_matrix, targets, weights, regularization=0.0)
    regularized = GradientComputer(design_matrix, targets, weights, regularization=2.0)

    theta = np.array([1.5, -0.5])
    diff = plain.compute_raw_gradient(theta) - regularized.compute_raw_gradient(theta)
    np.testing.assert_allclose(diff, [0.0, 1.0])

    expected = design_matrix.T @ ((design_matrix @ theta - targets) * weights)
    np.testing.assert_allclose(plain.compute_raw_gradient(theta), expected)


def test_zero_gradient_is_returned_as_zero_vector():
    """勾配のノルムが0なら零ベクトル（停留点）"""
    design_matrix = np.array([[1.0, 1.0], [1.0, 2.0]])
    targets = np.zeros(2)
    computer = GradientComputer(design_matrix, targets, np.array([0.5, 0.5]))

    gradient = computer.compute_gradient(np.zeros(2))
    np.testing.assert_array_equal(gradient, [0.0, 0.0])


def test_snapshot_is_immutable_copy():
    """スナップショットは読み取り専用のコピー"""
    examples = [TrainingExample([1.0, 2.0], 3.0, 0.25), TrainingExample([0.0, 1.0], 1.0, 0.75)]
    snapshot = WeightedSampleSnapshot.from_examples(examples)

    examples[0].set_relative_weight(0.9)
    assert snapshot.weights[0] == 0.25
    assert not snapshot.X.flags.writeable
    with pytest.raises(ValueError):
        snapshot.weights[0] = 1.0


def test_snapshot_validation():
    """スナップショットの検証"""
    with pytest.raises(InvalidConfiguration):
        WeightedSampleSnapshot.from_examples([])
    with pytest.raises(InputLengthMismatch):
        WeightedSampleSnapshot.from_examples([TrainingExample([1.0, 2.0], 1.0),
                                              TrainingExample([1.0], 1.0)])
    with pytest.raises(InvalidConfiguration):
        WeightedSampleSnapshot.from_arrays(np.ones((2, 2)), np.ones(2), np.array([0.5, -0.5]))
    with pytest.raises(InvalidConfiguration):
        WeightedSampleSnapshot.from_arrays(np.array([[np.nan]]), np.ones(1))

    snapshot = WeightedSampleSnapshot.from_arrays(np.ones((4, 3)), np.zeros(4))
    np.testing.assert_allclose(snapshot.weights, 0.25)
    assert snapshot.n_features == 3
    assert len(snapshot) == 4
