import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from adaboost_r.models.weak_learner_components import TrainingExample


@pytest.fixture
def line_training_set():
    """target = 2 * x0 + 1 の2サンプル（均等重み）"""
    return [
        TrainingExample([-1.0], -1.0, 0.5),
        TrainingExample([1.0], 3.0, 0.5),
    ]


@pytest.fixture
def random_training_set():
    """5特徴量・線形ターゲットの重み付きデータ"""
    rng = np.random.default_rng(0)
    X = rng.uniform(0.0, 3.0, size=(40, 5))
    y = 1.0 + X @ np.array([0.5, -1.0, 2.0, 0.0, 1.5])
    weights = rng.uniform(0.5, 1.5, size=40)
    weights /= weights.sum()
    return [TrainingExample(X[i], y[i], weights[i]) for i in range(40)]
