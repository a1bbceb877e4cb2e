import numpy as np
import pytest

from lmm_curve.src.models import LiborMarketModel, identity_correlation


class FixedNormals:
    """standard_normal 호출마다 같은 값을 돌려주는 난수원."""

    def __init__(self, value=0.0):
        self.value = value
        self.calls = 0

    def standard_normal(self, size=None):
        self.calls += 1
        return np.full(size, self.value, dtype=float)


@pytest.fixture
def grid():
    return {
        "t": [1.0, 2.0, 3.0],
        "phi": [0.05, 0.05, 0.05],
        "sigma": [0.0, 0.2, 0.2],
    }


@pytest.fixture
def model(grid):
    return LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], identity_correlation(1))


@pytest.fixture
def fixed_normals():
    return FixedNormals
