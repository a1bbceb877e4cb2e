import numpy as np
import pytest

from lmm_curve.config.settings import LMM_TIMES, FUTURES_QUOTES, CAPLET_VOLS, CORRELATION_BETA
from lmm_curve.src.market import build_default_model, default_market_data, validate_market_data


def test_validate_returns_arrays():
    t, phi, sigma = validate_market_data([0.5, 1.0], [0.03, 0.031], [0.0, 0.25])
    assert isinstance(t, np.ndarray)
    assert t.dtype == np.float64
    np.testing.assert_array_equal(sigma, [0.0, 0.25])


@pytest.mark.parametrize("t, phi, sigma, message", [
    ([-0.5, 1.0], [0.03, 0.03], [0.0, 0.2], "첫 시점"),
    ([1.0, 0.5], [0.03, 0.03], [0.0, 0.2], "증가"),
    ([0.5, 1.0], [0.03, 0.03], [0.0, -0.2], "음수"),
    ([0.5, np.nan], [0.03, 0.03], [0.0, 0.2], "유한"),
    ([[0.5, 1.0]], [0.03, 0.03], [0.0, 0.2], "1차원"),
])
def test_validate_names_offending_input(t, phi, sigma, message):
    with pytest.raises(ValueError, match=message):
        validate_market_data(t, phi, sigma)


def test_default_market_data_matches_settings():
    data = default_market_data()
    assert data["times"] == LMM_TIMES
    assert data["futures"] == FUTURES_QUOTES
    assert data["vols"] == CAPLET_VOLS
    assert data["beta"] == CORRELATION_BETA
    # settings 값 자체가 유효한 시장 데이터여야 한다
    validate_market_data(data["times"], data["futures"], data["vols"])


def test_build_default_model():
    model = build_default_model()
    assert model.size() == len(LMM_TIMES)
    assert len(model.brownian) == len(LMM_TIMES)
    expected = np.exp(-CORRELATION_BETA * abs(LMM_TIMES[0] - LMM_TIMES[1]))
    assert model.brownian.correlation.matrix[0, 1] == pytest.approx(expected)


def test_build_one_factor_model():
    model = build_default_model(one_factor=True)
    assert len(model.brownian) == 1
    j, out = model.sample(0.3, np.random.default_rng(0))
    assert j == 1
    assert not np.isnan(out[1:]).any()
