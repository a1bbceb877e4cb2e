import math
import pickle

import numpy as np
import pytest

from lmm_curve.src.models import (
    LiborMarketModel,
    OutOfRangeQuery,
    convexity_adjustment,
    exponential_correlation,
    first_live_index,
    futures_rate,
    identity_correlation,
)


def test_size_and_arrays(model):
    assert model.size() == 3
    assert len(model) == 3
    assert not model.phi.flags.writeable


def test_scenario_half_year(model, fixed_normals):
    out = np.full(3, np.nan)
    j = model.advance(0.5, out, fixed_normals(0.3))
    assert j == 0
    assert out[0] == 0.05

    b = model.brownian[0]
    assert b == pytest.approx(math.sqrt(0.5) * 0.3)
    for k, dt in ((1, 0.5), (2, 1.5)):
        expected = 0.05 * math.exp(0.2 * b - 0.04 * 0.5 / 2) - 0.04 * dt * dt / 2
        assert out[k] == pytest.approx(expected, rel=1e-14)


def test_scenario_last_time_out_of_range(model, fixed_normals):
    out = np.full(3, -1.0)
    with pytest.raises(OutOfRangeQuery) as excinfo:
        model.advance(3.0, out, fixed_normals())
    assert excinfo.value.query_time == 3.0
    assert excinfo.value.last_time == 3.0
    np.testing.assert_array_equal(out, -1.0)
    # OutOfRangeQuery도 ValueError
    with pytest.raises(ValueError):
        model.advance(10.0, out, fixed_normals())


def test_out_of_range_query_pickles():
    err = OutOfRangeQuery(3.5, 3.0)
    restored = pickle.loads(pickle.dumps(err))
    assert type(restored) is OutOfRangeQuery
    assert isinstance(restored, ValueError)
    assert (restored.query_time, restored.last_time) == (3.5, 3.0)
    assert str(restored) == str(err)


@pytest.mark.parametrize("u, expected", [
    (0.0, 0), (0.5, 0), (1.0, 1), (1.5, 1), (2.0, 2), (2.999, 2),
])
def test_first_live_index(grid, u, expected, fixed_normals):
    model = LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], identity_correlation(1))
    out = np.zeros(3)
    j = model.advance(u, out, fixed_normals(0.1))
    assert j == expected
    assert first_live_index(model.t, u) == expected
    t_prev = 0.0 if j == 0 else model.t[j - 1]
    assert t_prev <= u < model.t[j]


def test_settled_positions_untouched(model, fixed_normals):
    out = np.full(3, -1.0)
    j = model.advance(1.5, out, fixed_normals(0.2))
    assert j == 1
    assert out[0] == -1.0
    assert np.all(out[1:] > 0.0)


def test_short_rate_at_time_zero(model):
    out = np.zeros(3)
    model.advance(0.0, out, np.random.default_rng(1))
    assert out[0] == 0.05


def test_zero_convexity_at_settlement(model, fixed_normals):
    assert convexity_adjustment(0.2, 1.0, 1.0) == 0.0
    out = np.zeros(3)
    model.advance(1.0, out, fixed_normals(0.0))
    # B = 0, dt = t[0] - u = 0: 순수 선물 드리프트만 남는다
    assert out[1] == pytest.approx(0.05 * math.exp(-0.2 * 0.2 * 1.0 / 2), rel=1e-15)


def test_convexity_grows_with_time_to_settlement():
    adj = convexity_adjustment(0.2, np.array([0.5, 1.0, 2.0, 3.0]), 0.5)
    assert adj[0] == 0.0
    assert np.all(np.diff(adj) > 0.0)


def test_futures_rate_martingale_drift():
    assert futures_rate(0.04, 0.0, 1.7, 2.0) == 0.04
    assert futures_rate(0.04, 0.3, 0.0, 2.0) == pytest.approx(0.04 * math.exp(-0.09))


def test_replayed_randomness_is_bit_identical(grid):
    m1 = LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], exponential_correlation(grid["t"], 0.2))
    m2 = LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], exponential_correlation(grid["t"], 0.2))
    out1, out2 = np.zeros(3), np.zeros(3)
    m1.advance(0.7, out1, np.random.default_rng(11))
    m2.advance(0.7, out2, np.random.default_rng(11))
    np.testing.assert_array_equal(out1, out2)


def test_reset_matches_fresh_model(grid):
    rho = exponential_correlation(grid["t"], 0.2)
    used = LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], rho)
    used.advance(1.2, np.zeros(3), np.random.default_rng(3))
    used.reset()
    assert used.brownian.time == 0.0
    np.testing.assert_array_equal(used.phi, grid["phi"])

    fresh = LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], rho)
    out_used, out_fresh = np.zeros(3), np.zeros(3)
    used.advance(0.0, out_used, np.random.default_rng(5))
    fresh.advance(0.0, out_fresh, np.random.default_rng(5))
    np.testing.assert_array_equal(out_used, out_fresh)


def test_multi_factor_uses_matching_component(grid, fixed_normals):
    rho = exponential_correlation(grid["t"], 0.5)
    model = LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], rho)
    out = np.zeros(3)
    model.advance(0.5, out, fixed_normals(0.4))
    B = model.brownian
    for k in (1, 2):
        expected = (0.05 * math.exp(0.2 * B[k] - 0.04 * 0.5 / 2)
                    - 0.04 * (model.t[k - 1] - 0.5) ** 2 / 2)
        assert out[k] == pytest.approx(expected, rel=1e-14)


def test_sample_allocates_buffer(model, fixed_normals):
    j, out = model.sample(1.5, fixed_normals())
    assert j == 1
    assert np.isnan(out[0])
    assert not np.isnan(out[1:]).any()


def test_float32_model(grid, fixed_normals):
    model = LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], identity_correlation(1), dtype=np.float32)
    j, out = model.sample(0.5, fixed_normals(0.1))
    assert out.dtype == np.float32
    assert out[0] == np.float32(0.05)


def test_output_buffer_checked(model, fixed_normals):
    with pytest.raises(ValueError):
        model.advance(0.5, np.zeros(2), fixed_normals())
    with pytest.raises(ValueError):
        model.advance(0.5, [0.0, 0.0, 0.0], fixed_normals())
    with pytest.raises(ValueError):
        model.advance(0.5, np.zeros(3, dtype=int), fixed_normals())
    with pytest.raises(ValueError):
        model.advance(0.5, np.zeros((1, 3)), fixed_normals())


def test_from_arrays_takes_leading_entries():
    model = LiborMarketModel.from_arrays(
        2, [1.0, 2.0, 3.0], [0.05, 0.04, 0.03], [0.0, 0.2, 0.2], identity_correlation(1))
    assert model.size() == 2
    np.testing.assert_array_equal(model.phi, [0.05, 0.04])


@pytest.mark.parametrize("n", [0, -1, 4])
def test_from_arrays_count_out_of_bounds(n):
    with pytest.raises(ValueError):
        LiborMarketModel.from_arrays(
            n, [1.0, 2.0, 3.0], [0.05, 0.04, 0.03], [0.0, 0.2, 0.2], identity_correlation(1))


@pytest.mark.parametrize("t, phi, sigma", [
    ([1.0, 2.0], [0.05, 0.05, 0.05], [0.0, 0.2, 0.2]),   # 길이 불일치
    ([1.0, 1.0, 3.0], [0.05, 0.05, 0.05], [0.0, 0.2, 0.2]),  # 증가하지 않는 격자
    ([1.0, 2.0, 3.0], [0.05, 0.05, 0.05], [0.1, 0.2, 0.2]),  # sigma[0] != 0
    ([], [], []),
])
def test_invalid_market_data_rejected(t, phi, sigma):
    with pytest.raises(ValueError):
        LiborMarketModel(t, phi, sigma, identity_correlation(1))


def test_factor_dimension_checked(grid):
    with pytest.raises(ValueError):
        LiborMarketModel(grid["t"], grid["phi"], grid["sigma"], identity_correlation(2))


def test_unvalidated_model_never_adjusts_index_zero(fixed_normals):
    model = LiborMarketModel([1.0, 2.0], [0.05, 0.05], [0.1, 0.2], identity_correlation(1), validate=False)
    out = np.zeros(2)
    model.advance(0.5, out, fixed_normals(0.0))
    assert out[0] == pytest.approx(0.05 * math.exp(-0.01 * 0.5 / 2), rel=1e-15)
