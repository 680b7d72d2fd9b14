# tests/test_autocorrelation.py
import numpy as np
import pytest
from scipy import stats

from jackknife_analyzer import (
    autocorrelation,
    binning_analysis,
    correlation_time,
    integrated_autocorrelation_time,
    suggest_bin_size,
)


def ar1(phi, n, rng):
    """AR(1) series with integrated autocorrelation time (1 + phi) / (2 * (1 - phi))."""
    noise = rng.normal(size=n)
    x = np.zeros(n)
    for t in range(1, n):
        x[t] = phi * x[t - 1] + noise[t]
    return x


def test_autocorrelation_normalized():
    rng = np.random.default_rng(21)
    rho = autocorrelation(rng.normal(size=1000))
    assert len(rho) == 1000
    assert rho[0] == pytest.approx(1.0)
    assert np.all(np.abs(rho[1:20]) < 0.15)


def test_autocorrelation_matches_direct_sum():
    rng = np.random.default_rng(22)
    x = rng.normal(size=50)
    xp = x - np.mean(x)
    c0 = np.mean(xp * xp)
    for t in (1, 2, 5):
        expected = np.mean(xp[:-t] * xp[t:]) / c0
        assert autocorrelation(x)[t] == pytest.approx(expected)


def test_autocorrelation_constant_series():
    with pytest.raises(ValueError):
        autocorrelation(np.full(10, 0.1))


def test_autocorrelation_too_short():
    with pytest.raises(ValueError):
        autocorrelation(np.array([]))
    with pytest.raises(ValueError):
        autocorrelation([1.0])


def test_integrated_autocorrelation_time_uncorrelated():
    rng = np.random.default_rng(23)
    tau = integrated_autocorrelation_time(rng.normal(size=10000))
    assert abs(tau - 0.5) < 0.15
    assert correlation_time(rng.normal(size=10000)) < 0.7


def test_integrated_autocorrelation_time_ar1():
    rng = np.random.default_rng(24)
    phi = 0.9
    tau = integrated_autocorrelation_time(ar1(phi, 100000, rng))
    exact = (1 + phi) / (2 * (1 - phi))
    assert 0.8 * exact <= tau <= 1.2 * exact, f"tau {tau:.3f} not near {exact:.3f}"


def test_suggest_bin_size():
    rng = np.random.default_rng(25)
    assert suggest_bin_size(rng.normal(size=10000)) <= 2
    assert suggest_bin_size(ar1(0.9, 100000, rng)) >= 14

    # at least two bins remain
    assert suggest_bin_size(ar1(0.99, 8, rng), factor=100.0) <= 4


def test_binning_analysis_default_sizes():
    rng = np.random.default_rng(26)
    x = rng.normal(size=64)

    results = binning_analysis(x)
    assert [b for b, _ in results] == [1, 2, 4, 8, 16, 32]
    for _, m in results:
        assert m.value == pytest.approx(np.mean(x))
    assert results[0][1].error == pytest.approx(stats.sem(x))


def test_binning_analysis_grows_for_correlated_data():
    rng = np.random.default_rng(27)
    x = ar1(0.9, 2**14, rng)

    (_, small), (_, large) = binning_analysis(x, bin_sizes=[1, 256])
    assert large.error > 2 * small.error


def test_binning_analysis_too_few_bins():
    with pytest.raises(ValueError):
        binning_analysis(np.arange(10.0), bin_sizes=[6])
