# error.py

import numpy as np
from typing import Callable, Optional
from scipy import stats


class Measurement:
    def __init__(self, value: float, error: float):
        self.value = value
        self.error = error

    def __repr__(self):
        return f"{self.value} ± {self.error}"

    def __iter__(self):
        yield self.value
        yield self.error


def mean_and_stderr(x: np.ndarray, f: Optional[Callable[[np.ndarray], np.ndarray]] = None) -> Measurement:
    """Mean and standard error of f(x), assuming uncorrelated samples."""
    y = np.asarray(x) if f is None else f(np.asarray(x))

    mu = np.mean(y)
    sigma = stats.sem(y)  # Standard Error of the Mean

    return Measurement(mu, sigma)


def jackknife(f: Callable[..., float], *x: np.ndarray, bin_size: int = 1) -> Measurement:
    """
    Jackknife estimate of f evaluated on the means of the series x.

    :param f: function taking one value per series
    :param x: raw series of equal length
    :param bin_size: number of consecutive samples omitted per replicate
    :return: Measurement with f(means) as value and the jackknife error
    """
    from .analyzer import JackknifeAnalyzer

    if len({len(xi) for xi in x}) > 1:
        raise ValueError("All series must have the same length!")

    analyzer = JackknifeAnalyzer(bin_size)
    for i, xi in enumerate(x):
        analyzer.register_raw(i, xi)
    analyzer.compose("f", f, *range(len(x)))

    return analyzer.measurement("f")


def jackknife_identity(x: np.ndarray, bin_size: int = 1) -> Measurement:
    return jackknife(lambda x: x, x, bin_size=bin_size)
