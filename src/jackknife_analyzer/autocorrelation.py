# autocorrelation.py

import numpy as np
from numpy.fft import fft, ifft
from tqdm import tqdm
from typing import Iterable, List, Optional, Tuple

from .analyzer import JackknifeAnalyzer
from .error import Measurement


def autocorrelation(m: np.ndarray) -> np.ndarray:
    """Normalized autocorrelation function rho(t) = C(t) / C(0) for t = 0 .. N-1."""
    m = np.asarray(m, dtype=float)
    if len(m) < 2:
        raise ValueError("autocorrelation needs at least two samples!")
    if np.all(m == m[0]):
        raise ValueError("autocorrelation of a constant series is undefined!")

    N = len(m)
    m_prime = m - np.mean(m)
    m_prime = np.concatenate([m_prime, np.zeros(N)])  # zero padding, no wrap-around
    mw = fft(m_prime)
    s = np.abs(mw)**2

    chi = np.real(ifft(s)[:N])
    chi /= np.arange(N, 0, -1)  # number of pairs at each lag
    return chi / chi[0]


def integrated_autocorrelation_time(m: np.ndarray, window: float = 6.0) -> float:
    """
    Integrated autocorrelation time tau = 1/2 + sum_{t=1}^{M} rho(t).

    The summation window M is chosen self-consistently as the smallest M >= window * tau.
    Uncorrelated data gives tau = 1/2.
    """
    ac = autocorrelation(m)

    corr_time = 0.5
    for M in range(1, len(ac)):
        corr_time += ac[M]
        if M >= window * corr_time:
            break

    return corr_time


def correlation_time(m: np.ndarray) -> float:
    return integrated_autocorrelation_time(m)


def suggest_bin_size(m: np.ndarray, factor: float = 2.0) -> int:
    """Bin size of factor * tau, clamped so that at least two bins remain."""
    tau = integrated_autocorrelation_time(m)
    bin_size = int(np.ceil(factor * tau))
    return max(1, min(bin_size, len(m) // 2))


def binning_analysis(m: np.ndarray, bin_sizes: Optional[Iterable[int]] = None,
                     progress: bool = False) -> List[Tuple[int, Measurement]]:
    """
    Jackknife error of the mean of m for a range of bin sizes.

    For correlated data the error grows with the bin size and levels off once
    the bins are longer than the correlation time.

    :param m: raw series
    :param bin_sizes: bin sizes to try, defaults to powers of two up to len(m) // 2
    :param progress: show a progress bar
    :return: list of (bin_size, Measurement)
    """
    if bin_sizes is None:
        bin_sizes = []
        b = 1
        while b <= len(m) // 2:
            bin_sizes.append(b)
            b *= 2
    bin_sizes = list(bin_sizes)

    results = []
    for b in tqdm(bin_sizes, desc="Binning", disable=not progress):
        analyzer = JackknifeAnalyzer.from_samples("m", m, bin_size=b)
        results.append((b, analyzer.measurement("m")))
    return results
