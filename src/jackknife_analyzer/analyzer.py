# analyzer.py

import numpy as np
from typing import Callable, Dict, Generic, Hashable, List, Optional, Sequence, Tuple, TypeVar

from .error import Measurement

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


class JackknifeAnalyzer(Generic[K, T]):
    """
    Store of jackknife-resampled datasets keyed by K.

    Datasets can be resampled from raw samples, added as already resampled
    replicates, or derived from stored datasets through a function. All
    datasets share the same number of bins, so replicate i of every key was
    obtained by omitting the same block of raw samples.

    :param bin_size: number of consecutive raw samples omitted per replicate.
                     1 is the classic leave-one-out jackknife, larger values
                     give a binned jackknife for autocorrelated data.
    """

    def __init__(self, bin_size: int = 1):
        if bin_size < 1 or int(bin_size) != bin_size:
            raise ValueError("bin_size must be a positive integer!")
        self._bin_size = int(bin_size)
        self._n_bins: Optional[int] = None
        self._replicates: Dict[K, np.ndarray] = {}
        self._mu: Dict[K, T] = {}

    @classmethod
    def from_samples(cls, key: K, raw_samples: Sequence[T], bin_size: int = 1) -> "JackknifeAnalyzer[K, T]":
        analyzer = cls(bin_size)
        analyzer.register_raw(key, raw_samples)
        return analyzer

    @property
    def bin_size(self) -> int:
        return self._bin_size

    @property
    def n_bins(self) -> Optional[int]:
        return self._n_bins

    def __contains__(self, key) -> bool:
        return key in self._mu and key in self._replicates

    def __len__(self):
        return len(self._mu)

    def __repr__(self):
        return f"JackknifeAnalyzer(bin_size={self._bin_size}, n_bins={self._n_bins}, keys={self.keys()})"

    def _verify_n_bins(self, n_samples: int, binned: bool) -> int:
        # n_bins is only assigned by the caller, after the dataset is stored
        num_bins = n_samples if binned else n_samples // self._bin_size
        if self._n_bins is None:
            if num_bins <= 1:
                raise ValueError(f"Dataset yields fewer than 2 bins ({num_bins})!")
        elif num_bins != self._n_bins:
            raise ValueError(f"Dataset yields {num_bins} bins, but the analyzer holds {self._n_bins}!")
        return num_bins

    def register_raw(self, key: K, raw_samples: Sequence[T]):
        """
        Resample raw_samples and store the mean and the jackknife replicates under key.

        Does nothing if key already exists. Raises ValueError if the number of bins
        does not match the datasets already stored.

        If bin_size does not divide len(raw_samples), the trailing samples enter the
        mean and every replicate but are never omitted themselves.
        """
        if key in self:
            return

        x = np.asarray(raw_samples)
        n = len(x)
        nb = self._verify_n_bins(n, binned=False)

        b = self._bin_size
        total = np.sum(x)
        bin_sums = np.sum(x[:nb * b].reshape(nb, b), axis=1)

        replicates = (total - bin_sums) / (n - b)

        self._mu[key] = total / n
        self._replicates[key] = replicates
        self._n_bins = nb

    def register_resampled(self, key: K, replicates: Sequence[T], mean: T):
        """
        Store externally computed jackknife replicates and the mean of X under key.

        The mean has to be supplied because it cannot be recovered from the
        replicates when X depends on other quantities in a non-linear way.
        Does nothing if key already exists.
        """
        if key in self:
            return

        reps = np.array(replicates)
        nb = self._verify_n_bins(len(reps), binned=True)

        self._mu[key] = mean
        self._replicates[key] = reps
        self._n_bins = nb

    def compose_function(self, result_key: K, function: Callable[[List[T]], T], argument_keys: Sequence[K]):
        """
        Store the dataset F = function([X_1, ..., X_n]) under result_key, where X_j are the
        stored datasets named by argument_keys.

        The mean of F is function applied to the means, each replicate of F is function
        applied to the corresponding replicates. Does nothing if result_key already exists.
        Raises KeyError if one of argument_keys does not exist.
        """
        if result_key in self:
            return

        missing = [k for k in argument_keys if k not in self]
        if missing:
            raise KeyError(f"Unknown argument keys: {missing}")
        if self._n_bins is None:
            raise ValueError("Cannot compose a function on an empty analyzer!")

        mu = function([self._mu[k] for k in argument_keys])

        args = [self._replicates[k] for k in argument_keys]
        reps = np.array([function([a[i] for a in args]) for i in range(self._n_bins)])

        self._mu[result_key] = mu
        self._replicates[result_key] = reps

    def compose(self, result_key: K, function: Callable[..., T], *argument_keys: K):
        """Same as compose_function, for a function taking the arguments separately."""
        self.compose_function(result_key, lambda values: function(*values), argument_keys)

    def remove(self, key: K):
        self._mu.pop(key, None)
        self._replicates.pop(key, None)

    def keys(self) -> List[K]:
        return list(self._mu)

    def mu(self, key: K) -> T:
        return self._mu[key]

    def sigma(self, key: K) -> T:
        reps = self._replicates[key]
        mu = self._mu[key]
        N = self._n_bins
        return np.sqrt((N - 1) / N * np.sum((reps - mu) ** 2))

    def jackknife(self, key: K) -> Tuple[bool, Optional[T], Optional[T]]:
        if key not in self:
            return False, None, None
        return True, self.mu(key), self.sigma(key)

    def measurement(self, key: K) -> Measurement:
        return Measurement(self.mu(key), self.sigma(key))

    def samples(self, key: K) -> np.ndarray:
        return self._replicates[key].copy()

    def bias_corrected(self, key: K) -> T:
        # first order jackknife bias correction
        N = self._n_bins
        return N * self._mu[key] - (N - 1) * np.mean(self._replicates[key])
