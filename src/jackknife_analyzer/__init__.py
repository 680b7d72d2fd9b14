from .analyzer import JackknifeAnalyzer
from .error import Measurement, mean_and_stderr, jackknife, jackknife_identity
from .autocorrelation import (
    autocorrelation,
    integrated_autocorrelation_time,
    correlation_time,
    suggest_bin_size,
    binning_analysis,
)
