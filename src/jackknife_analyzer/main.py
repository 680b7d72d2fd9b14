# main.py

import argparse
import numpy as np

from jackknife_analyzer.analyzer import JackknifeAnalyzer
from jackknife_analyzer.autocorrelation import binning_analysis, correlation_time, suggest_bin_size
from jackknife_analyzer.error import mean_and_stderr


def load_columns(path, names=None):
    data = np.loadtxt(path, ndmin=2)
    if names is None:
        names = [f"x{i}" for i in range(data.shape[1])]
    elif len(names) != data.shape[1]:
        raise ValueError(f"Got {len(names)} names for {data.shape[1]} columns")
    return dict(zip(names, data.T))


def choose_bin_size(args, columns):
    if not args.auto_bin:
        return args.bin_size
    # constant columns have no autocorrelation and take any bin size
    return max(1 if np.all(x == x[0]) else suggest_bin_size(x) for x in columns.values())


def build_analyzer(columns, bin_size, ratio=None):
    analyzer = JackknifeAnalyzer(bin_size)
    for name, x in columns.items():
        analyzer.register_raw(name, x)

    if ratio is not None:
        num, den = ratio
        analyzer.compose(f"{num}/{den}", lambda a, b: a / b, num, den)

    return analyzer


def report(analyzer, columns, file=None):
    width = max(len(str(k)) for k in analyzer.keys())
    for key in analyzer.keys():
        mu, sigma = analyzer.measurement(key)
        print(f"⟨{key}⟩{'':{width - len(str(key))}} = {mu:16f} +/- {sigma:16f}", file=file)

    print(f"\nBin size: {analyzer.bin_size}", file=file)
    print(f"Number of bins: {analyzer.n_bins}\n", file=file)

    for name, x in columns.items():
        naive = mean_and_stderr(x)
        if np.all(x == x[0]):
            tau = 0.0
        else:
            tau = correlation_time(x)
        print(f"{name}: naive error {naive.error:16f}, correlation time {tau:10f}", file=file)


def report_scan(columns, file=None):
    for name, x in columns.items():
        print(f"\nBinning analysis of {name}:", file=file)
        for b, m in binning_analysis(x, progress=True):
            print(f"  bin size {b:8d}: {m.value:16f} +/- {m.error:16f}", file=file)


def run(args):
    try:
        columns = load_columns(args.file, args.names)
    except ValueError as e:
        args.parser.error(str(e))

    if args.ratio is not None:
        for name in args.ratio:
            if name not in columns:
                args.parser.error(f"Unknown column for --ratio: {name}")

    try:
        bin_size = choose_bin_size(args, columns)
    except ValueError as e:
        args.parser.error(str(e))
    n_rows = len(next(iter(columns.values())))
    if n_rows % bin_size != 0:
        print(f"Warning: bin size {bin_size} does not divide the number of samples {n_rows}, "
              f"the last {n_rows % bin_size} samples are never omitted.")

    try:
        analyzer = build_analyzer(columns, bin_size, args.ratio)
    except ValueError as e:
        args.parser.error(str(e))

    report(analyzer, columns)

    if args.scan:
        report_scan(columns)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Jackknife error analysis of Monte Carlo time series')
    parser.add_argument('file', help='Text file with one column per observable and one row per measurement')
    parser.add_argument('--names', nargs='+', default=None, help='Names of the columns')
    bin_group = parser.add_mutually_exclusive_group()
    bin_group.add_argument('--bin-size', '-b', type=int, default=1, help='Number of consecutive samples omitted per jackknife bin')
    bin_group.add_argument('--auto-bin', action='store_true', help='Choose the bin size from the autocorrelation time')
    parser.add_argument('--ratio', nargs=2, metavar=('NUM', 'DEN'), default=None, help='Also estimate the ratio of two columns')
    parser.add_argument('--scan', action='store_true', help='Print the jackknife error for increasing bin sizes')
    parser.set_defaults(func=run, parser=parser)

    args = parser.parse_args(argv)
    if args.bin_size < 1:
        parser.error("--bin-size must be a positive integer")
    args.func(args)


if __name__ == "__main__":
    main()
