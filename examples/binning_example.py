import numpy as np

from jackknife_analyzer import JackknifeAnalyzer, binning_analysis, integrated_autocorrelation_time, suggest_bin_size

# Correlated AR(1) series x_t = phi * x_{t-1} + noise, tau_int = (1 + phi) / (2 * (1 - phi))
phi = 0.9
N = 2**16
rng = np.random.default_rng(42)

noise = rng.normal(size=(2, N))
x = np.zeros(N)
y = np.zeros(N)
for t in range(1, N):
    x[t] = phi * x[t - 1] + noise[0, t]
    y[t] = phi * y[t - 1] + noise[1, t]
x += 5.0
y += 2.0

print(f"tau_int = {integrated_autocorrelation_time(x):.3f} (exact {(1 + phi) / (2 * (1 - phi)):.3f})")

for b, m in binning_analysis(x, progress=True):
    print(f"bin size {b:6d}: {m}")

bin_size = suggest_bin_size(x, factor=10.0)
analyzer = JackknifeAnalyzer(bin_size)
analyzer.register_raw("x", x)
analyzer.register_raw("y", y)
analyzer.compose("x/y", lambda a, b: a / b, "x", "y")
analyzer.compose_function("x^2 + y^2", lambda v: v[0]**2 + v[1]**2, ["x", "y"])

for key in analyzer.keys():
    print(f"{key:10s} = {analyzer.measurement(key)}")
