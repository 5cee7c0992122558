"""Bootstrap confidence interval computation."""

import warnings
from collections.abc import Callable

import numpy as np
from sklearn.exceptions import UndefinedMetricWarning


def bootstrap_ci(
    stat_fn: Callable[..., float],
    *arrays: np.ndarray,
    n_boot: int,
    alpha: float,
    seed: int,
) -> tuple[float, float]:
    """
    Non-parametric bootstrap CI for a statistic over row-aligned arrays.

    Each bootstrap sample draws the same row indices from every array, so
    `stat_fn(y_true, y_pred)` and `stat_fn(hits)` are both supported.

    Args:
        stat_fn: Function computing a metric from the resampled arrays
        *arrays: One or more arrays of equal length
        n_boot: Number of bootstrap samples
        alpha: Significance level (e.g., 0.05 for 95% CI)
        seed: Random seed for reproducibility

    Returns:
        Tuple of (lower, upper) confidence interval bounds; (nan, nan) for empty input
    """
    if not arrays:
        raise ValueError("bootstrap_ci needs at least one array")
    n = len(arrays[0])
    if any(len(a) != n for a in arrays):
        raise ValueError("bootstrap_ci arrays must have equal length")
    if n == 0 or n_boot <= 0:
        return float("nan"), float("nan")

    rng = np.random.default_rng(seed)
    stats = np.empty(n_boot, dtype=float)

    for b in range(n_boot):
        sample_idx = rng.integers(0, n, size=n)
        with warnings.catch_warnings():
            # Degenerate resamples (one class only) are expected
            warnings.filterwarnings("ignore", category=UserWarning)
            warnings.filterwarnings("ignore", category=UndefinedMetricWarning)
            stats[b] = stat_fn(*(a[sample_idx] for a in arrays))

    lower = float(np.percentile(stats, 100 * (alpha / 2)))
    upper = float(np.percentile(stats, 100 * (1 - alpha / 2)))
    return lower, upper
