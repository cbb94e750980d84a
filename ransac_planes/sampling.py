import numpy as np

SAMPLE_SIZE = 3


def reservoir_sample_indices(n: int, rng, k: int = SAMPLE_SIZE) -> np.ndarray:
    """
    Pick k of range(n) uniformly without replacement using reservoir sampling (Algorithm R).

    The reservoir starts as the first k indices. Index i (k <= i < n) draws j from [0, i]
    and replaces slot j when j < k. Only the reservoir is kept in memory.
    If n <= k every index is returned in order and nothing is drawn.
    """
    if n <= k:
        return np.arange(n)

    reservoir = np.arange(k)

    for i in range(k, n):
        # high is exclusive
        j = int(rng.integers(0, i + 1))
        if j < k:
            reservoir[j] = i

    return reservoir


def select_random_points(points: np.ndarray, rng, k: int = SAMPLE_SIZE) -> np.ndarray:
    """Return k rows of points chosen by reservoir sampling."""
    return points[reservoir_sample_indices(len(points), rng, k)]
