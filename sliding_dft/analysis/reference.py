from __future__ import annotations

import numpy as np


def naive_dft(x: np.ndarray) -> np.ndarray:
    r"""O(N^2) reference DFT, ``X[k] = sum_n x[n] exp(-2j*pi*k*n/N)``.

    ``x[0]`` is the oldest sample, matching the spectrum a sliding engine
    tracks after :meth:`~sliding_dft.core.WindowEngine.unshift_and_get_window`.
    The result is complex128 regardless of the input precision.
    """
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"x must be 1D, got shape {x.shape}")
    N = x.size
    if N == 0:
        return np.zeros(0, dtype=complex)

    n = np.arange(N)
    kernel = np.exp(-2j * np.pi * np.outer(n, n) / float(N))
    return kernel @ x.astype(complex)
