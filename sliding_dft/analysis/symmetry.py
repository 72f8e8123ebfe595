"""Hermitian-symmetry reconstruction of a half-tracked spectrum.

For a purely real signal ``X[N-k] = conj(X[k])``; for a purely imaginary one
``X[N-k] = -conj(X[k])``. Engines with a restricted trait track only bins
``0 .. N//2 - 1``; the mirror of those covers ``N - N//2 + 1 .. N - 1``. The
bins in between (the Nyquist bin for even ``N``, the two middle bins for odd
``N``) are neither tracked nor mirrored and come back as NaN.
"""

from __future__ import annotations

import numpy as np

from sliding_dft.models.traits import SignalTrait


def recoverable_bins(window_size: int, signal_trait: SignalTrait) -> np.ndarray:
    """Boolean mask of length ``window_size``: True where a bin can be reconstructed."""
    N = int(window_size)
    mask = np.ones(N, dtype=bool)
    if SignalTrait(signal_trait) is SignalTrait.FULL:
        return mask
    h = N // 2
    mask[h:N - h + 1] = False
    return mask


def mirror_spectrum(half: np.ndarray, window_size: int, signal_trait: SignalTrait) -> np.ndarray:
    """Return the full ``window_size``-bin spectrum implied by the tracked bins.

    Parameters
    ----------
    half:
        Tracked bins as exposed by an engine (``window_size`` bins for
        ``FULL``, ``window_size // 2`` otherwise). Longer arrays are truncated.
    window_size:
        Window length ``N``.
    signal_trait:
        Trait the bins were tracked under.

    Returns
    -------
    np.ndarray
        New array of ``half.dtype``; unrecoverable bins are NaN.
    """
    trait = SignalTrait(signal_trait)
    N = int(window_size)
    h = trait.n_bins(N)
    x = np.asarray(half)
    if x.ndim != 1 or x.size < h:
        raise ValueError(f"half must be 1D with at least {h} bins, got shape {x.shape}")

    if trait is SignalTrait.FULL:
        return x[:N].copy()

    out = np.full(N, np.nan, dtype=x.dtype if x.dtype.kind == "c" else complex)
    out[:h] = x[:h]
    if h > 1:
        k = np.arange(1, h)
        mirrored = np.conj(x[1:h])
        if trait is SignalTrait.IMAG_ONLY:
            mirrored = -mirrored
        out[N - k] = mirrored
    return out
