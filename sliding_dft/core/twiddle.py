"""Roots-of-unity table driving the sliding-DFT recurrence."""

from __future__ import annotations

from typing import Optional

import numpy as np


def build_twiddles(window_size: int, dtype=np.complex128, out: Optional[np.ndarray] = None) -> np.ndarray:
    r"""Fill ``out[i] = exp(+2j*pi*i/window_size)`` for ``i in [0, window_size)``.

    Parameters
    ----------
    window_size:
        Number of phase factors (one per bin of a full spectrum).
    dtype:
        Complex dtype of the table. The angle is evaluated in the matching real
        precision so extended-precision tables get an extended-precision
        :math:`\pi`.
    out:
        Optional caller-owned buffer of at least ``window_size`` elements of
        ``dtype``. Only the leading ``window_size`` elements are written.

    Returns
    -------
    np.ndarray
        View of length ``window_size`` onto the filled table.

    Notes
    -----
    The positive sign is paired with the recurrence
    ``X[k] <- (X[k] + delta) * phase[k]``, which then tracks the forward DFT
    ``X[k] = sum_n x[n] exp(-2j*pi*k*n/N)`` with the oldest sample at ``n=0``.
    Flipping the sign here reverses the time axis of the spectrum.
    """
    n = int(window_size)
    if n < 0:
        raise ValueError(f"window_size must be >= 0, got {window_size}")

    cdt = np.dtype(dtype)
    if cdt.kind != "c":
        raise ValueError(f"dtype must be complex, got {cdt}")

    if out is None:
        out = np.empty(n, dtype=cdt)
    elif out.dtype != cdt or out.ndim != 1 or out.size < n:
        raise ValueError(f"out must be 1D {cdt} with at least {n} elements, got {out.dtype} {out.shape}")

    table = out[:n]
    if n == 0:
        return table

    real = np.finfo(cdt).dtype.type
    two_pi = real(8) * np.arctan(real(1))
    angle = two_pi * np.arange(n, dtype=real) / real(n)
    table.real[:] = np.cos(angle)
    table.imag[:] = np.sin(angle)
    return table
