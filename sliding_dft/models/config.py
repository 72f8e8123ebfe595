"""Instance configuration and caller-side buffer allocation.

An :class:`SdftConfig` groups every parameter that fixes the shape and
numeric behavior of one instance into one frozen dataclass. It can be:

- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance

:class:`SdftBuffers` is the caller's side of the ownership contract: it
allocates the window, spectrum and phase-offset buffers (and the state
storage) that an engine is later constructed on. Engines never allocate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .state import size_of_state
from .traits import FloatPrecision, SignalTrait


def _dft_bins(x: np.ndarray, n_bins: int) -> np.ndarray:
    """First ``n_bins`` DFT bins of ``x``, evaluated in the precision of ``x.dtype``."""
    N = x.size
    real = np.finfo(x.dtype).dtype.type
    two_pi = real(8) * np.arctan(real(1))
    k = np.arange(n_bins)[:, None]
    n = np.arange(N)[None, :]
    # reduce k*n mod N so the angle stays in [0, 2*pi)
    angle = -two_pi * ((k * n) % N).astype(real) / real(N)
    kernel = np.empty(angle.shape, dtype=x.dtype)
    kernel.real[...] = np.cos(angle)
    kernel.imag[...] = np.sin(angle)
    return kernel @ x


def buffer_lengths(window_size: int, signal_trait: SignalTrait) -> Tuple[int, int, int]:
    """Required ``(window, spectrum, phase_offsets)`` lengths in complex elements."""
    n = int(window_size)
    if n < 0:
        raise ValueError(f"window_size must be >= 0, got {window_size}")
    return n, SignalTrait(signal_trait).n_bins(n), n


@dataclass(frozen=True)
class SdftConfig:
    """Frozen configuration of one sliding-DFT instance.

    Attributes
    ----------
    window_size : int
        Number of samples in the sliding window (and of spectrum bins for
        ``FULL`` signals).
    precision : FloatPrecision
        Floating point width used for all buffers and arithmetic.
    signal_trait : SignalTrait
        Guarantee about every sample; restricted traits halve the update cost.
    combined : bool
        If True, :func:`sliding_dft.core.build` returns a :class:`Combiner`
        of two engines instead of a single engine.
    """

    window_size: int
    precision: FloatPrecision = FloatPrecision.DOUBLE
    signal_trait: SignalTrait = SignalTrait.FULL
    combined: bool = False

    @property
    def dtype(self) -> np.dtype:
        return FloatPrecision(self.precision).dtype

    @property
    def n_bins(self) -> int:
        return SignalTrait(self.signal_trait).n_bins(self.window_size)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (enums become their names)."""
        return {
            "window_size": int(self.window_size),
            "precision": FloatPrecision(self.precision).name,
            "signal_trait": SignalTrait(self.signal_trait).name,
            "combined": bool(self.combined),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> SdftConfig:
        """Reconstruct from a dict (e.g. loaded from JSON); accepts names or values."""
        d = dict(d)  # shallow copy
        if isinstance(d.get("precision"), str):
            d["precision"] = FloatPrecision[d["precision"]]
        elif "precision" in d:
            d["precision"] = FloatPrecision(d["precision"])
        if isinstance(d.get("signal_trait"), str):
            d["signal_trait"] = SignalTrait[d["signal_trait"]]
        elif "signal_trait" in d:
            d["signal_trait"] = SignalTrait(d["signal_trait"])
        return cls(**d)


@dataclass(frozen=True)
class SdftBuffers:
    """One set of caller-owned buffers for a single engine.

    Arrays are 1D and share ``dtype``; the state storage is raw bytes sized
    by :func:`~sliding_dft.models.state.size_of_state`.
    """

    window: np.ndarray
    spectrum: np.ndarray
    phase_offsets: np.ndarray
    state: np.ndarray

    @classmethod
    def allocate(cls, config: SdftConfig, initial_window: Optional[np.ndarray] = None) -> SdftBuffers:
        """Allocate zero-filled buffers for ``config``.

        If ``initial_window`` is given it is copied into the window buffer and
        the spectrum is seeded with its DFT (oldest sample first), so the
        engine starts in a consistent state instead of from silence.
        """
        n_win, n_spec, n_po = buffer_lengths(config.window_size, config.signal_trait)
        dtype = config.dtype

        window = np.zeros(n_win, dtype=dtype)
        spectrum = np.zeros(n_spec, dtype=dtype)
        phase_offsets = np.zeros(n_po, dtype=dtype)
        state = np.zeros(size_of_state(), dtype=np.uint8)

        if initial_window is not None:
            x = np.asarray(initial_window)
            if x.shape != (n_win,):
                raise ValueError(f"initial_window must have shape ({n_win},), got {x.shape}")
            window[:] = x
            if n_spec:
                spectrum[:] = _dft_bins(window, n_spec)

        return cls(window=window, spectrum=spectrum, phase_offsets=phase_offsets, state=state)
