"""Single sliding-DFT instance over caller-owned buffers.

The engine keeps one circular window buffer, one spectrum buffer and one
phase-offset table. Each :meth:`WindowEngine.push` folds one new sample into
every tracked bin with the recurrence

    delta = sample - window[write_index]
    X[k]  = (X[k] + delta) * exp(+2j*pi*k/N)

which costs O(N) instead of the O(N^2) of a fresh DFT, and O(N/2) for purely
real or purely imaginary signals.

Contract violations (short window, trait violation, illegal combination) are
returned as :class:`~sliding_dft.models.traits.SdftError` codes. Miswired
buffers raise ``ValueError`` at construction.
"""

from __future__ import annotations

import logging
from math import gcd
from typing import Optional, Tuple

import numpy as np

from sliding_dft.models.state import KIND_ENGINE, state_from_storage
from sliding_dft.models.traits import FloatPrecision, SdftError, SignalTrait

from .twiddle import build_twiddles

logger = logging.getLogger(__name__)


def _check_buffer(name: str, buf: np.ndarray, dtype: np.dtype, need: int) -> None:
    if not isinstance(buf, np.ndarray):
        raise ValueError(f"{name} must be a numpy array, got {type(buf).__name__}")
    if buf.ndim != 1:
        raise ValueError(f"{name} must be 1D, got shape {buf.shape}")
    if buf.dtype != dtype:
        raise ValueError(f"{name} dtype mismatch: expected {dtype}, got {buf.dtype}")
    if buf.size < need:
        raise ValueError(f"{name} too short: size={buf.size}, need={need}")


def _rotate_left_inplace(buf: np.ndarray, k: int) -> None:
    """Rotate ``buf`` left by ``k`` in place: ``new[i] = old[(i + k) % n]``.

    Cycle-leader rotation: ``gcd(n, k)`` disjoint cycles, one held scalar each.
    """
    n = buf.size
    for start in range(gcd(n, k)):
        held = buf[start]
        cur = start
        while True:
            nxt = cur + k
            if nxt >= n:
                nxt -= n
            if nxt == start:
                break
            buf[cur] = buf[nxt]
            cur = nxt
        buf[cur] = held


class WindowEngine:
    """Incrementally maintained DFT of the last ``window_size`` samples.

    Parameters
    ----------
    state:
        Caller storage for the instance record (``uint8`` bytes of at least
        :func:`~sliding_dft.models.state.size_of_state`, or a ``STATE_DTYPE`` array).
    window:
        Initial window content, oldest sample first. At least ``window_size``
        elements. Written circularly from then on.
    spectrum:
        Spectrum matching ``window``. At least ``window_size`` bins for
        ``FULL`` signals, ``window_size // 2`` otherwise.
    phase_offsets:
        Scratch for the twiddle table, overwritten here. At least
        ``window_size`` elements.
    window_size:
        Number of samples in the window. Values below 1 are accepted here and
        reported by :meth:`validate`.
    signal_trait:
        Guarantee about every sample ever stored into ``window``.
    precision:
        Optional explicit precision; inferred from ``window.dtype`` if omitted.
        All three buffers must share its dtype.

    Notes
    -----
    Construction neither zeroes nor checks ``window``/``spectrum``; call
    :meth:`validate` before the first :meth:`push`.
    """

    def __init__(
        self,
        state: np.ndarray,
        window: np.ndarray,
        spectrum: np.ndarray,
        phase_offsets: np.ndarray,
        window_size: int,
        signal_trait: SignalTrait = SignalTrait.FULL,
        precision: Optional[FloatPrecision] = None,
    ) -> None:
        n = int(window_size)
        if n < 0:
            raise ValueError(f"window_size must be >= 0, got {window_size}")
        trait = SignalTrait(signal_trait)

        if precision is None:
            if not isinstance(window, np.ndarray):
                raise ValueError(f"window must be a numpy array, got {type(window).__name__}")
            precision = FloatPrecision.from_dtype(window.dtype)
        precision = FloatPrecision(precision)
        dtype = precision.dtype
        n_bins = trait.n_bins(n)

        _check_buffer("window", window, dtype, n)
        _check_buffer("spectrum", spectrum, dtype, n_bins)
        _check_buffer("phase_offsets", phase_offsets, dtype, n)

        rec = state_from_storage(state)
        rec[...] = 0
        rec["kind"] = KIND_ENGINE
        rec["precision"] = int(precision)
        rec["signal_trait"] = int(trait)
        rec["window_size"] = n

        self._state = rec
        self._precision = precision
        self._trait = trait
        self._n = n
        self._n_bins = n_bins
        self._scalar = dtype.type

        self._window = window[:n]
        self._spectrum = spectrum[:n_bins]
        table = build_twiddles(n, dtype, out=phase_offsets)
        self._phase = table[:n_bins]

        logger.debug("WindowEngine built: window_size=%d precision=%s trait=%s bins=%d",
                     n, precision.name, trait.name, n_bins)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def window_size(self) -> int:
        return self._n

    @property
    def signal_trait(self) -> SignalTrait:
        return self._trait

    @property
    def precision(self) -> FloatPrecision:
        return self._precision

    @property
    def dtype(self) -> np.dtype:
        return self._precision.dtype

    @property
    def n_bins(self) -> int:
        return self._n_bins

    @property
    def write_index(self) -> int:
        return int(self._state["write_index"])

    @property
    def state(self) -> np.ndarray:
        """The 0-d state record inside the caller's storage."""
        return self._state

    def _buffers(self) -> Tuple[np.ndarray, ...]:
        return (self._window, self._spectrum, self._phase)

    def coerce(self, sample) -> np.generic:
        """Convert ``sample`` to this engine's complex scalar type."""
        return self._scalar(sample)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def validate(self) -> SdftError:
        """Check window size and that the current window satisfies the signal trait."""
        if self._n < 1:
            return SdftError.WINDOW_TOO_SHORT
        if not self._trait.accepts_all(self._window):
            return SdftError.SIGNAL_TRAIT_VIOLATION
        return SdftError.NO_ERROR

    def push(self, sample) -> SdftError:
        """Slide the window by one sample and update every tracked bin.

        A sample that violates the signal trait is rejected before any buffer
        is touched.
        """
        # checked before the cast: narrowing can zero a violating component
        if not self._trait.accepts(sample):
            logger.debug("rejected sample %r under trait %s", sample, self._trait.name)
            return SdftError.SIGNAL_TRAIT_VIOLATION
        x = self._scalar(sample)
        if self._n < 1:
            return SdftError.WINDOW_TOO_SHORT

        idx = int(self._state["write_index"])
        window = self._window
        spec = self._spectrum

        delta = x - window[idx]
        np.add(spec, delta, out=spec)
        np.multiply(spec, self._phase, out=spec)

        window[idx] = x
        idx += 1
        if idx == self._n:
            idx = 0
        self._state["write_index"] = idx
        return SdftError.NO_ERROR

    def reset_to_zero(self) -> None:
        """Zero window and spectrum and rewind the cursor. Discards history."""
        self._window[:] = 0
        self._spectrum[:] = 0
        self._state["write_index"] = 0

    def get_spectrum(self) -> np.ndarray:
        """Read-only view of the tracked bins (``n_bins`` elements)."""
        view = self._spectrum.view()
        view.flags.writeable = False
        return view

    def unshift_and_get_window(self) -> np.ndarray:
        """Restore chronological order in place and return a read-only view.

        After the call the oldest sample is at index 0 and the cursor is 0, so
        physical and logical order coincide until the next push.
        """
        idx = int(self._state["write_index"])
        if idx != 0:
            _rotate_left_inplace(self._window, idx)
            self._state["write_index"] = 0
        view = self._window.view()
        view.flags.writeable = False
        return view

    def combine_with(self, other, state: np.ndarray) -> Tuple[Optional["Combiner"], SdftError]:
        """Pair this engine (first, authoritative) with ``other`` (reset to zero).

        Returns ``(combiner, NO_ERROR)``, or ``(None, error)`` where ``error`` is
        ``NOT_COMBINABLE`` or this engine's :meth:`validate` code; neither
        engine is mutated on failure.
        """
        from .combiner import combine

        return combine(state, self, other)

    def __repr__(self) -> str:
        return (f"WindowEngine(window_size={self._n}, precision={self._precision.name}, "
                f"signal_trait={self._trait.name}, write_index={self.write_index})")
