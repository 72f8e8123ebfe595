"""Pair of engines with staggered resets for bounded error growth.

Every push multiplies each bin by a twiddle factor, so rounding error
accumulates for as long as an engine runs. A :class:`Combiner` feeds the same
stream to two engines and zeroes them alternately, each one every
``2 * window_size`` pushes, half a cycle apart::

    cycle_counter:  0 ........ N ........ 2N
    first:          serves     reset here, refills
    second:         refills    serves     reset here

An engine that was zeroed holds a complete, freshly accumulated window once
it has seen ``window_size`` pushes. Authority always sits with that engine,
so the exposed spectrum never carries error from more than about
``window_size`` pushes beyond its last reset.

Accessors recompute the authoritative engine on every call: never cache
the returned view across a push.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from sliding_dft.models.state import KIND_COMBINER, KIND_ENGINE, KIND_PAIRED, state_from_storage
from sliding_dft.models.traits import FloatPrecision, SdftError, SdftFailure, SignalTrait

from .window_engine import WindowEngine

logger = logging.getLogger(__name__)


def _not_combinable_reason(state: np.ndarray, first, second) -> Optional[str]:
    """Return why ``first``/``second`` cannot be combined, or None if they can."""
    if not isinstance(first, WindowEngine) or not isinstance(second, WindowEngine):
        return "only two single engines can be combined"
    if first is second:
        return "an engine cannot be combined with itself"
    for engine in (first, second):
        if int(engine.state["kind"]) != KIND_ENGINE:
            return "engine already belongs to a combiner"
    if first.precision != second.precision:
        return f"precision mismatch: {first.precision.name} vs {second.precision.name}"
    if first.window_size != second.window_size:
        return f"window_size mismatch: {first.window_size} vs {second.window_size}"
    if first.signal_trait != second.signal_trait:
        return f"signal_trait mismatch: {first.signal_trait.name} vs {second.signal_trait.name}"

    for a in first._buffers() + (first.state,):
        for b in second._buffers() + (second.state,):
            if np.may_share_memory(a, b):
                return "buffers of first and second overlap"
    for b in first._buffers() + second._buffers() + (first.state, second.state):
        if np.may_share_memory(state, b):
            return "combiner state overlaps an engine buffer"
    return None


class Combiner:
    """Two combinable engines exposed as one numerically fresh sliding DFT.

    ``first`` keeps its current content and is authoritative for the first
    ``window_size`` pushes; ``second`` is reset to zero here. Prefer
    :func:`combine`, which reports an incompatible pair as
    ``NOT_COMBINABLE`` instead of raising :class:`SdftFailure`.
    """

    def __init__(self, state: np.ndarray, first: WindowEngine, second: WindowEngine) -> None:
        reason = _not_combinable_reason(state, first, second)
        if reason is not None:
            raise SdftFailure(SdftError.NOT_COMBINABLE, reason)

        err = first.validate()
        if err is not SdftError.NO_ERROR:
            raise SdftFailure(err, "first engine does not validate")

        rec = state_from_storage(state)
        rec[...] = 0
        rec["kind"] = KIND_COMBINER
        rec["precision"] = int(first.precision)
        rec["signal_trait"] = int(first.signal_trait)
        rec["window_size"] = first.window_size

        self._state = rec
        self._first = first
        self._second = second
        self._n = first.window_size

        second.reset_to_zero()
        first.state["kind"] = KIND_PAIRED
        second.state["kind"] = KIND_PAIRED
        logger.debug("Combiner built: window_size=%d precision=%s trait=%s",
                     self._n, first.precision.name, first.signal_trait.name)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def window_size(self) -> int:
        return self._n

    @property
    def signal_trait(self) -> SignalTrait:
        return self._first.signal_trait

    @property
    def precision(self) -> FloatPrecision:
        return self._first.precision

    @property
    def dtype(self) -> np.dtype:
        return self._first.dtype

    @property
    def n_bins(self) -> int:
        return self._first.n_bins

    @property
    def cycle_counter(self) -> int:
        return int(self._state["cycle_counter"])

    @property
    def state(self) -> np.ndarray:
        return self._state

    @property
    def engines(self) -> Tuple[WindowEngine, WindowEngine]:
        return self._first, self._second

    def authoritative(self) -> WindowEngine:
        """The engine whose window and spectrum are currently exposed."""
        if int(self._state["cycle_counter"]) <= self._n:
            return self._first
        return self._second

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def validate(self) -> SdftError:
        err = self._first.validate()
        if err is not SdftError.NO_ERROR:
            return err
        return self._second.validate()

    def push(self, sample) -> SdftError:
        """Forward one sample to both engines, resetting one of them on schedule.

        The trait is checked before the scheduled reset so a rejected sample
        leaves both engines and the cycle counter untouched.
        """
        if not self._first.signal_trait.accepts(sample):
            logger.debug("rejected sample %r under trait %s", sample, self.signal_trait.name)
            return SdftError.SIGNAL_TRAIT_VIOLATION
        x = self._first.coerce(sample)

        n = self._n
        counter = int(self._state["cycle_counter"])
        if counter == n:
            logger.debug("cycle %d: resetting first engine", counter)
            self._first.reset_to_zero()
        elif counter == 2 * n:
            logger.debug("cycle %d: resetting second engine", counter)
            self._second.reset_to_zero()
            counter = 0

        err = self._first.push(x)
        if err is not SdftError.NO_ERROR:
            return err
        err = self._second.push(x)
        if err is not SdftError.NO_ERROR:
            return err

        self._state["cycle_counter"] = counter + 1
        return SdftError.NO_ERROR

    def get_spectrum(self) -> np.ndarray:
        return self.authoritative().get_spectrum()

    def unshift_and_get_window(self) -> np.ndarray:
        return self.authoritative().unshift_and_get_window()

    def combine_with(self, other, state: np.ndarray) -> Tuple[None, SdftError]:
        """Combiners cannot be combined further."""
        return None, SdftError.NOT_COMBINABLE

    def __repr__(self) -> str:
        return (f"Combiner(window_size={self._n}, precision={self.precision.name}, "
                f"signal_trait={self.signal_trait.name}, cycle_counter={self.cycle_counter})")


def combine(state: np.ndarray, first, second) -> Tuple[Optional[Combiner], SdftError]:
    """Combine two engines into ``state``.

    Returns ``(combiner, NO_ERROR)``, or ``(None, NOT_COMBINABLE)`` when the
    engines differ in precision, window size or signal trait, when either is
    a combiner or already belongs to one, or when their buffers overlap.
    ``first`` is validated here since its content becomes the initial
    output; its error code (``WINDOW_TOO_SHORT`` or
    ``SIGNAL_TRAIT_VIOLATION``) is returned as ``(None, error)``. On failure
    nothing is mutated.
    """
    reason = _not_combinable_reason(state, first, second)
    if reason is not None:
        logger.debug("combine rejected: %s", reason)
        return None, SdftError.NOT_COMBINABLE
    err = first.validate()
    if err is not SdftError.NO_ERROR:
        logger.debug("combine rejected: first engine reports %s", err.name)
        return None, err
    return Combiner(state, first, second), SdftError.NO_ERROR
