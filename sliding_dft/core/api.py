"""Arena-style entry points and the uniform ``Sdft`` surface.

The caller sizes state storage with :func:`size_of_state`, allocates every
buffer itself, and constructs instances in place with
:func:`init_from_buffers` and :func:`combine`. :func:`build` is a shortcut
for callers that are happy to let :class:`~sliding_dft.models.config.SdftBuffers`
do the allocation.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from sliding_dft.models.config import SdftBuffers, SdftConfig
from sliding_dft.models.state import size_of_state
from sliding_dft.models.traits import FloatPrecision, SdftError, SignalTrait, ensure_ok

from .combiner import Combiner, combine
from .window_engine import WindowEngine

# Either a single engine or a combined pair; both expose push, get_spectrum,
# unshift_and_get_window, validate and combine_with.
Sdft = Union[WindowEngine, Combiner]

__all__ = ["Sdft", "build", "init_from_buffers", "size_of_state"]


def init_from_buffers(
    state: np.ndarray,
    precision: FloatPrecision,
    window: np.ndarray,
    spectrum: np.ndarray,
    phase_offsets: np.ndarray,
    window_size: int,
    signal_trait: SignalTrait = SignalTrait.FULL,
) -> Tuple[WindowEngine, SdftError]:
    """Construct an engine in ``state`` and validate it.

    Returns
    -------
    engine, error
        ``error`` is ``NO_ERROR``, ``WINDOW_TOO_SHORT`` or
        ``SIGNAL_TRAIT_VIOLATION``. The engine is returned in every case so it
        can be inspected, but must not be pushed to unless ``error`` is
        ``NO_ERROR``.
    """
    engine = WindowEngine(
        state,
        window,
        spectrum,
        phase_offsets,
        window_size,
        signal_trait=signal_trait,
        precision=precision,
    )
    return engine, engine.validate()


def _engine_from_config(config: SdftConfig, buffers: SdftBuffers) -> WindowEngine:
    engine, err = init_from_buffers(
        buffers.state,
        config.precision,
        buffers.window,
        buffers.spectrum,
        buffers.phase_offsets,
        config.window_size,
        config.signal_trait,
    )
    ensure_ok(err, f"cannot initialize engine for {config.to_dict()}")
    return engine


def build(
    config: SdftConfig,
    buffers: Optional[SdftBuffers] = None,
    *,
    second: Optional[SdftBuffers] = None,
    combiner_state: Optional[np.ndarray] = None,
) -> Sdft:
    """Create a ready-to-push instance from ``config``.

    Buffers that are not supplied are allocated zero-filled. For a combined
    configuration, ``buffers`` seed the first (initially authoritative)
    engine and ``second`` / ``combiner_state`` the rest of the pair.

    Raises
    ------
    SdftFailure
        If validation or combination reports an error code.
    """
    if buffers is None:
        buffers = SdftBuffers.allocate(config)
    first = _engine_from_config(config, buffers)
    if not config.combined:
        return first

    if second is None:
        second = SdftBuffers.allocate(config)
    if combiner_state is None:
        combiner_state = np.zeros(size_of_state(), dtype=np.uint8)
    other = _engine_from_config(config, second)

    pair, err = combine(combiner_state, first, other)
    ensure_ok(err, "engines built from one config must be combinable")
    return pair
