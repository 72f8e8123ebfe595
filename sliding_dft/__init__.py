"""Sliding DFT -- incremental spectrum of a fixed-length window over a sample stream.

This package provides tools for:
- Maintaining the DFT of the last ``window_size`` samples with O(window_size) work per sample
- Halving the update cost for purely real or purely imaginary signals
- Combining two engines with staggered resets to bound floating-point error growth
- Measuring accumulated error empirically over long synthetic streams

Key principles:
- Caller-owned storage: every buffer, including the per-instance state record,
  is allocated by the caller; engines only index into it
- No allocation on the hot path: ``push`` works in place on prepared views
- Contract violations are reported as :class:`SdftError` codes, not raised

Main subpackages:
- models: Precision/trait/error enums, configuration, state record layout
- core: Twiddle table, WindowEngine, Combiner, arena-style entry points
- analysis: Reference DFT and Hermitian-symmetry spectrum reconstruction
- validation: Empirical error-growth measurement
"""

from .core import (
    Combiner,
    Sdft,
    WindowEngine,
    build,
    build_twiddles,
    combine,
    init_from_buffers,
    size_of_state,
)
from .models import (
    FloatPrecision,
    SdftBuffers,
    SdftConfig,
    SdftError,
    SdftFailure,
    SignalTrait,
    ensure_ok,
)

__all__ = [
    "Combiner",
    "FloatPrecision",
    "Sdft",
    "SdftBuffers",
    "SdftConfig",
    "SdftError",
    "SdftFailure",
    "SignalTrait",
    "WindowEngine",
    "build",
    "build_twiddles",
    "combine",
    "ensure_ok",
    "init_from_buffers",
    "size_of_state",
]
