"""Core sliding-DFT package.

Design principle:
  - Every buffer, including the per-instance state record, is owned by the caller.
  - Engines and combiners only index into those buffers; ``push`` allocates no arrays.

Layers, leaves first:
  - twiddle: roots-of-unity table
  - window_engine: one circular window, one spectrum, one table
  - combiner: two engines with staggered resets behind one view
"""

from .api import Sdft, build, init_from_buffers, size_of_state
from .combiner import Combiner, combine
from .twiddle import build_twiddles
from .window_engine import WindowEngine

__all__ = [
    "Combiner",
    "Sdft",
    "WindowEngine",
    "build",
    "build_twiddles",
    "combine",
    "init_from_buffers",
    "size_of_state",
]
