"""Caller-side spectrum helpers.

These functions live outside the engine on purpose: they allocate, and they
are meant for checking or post-processing what an engine exposes.
"""

from .reference import naive_dft
from .symmetry import mirror_spectrum, recoverable_bins

__all__ = [
    "mirror_spectrum",
    "naive_dft",
    "recoverable_bins",
]
