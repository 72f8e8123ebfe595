"""Validation utilities.

This package contains *non-interactive* tooling for checking the numerical
behavior of sliding-DFT instances against a batch FFT.

Design goals
------------
1) Keep measurement code out of the engine path (it allocates freely).
2) Make error-growth comparisons reproducible (seeded synthetic streams).
3) Report results as DataFrames for export and plotting.
"""

from .drift import measure_drift, summarize_drift, synthetic_stream

__all__ = [
    "measure_drift",
    "summarize_drift",
    "synthetic_stream",
]
