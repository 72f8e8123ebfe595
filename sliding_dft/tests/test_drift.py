"""Tests for the empirical error-growth runner."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from sliding_dft.models.config import SdftConfig
from sliding_dft.models.traits import FloatPrecision, SdftFailure, SignalTrait
from sliding_dft.validation import measure_drift, summarize_drift, synthetic_stream


def test_synthetic_stream_respects_trait() -> None:
    assert np.all(synthetic_stream(50, SignalTrait.REAL_ONLY).imag == 0)
    assert np.all(synthetic_stream(50, SignalTrait.IMAG_ONLY).real == 0)
    full = synthetic_stream(50, seed=1)
    assert np.any(full.real != 0) and np.any(full.imag != 0)
    np.testing.assert_array_equal(synthetic_stream(10, seed=3), synthetic_stream(10, seed=3))
    assert synthetic_stream(4, dtype=np.complex64).dtype == np.dtype(np.complex64)


def test_measure_drift_over_ten_windows() -> None:
    W = 16
    cfg = SdftConfig(window_size=W)
    x = synthetic_stream(10 * W, seed=2)
    df = measure_drift(cfg, x)

    assert isinstance(df, pd.DataFrame)
    assert list(df.columns) == ["push", "engine_err", "combined_err", "scale", "window_exact"]
    assert len(df) == 10 * W - W + 1
    assert df["push"].iloc[0] == W
    assert df["window_exact"].all()
    assert df["combined_err"].max() < 1e-9
    assert df["engine_err"].max() < 1e-6


def test_measure_drift_check_every_and_max_rows() -> None:
    W = 8
    cfg = SdftConfig(window_size=W, precision=FloatPrecision.SINGLE, signal_trait=SignalTrait.REAL_ONLY)
    x = synthetic_stream(20 * W, SignalTrait.REAL_ONLY, seed=4)
    df = measure_drift(cfg, x, check_every=W)
    assert df["push"].tolist() == list(range(W, 20 * W + 1, W))
    assert df["combined_err"].max() < 1e-3

    capped = measure_drift(cfg, x, check_every=3, max_rows=5)
    assert len(capped) == 5


def test_measure_drift_rejects_trait_violation() -> None:
    cfg = SdftConfig(window_size=4, signal_trait=SignalTrait.REAL_ONLY)
    with pytest.raises(SdftFailure):
        measure_drift(cfg, synthetic_stream(8, SignalTrait.FULL, seed=5))
    with pytest.raises(ValueError):
        measure_drift(cfg, np.zeros(8), check_every=0)


def test_summarize_drift() -> None:
    cfg = SdftConfig(window_size=4)
    summary = summarize_drift(measure_drift(cfg, synthetic_stream(40, seed=6)))
    assert summary["n_checks"] == 37
    assert summary["all_windows_exact"] is True
    assert summary["combined_err_max"] >= summary["combined_err_final"]

    empty = summarize_drift(measure_drift(cfg, synthetic_stream(2, seed=6)))
    assert empty["n_checks"] == 0
    assert np.isnan(empty["engine_err_max"])

    with pytest.raises(KeyError):
        summarize_drift(pd.DataFrame({"push": [1]}))
