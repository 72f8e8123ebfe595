from __future__ import annotations

import numpy as np
import pytest

from sliding_dft.core.twiddle import build_twiddles


def test_twiddles_are_positive_roots_of_unity() -> None:
    N = 8
    table = build_twiddles(N)
    expected = np.exp(2j * np.pi * np.arange(N) / N)
    np.testing.assert_allclose(table, expected, rtol=0.0, atol=1e-12)
    # positive sign: bin 1 advances counter-clockwise
    assert table[2].imag == pytest.approx(1.0)


@pytest.mark.parametrize("dtype", [np.complex64, np.complex128, np.clongdouble])
def test_twiddles_keep_requested_precision(dtype) -> None:
    table = build_twiddles(16, dtype)
    assert table.dtype == np.dtype(dtype)
    np.testing.assert_allclose(np.abs(table.astype(complex)), 1.0, rtol=0.0, atol=1e-6)


def test_twiddles_written_into_caller_buffer() -> None:
    out = np.full(10, 7 + 7j, dtype=np.complex128)
    view = build_twiddles(4, out=out)
    assert np.shares_memory(view, out)
    assert view.size == 4
    np.testing.assert_allclose(out[:4], [1, 1j, -1, -1j], atol=1e-15)
    # tail untouched
    assert np.all(out[4:] == 7 + 7j)


def test_twiddles_empty_and_bad_input() -> None:
    assert build_twiddles(0).size == 0
    with pytest.raises(ValueError):
        build_twiddles(-1)
    with pytest.raises(ValueError):
        build_twiddles(4, np.float64)
    with pytest.raises(ValueError):
        build_twiddles(4, np.complex128, out=np.zeros(3, dtype=np.complex128))
