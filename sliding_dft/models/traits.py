"""Enumerations shared by every layer: precision, signal traits, error codes."""

from __future__ import annotations

from enum import IntEnum

import numpy as np


class FloatPrecision(IntEnum):
    """Floating point width of every buffer and every operation of one instance.

    Each precision maps to a numpy complex dtype laid out as two consecutive
    same-width floats (real, imag), i.e. the standard interleaved format.
    """

    SINGLE = 0
    DOUBLE = 1
    EXTENDED = 2

    @property
    def dtype(self) -> np.dtype:
        return _PRECISION_DTYPES[self]

    @classmethod
    def from_dtype(cls, dtype) -> "FloatPrecision":
        dt = np.dtype(dtype)
        for prec, known in _PRECISION_DTYPES.items():
            if dt == known:
                return prec
        raise ValueError(f"Unsupported complex dtype {dt}; expected one of "
                         f"{[str(d) for d in _PRECISION_DTYPES.values()]}")


_PRECISION_DTYPES = {
    FloatPrecision.SINGLE: np.dtype(np.complex64),
    FloatPrecision.DOUBLE: np.dtype(np.complex128),
    FloatPrecision.EXTENDED: np.dtype(np.clongdouble),
}


class SignalTrait(IntEnum):
    """Caller-declared guarantee about every sample fed to an engine.

    ``REAL_ONLY`` and ``IMAG_ONLY`` let the engine track only the independent
    half of the Hermitian-symmetric spectrum. The guarantee is checked, never
    inferred: a sample that breaks it is rejected.
    """

    FULL = 0
    REAL_ONLY = 1
    IMAG_ONLY = 2

    def n_bins(self, window_size: int) -> int:
        """Number of spectrum bins tracked for a window of ``window_size`` samples."""
        n = int(window_size)
        return n if self is SignalTrait.FULL else n // 2

    def accepts(self, sample) -> bool:
        """True if a single complex ``sample`` satisfies this trait."""
        if self is SignalTrait.REAL_ONLY:
            return bool(np.imag(sample) == 0)
        if self is SignalTrait.IMAG_ONLY:
            return bool(np.real(sample) == 0)
        return True

    def accepts_all(self, samples: np.ndarray) -> bool:
        """True if every element of ``samples`` satisfies this trait."""
        x = np.asarray(samples)
        if self is SignalTrait.REAL_ONLY:
            return bool(np.all(x.imag == 0))
        if self is SignalTrait.IMAG_ONLY:
            return bool(np.all(x.real == 0))
        return True


class SdftError(IntEnum):
    """Result codes returned by every fallible operation."""

    NO_ERROR = 0
    # window_size below 1, detected by validate()
    WINDOW_TOO_SHORT = 1
    # an initial or pushed sample contradicts the declared SignalTrait
    SIGNAL_TRAIT_VIOLATION = 2
    # precision, window size or trait mismatch (or an illegal pairing) in combine
    NOT_COMBINABLE = 3


class SdftFailure(ValueError):
    """Exception form of a non-success :class:`SdftError`, for callers that prefer raising."""

    def __init__(self, error: SdftError, message: str = "") -> None:
        self.error = SdftError(error)
        text = f"{self.error.name}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)


def ensure_ok(error: SdftError, message: str = "") -> None:
    """Raise :class:`SdftFailure` unless ``error`` is ``NO_ERROR``."""
    if SdftError(error) is not SdftError.NO_ERROR:
        raise SdftFailure(error, message)
