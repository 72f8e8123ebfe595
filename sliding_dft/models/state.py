"""Fixed-size state record living in caller-owned storage.

Every mutable scalar of an engine or combiner (cursor, cycle counter, and
the immutable configuration it was built with) is stored in one record of
:data:`STATE_DTYPE`. The caller allocates :func:`size_of_state` bytes once
and hands the storage in at construction; the Python objects wrapping it
hold references only.
"""

from __future__ import annotations

import numpy as np

KIND_ENGINE = 1
# an engine already owned by a combiner
KIND_PAIRED = 2
KIND_COMBINER = 3

STATE_DTYPE = np.dtype(
    [
        ("kind", np.uint8),
        ("precision", np.uint8),
        ("signal_trait", np.uint8),
        ("window_size", np.int64),
        ("write_index", np.int64),
        ("cycle_counter", np.int64),
    ],
    align=True,
)


def size_of_state() -> int:
    """Bytes the caller must allocate for one instance.

    The layout is shared by all precisions and by both the single engine and
    the combined pair, so one allocation size fits any configuration.
    """
    return int(STATE_DTYPE.itemsize)


def state_from_storage(storage: np.ndarray) -> np.ndarray:
    """View caller storage as a 0-d state record (no copy).

    ``storage`` is either a raw byte buffer (``uint8``, C-contiguous, at
    least :func:`size_of_state` bytes) or an array that already has
    :data:`STATE_DTYPE`. Writes through the returned record land in
    ``storage``.
    """
    if not isinstance(storage, np.ndarray):
        raise ValueError(f"state storage must be a numpy array, got {type(storage).__name__}")

    if storage.dtype == STATE_DTYPE:
        flat = storage.reshape(-1)
        if flat.size < 1:
            raise ValueError("state storage holds no record")
        if not np.shares_memory(flat, storage):
            raise ValueError("state storage must be contiguous so the record is a view")
        return flat[0:1].reshape(())

    if storage.dtype != np.uint8:
        raise ValueError(f"state storage must be uint8 bytes or STATE_DTYPE, got {storage.dtype}")
    if storage.ndim != 1 or not storage.flags.c_contiguous:
        raise ValueError("state storage must be a 1D C-contiguous byte buffer")
    need = size_of_state()
    if storage.size < need:
        raise ValueError(f"state storage too small: size={storage.size}, need={need}")

    return storage[:need].view(STATE_DTYPE).reshape(())
