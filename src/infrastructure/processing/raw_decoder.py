"""
Fallback decoder for schema-less point buffers.

A raw buffer is a flat little-endian float32 array of ``x, y, z, r, g, b``
records with colors already in [0, 1].
"""

from __future__ import annotations

import logging

import numpy as np

from src.domain.entities import PointSet


logger = logging.getLogger(__name__)

RAW_FLOATS_PER_POINT = 6
RAW_DTYPE = np.dtype("<f4")


def decode_raw(buffer: bytes | bytearray | memoryview) -> PointSet | None:
    """Decode a raw ``xyzrgb`` float32 buffer.

    Trailing bytes that do not form a complete record are dropped with a
    warning.

    Returns:
        PointSet, or None when the buffer holds no complete record
    """
    n_bytes = len(buffer)
    n_floats = n_bytes // RAW_DTYPE.itemsize

    if n_bytes % RAW_DTYPE.itemsize or n_floats % RAW_FLOATS_PER_POINT:
        logger.warning(
            f"[Raw Decoder] Expected float32 xyzrgb per point ({RAW_FLOATS_PER_POINT} floats), "
            f"but got {n_bytes} bytes ({n_bytes / RAW_DTYPE.itemsize:g} floats); "
            f"trailing data is ignored"
        )

    count = n_floats // RAW_FLOATS_PER_POINT
    if count == 0:
        logger.warning("[Raw Decoder] No points detected in buffer")
        return None

    floats = np.frombuffer(buffer, dtype=RAW_DTYPE, count=count * RAW_FLOATS_PER_POINT)
    records = floats.reshape(count, RAW_FLOATS_PER_POINT)

    logger.debug(f"[Raw Decoder] Decoded {count} points")
    return PointSet(positions=records[:, :3].copy(), colors=records[:, 3:].copy())


__all__ = ["RAW_FLOATS_PER_POINT", "decode_raw"]
