"""
Scalar codec for PLY property values.

Maps PLY type names to a closed set of scalar types and decodes fixed-width
binary values. Each scalar type owns one table entry of
(byte width, struct code, numpy code); the same table drives both the
single-value decoder and the packed numpy record dtype used for bulk decoding.

The vertex decoder reads whole records through ``numpy_dtype``. ``decode`` is
its single-value companion for callers that need one field at a known offset,
and it reads exactly the bytes the matching ``numpy_dtype`` field would.
"""

from __future__ import annotations

import logging
import struct
from enum import Enum

import numpy as np

from src.shared.exceptions import FormatError


logger = logging.getLogger(__name__)

LITTLE_ENDIAN = "<"
BIG_ENDIAN = ">"


class ScalarType(str, Enum):
    """Fixed-width scalar types a PLY property can carry."""

    FLOAT32 = "float32"
    FLOAT64 = "float64"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"


# (width, struct code, numpy code)
_SCALAR_TABLE: dict[ScalarType, tuple[int, str, str]] = {
    ScalarType.FLOAT32: (4, "f", "f4"),
    ScalarType.FLOAT64: (8, "d", "f8"),
    ScalarType.INT8: (1, "b", "i1"),
    ScalarType.UINT8: (1, "B", "u1"),
    ScalarType.INT16: (2, "h", "i2"),
    ScalarType.UINT16: (2, "H", "u2"),
    ScalarType.INT32: (4, "i", "i4"),
    ScalarType.UINT32: (4, "I", "u4"),
}

_TYPE_NAMES: dict[str, ScalarType] = {
    "float": ScalarType.FLOAT32,
    "float32": ScalarType.FLOAT32,
    "double": ScalarType.FLOAT64,
    "float64": ScalarType.FLOAT64,
    "char": ScalarType.INT8,
    "int8": ScalarType.INT8,
    "uchar": ScalarType.UINT8,
    "uint8": ScalarType.UINT8,
    "short": ScalarType.INT16,
    "int16": ScalarType.INT16,
    "ushort": ScalarType.UINT16,
    "uint16": ScalarType.UINT16,
    "int": ScalarType.INT32,
    "int32": ScalarType.INT32,
    "uint": ScalarType.UINT32,
    "uint32": ScalarType.UINT32,
}


def resolve_scalar_type(type_name: str, *, strict: bool = False) -> ScalarType:
    """Map a PLY type name to a ScalarType.

    Args:
        type_name: Type token from a ``property`` header line
        strict: Reject unknown names instead of falling back to float32

    Returns:
        Matching ScalarType (FLOAT32 for unknown names in lenient mode)

    Raises:
        FormatError: If the name is unknown and ``strict`` is set
    """
    scalar_type = _TYPE_NAMES.get(type_name)
    if scalar_type is not None:
        return scalar_type

    if strict:
        raise FormatError(f"unsupported scalar type '{type_name}'")

    logger.warning(f"[PLY Codec] Unknown scalar type '{type_name}', decoding as float32")
    return ScalarType.FLOAT32


def width(scalar_type: ScalarType) -> int:
    """Byte width of a scalar type."""
    return _SCALAR_TABLE[scalar_type][0]


def decode(
    buffer: bytes | bytearray | memoryview,
    scalar_type: ScalarType,
    offset: int,
    byte_order: str = LITTLE_ENDIAN,
) -> int | float:
    """Decode one value of ``scalar_type`` at ``offset``.

    Single-value counterpart of ``numpy_dtype(scalar_type, byte_order)``.

    Bounds are the caller's responsibility; ``struct.error`` surfaces if the
    buffer is too short.
    """
    code = _SCALAR_TABLE[scalar_type][1]
    return struct.unpack_from(f"{byte_order}{code}", buffer, offset)[0]


def numpy_dtype(scalar_type: ScalarType, byte_order: str = LITTLE_ENDIAN) -> np.dtype:
    """Numpy dtype matching ``scalar_type`` in the given byte order."""
    return np.dtype(f"{byte_order}{_SCALAR_TABLE[scalar_type][2]}")


__all__ = [
    "BIG_ENDIAN",
    "LITTLE_ENDIAN",
    "ScalarType",
    "decode",
    "numpy_dtype",
    "resolve_scalar_type",
    "width",
]
