"""Tests for the PLY scalar codec."""

import logging
import struct

import numpy as np
import pytest

from src.infrastructure.processing.ply import decode_points, parse_header, write_ply_bytes
from src.infrastructure.processing.ply.scalar_codec import (
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    ScalarType,
    decode,
    numpy_dtype,
    resolve_scalar_type,
    width,
)
from src.shared.exceptions import FormatError


class TestWidth:
    """Test byte widths of scalar types."""

    @pytest.mark.parametrize(
        ("scalar_type", "expected"),
        [
            (ScalarType.FLOAT32, 4),
            (ScalarType.FLOAT64, 8),
            (ScalarType.INT8, 1),
            (ScalarType.UINT8, 1),
            (ScalarType.INT16, 2),
            (ScalarType.UINT16, 2),
            (ScalarType.INT32, 4),
            (ScalarType.UINT32, 4),
        ],
    )
    def test_width(self, scalar_type, expected):
        assert width(scalar_type) == expected

    def test_numpy_dtype_matches_width(self):
        """Every numpy dtype has the codec width."""
        for scalar_type in ScalarType:
            assert numpy_dtype(scalar_type).itemsize == width(scalar_type)


class TestResolveScalarType:
    """Test PLY type-name resolution."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("float", ScalarType.FLOAT32),
            ("float32", ScalarType.FLOAT32),
            ("double", ScalarType.FLOAT64),
            ("float64", ScalarType.FLOAT64),
            ("char", ScalarType.INT8),
            ("uchar", ScalarType.UINT8),
            ("short", ScalarType.INT16),
            ("ushort", ScalarType.UINT16),
            ("int", ScalarType.INT32),
            ("uint", ScalarType.UINT32),
        ],
    )
    def test_known_names(self, name, expected):
        assert resolve_scalar_type(name) is expected

    def test_unknown_name_falls_back_to_float32(self, caplog):
        """Unknown types are read as float32 with a warning."""
        with caplog.at_level(logging.WARNING):
            assert resolve_scalar_type("half") is ScalarType.FLOAT32
        assert "half" in caplog.text

    def test_unknown_name_rejected_in_strict_mode(self):
        with pytest.raises(FormatError, match="half"):
            resolve_scalar_type("half", strict=True)


class TestDecode:
    """Test single-value decoding."""

    def test_float32_little_endian(self):
        buffer = b"\xff" + struct.pack("<f", 1.5)
        assert decode(buffer, ScalarType.FLOAT32, 1, LITTLE_ENDIAN) == 1.5

    def test_float64_big_endian(self):
        buffer = struct.pack(">d", -2.25)
        assert decode(buffer, ScalarType.FLOAT64, 0, BIG_ENDIAN) == -2.25

    def test_signed_and_unsigned_bytes(self):
        buffer = bytes([0xFF])
        assert decode(buffer, ScalarType.UINT8, 0) == 255
        assert decode(buffer, ScalarType.INT8, 0) == -1

    def test_byte_order_changes_int16(self):
        buffer = bytes([0x01, 0x02])
        assert decode(buffer, ScalarType.UINT16, 0, LITTLE_ENDIAN) == 0x0201
        assert decode(buffer, ScalarType.UINT16, 0, BIG_ENDIAN) == 0x0102

    def test_uint32_full_range(self):
        buffer = struct.pack("<I", 0xFFFFFFFF)
        assert decode(buffer, ScalarType.UINT32, 0) == 0xFFFFFFFF
        assert decode(buffer, ScalarType.INT32, 0) == -1

    def test_decode_matches_numpy_dtype(self):
        """Scalar and bulk decoding agree for big-endian data."""
        values = np.array([3, -7, 1000], dtype=">i2")
        buffer = values.tobytes()
        decoded = [decode(buffer, ScalarType.INT16, i * 2, BIG_ENDIAN) for i in range(3)]
        bulk = np.frombuffer(buffer, dtype=numpy_dtype(ScalarType.INT16, BIG_ENDIAN))
        assert decoded == bulk.tolist() == [3, -7, 1000]

    def test_decode_reads_fields_of_a_vertex_record(self, sample_points):
        """Single values read at field offsets match the bulk vertex decode."""
        buffer = write_ply_bytes(sample_points)
        schema, data_offset = parse_header(buffer)
        points = decode_points(buffer, schema, data_offset)

        record = data_offset + 3 * schema.stride
        y_offset = record + width(ScalarType.FLOAT32)
        red_offset = record + 3 * width(ScalarType.FLOAT32)
        assert decode(buffer, ScalarType.FLOAT32, y_offset) == points.positions[3, 1]
        assert decode(buffer, ScalarType.UINT8, red_offset) == round(points.colors[3, 0] * 255)
