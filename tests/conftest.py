"""Pytest configuration and shared fixtures."""

import shutil
import struct
import tempfile
from pathlib import Path

import numpy as np
import pytest

from src.domain.entities import PointSet


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_points():
    """Small PointSet with exactly representable positions and 0-255 colors."""
    positions = np.array(
        [
            [0.0, 1.0, 2.0],
            [-1.5, 0.25, 3.75],
            [10.0, -20.0, 0.5],
            [1024.0, 0.125, -7.0],
        ],
        dtype=np.float32,
    )
    colors = np.array(
        [
            [255, 0, 0],
            [0, 255, 0],
            [0, 0, 255],
            [12, 128, 200],
        ],
        dtype=np.float32,
    ) / 255.0
    return PointSet(positions=positions, colors=colors)


def _header(fmt: str, count: int, properties: list[tuple[str, str]]) -> bytes:
    lines = ["ply", f"format {fmt} 1.0", f"element vertex {count}"]
    lines += [f"property {type_name} {name}" for type_name, name in properties]
    lines.append("end_header")
    return ("\n".join(lines) + "\n").encode("ascii")


_STRUCT_CODES = {
    "float": "f",
    "float32": "f",
    "double": "d",
    "float64": "d",
    "char": "b",
    "int8": "b",
    "uchar": "B",
    "uint8": "B",
    "short": "h",
    "int16": "h",
    "ushort": "H",
    "uint16": "H",
    "int": "i",
    "int32": "i",
    "uint": "I",
    "uint32": "I",
}


@pytest.fixture
def make_binary_ply():
    """Build a binary PLY buffer from (type, name) properties and value rows."""

    def _build(
        properties: list[tuple[str, str]],
        rows: list[tuple],
        byte_order: str = "<",
    ) -> bytes:
        fmt = "binary_little_endian" if byte_order == "<" else "binary_big_endian"
        codes = "".join(_STRUCT_CODES.get(type_name, "f") for type_name, _ in properties)
        body = b"".join(struct.pack(f"{byte_order}{codes}", *row) for row in rows)
        return _header(fmt, len(rows), properties) + body

    return _build


@pytest.fixture
def make_ascii_ply():
    """Build an ASCII PLY buffer from (type, name) properties and body text."""

    def _build(properties: list[tuple[str, str]], count: int, body: str) -> bytes:
        return _header("ascii", count, properties) + body.encode("ascii")

    return _build


@pytest.fixture
def xyz_rgb_properties():
    """Float position plus uchar color property list."""
    return [
        ("float", "x"),
        ("float", "y"),
        ("float", "z"),
        ("uchar", "red"),
        ("uchar", "green"),
        ("uchar", "blue"),
    ]
