"""
PLY writer for PointSet.

Writes float ``x, y, z`` plus uchar ``red, green, blue`` vertex properties in
any of the three PLY body encodings. Colors are scaled from [0, 1] to 0-255.
"""

import logging
from pathlib import Path

import numpy as np

from src.domain.entities import PointSet
from src.infrastructure.io.path_io import UniversalPath
from src.infrastructure.processing.ply.header import PlyEncoding

logger = logging.getLogger(__name__)


def _build_header(encoding: PlyEncoding, count: int) -> bytes:
    lines = [
        "ply",
        f"format {encoding.value} 1.0",
        f"element vertex {count}",
        "property float x",
        "property float y",
        "property float z",
        "property uchar red",
        "property uchar green",
        "property uchar blue",
        "end_header",
    ]
    return ("\n".join(lines) + "\n").encode("ascii")


def _colors_to_uchar(colors: np.ndarray) -> np.ndarray:
    return np.clip(np.rint(colors.astype(np.float64) * 255.0), 0, 255).astype(np.uint8)


def write_ply_bytes(
    points: PointSet,
    encoding: PlyEncoding | str = PlyEncoding.BINARY_LITTLE_ENDIAN,
) -> bytes:
    """Encode a PointSet as PLY bytes.

    Args:
        points: Points to encode
        encoding: Body encoding (``ascii``, ``binary_little_endian`` or
            ``binary_big_endian``)

    Returns:
        PLY file data as bytes

    Raises:
        ValueError: If encoding is unsupported
        TypeError: If points is not a PointSet
    """
    if not isinstance(points, PointSet):
        raise TypeError(f"points must be PointSet, got {type(points)}")

    encoding = PlyEncoding(encoding)
    header = _build_header(encoding, points.count)
    colors = _colors_to_uchar(points.colors)

    if encoding is PlyEncoding.ASCII:
        rows = [
            f"{x!r} {y!r} {z!r} {r} {g} {b}"
            for (x, y, z), (r, g, b) in zip(points.positions.tolist(), colors.tolist())
        ]
        body = ("\n".join(rows) + "\n").encode("ascii") if rows else b""
        return header + body

    order = encoding.byte_order
    record = np.dtype(
        [
            ("x", f"{order}f4"),
            ("y", f"{order}f4"),
            ("z", f"{order}f4"),
            ("red", "u1"),
            ("green", "u1"),
            ("blue", "u1"),
        ]
    )
    body = np.empty(points.count, dtype=record)
    body["x"], body["y"], body["z"] = points.positions.T
    body["red"], body["green"], body["blue"] = colors.T
    return header + body.tobytes()


def write_ply(
    file_path: str | Path | UniversalPath,
    points: PointSet,
    encoding: PlyEncoding | str = PlyEncoding.BINARY_LITTLE_ENDIAN,
) -> None:
    """Write a PointSet to a local or remote PLY file."""
    file_path = UniversalPath(file_path)
    data = write_ply_bytes(points, encoding)
    file_path.write_bytes(data)
    logger.debug(f"[PLY Writer] Wrote {points.count} points ({PlyEncoding(encoding).value}) to {file_path.name}")
