"""
PLY vertex decoding into PointSet.

ASCII bodies are tokenized line by line; binary bodies are decoded in bulk
through a packed numpy record dtype assembled from the scalar codec, so every
declared property (matched or not) advances the record offset by its width.
"""

from __future__ import annotations

import logging

import numpy as np

from src.domain.entities import PointSet
from src.infrastructure.processing.ply.header import HeaderSchema
from src.infrastructure.processing.ply.scalar_codec import numpy_dtype
from src.shared.exceptions import FormatError


logger = logging.getLogger(__name__)

DEFAULT_COLOR_SCALE = 255.0


def _default_arrays(count: int) -> tuple[np.ndarray, np.ndarray]:
    positions = np.zeros((count, 3), dtype=np.float32)
    colors = np.ones((count, 3), dtype=np.float32)
    return positions, colors


def _record_dtype(schema: HeaderSchema) -> np.dtype:
    """Packed structured dtype for one binary vertex record.

    Fields are named by index so duplicate property names stay addressable.
    """
    byte_order = schema.encoding.byte_order
    names, formats, offsets = [], [], []
    offset = 0
    for index, prop in enumerate(schema.properties):
        names.append(f"f{index}")
        formats.append(numpy_dtype(prop.scalar_type, byte_order))
        offsets.append(offset)
        offset += prop.width
    return np.dtype({"names": names, "formats": formats, "offsets": offsets, "itemsize": offset})


def _decode_ascii(
    buffer: bytes | bytearray | memoryview,
    schema: HeaderSchema,
    data_offset: int,
    color_scale: float,
) -> PointSet:
    count = schema.element_count
    n_properties = len(schema.properties)
    position_indices = schema.position_indices
    color_indices = schema.color_indices

    text = bytes(buffer[data_offset:]).decode("ascii", errors="replace")

    rows: list[list[str]] = []
    for line in text.splitlines():
        tokens = line.split()
        # Blank and short lines never consume a vertex slot
        if len(tokens) < n_properties:
            continue
        rows.append(tokens)
        if len(rows) == count:
            break

    positions, colors = _default_arrays(count)
    if rows:
        try:
            positions[: len(rows)] = [[float(row[i]) for i in position_indices] for row in rows]
            if color_indices is not None:
                values = np.array(
                    [[float(row[i]) for i in color_indices] for row in rows], dtype=np.float64
                )
                colors[: len(rows)] = values / color_scale
        except ValueError as exc:
            raise FormatError(f"invalid numeric value in ASCII vertex data: {exc}") from exc

    if len(rows) < count:
        logger.warning(
            f"[PLY Decoder] ASCII body holds {len(rows)} of {count} declared vertices; "
            f"remaining vertices keep default values"
        )

    return PointSet(positions=positions, colors=colors)


def _decode_binary(
    buffer: bytes | bytearray | memoryview,
    schema: HeaderSchema,
    data_offset: int,
    color_scale: float,
) -> PointSet:
    count = schema.element_count
    record_dtype = _record_dtype(schema)

    required = data_offset + count * record_dtype.itemsize
    if len(buffer) < required:
        raise FormatError(
            f"truncated vertex data: need {required} bytes, got {len(buffer)}",
            offset=data_offset,
        )

    records = np.frombuffer(buffer, dtype=record_dtype, count=count, offset=data_offset)

    positions, colors = _default_arrays(count)
    for axis, index in enumerate(schema.position_indices):
        positions[:, axis] = records[f"f{index}"]

    color_indices = schema.color_indices
    if color_indices is not None:
        for channel, index in enumerate(color_indices):
            colors[:, channel] = records[f"f{index}"].astype(np.float64) / color_scale

    return PointSet(positions=positions, colors=colors)


def decode_points(
    buffer: bytes | bytearray | memoryview,
    schema: HeaderSchema,
    data_offset: int,
    color_scale: float = DEFAULT_COLOR_SCALE,
) -> PointSet:
    """Decode the vertex element of a PLY buffer.

    Args:
        buffer: Complete PLY file contents
        schema: Schema returned by ``parse_header``
        data_offset: Offset returned by ``parse_header``
        color_scale: Divisor mapping stored color values into [0, 1]

    Returns:
        PointSet with ``schema.element_count`` points; white when the header
        declares no complete color triple

    Raises:
        FormatError: If the body is truncated or holds non-numeric tokens
    """
    if schema.encoding.is_binary:
        points = _decode_binary(buffer, schema, data_offset, color_scale)
    else:
        points = _decode_ascii(buffer, schema, data_offset, color_scale)

    logger.debug(
        f"[PLY Decoder] Decoded {points.count} vertices "
        f"({schema.encoding.value}, color={'yes' if schema.has_color else 'default'})"
    )
    return points


__all__ = ["DEFAULT_COLOR_SCALE", "decode_points"]
