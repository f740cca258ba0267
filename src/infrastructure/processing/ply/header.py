"""
PLY format sniffing and header parsing.

Only the ``vertex`` element is collected; other elements (faces, edges, ...)
are skipped entirely. The parsed schema is transient and holds no reference
to the buffer it was read from.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum

from src.infrastructure.processing.ply.scalar_codec import (
    BIG_ENDIAN,
    LITTLE_ENDIAN,
    ScalarType,
    resolve_scalar_type,
    width,
)
from src.shared.exceptions import FormatError


logger = logging.getLogger(__name__)

PLY_MAGIC = b"ply"
END_HEADER = b"end_header"
DEFAULT_SNIFF_WINDOW = 1024
DEFAULT_HEADER_SCAN_LIMIT = 64 * 1024

POSITION_NAMES = ("x", "y", "z")
COLOR_NAMES = (("red", "r"), ("green", "g"), ("blue", "b"))

_ASCII_WHITESPACE = b" \t\r\n\f\v"
_LINE_PADDING = b" \t"
_END_HEADER_LINE = re.compile(rb"(?m)^end_header[ \t]*\r?$")


class PlyEncoding(str, Enum):
    """Body encodings declared by the ``format`` header line."""

    ASCII = "ascii"
    BINARY_LITTLE_ENDIAN = "binary_little_endian"
    BINARY_BIG_ENDIAN = "binary_big_endian"

    @property
    def is_binary(self) -> bool:
        return self is not PlyEncoding.ASCII

    @property
    def byte_order(self) -> str:
        return BIG_ENDIAN if self is PlyEncoding.BINARY_BIG_ENDIAN else LITTLE_ENDIAN


@dataclass(frozen=True)
class PropertyDescriptor:
    """One ``property`` declaration of the vertex element."""

    name: str
    scalar_type: ScalarType
    is_list: bool = False
    type_name: str = ""

    @property
    def width(self) -> int:
        return width(self.scalar_type)


@dataclass(frozen=True)
class HeaderSchema:
    """Vertex layout parsed from a PLY header."""

    encoding: PlyEncoding
    element_count: int
    properties: tuple[PropertyDescriptor, ...]

    @property
    def stride(self) -> int:
        """Byte width of one binary vertex record."""
        return sum(prop.width for prop in self.properties)

    @property
    def names(self) -> list[str]:
        return [prop.name for prop in self.properties]

    def index_of(self, name: str) -> int | None:
        """Index of the first property called ``name``, or None."""
        for index, prop in enumerate(self.properties):
            if prop.name == name:
                return index
        return None

    @property
    def position_indices(self) -> tuple[int, int, int]:
        indices = tuple(self.index_of(name) for name in POSITION_NAMES)
        if any(index is None for index in indices):
            raise FormatError("missing required position properties")
        return indices  # type: ignore[return-value]

    @property
    def color_indices(self) -> tuple[int, int, int] | None:
        """Indices of the color channels, or None if any channel is missing.

        Long names (``red``) take precedence over short names (``r``) per channel.
        """
        indices = []
        for long_name, short_name in COLOR_NAMES:
            index = self.index_of(long_name)
            if index is None:
                index = self.index_of(short_name)
            if index is None:
                return None
            indices.append(index)
        return tuple(indices)  # type: ignore[return-value]

    @property
    def has_color(self) -> bool:
        return self.color_indices is not None


def is_ply_buffer(buffer: bytes | bytearray | memoryview, window: int = DEFAULT_SNIFF_WINDOW) -> bool:
    """Return True if the buffer starts with the PLY magic."""
    head = bytes(buffer[:window])
    return head.startswith(PLY_MAGIC)


def _parse_format(tokens: list[str], line: str) -> PlyEncoding:
    if len(tokens) < 2:
        raise FormatError("missing format", line=line)
    try:
        return PlyEncoding(tokens[1])
    except ValueError:
        raise FormatError(f"unsupported format '{tokens[1]}'", line=line) from None


def _parse_property(tokens: list[str], line: str, strict: bool) -> PropertyDescriptor:
    if len(tokens) < 3:
        raise FormatError("malformed property declaration", line=line)

    if tokens[1] == "list":
        if len(tokens) < 5:
            raise FormatError("malformed list property declaration", line=line)
        return PropertyDescriptor(
            name=tokens[-1],
            scalar_type=resolve_scalar_type(tokens[3], strict=strict),
            is_list=True,
            type_name=tokens[3],
        )

    return PropertyDescriptor(
        name=tokens[-1],
        scalar_type=resolve_scalar_type(tokens[1], strict=strict),
        type_name=tokens[1],
    )


def _data_offset(
    buffer: bytes | bytearray | memoryview,
    header_end: int,
    encoding: PlyEncoding,
) -> int:
    """Offset of the first body byte after ``end_header``.

    ASCII bodies skip every whitespace byte. Binary bodies skip the rest of
    the ``end_header`` line (trailing blanks plus its line break) so leading data
    bytes are never consumed.
    """
    offset = header_end
    size = len(buffer)

    if encoding.is_binary:
        while offset < size and buffer[offset] in _LINE_PADDING:
            offset += 1
        if offset < size and buffer[offset] == 0x0D:
            offset += 1
        if offset < size and buffer[offset] == 0x0A:
            offset += 1
        return offset

    while offset < size and buffer[offset] in _ASCII_WHITESPACE:
        offset += 1
    return offset


def parse_header(
    buffer: bytes | bytearray | memoryview,
    scan_limit: int = DEFAULT_HEADER_SCAN_LIMIT,
    *,
    strict_scalar_types: bool = False,
) -> tuple[HeaderSchema, int]:
    """Parse a PLY header.

    Args:
        buffer: Complete PLY file contents
        scan_limit: Number of leading bytes searched for ``end_header``
        strict_scalar_types: Reject unknown property types

    Returns:
        Tuple of (schema, data_offset)

    Raises:
        FormatError: If the header is missing, incomplete or unsupported
    """
    window = bytes(buffer[:scan_limit])
    match = _END_HEADER_LINE.search(window)
    if match is None:
        raise FormatError(f"PLY header does not contain 'end_header' within {scan_limit} bytes")

    header_end = match.start() + len(END_HEADER)
    header_text = window[:header_end].decode("ascii", errors="replace")

    encoding: PlyEncoding | None = None
    element_count = 0
    properties: list[PropertyDescriptor] = []
    in_vertex_element = False

    for line in header_text.splitlines():
        tokens = line.split()
        if not tokens:
            continue

        keyword = tokens[0]
        if keyword == "format":
            encoding = _parse_format(tokens, line)
        elif keyword == "element":
            if len(tokens) >= 2 and tokens[1] == "vertex":
                if len(tokens) < 3:
                    raise FormatError("missing or empty vertex element", line=line)
                try:
                    element_count = int(tokens[2])
                except ValueError:
                    raise FormatError("invalid vertex count", line=line) from None
                in_vertex_element = True
            else:
                in_vertex_element = False
        elif keyword == "property" and in_vertex_element:
            properties.append(_parse_property(tokens, line, strict_scalar_types))

    if encoding is None:
        raise FormatError("missing format")
    if element_count <= 0:
        raise FormatError("missing or empty vertex element")

    list_properties = [prop.name for prop in properties if prop.is_list]
    if list_properties:
        raise FormatError(f"list-typed vertex properties are not supported: {', '.join(list_properties)}")

    declared = {prop.name for prop in properties}
    if not all(name in declared for name in POSITION_NAMES):
        raise FormatError("missing required position properties")

    schema = HeaderSchema(
        encoding=encoding,
        element_count=element_count,
        properties=tuple(properties),
    )
    data_offset = _data_offset(buffer, header_end, encoding)

    logger.debug(
        f"[PLY Header] {encoding.value}, {element_count} vertices, "
        f"properties={schema.names}, data_offset={data_offset}"
    )
    return schema, data_offset


__all__ = [
    "HeaderSchema",
    "PlyEncoding",
    "PropertyDescriptor",
    "is_ply_buffer",
    "parse_header",
]
