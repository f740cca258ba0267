"""
PLY point-cloud I/O.

This package decodes the vertex element of PLY files into PointSet, with
support for:
- ASCII, binary little endian and binary big endian bodies
- float/double/char/uchar/short/ushort/int/uint vertex properties
- Colors from red/green/blue (preferred) or r/g/b, white when absent

Public API:
-----------
**Decoding**:
- is_ply_buffer()         - Magic-prefix check
- parse_header()          - Header -> (HeaderSchema, data offset)
- decode_points()         - Vertex body -> PointSet

**Writing**:
- write_ply()             - Write a PointSet to a local or remote file
- write_ply_bytes()       - Write to bytes (in-memory)

Architecture:
-------------
```
scalar_codec.py    - Scalar type table (width, struct code, numpy code)
header.py          - Sniffer + header parser
decoder.py         - ASCII / binary vertex decoding
writer.py          - PointSet -> PLY
```

Example Usage:
--------------
```python
from src.infrastructure.processing.ply import decode_points, parse_header

schema, offset = parse_header(buffer)
points = decode_points(buffer, schema, offset)
```
"""

# Public API - Decoding
from src.infrastructure.processing.ply.decoder import decode_points
from src.infrastructure.processing.ply.header import (
    HeaderSchema,
    PlyEncoding,
    PropertyDescriptor,
    is_ply_buffer,
    parse_header,
)
from src.infrastructure.processing.ply.scalar_codec import ScalarType

# Public API - Writers
from src.infrastructure.processing.ply.writer import write_ply, write_ply_bytes

__all__ = [
    # Decoding
    "HeaderSchema",
    "PlyEncoding",
    "PropertyDescriptor",
    "ScalarType",
    "decode_points",
    "is_ply_buffer",
    "parse_header",
    # Writers
    "write_ply",
    "write_ply_bytes",
]
