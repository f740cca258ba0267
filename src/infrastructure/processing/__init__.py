"""Point-cloud decoding: format detection, PLY and raw decoders."""

from .format_loader import (
    FormatAwarePointLoader,
    PointCloudEncoding,
    PointLoadResult,
    load_point_set,
    load_point_set_from_path,
    load_points,
)
from .raw_decoder import decode_raw

__all__ = [
    "FormatAwarePointLoader",
    "PointCloudEncoding",
    "PointLoadResult",
    "decode_raw",
    "load_point_set",
    "load_point_set_from_path",
    "load_points",
]
