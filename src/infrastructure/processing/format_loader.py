"""
Format-aware point-cloud loader registry.

Detects whether a buffer is a PLY file or a raw ``xyzrgb`` float32 dump and
dispatches to the matching loader strategy. New strategies can be registered
per encoding without modifying callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from src.domain.entities import PointCloudRenderable, PointSet
from src.infrastructure.io.path_io import UniversalPath
from src.infrastructure.processing.ply.decoder import decode_points
from src.infrastructure.processing.ply.header import HeaderSchema, is_ply_buffer, parse_header
from src.infrastructure.processing.raw_decoder import decode_raw
from src.shared.exceptions import PointCloudLoadError

if TYPE_CHECKING:
    from src.splatview.config.settings import LoaderConfig


logger = logging.getLogger(__name__)

Buffer = bytes | bytearray | memoryview


class PointCloudEncoding(str, Enum):
    """Supported point-cloud buffer encodings."""

    PLY = "ply"
    RAW = "raw"


@dataclass
class PointLoadResult:
    """Container returned by loader strategies.

    ``points`` is None when the buffer holds nothing to display.
    """

    encoding: PointCloudEncoding
    points: PointSet | None
    schema: HeaderSchema | None = None

    @property
    def is_empty(self) -> bool:
        return self.points is None or self.points.count == 0


class PointLoaderStrategy(Protocol):
    """Strategy protocol for point-cloud decoders."""

    def load(self, buffer: Buffer, config: LoaderConfig) -> PointLoadResult: ...


class PlyPointLoader:
    """Header-driven loader for ASCII and binary PLY buffers."""

    def load(self, buffer: Buffer, config: LoaderConfig) -> PointLoadResult:
        schema, data_offset = parse_header(
            buffer,
            config.header_scan_limit,
            strict_scalar_types=config.strict_scalar_types,
        )
        points = decode_points(buffer, schema, data_offset, color_scale=config.color_scale)
        return PointLoadResult(encoding=PointCloudEncoding.PLY, points=points, schema=schema)


class RawPointLoader:
    """Loader for schema-less float32 ``xyzrgb`` buffers."""

    def load(self, buffer: Buffer, config: LoaderConfig) -> PointLoadResult:
        return PointLoadResult(encoding=PointCloudEncoding.RAW, points=decode_raw(buffer))


class FormatAwarePointLoader:
    """
    Detects the buffer encoding and dispatches to the appropriate loader strategy.

    Holds no per-buffer state; one instance can decode any number of buffers.
    """

    def __init__(self, config: LoaderConfig | None = None) -> None:
        if config is None:
            from src.splatview.config.settings import LoaderConfig

            config = LoaderConfig()
        self.config = config
        self._strategies: dict[PointCloudEncoding, PointLoaderStrategy] = {
            PointCloudEncoding.PLY: PlyPointLoader(),
            PointCloudEncoding.RAW: RawPointLoader(),
        }

    def register_strategy(
        self,
        encoding: PointCloudEncoding,
        strategy: PointLoaderStrategy,
    ) -> None:
        """Register/override a loader strategy for a specific encoding."""
        self._strategies[encoding] = strategy

    def detect_format(self, buffer: Buffer) -> PointCloudEncoding:
        """Classify a buffer as PLY or raw from its leading bytes."""
        if is_ply_buffer(buffer, self.config.sniff_window):
            return PointCloudEncoding.PLY
        return PointCloudEncoding.RAW

    def load(self, buffer: Buffer) -> PointLoadResult:
        """
        Decode a complete in-memory buffer.

        Raises:
            FormatError: If a PLY header or body is structurally invalid
        """
        encoding = self.detect_format(buffer)
        if encoding is PointCloudEncoding.PLY:
            logger.debug("[PointLoader] Detected PLY format")
        else:
            logger.debug("[PointLoader] Assuming raw float32 xyzrgb format")

        result = self._strategies[encoding].load(buffer, self.config)
        if result.points is not None:
            logger.info(f"[PointLoader] Loaded {result.points.count} points ({encoding.value})")
        return result


def load_point_set(buffer: Buffer, config: LoaderConfig | None = None) -> PointSet | None:
    """Decode a buffer into a PointSet, or None when there is nothing to display."""
    return FormatAwarePointLoader(config).load(buffer).points


def load_points(
    buffer: Buffer,
    material: Any = None,
    config: LoaderConfig | None = None,
) -> PointCloudRenderable | None:
    """Decode a buffer into a renderable point cloud carrying ``material`` untouched."""
    points = load_point_set(buffer, config)
    if points is None:
        return None
    return PointCloudRenderable.from_points(points, material)


def load_point_set_from_path(
    file_path: str | Path | UniversalPath,
    config: LoaderConfig | None = None,
) -> PointSet | None:
    """Read a local or remote file and decode it.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PointCloudLoadError: If the file cannot be read
        FormatError: If the contents are not a valid point cloud
    """
    file_path = UniversalPath(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Point cloud file not found: {file_path}")

    logger.debug(f"[PointLoader] Reading {file_path.name}")
    try:
        buffer = file_path.read_bytes()
    except OSError as e:
        raise PointCloudLoadError(f"Failed to read point cloud: {e}", path=str(file_path)) from e

    return load_point_set(buffer, config)


__all__ = [
    "FormatAwarePointLoader",
    "PlyPointLoader",
    "PointCloudEncoding",
    "PointLoadResult",
    "PointLoaderStrategy",
    "RawPointLoader",
    "load_point_set",
    "load_point_set_from_path",
    "load_points",
]
