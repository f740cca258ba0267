"""
Configuration dataclasses for splatview point-cloud loading.

All loaders take a LoaderConfig; the defaults match the common PLY
conventions (1 KiB sniff window, 64 KiB header limit, 0-255 colors).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass


logger = logging.getLogger(__name__)


__all__ = ["LoaderConfig"]


@dataclass
class LoaderConfig:
    """Configuration for point-cloud buffer decoding."""

    sniff_window: int = 1024  # Leading bytes inspected for the PLY magic
    header_scan_limit: int = 64 * 1024  # Leading bytes searched for end_header
    strict_scalar_types: bool = False  # Reject unknown property types instead of reading float32
    color_scale: float = 255.0  # Divisor mapping stored PLY colors into [0, 1]

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.sniff_window < 3:
            raise ValueError(f"sniff_window must be at least 3 bytes, got {self.sniff_window}")
        if self.header_scan_limit <= 0:
            raise ValueError(f"header_scan_limit must be positive, got {self.header_scan_limit}")
        if self.color_scale <= 0:
            raise ValueError(f"color_scale must be positive, got {self.color_scale}")

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for easy serialization."""
        return asdict(self)
