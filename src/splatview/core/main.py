"""
splatview - point-cloud inspection entry point.

This is the CLI entry point that uses tyro for argument parsing.
"""

from __future__ import annotations

import logging
import sys
from typing import Annotated

import tyro

from src.infrastructure.processing.format_loader import FormatAwarePointLoader
from src.infrastructure.io.path_io import UniversalPath
from src.shared.exceptions import SplatViewError
from src.splatview.config.settings import LoaderConfig

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """
    Setup logging configuration.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def main(
    path: Annotated[str, tyro.conf.Positional],
    log_level: str = "INFO",
    strict_scalar_types: bool = False,
) -> int:
    """
    Decode a point-cloud file and report what it contains.

    Parameters
    ----------
    path : str
        Local path or URL of a PLY file or raw float32 xyzrgb dump
    log_level : str
        Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
    strict_scalar_types : bool
        Reject unknown PLY property types instead of reading them as float32

    Examples
    --------
        splatview-inspect ./scans/room.ply
        splatview-inspect https://example.com/room.bin --log-level DEBUG
    """
    setup_logging(log_level)

    config = LoaderConfig(strict_scalar_types=strict_scalar_types)
    loader = FormatAwarePointLoader(config)

    source = UniversalPath(path)
    try:
        if not source.exists():
            logger.error(f"File not found: {source}")
            return 1
        result = loader.load(source.read_bytes())
    except (SplatViewError, OSError) as e:
        logger.error(f"Failed to load {source.name}: {e}")
        return 1

    logger.info(f"Encoding: {result.encoding.value}")
    if result.schema is not None:
        logger.info(f"PLY body: {result.schema.encoding.value}, properties: {result.schema.names}")

    if result.points is None:
        logger.warning("Nothing to display")
        return 0

    points = result.points
    min_corner, max_corner = points.bounds()
    sphere = points.bounding_sphere()
    logger.info(f"Points: {points.count}")
    logger.info(f"Bounds: min={min_corner.tolist()} max={max_corner.tolist()}")
    logger.info(f"Bounding sphere: center={list(sphere.center)} radius={sphere.radius:.6g}")
    return 0


def cli() -> None:
    """Entry point for the installed script."""
    sys.exit(tyro.cli(main))


if __name__ == "__main__":
    cli()
