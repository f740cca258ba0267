"""
Core domain entities for point-cloud display.

- PointSet: flat positions + per-point colors, the output of every decoder
- BoundingSphere: camera framing helper derived from a PointSet
- PointCloudRenderable: PointSet paired with an opaque material handle
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(frozen=True)
class BoundingSphere:
    """Sphere enclosing all points of a cloud."""

    center: tuple[float, float, float] = (0.0, 0.0, 0.0)
    radius: float = 0.0


def _as_points_array(values: Any, label: str) -> np.ndarray:
    """Coerce to a contiguous [N, 3] float32 array.

    Flat input is grouped into triples; any other shape must already be [N, 3].
    """
    array = np.asarray(values, dtype=np.float32)
    if array.ndim == 1:
        if array.size % 3 != 0:
            raise ValueError(f"{label} length {array.size} is not a multiple of 3")
        array = array.reshape(-1, 3)
    elif array.ndim != 2 or array.shape[1] != 3:
        raise ValueError(f"{label} must have shape [N, 3], got {array.shape}")
    return np.ascontiguousarray(array)


@dataclass
class PointSet:
    """
    Render-ready point cloud.

    Attributes:
        positions: Point positions [N, 3] float32
        colors: Point colors [N, 3] float32, channels in [0, 1]
    """

    positions: np.ndarray
    colors: np.ndarray

    def __post_init__(self) -> None:
        self.positions = _as_points_array(self.positions, "positions")
        self.colors = _as_points_array(self.colors, "colors")
        if self.positions.shape[0] != self.colors.shape[0]:
            raise ValueError(
                f"positions and colors length mismatch: "
                f"{self.positions.shape[0]} != {self.colors.shape[0]}"
            )

    @property
    def count(self) -> int:
        """Number of points."""
        return int(self.positions.shape[0])

    def __len__(self) -> int:
        return self.count

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """Return (min_corner, max_corner) of the axis-aligned bounding box."""
        if self.count == 0:
            zero = np.zeros(3, dtype=np.float32)
            return zero, zero.copy()
        return self.positions.min(axis=0), self.positions.max(axis=0)

    def bounding_sphere(self) -> BoundingSphere:
        """
        Compute the bounding sphere used to frame the camera.

        The center is the middle of the bounding box and the radius is the
        largest distance from that center to any point.
        """
        if self.count == 0:
            return BoundingSphere()

        min_corner, max_corner = self.bounds()
        center = (min_corner.astype(np.float64) + max_corner.astype(np.float64)) * 0.5
        offsets = self.positions.astype(np.float64) - center
        radius = float(np.sqrt((offsets * offsets).sum(axis=1).max()))
        return BoundingSphere(center=tuple(float(c) for c in center), radius=radius)


@dataclass
class PointCloudRenderable:
    """
    A PointSet prepared for a rendering collaborator.

    The material handle is never inspected; it is handed back exactly as given.
    """

    points: PointSet
    material: Any = None
    bounding_sphere: BoundingSphere = field(default_factory=BoundingSphere)
    frustum_culled: bool = False

    @classmethod
    def from_points(cls, points: PointSet, material: Any = None) -> PointCloudRenderable:
        return cls(points=points, material=material, bounding_sphere=points.bounding_sphere())

    @property
    def attributes(self) -> dict[str, np.ndarray]:
        """Per-point attribute buffers keyed by renderer attribute name."""
        return {"position": self.points.positions, "color": self.points.colors}
