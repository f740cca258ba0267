"""Infrastructure I/O helpers (local and remote byte sources)."""

from .path_io import UniversalPath


__all__ = ["UniversalPath"]
