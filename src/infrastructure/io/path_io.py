"""
Universal path abstraction for reading point-cloud sources.

Point-cloud files can live on the local filesystem or behind any fsspec
protocol (s3://, gs://, http://, https://, ...). The decoders never touch
storage; this module is the single place where bytes are fetched.

Example Usage:
    # Local filesystem (no extra dependencies)
    path = UniversalPath("./scans/room.ply")
    data = path.read_bytes()

    # HTTP read-only (fsspec base only)
    path = UniversalPath("https://example.com/scans/room.ply")
    data = path.read_bytes()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Protocol


logger = logging.getLogger(__name__)


class PathBackend(Protocol):
    """Interface shared by local and remote storage backends."""

    def open(self, path: str, mode: str = "rb") -> BinaryIO:
        """Open file for reading/writing."""
        ...

    def exists(self, path: str) -> bool:
        """Check if path exists."""
        ...


class LocalBackend:
    """Storage backend for local filesystem using pathlib."""

    def open(self, path: str, mode: str = "rb") -> BinaryIO:
        return open(path, mode)

    def exists(self, path: str) -> bool:
        return Path(path).is_file()


class FsspecBackend:
    """Storage backend for remote filesystems using fsspec."""

    def __init__(self, protocol: str):
        """
        Initialize fsspec backend.

        Parameters
        ----------
        protocol : str
            Storage protocol (s3, gs, http, https, etc.)

        Raises
        ------
        ImportError
            If the protocol needs an fsspec plugin that is not installed
        """
        import fsspec

        self.protocol = protocol
        self._fsspec = fsspec
        try:
            self._fs = fsspec.filesystem(protocol)
        except ImportError as e:
            raise ImportError(
                f"Protocol '{protocol}' requires additional dependencies.\nOriginal error: {e}"
            ) from e

    def open(self, path: str, mode: str = "rb") -> BinaryIO:
        return self._fsspec.open(path, mode)

    def exists(self, path: str) -> bool:
        return self._fs.exists(path)


class UniversalPath:
    """
    Path to a local or remote point-cloud file.

    Parameters
    ----------
    path : str | Path | UniversalPath
        Local path or URL

    Examples
    --------
        >>> path = UniversalPath("./scans/room.ply")
        >>> path.is_remote
        False
        >>> UniversalPath("https://example.com/room.ply").protocol
        'https'
    """

    def __init__(self, path: str | Path | UniversalPath):
        if isinstance(path, UniversalPath):
            self.path_str = path.path_str
            self._protocol = path._protocol
            self._backend = path._backend
            return

        self.path_str = str(path)
        self._protocol = self.path_str.split("://")[0] if "://" in self.path_str else "local"
        self._backend: PathBackend = (
            LocalBackend() if self._protocol == "local" else FsspecBackend(self._protocol)
        )

    @property
    def is_remote(self) -> bool:
        """Check if path is remote (not local filesystem)."""
        return self._protocol != "local"

    @property
    def protocol(self) -> str:
        return self._protocol

    @property
    def name(self) -> str:
        """File name (last path component)."""
        if self._protocol == "local":
            return Path(self.path_str).name
        return self.path_str.rstrip("/").split("/")[-1]

    def open(self, mode: str = "rb") -> BinaryIO:
        return self._backend.open(self.path_str, mode)

    def exists(self) -> bool:
        return self._backend.exists(self.path_str)

    def read_bytes(self) -> bytes:
        """Read entire file as bytes."""
        with self.open("rb") as f:
            return f.read()

    def write_bytes(self, data: bytes) -> None:
        """Write bytes to file."""
        with self.open("wb") as f:
            f.write(data)

    def __str__(self) -> str:
        return self.path_str

    def __repr__(self) -> str:
        return f"UniversalPath('{self.path_str}')"

    def __eq__(self, other) -> bool:
        if isinstance(other, UniversalPath):
            return self.path_str == other.path_str
        return self.path_str == str(other)

    def __hash__(self) -> int:
        return hash(self.path_str)
