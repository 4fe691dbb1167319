"""Loader for resolving paths referenced by a kustomization into content.

A loader is bound to a root directory and only reads files beneath it, so a
kustomization cannot reach outside of the directory tree it was loaded from.
"""

from abc import ABC, abstractmethod
import logging
from pathlib import Path

from .exceptions import LoadException

__all__ = [
    "Loader",
    "FileLoader",
]

_LOGGER = logging.getLogger(__name__)


class Loader(ABC):
    """Interface for resolving a path to raw content."""

    @property
    @abstractmethod
    def root(self) -> Path:
        """Return the root directory of the loader."""

    @abstractmethod
    def load(self, path: str) -> bytes:
        """Return the content of the path, raising LoadException on failure."""


class FileLoader(Loader):
    """Loads files from the local filesystem below a root directory."""

    def __init__(self, root: Path) -> None:
        """Initialize FileLoader."""
        self._root = Path(root).expanduser().resolve()

    @property
    def root(self) -> Path:
        """Return the root directory of the loader."""
        return self._root

    def _resolve(self, path: str) -> Path:
        """Return the absolute path, checking that it is within the root."""
        if not path:
            raise LoadException("Unable to load empty path")
        full_path = Path(path)
        if not full_path.is_absolute():
            full_path = self._root / full_path
        full_path = full_path.resolve()
        if not full_path.is_relative_to(self._root):
            raise LoadException(
                f"Security; file '{path}' is not in or below '{self._root}'"
            )
        return full_path

    def load(self, path: str) -> bytes:
        """Return the content of the path, raising LoadException on failure."""
        full_path = self._resolve(path)
        _LOGGER.debug("Loading file: %s", full_path)
        if not full_path.is_file():
            raise LoadException(f"File '{path}' does not exist in '{self._root}'")
        try:
            return full_path.read_bytes()
        except OSError as err:
            raise LoadException(f"Failed to read file {full_path}: {err}") from err

    def __str__(self) -> str:
        """Render as a debug string."""
        return f"FileLoader({self._root})"
