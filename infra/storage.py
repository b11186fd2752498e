"""Artifact storage implementations.

Both classes satisfy :class:`core.storage.Storage`:

- :class:`FileStorage` writes one file per artifact into a directory.
- :class:`MemoryStorage` keeps artifacts in a dict (tests, dry runs).

Error mapping:
    ``OSError`` from the filesystem is re-raised as
    :class:`~core.errors.PersistenceError`; a missing file as
    :class:`~core.errors.ArtifactNotFoundError`. Names containing path
    separators, or ``"."`` / ``".."``, are rejected with
    ``PersistenceError`` before touching the filesystem.

Example:
    >>> storage = MemoryStorage()
    >>> storage.write("data.json", b"{}")
    >>> storage.size("data.json")
    2
"""

import logging
from pathlib import Path

from core.errors import ArtifactNotFoundError, PersistenceError

logger: logging.Logger = logging.getLogger(__name__)


def _check_name(name: str) -> None:
    if not name or name in (".", "..") or "/" in name or "\\" in name:
        raise PersistenceError(f"invalid artifact name: {name!r}")


class FileStorage:
    """Filesystem-backed artifact storage.

    The directory is created on construction if missing. Each ``write``
    opens, writes, and closes the file before returning, so ``size``
    immediately reflects the written length.

    Args:
        directory: Directory holding the artifacts.

    Raises:
        PersistenceError: If the directory cannot be created.
    """

    def __init__(self, directory: Path | str) -> None:
        self._directory: Path = Path(directory)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise PersistenceError(
                f"cannot create storage directory {self._directory}: {exc}"
            ) from exc

    @property
    def directory(self) -> Path:
        """Artifact directory."""
        return self._directory

    def path_for(self, name: str) -> Path:
        """Filesystem path of artifact ``name``."""
        _check_name(name)
        return self._directory / name

    def write(self, name: str, payload: bytes) -> None:
        path: Path = self.path_for(name)
        try:
            path.write_bytes(payload)
        except OSError as exc:
            raise PersistenceError(f"cannot write {path}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(payload), path)

    def size(self, name: str) -> int:
        path: Path = self.path_for(name)
        try:
            return path.stat().st_size
        except FileNotFoundError as exc:
            raise ArtifactNotFoundError(f"artifact not found: {name}") from exc
        except OSError as exc:
            raise PersistenceError(f"cannot stat {path}: {exc}") from exc

    def read(self, name: str) -> bytes:
        path: Path = self.path_for(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise ArtifactNotFoundError(f"artifact not found: {name}") from exc
        except OSError as exc:
            raise PersistenceError(f"cannot read {path}: {exc}") from exc


class MemoryStorage:
    """In-memory artifact storage keyed by name."""

    def __init__(self) -> None:
        self._artifacts: dict[str, bytes] = {}

    def write(self, name: str, payload: bytes) -> None:
        _check_name(name)
        self._artifacts[name] = bytes(payload)

    def size(self, name: str) -> int:
        return len(self.read(name))

    def read(self, name: str) -> bytes:
        _check_name(name)
        try:
            return self._artifacts[name]
        except KeyError:
            raise ArtifactNotFoundError(f"artifact not found: {name}") from None

    def names(self) -> list[str]:
        """Stored artifact names, sorted."""
        return sorted(self._artifacts)
