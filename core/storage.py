"""Storage capability injected into the orchestrator.

The orchestrator persists each adapter's encoded payload as one named
artifact and then asks storage for its size. Concrete implementations
live in :mod:`infra.storage`.

Contract:
    - ``write`` completes before returning; a following ``size`` or
      ``read`` of the same name observes the written bytes.
    - Every failure raises :class:`~core.errors.PersistenceError`.
      A missing artifact raises
      :class:`~core.errors.ArtifactNotFoundError`.
    - Names are flat identifiers (``"data.json"``); path separators are
      rejected.
"""

from typing import Protocol


class Storage(Protocol):
    """Interface for artifact persistence."""

    def write(self, name: str, payload: bytes) -> None:
        """Persist ``payload`` under ``name``, replacing any previous artifact."""
        ...

    def size(self, name: str) -> int:
        """Return the persisted byte size of ``name``."""
        ...

    def read(self, name: str) -> bytes:
        """Return the persisted bytes of ``name``."""
        ...


def artifact_name(stem: str, extension: str) -> str:
    """Build the artifact name for an adapter.

    Example:
        >>> artifact_name("data", "proto")
        'data.proto'
        >>> artifact_name("data", "")
        'data'
    """
    return f"{stem}.{extension}" if extension else stem
