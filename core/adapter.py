"""Format adapter contract.

A :class:`FormatAdapter` wraps one serialization technology behind a
uniform ``validate`` / ``encode`` / ``decode`` interface so the
orchestrator can exercise heterogeneous encodings the same way.

Purity contract:
    Adapters hold only constructor-time configuration (indentation,
    schema objects, tag names). ``validate``, ``encode`` and ``decode``
    must not mutate the dataset, must not touch global state, and must
    not keep benchmark-specific state between calls.

Failure contract:
    - ``validate`` returns a :class:`~core.records.ValidationOutcome`;
      it does not raise for invalid data.
    - ``encode`` raises :class:`~core.errors.EncodingError`.
    - ``decode`` raises :class:`~core.errors.DecodingError`.
    Library exceptions should be wrapped with ``raise ... from exc`` so
    the recorded cause is readable.

Example:
    >>> class UpperAdapter(FormatAdapter):
    ...     name = "upper"
    ...     extension = "txt"
    ...     def encode(self, dataset):
    ...         return str(dataset).upper().encode()
    ...     def decode(self, payload):
    ...         return payload.decode().lower()
    >>> UpperAdapter().validate("abc").ok
    True
"""

from abc import ABC, abstractmethod
from typing import Any

from core.records import ValidationOutcome


class FormatAdapter(ABC):
    """Abstract base for all serialization format adapters.

    Subclasses set the ``name`` and ``extension`` class attributes (or
    instance attributes in ``__init__``) and implement :meth:`encode`
    and :meth:`decode`. Text formats without a schema inherit the
    always-succeeding :meth:`validate`.

    Attributes:
        name: Unique adapter identity within an orchestrator
            (e.g. ``"json"``).
        extension: Artifact file extension without the dot
            (e.g. ``"json"``, ``"proto"``).
    """

    name: str = ""
    extension: str = ""

    def validate(self, dataset: Any) -> ValidationOutcome:
        """Check ``dataset`` against the adapter's structural constraints.

        The default accepts everything.

        Args:
            dataset: Read-only dataset.

        Returns:
            :class:`ValidationOutcome` (never raises for invalid data).
        """
        return ValidationOutcome.success()

    @abstractmethod
    def encode(self, dataset: Any) -> bytes:
        """Serialize ``dataset`` to bytes.

        Raises:
            EncodingError: If the dataset cannot be represented.
        """

    @abstractmethod
    def decode(self, payload: bytes) -> Any:
        """Reconstruct a value from ``payload``.

        Raises:
            DecodingError: If the payload is malformed for this format.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
