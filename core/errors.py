"""Error taxonomy for the serialization benchmark.

Every exception raised by an adapter or by the storage capability derives
from :class:`BenchmarkError`. The orchestrator catches these at the
per-adapter boundary and records them on the
:class:`~core.records.MeasurementRecord`; none of them abort a run.

Round-trip mismatches are deliberately absent from this module: a
decoded value that differs from the original is recorded as
``round_trip_equal=False``, not raised.
"""


class BenchmarkError(Exception):
    """Base class for all per-adapter benchmark failures."""


class ValidationError(BenchmarkError):
    """Dataset violates an adapter's structural constraints."""


class EncodingError(BenchmarkError):
    """Adapter failed to produce bytes from a validated dataset."""


class DecodingError(BenchmarkError):
    """Adapter failed to reconstruct a value from an encoded payload."""


class PersistenceError(BenchmarkError):
    """Storage capability failed to write, read, or size an artifact."""


class ArtifactNotFoundError(PersistenceError):
    """Requested artifact does not exist in storage."""
