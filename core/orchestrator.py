"""Benchmark orchestrator: runs every registered adapter against one dataset.

Pipeline per adapter (registration order):

    validate → run_timed(encode) → storage.write → storage.size
             → run_timed(decode) → round-trip equality → MeasurementRecord

Sequencing:
    Strictly single-threaded. Adapters run one at a time in the order
    they were registered; no encode or decode overlaps another, so
    elapsed times are comparable across formats.

Error isolation:
    Validation failures, encode/decode exceptions and storage failures
    are caught at the per-adapter boundary and recorded as fields on the
    adapter's :class:`~core.records.MeasurementRecord`. A run always
    yields exactly one record per adapter. The only run-level abort is a
    ``None`` dataset.

Decode input:
    Decode always consumes the in-memory encoded bytes, never the
    persisted copy, so decode is measured even when persistence fails.
    Optional readback verification (``verify_readback``) decodes the
    persisted artifact separately and is not timed.

Example:
    >>> from core.employees import EmployeeList, build_sample_dataset
    >>> from infra.json_adapter import JsonAdapter
    >>> from infra.storage import MemoryStorage
    >>> orchestrator = BenchmarkOrchestrator(
    ...     storage=MemoryStorage(),
    ...     config=BenchmarkConfig(dataset_schema=EmployeeList),
    ... )
    >>> orchestrator.register(JsonAdapter())
    >>> report = orchestrator.run(build_sample_dataset())
    >>> report.record("json").round_trip_equal
    True
"""

import logging
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.adapter import FormatAdapter
from core.comparator import compare_records
from core.equality import values_equal
from core.errors import PersistenceError
from core.records import (
    BenchmarkReport,
    MeasurementRecord,
    TimedResult,
    ValidationOutcome,
)
from core.storage import Storage, artifact_name
from core.timing import run_timed

logger: logging.Logger = logging.getLogger(__name__)

EqualityFn = Callable[[Any, Any], bool]
"""Round-trip equality relation: ``(original, decoded) -> bool``."""


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class BenchmarkConfig(BaseModel):
    """Configuration for :class:`BenchmarkOrchestrator`.

    Attributes:
        artifact_stem: Artifact base name. Each adapter persists to
            ``f"{artifact_stem}.{adapter.extension}"``.
        verify_readback: If ``True``, read each persisted artifact back,
            decode it, and record whether it equals the dataset.
        dataset_schema: Declared dataset schema used by the default
            equality relation. ``None`` for structural equality.

    Example:
        >>> BenchmarkConfig().artifact_stem
        'data'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    artifact_stem: str = Field(
        default="data",
        min_length=1,
        description="Artifact base name (no path separators)",
    )
    verify_readback: bool = Field(
        default=False,
        description="Decode persisted artifacts and compare to the dataset",
    )
    dataset_schema: type[BaseModel] | None = Field(
        default=None,
        description="Pydantic model describing the dataset (for equality)",
    )

    @field_validator("artifact_stem")
    @classmethod
    def validate_stem_is_flat(cls, value: str) -> str:
        """Reject stems that would escape the storage namespace."""
        if "/" in value or "\\" in value:
            raise ValueError(f"artifact_stem must not contain path separators: {value!r}")
        return value


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class BenchmarkOrchestrator:
    """Runs registered format adapters and assembles measurement records.

    The storage capability is owned exclusively by the orchestrator for
    the duration of :meth:`run`.

    Args:
        storage: Injected artifact storage.
        config: Orchestrator configuration. Defaults to
            ``BenchmarkConfig()``.
        equality: Round-trip equality relation. Defaults to
            :func:`core.equality.values_equal` bound to
            ``config.dataset_schema``.

    Example:
        >>> orchestrator = BenchmarkOrchestrator(storage=MemoryStorage())
        >>> orchestrator.register(JsonAdapter())
        >>> orchestrator.register(XmlAdapter())
        >>> [a.name for a in orchestrator.adapters]
        ['json', 'xml']
    """

    def __init__(
        self,
        storage: Storage,
        config: BenchmarkConfig | None = None,
        equality: EqualityFn | None = None,
    ) -> None:
        self._storage: Storage = storage
        self._config: BenchmarkConfig = config or BenchmarkConfig()
        self._adapters: list[FormatAdapter] = []
        if equality is None:
            schema: type[BaseModel] | None = self._config.dataset_schema

            def equality(expected: Any, actual: Any) -> bool:
                return values_equal(expected, actual, schema=schema)

        self._equality: EqualityFn = equality

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, adapter: FormatAdapter) -> None:
        """Append ``adapter`` to the run order.

        Raises:
            ValueError: If the adapter has no name or its name is
                already registered.
        """
        if not adapter.name:
            raise ValueError(f"adapter {adapter!r} has an empty name")
        if any(a.name == adapter.name for a in self._adapters):
            raise ValueError(f"adapter name {adapter.name!r} already registered")
        self._adapters.append(adapter)
        logger.debug("Registered adapter %s", adapter.name)

    @property
    def adapters(self) -> tuple[FormatAdapter, ...]:
        """Registered adapters in run order."""
        return tuple(self._adapters)

    @property
    def config(self) -> BenchmarkConfig:
        """Orchestrator configuration."""
        return self._config

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------

    def run(self, dataset: Any) -> BenchmarkReport:
        """Benchmark every registered adapter against ``dataset``.

        Args:
            dataset: Structured value fed unchanged to every adapter.

        Returns:
            :class:`BenchmarkReport` with one record per adapter in
            registration order and all pairwise size comparisons.

        Raises:
            ValueError: If ``dataset`` is ``None``.
        """
        if dataset is None:
            raise ValueError("dataset must not be None")

        logger.info("Benchmark started with %d adapter(s)", len(self._adapters))
        records: list[MeasurementRecord] = [
            self._measure(adapter=adapter, dataset=dataset)
            for adapter in self._adapters
        ]

        # Comparisons only ever see the complete record set
        report: BenchmarkReport = BenchmarkReport(
            records=tuple(records),
            comparisons=compare_records(records),
        )
        failed: int = sum(1 for r in records if not r.succeeded)
        logger.info(
            "Benchmark finished: %d record(s), %d failed, %d comparison(s)",
            len(records),
            failed,
            len(report.comparisons),
        )
        return report

    def _measure(self, adapter: FormatAdapter, dataset: Any) -> MeasurementRecord:
        """Run one adapter through the full pipeline. Never raises."""
        name: str = adapter.name
        artifact: str = artifact_name(self._config.artifact_stem, adapter.extension)
        logger.info("Measuring %s", name)

        # Stage 1: validation
        validation: ValidationOutcome = self._validate(adapter=adapter, dataset=dataset)
        if not validation.ok:
            logger.warning("%s validation failed: %s", name, validation.error)
            reason: str = f"skipped: validation failed ({validation.error})"
            return MeasurementRecord(
                adapter_name=name,
                artifact_name=artifact,
                validation=validation,
                encode=TimedResult.skipped(reason),
                decode=TimedResult.skipped(reason),
            )

        # Stage 2: encode
        encoded: TimedResult = run_timed(
            lambda: _require_bytes(adapter.encode(dataset)),
            label=f"{name} encode",
        )
        if not encoded.succeeded:
            return MeasurementRecord(
                adapter_name=name,
                artifact_name=artifact,
                validation=validation,
                encode=encoded,
                decode=TimedResult.skipped("skipped: encode failed"),
            )
        payload: bytes = encoded.value

        # Stage 3: persist and size
        size_bytes: int | None = None
        persistence_error: str | None = None
        try:
            self._storage.write(artifact, payload)
            size_bytes = self._storage.size(artifact)
        except PersistenceError as exc:
            persistence_error = str(exc) or type(exc).__name__
            logger.warning("%s persistence failed: %s", name, persistence_error)
        except Exception as exc:
            # Storage implementations outside infra may not wrap their errors
            persistence_error = f"{type(exc).__name__}: {exc}"
            logger.warning("%s persistence failed: %s", name, persistence_error)
        else:
            logger.debug("%s persisted %s (%d bytes)", name, artifact, size_bytes)

        # Stage 4: decode in-memory payload
        decoded: TimedResult = run_timed(
            lambda: adapter.decode(payload),
            label=f"{name} decode",
        )

        # Stage 5: round-trip equality
        round_trip_equal: bool = decoded.succeeded and self._compare(
            name=name, expected=dataset, actual=decoded.value,
        )
        if decoded.succeeded and not round_trip_equal:
            logger.warning("%s round-trip mismatch", name)

        # Stage 6: optional readback of the persisted artifact
        readback_equal: bool | None = None
        if self._config.verify_readback and size_bytes is not None:
            readback_equal = self._readback(
                adapter=adapter, artifact=artifact, dataset=dataset,
            )

        return MeasurementRecord(
            adapter_name=name,
            artifact_name=artifact,
            validation=validation,
            encode=encoded,
            decode=decoded,
            size_bytes=size_bytes,
            persistence_error=persistence_error,
            round_trip_equal=round_trip_equal,
            readback_equal=readback_equal,
        )

    # ------------------------------------------------------------------
    # Stage helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(adapter: FormatAdapter, dataset: Any) -> ValidationOutcome:
        """Call ``validate`` and turn a raising validator into a failure."""
        try:
            outcome: ValidationOutcome = adapter.validate(dataset)
        except Exception as exc:
            logger.exception("%s validate raised", adapter.name)
            return ValidationOutcome.failure(f"{type(exc).__name__}: {exc}")
        if not isinstance(outcome, ValidationOutcome):
            return ValidationOutcome.failure(
                f"validate returned {type(outcome).__name__}, "
                "expected ValidationOutcome"
            )
        return outcome

    def _compare(self, name: str, expected: Any, actual: Any) -> bool:
        """Apply the equality relation; a raising relation means unequal."""
        try:
            return bool(self._equality(expected, actual))
        except Exception:
            logger.exception("%s equality check raised", name)
            return False

    def _readback(self, adapter: FormatAdapter, artifact: str, dataset: Any) -> bool:
        """Decode the persisted artifact and compare it to ``dataset``."""
        try:
            stored: bytes = self._storage.read(artifact)
            value: Any = adapter.decode(stored)
        except Exception as exc:
            logger.warning(
                "%s readback of %s failed: %s: %s",
                adapter.name,
                artifact,
                type(exc).__name__,
                exc,
            )
            return False
        return self._compare(name=adapter.name, expected=dataset, actual=value)


def _require_bytes(value: Any) -> bytes:
    """Reject encoders that return something other than bytes."""
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    if not isinstance(value, bytes):
        raise TypeError(f"encode returned {type(value).__name__}, expected bytes")
    return value
