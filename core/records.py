"""Measurement models produced by a benchmark run.

All models are Pydantic-based with ``frozen=True`` so a record cannot be
altered once the orchestrator has assembled it. Payload values (encoded
bytes, decoded reconstructions) are carried in memory for inspection but
excluded from JSON serialization.

Timing convention:
    Durations are stored as integer nanoseconds from
    ``time.perf_counter_ns()`` (monotonic). ``elapsed_ms`` is derived
    for display and always has at least millisecond resolution.

Example:
    >>> from core.records import OperationStatus, TimedResult
    >>> result = TimedResult(
    ...     status=OperationStatus.SUCCEEDED,
    ...     value=b"{}",
    ...     elapsed_ns=1_500_000,
    ... )
    >>> result.elapsed_ms
    1.5
    >>> result.succeeded
    True
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from core import errors


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class OperationStatus(str, Enum):
    """Outcome of a single timed operation.

    Attributes:
        SUCCEEDED: The operation returned a value.
        FAILED: The operation raised; the cause is captured as data.
        SKIPPED: The operation was never attempted (validation failed,
            or there was no encoded payload to decode).
    """

    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationOutcome(BaseModel):
    """Result of ``FormatAdapter.validate()``.

    Attributes:
        ok: ``True`` if the dataset satisfies the adapter's constraints.
        error: Human-readable cause when ``ok`` is ``False``.

    Example:
        >>> ValidationOutcome.success().ok
        True
        >>> ValidationOutcome.failure("employee.0.id: not an int").error
        'employee.0.id: not an int'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ok: bool = Field(description="True if the dataset passed validation")
    error: str | None = Field(
        default=None,
        description="Validation failure cause (None on success)",
    )

    @classmethod
    def success(cls) -> "ValidationOutcome":
        """Build a passing outcome."""
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> "ValidationOutcome":
        """Build a failing outcome carrying ``error``."""
        return cls(ok=False, error=error)

    def raise_for_failure(self) -> None:
        """Raise :class:`core.errors.ValidationError` if not ``ok``.

        For callers that prefer exceptions over inspecting the outcome.
        The orchestrator never calls this.
        """
        if not self.ok:
            raise errors.ValidationError(self.error or "validation failed")


# ---------------------------------------------------------------------------
# Timed Result
# ---------------------------------------------------------------------------


class TimedResult(BaseModel):
    """Outcome of one timed encode or decode operation.

    Attributes:
        status: Whether the operation succeeded, failed, or was skipped.
        value: Operation result (``bytes`` for encode, reconstructed
            value for decode). ``None`` unless succeeded. Excluded from
            JSON output.
        error: Failure or skip reason.
        error_type: Exception class name for failures (e.g.
            ``"DecodingError"``).
        elapsed_ns: Wall-clock duration up to completion or failure.
            Zero for skipped operations.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    status: OperationStatus = Field(description="Operation outcome")
    value: Any = Field(
        default=None,
        exclude=True,
        description="Encoded bytes or decoded value (in-memory only)",
    )
    error: str | None = Field(
        default=None,
        description="Failure cause or skip reason",
    )
    error_type: str | None = Field(
        default=None,
        description="Exception class name for failures",
    )
    elapsed_ns: int = Field(ge=0, description="Elapsed duration (ns)")

    @classmethod
    def skipped(cls, reason: str) -> "TimedResult":
        """Build a SKIPPED result with zero elapsed time."""
        return cls(status=OperationStatus.SKIPPED, error=reason, elapsed_ns=0)

    @property
    def succeeded(self) -> bool:
        """``True`` if the operation returned a value."""
        return self.status is OperationStatus.SUCCEEDED

    @property
    def elapsed_ms(self) -> float:
        """Elapsed duration in milliseconds."""
        return self.elapsed_ns / 1_000_000


# ---------------------------------------------------------------------------
# Measurement Record
# ---------------------------------------------------------------------------


class MeasurementRecord(BaseModel):
    """Complete timing, size, and correctness outcome for one adapter.

    Created exactly once per adapter per run by
    :class:`~core.orchestrator.BenchmarkOrchestrator`.

    Attributes:
        adapter_name: Registered adapter name.
        artifact_name: Storage name the payload was (or would be)
            persisted under.
        validation: Outcome of ``validate()``.
        encode: Timed encode result.
        decode: Timed decode result.
        size_bytes: Persisted artifact size. ``None`` when encode or
            persistence failed; never zero as a stand-in for absence.
        persistence_error: Storage failure cause, if any.
        round_trip_equal: ``True`` iff decode succeeded and the decoded
            value equals the original dataset.
        readback_equal: Result of decoding the persisted artifact and
            comparing it to the dataset. ``None`` when readback
            verification is disabled or there is no artifact.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    adapter_name: str = Field(min_length=1, description="Adapter name")
    artifact_name: str = Field(min_length=1, description="Storage name")
    validation: ValidationOutcome = Field(description="Validation outcome")
    encode: TimedResult = Field(description="Timed encode result")
    decode: TimedResult = Field(description="Timed decode result")
    size_bytes: int | None = Field(
        default=None,
        ge=0,
        description="Persisted size in bytes (None if absent)",
    )
    persistence_error: str | None = Field(
        default=None,
        description="Storage failure cause",
    )
    round_trip_equal: bool = Field(
        default=False,
        description="decode(encode(dataset)) equals dataset",
    )
    readback_equal: bool | None = Field(
        default=None,
        description="decode(read(artifact)) equals dataset (None if unchecked)",
    )

    @property
    def succeeded(self) -> bool:
        """``True`` if every stage passed and the round-trip held."""
        return (
            self.validation.ok
            and self.encode.succeeded
            and self.decode.succeeded
            and self.size_bytes is not None
            and self.round_trip_equal
        )


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


class ComparisonResult(BaseModel):
    """Relative size savings of ``candidate`` against ``baseline``.

    Attributes:
        baseline: Baseline adapter name (A).
        candidate: Candidate adapter name (B).
        baseline_size: Persisted size of A in bytes.
        candidate_size: Persisted size of B in bytes.
        savings_percent: ``(A - B) / A * 100`` rounded to one decimal.
            Negative when B is larger. ``None`` when A is zero.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    baseline: str = Field(min_length=1, description="Baseline adapter")
    candidate: str = Field(min_length=1, description="Candidate adapter")
    baseline_size: int = Field(ge=0, description="Baseline size (bytes)")
    candidate_size: int = Field(ge=0, description="Candidate size (bytes)")
    savings_percent: float | None = Field(
        default=None,
        description="Size savings of candidate vs baseline (%)",
    )

    @property
    def defined(self) -> bool:
        """``False`` when the baseline size is zero."""
        return self.savings_percent is not None


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------


class BenchmarkReport(BaseModel):
    """Everything a run hands to the reporter.

    Attributes:
        records: One record per registered adapter, in registration order.
        comparisons: Pairwise size comparisons over the full record set.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    records: tuple[MeasurementRecord, ...] = Field(
        description="Per-adapter records in registration order",
    )
    comparisons: tuple[ComparisonResult, ...] = Field(
        default=(),
        description="Pairwise size comparisons",
    )

    def record(self, adapter_name: str) -> MeasurementRecord:
        """Look up the record for ``adapter_name``.

        Raises:
            KeyError: If no adapter with that name was run.
        """
        for rec in self.records:
            if rec.adapter_name == adapter_name:
                return rec
        raise KeyError(adapter_name)
