"""Unit tests for core.comparator module.

Tests the savings formula, round-half-away-from-zero rounding, the
zero-baseline policy, and pair generation over record sets.
"""

import math

import pytest

from core.comparator import compare_records, savings_percent
from core.records import (
    ComparisonResult,
    MeasurementRecord,
    OperationStatus,
    TimedResult,
    ValidationOutcome,
)


def _record(name: str, size: int | None) -> MeasurementRecord:
    ok: TimedResult = TimedResult(status=OperationStatus.SUCCEEDED, elapsed_ns=1)
    return MeasurementRecord(
        adapter_name=name,
        artifact_name=f"data.{name}",
        validation=ValidationOutcome.success(),
        encode=ok,
        decode=ok,
        size_bytes=size,
        round_trip_equal=size is not None,
    )


# ---------------------------------------------------------------------------
# Savings Formula
# ---------------------------------------------------------------------------


class TestSavingsPercent:
    """Tests for savings_percent."""

    def test_candidate_smaller(self) -> None:
        """100 → 40 saves 60%."""
        assert savings_percent(100, 40) == 60.0

    def test_candidate_larger(self) -> None:
        """40 → 100 is -150%."""
        assert savings_percent(40, 100) == -150.0

    def test_equal_sizes(self) -> None:
        """Equal sizes save nothing."""
        assert savings_percent(250, 250) == 0.0

    def test_zero_baseline_undefined(self) -> None:
        """A zero baseline is undefined, never NaN or inf."""
        result: float | None = savings_percent(0, 40)
        assert result is None

    def test_zero_both_undefined(self) -> None:
        """0 vs 0 is still undefined."""
        assert savings_percent(0, 0) is None

    def test_zero_candidate(self) -> None:
        """An empty candidate saves 100%."""
        assert savings_percent(10, 0) == 100.0

    def test_rounds_to_one_decimal(self) -> None:
        """1/3 savings rounds to 33.3."""
        assert savings_percent(3, 2) == 33.3

    def test_half_rounds_away_from_zero_positive(self) -> None:
        """12.25% rounds up to 12.3."""
        # (400 - 351) / 400 * 100 = 12.25
        assert savings_percent(400, 351) == 12.3

    def test_half_rounds_away_from_zero_negative(self) -> None:
        """-12.25% rounds down to -12.3."""
        # (400 - 449) / 400 * 100 = -12.25
        assert savings_percent(400, 449) == -12.3

    def test_result_is_finite(self) -> None:
        """Large ratios stay finite."""
        result: float | None = savings_percent(1, 10**9)
        assert result is not None
        assert math.isfinite(result)

    def test_negative_size_rejected(self) -> None:
        """Negative sizes raise ValueError."""
        with pytest.raises(ValueError, match="non-negative"):
            savings_percent(-1, 10)


# ---------------------------------------------------------------------------
# Pair Generation
# ---------------------------------------------------------------------------


class TestCompareRecords:
    """Tests for compare_records."""

    def test_all_ordered_pairs(self) -> None:
        """Three sized records give six ordered pairs."""
        results: tuple[ComparisonResult, ...] = compare_records([
            _record("json", 500),
            _record("xml", 800),
            _record("protobuf", 100),
        ])
        pairs: list[tuple[str, str]] = [(r.baseline, r.candidate) for r in results]
        assert pairs == [
            ("json", "xml"),
            ("json", "protobuf"),
            ("xml", "json"),
            ("xml", "protobuf"),
            ("protobuf", "json"),
            ("protobuf", "xml"),
        ]

    def test_values(self) -> None:
        """Each pair carries sizes and savings."""
        results: tuple[ComparisonResult, ...] = compare_records([
            _record("json", 100),
            _record("protobuf", 40),
        ])
        forward: ComparisonResult = results[0]
        assert forward.baseline_size == 100
        assert forward.candidate_size == 40
        assert forward.savings_percent == 60.0
        assert results[1].savings_percent == -150.0

    def test_records_without_size_excluded(self) -> None:
        """Failed records never appear in comparisons."""
        results: tuple[ComparisonResult, ...] = compare_records([
            _record("json", 100),
            _record("broken", None),
            _record("protobuf", 40),
        ])
        names: set[str] = {r.baseline for r in results} | {r.candidate for r in results}
        assert "broken" not in names
        assert len(results) == 2

    def test_zero_size_baseline_undefined(self) -> None:
        """A zero-size record is an undefined baseline."""
        results: tuple[ComparisonResult, ...] = compare_records([
            _record("empty", 0),
            _record("json", 10),
        ])
        assert results[0].defined is False
        assert results[1].savings_percent == 100.0

    def test_fewer_than_two(self) -> None:
        """A single sized record yields no comparisons."""
        assert compare_records([_record("json", 10)]) == ()
        assert compare_records([]) == ()
