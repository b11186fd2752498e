"""Human-readable and JSON rendering of a :class:`~core.records.BenchmarkReport`.

The core emits structured records only; everything display-related
lives here.

Example:
    >>> from scripts.report import format_report
    >>> print(format_report(report))  # doctest: +SKIP
    ======================================================================
    SERIALIZATION BENCHMARK RESULTS
    ...
"""

import os
import sys

from core.records import (
    BenchmarkReport,
    ComparisonResult,
    MeasurementRecord,
    OperationStatus,
    TimedResult,
)

_WIDTH: int = 78


# ---------------------------------------------------------------------------
# Status helpers
# ---------------------------------------------------------------------------


def record_status(record: MeasurementRecord) -> str:
    """Short status label for a record's first failing stage.

    Example:
        >>> record_status(ok_record)  # doctest: +SKIP
        'OK'
    """
    if not record.validation.ok:
        return "INVALID"
    if not record.encode.succeeded:
        return "ENCODE FAILED"
    if not record.decode.succeeded:
        return "DECODE FAILED"
    if record.size_bytes is None:
        return "PERSIST FAILED"
    if not record.round_trip_equal:
        return "MISMATCH"
    return "OK"


def describe_comparison(comparison: ComparisonResult) -> str:
    """One-line sentence for a comparison.

    Example:
        >>> describe_comparison(ComparisonResult(
        ...     baseline="json", candidate="protobuf",
        ...     baseline_size=100, candidate_size=40, savings_percent=60.0,
        ... ))
        'protobuf is 60.0% more compact than json'
    """
    pct: float | None = comparison.savings_percent
    if pct is None:
        return (
            f"{comparison.candidate} vs {comparison.baseline}: undefined "
            f"({comparison.baseline} size is 0)"
        )
    if pct > 0:
        return f"{comparison.candidate} is {pct:.1f}% more compact than {comparison.baseline}"
    if pct < 0:
        return f"{comparison.candidate} is {-pct:.1f}% larger than {comparison.baseline}"
    return f"{comparison.candidate} is the same size as {comparison.baseline}"


def _ms(result: TimedResult) -> str:
    if result.status is OperationStatus.SKIPPED:
        return "-"
    return f"{result.elapsed_ms:.3f}"


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------


def format_report(report: BenchmarkReport) -> str:
    """Generate the ASCII results table and size-savings section.

    Args:
        report: Completed benchmark report.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []

    lines.append("=" * _WIDTH)
    lines.append("SERIALIZATION BENCHMARK RESULTS")
    lines.append("=" * _WIDTH)
    lines.append(
        f"Environment:  {sys.platform}, CPython {sys.version.split()[0]}, "
        f"{os.cpu_count()} CPU"
    )
    lines.append(f"Adapters:     {len(report.records)}")
    lines.append("=" * _WIDTH)
    lines.append("")

    lines.append(
        f"{'Format':<12} {'Status':<15} {'Encode (ms)':>12} "
        f"{'Decode (ms)':>12} {'Size (B)':>10} {'Round-trip':>12}"
    )
    lines.append("-" * _WIDTH)
    for rec in report.records:
        size: str = "-" if rec.size_bytes is None else f"{rec.size_bytes:,}"
        round_trip: str = "yes" if rec.round_trip_equal else "no"
        if rec.readback_equal is not None:
            round_trip += "/file ok" if rec.readback_equal else "/file bad"
        lines.append(
            f"{rec.adapter_name:<12} {record_status(rec):<15} "
            f"{_ms(rec.encode):>12} {_ms(rec.decode):>12} "
            f"{size:>10} {round_trip:>12}"
        )

    failures: list[str] = []
    for rec in report.records:
        if not rec.validation.ok:
            failures.append(f"  {rec.adapter_name}: validation: {rec.validation.error}")
            continue
        if rec.encode.status is OperationStatus.FAILED:
            failures.append(
                f"  {rec.adapter_name}: encode: {rec.encode.error_type}: {rec.encode.error}"
            )
        if rec.persistence_error is not None:
            failures.append(f"  {rec.adapter_name}: storage: {rec.persistence_error}")
        if rec.decode.status is OperationStatus.FAILED:
            failures.append(
                f"  {rec.adapter_name}: decode: {rec.decode.error_type}: {rec.decode.error}"
            )
        if rec.decode.succeeded and not rec.round_trip_equal:
            failures.append(f"  {rec.adapter_name}: decoded value differs from dataset")

    if failures:
        lines.append("")
        lines.append("FAILURES")
        lines.append("-" * _WIDTH)
        lines.extend(failures)

    lines.append("")
    lines.append("SIZE SAVINGS")
    lines.append("-" * _WIDTH)
    if report.comparisons:
        for comparison in report.comparisons:
            lines.append(f"  {describe_comparison(comparison)}")
    else:
        lines.append("  (fewer than two formats produced a size)")

    lines.append("")
    lines.append("=" * _WIDTH)
    lines.append("Single-shot timings: no warm-up, no confidence intervals.")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# JSON Serialization
# ---------------------------------------------------------------------------


def report_to_json(report: BenchmarkReport) -> str:
    """Serialize a report to JSON.

    Encoded payloads and decoded values are excluded.
    """
    return report.model_dump_json(indent=2)


def report_from_json(json_str: str) -> BenchmarkReport:
    """Deserialize a report produced by :func:`report_to_json`."""
    return BenchmarkReport.model_validate_json(json_str)
