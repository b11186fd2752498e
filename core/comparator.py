"""Pairwise size comparison over a completed set of measurement records.

Formula:
    For baseline A and candidate B:
    ``savings = (size_A - size_B) / size_A * 100``, rounded to one
    decimal place with round-half-away-from-zero. Arithmetic is done in
    ``Decimal`` so ``.x5`` boundaries round exactly rather than by the
    binary float representation.

    - Positive: B is smaller than A.
    - Negative: B is larger than A (valid, reportable).
    - ``size_A == 0``: undefined, reported as ``None`` (never NaN or inf).

Example:
    >>> savings_percent(100, 40)
    60.0
    >>> savings_percent(40, 100)
    -150.0
    >>> savings_percent(0, 10) is None
    True
"""

from decimal import ROUND_HALF_UP, Decimal
from itertools import permutations
from typing import Sequence

from core.records import ComparisonResult, MeasurementRecord

_ONE_DECIMAL: Decimal = Decimal("0.1")


def savings_percent(size_a: int, size_b: int) -> float | None:
    """Relative size savings of ``size_b`` against baseline ``size_a``.

    Args:
        size_a: Baseline size in bytes.
        size_b: Candidate size in bytes.

    Returns:
        Savings percentage rounded to one decimal, or ``None`` when
        ``size_a`` is zero.

    Raises:
        ValueError: If either size is negative.
    """
    if size_a < 0 or size_b < 0:
        raise ValueError(
            f"sizes must be non-negative, got {size_a} and {size_b}"
        )
    if size_a == 0:
        return None

    ratio: Decimal = Decimal(size_a - size_b) * 100 / Decimal(size_a)
    # ROUND_HALF_UP in decimal rounds ties away from zero for both signs
    return float(ratio.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compare_records(
    records: Sequence[MeasurementRecord],
) -> tuple[ComparisonResult, ...]:
    """Compare every ordered pair of records that have a persisted size.

    Records whose ``size_bytes`` is ``None`` (validation, encode, or
    persistence failure) are excluded. Pairs are produced in
    registration order: baseline outer, candidate inner.

    Args:
        records: The complete record set of one run.

    Returns:
        Tuple of :class:`ComparisonResult`, one per ordered pair.
    """
    sized: list[MeasurementRecord] = [
        r for r in records if r.size_bytes is not None
    ]
    return tuple(
        ComparisonResult(
            baseline=a.adapter_name,
            candidate=b.adapter_name,
            baseline_size=a.size_bytes,
            candidate_size=b.size_bytes,
            savings_percent=savings_percent(a.size_bytes, b.size_bytes),
        )
        for a, b in permutations(sized, 2)
    )
