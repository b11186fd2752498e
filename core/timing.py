"""Timed operation runner.

Wraps a no-argument callable, measures its wall-clock duration with
``time.perf_counter_ns()`` and returns a :class:`~core.records.TimedResult`
whatever happens.

Error isolation:
    Any ``Exception`` raised by the operation is captured as data
    (status ``FAILED``, message, exception class name) together with the
    time elapsed before the failure. Nothing propagates past this
    boundary, so one format's failure never aborts measurement of the
    others. ``BaseException`` subclasses that are not ``Exception``
    (``KeyboardInterrupt``, ``SystemExit``) are not caught.

Single-shot:
    No warm-up and no retries. A failed attempt is reported as-is.

Example:
    >>> result = run_timed(lambda: b"payload", label="json encode")
    >>> result.succeeded, result.value
    (True, b'payload')
    >>> failed = run_timed(lambda: 1 / 0, label="broken")
    >>> failed.status.value, failed.error_type
    ('FAILED', 'ZeroDivisionError')
"""

import logging
import time
from typing import Any, Callable

from core.records import OperationStatus, TimedResult

logger: logging.Logger = logging.getLogger(__name__)

Operation = Callable[[], Any]
"""A no-argument callable wrapping one encode or decode call."""


def run_timed(operation: Operation, label: str = "operation") -> TimedResult:
    """Execute ``operation`` once and time it.

    Args:
        operation: No-argument callable to execute.
        label: Name used in log messages (e.g. ``"protobuf decode"``).

    Returns:
        :class:`TimedResult` with the return value on success, or the
        captured failure on error. ``elapsed_ns`` is always set.
    """
    t0: int = time.perf_counter_ns()
    try:
        value: Any = operation()
    except Exception as exc:
        elapsed_ns: int = time.perf_counter_ns() - t0
        logger.warning(
            "%s failed after %.3f ms: %s: %s",
            label,
            elapsed_ns / 1_000_000,
            type(exc).__name__,
            exc,
        )
        return TimedResult(
            status=OperationStatus.FAILED,
            error=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            elapsed_ns=elapsed_ns,
        )
    elapsed_ns = time.perf_counter_ns() - t0

    logger.debug("%s completed in %.3f ms", label, elapsed_ns / 1_000_000)
    return TimedResult(
        status=OperationStatus.SUCCEEDED,
        value=value,
        elapsed_ns=elapsed_ns,
    )
