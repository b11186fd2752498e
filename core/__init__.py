"""Core domain layer for the serialization format benchmark.

This package provides the format adapter contract, the error taxonomy,
immutable measurement models, the timed operation runner, the
orchestrator that drives a run, and the size comparator. Concrete
adapters and storage live in :mod:`infra`.
"""

from core.adapter import FormatAdapter
from core.comparator import compare_records, savings_percent
from core.equality import values_equal
from core.errors import (
    ArtifactNotFoundError,
    BenchmarkError,
    DecodingError,
    EncodingError,
    PersistenceError,
    ValidationError,
)
from core.orchestrator import BenchmarkConfig, BenchmarkOrchestrator
from core.records import (
    BenchmarkReport,
    ComparisonResult,
    MeasurementRecord,
    OperationStatus,
    TimedResult,
    ValidationOutcome,
)
from core.storage import Storage
from core.timing import run_timed

__all__: list[str] = [
    "ArtifactNotFoundError",
    "BenchmarkConfig",
    "BenchmarkError",
    "BenchmarkOrchestrator",
    "BenchmarkReport",
    "ComparisonResult",
    "DecodingError",
    "EncodingError",
    "FormatAdapter",
    "MeasurementRecord",
    "OperationStatus",
    "PersistenceError",
    "Storage",
    "TimedResult",
    "ValidationError",
    "ValidationOutcome",
    "compare_records",
    "run_timed",
    "savings_percent",
    "values_equal",
]
