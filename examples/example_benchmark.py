"""Example: embed the benchmark and register an extra adapter.

Demonstrates that new formats plug in without touching the orchestrator:
a compact JSON adapter is registered next to the pretty-printed one,
and the run is reported programmatically from the structured records
instead of the ASCII table.

Usage:
    python -m examples.example_benchmark
    python -m examples.example_benchmark --employees 500

Artifacts are kept in memory; nothing is written to disk.
"""

import argparse
import logging

from core.employees import EmployeeList
from core.orchestrator import BenchmarkConfig, BenchmarkOrchestrator
from core.records import BenchmarkReport
from infra.json_adapter import JsonAdapter
from infra.protobuf_adapter import ProtobufAdapter
from infra.storage import MemoryStorage
from infra.xml_adapter import XmlAdapter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger: logging.Logger = logging.getLogger(__name__)


def build_dataset(count: int) -> dict:
    """Generate ``count`` employees with varied salaries and roles."""
    return {
        "employee": [
            {
                "id": i,
                "name": f"Employee {i}",
                "salary": 10_000 + (i * 137) % 20_000,
                "email": f"employee{i}@entreprise.ma",
                "is_manager": i % 7 == 0,
            }
            for i in range(1, count + 1)
        ],
    }


def main() -> None:
    """Run four adapters and log the per-format outcome."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Benchmark JSON, compact JSON, XML and Protobuf",
    )
    parser.add_argument(
        "--employees",
        type=int,
        default=100,
        help="Number of generated employees (default: 100)",
    )
    args: argparse.Namespace = parser.parse_args()

    orchestrator: BenchmarkOrchestrator = BenchmarkOrchestrator(
        storage=MemoryStorage(),
        config=BenchmarkConfig(dataset_schema=EmployeeList, verify_readback=True),
    )
    orchestrator.register(JsonAdapter(indent=2))
    orchestrator.register(JsonAdapter(indent=None, name="json-compact"))
    orchestrator.register(XmlAdapter(list_tags={"employee"}))
    orchestrator.register(ProtobufAdapter(schema=EmployeeList))

    report: BenchmarkReport = orchestrator.run(build_dataset(args.employees))

    for rec in report.records:
        logger.info(
            "%-12s encode=%.3fms decode=%.3fms size=%s round_trip=%s",
            rec.adapter_name,
            rec.encode.elapsed_ms,
            rec.decode.elapsed_ms,
            rec.size_bytes,
            rec.round_trip_equal,
        )
    for comparison in report.comparisons:
        if comparison.baseline == "json":
            logger.info(
                "%s vs json: %s%%",
                comparison.candidate,
                comparison.savings_percent,
            )


if __name__ == "__main__":
    main()
