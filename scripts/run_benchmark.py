"""Serialization benchmark runner for JSON, XML and Protobuf.

Builds the three-employee sample dataset, registers the JSON, XML and
Protobuf adapters in that order, runs them once each, and prints the
results table (or the JSON report) to stdout. Progress logging goes to
stderr.

Usage:
    python -m scripts.run_benchmark
    python -m scripts.run_benchmark --output-dir out --verify-readback
    python -m scripts.run_benchmark --in-memory --json

Output:
    Formatted results table to stdout (``--json`` for the JSON report).
    Exit code 0 if every format round-tripped, exit code 1 otherwise.
"""

import argparse
import logging
import sys

from core.employees import EmployeeList, build_sample_dataset
from core.orchestrator import BenchmarkConfig, BenchmarkOrchestrator
from core.records import BenchmarkReport
from core.storage import Storage
from infra.json_adapter import JsonAdapter
from infra.protobuf_adapter import ProtobufAdapter
from infra.storage import FileStorage, MemoryStorage
from infra.xml_adapter import XmlAdapter
from scripts.report import format_report, report_to_json

logger: logging.Logger = logging.getLogger(__name__)


def build_orchestrator(
    storage: Storage,
    verify_readback: bool = False,
) -> BenchmarkOrchestrator:
    """Create an orchestrator with the JSON, XML and Protobuf adapters.

    Args:
        storage: Artifact storage.
        verify_readback: Decode persisted artifacts after the run.

    Returns:
        Orchestrator ready for :meth:`BenchmarkOrchestrator.run`.
    """
    orchestrator: BenchmarkOrchestrator = BenchmarkOrchestrator(
        storage=storage,
        config=BenchmarkConfig(
            verify_readback=verify_readback,
            dataset_schema=EmployeeList,
        ),
    )
    orchestrator.register(JsonAdapter(indent=2))
    orchestrator.register(XmlAdapter(root_tag="root", list_tags={"employee"}))
    orchestrator.register(ProtobufAdapter(schema=EmployeeList))
    return orchestrator


def main(argv: list[str] | None = None) -> int:
    """Run the benchmark and print the report.

    Returns:
        Process exit code.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Compare JSON, XML and Protobuf encodings of a sample dataset",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=".",
        help="Directory for data.json / data.xml / data.proto (default: .)",
    )
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="Keep artifacts in memory instead of writing files",
    )
    parser.add_argument(
        "--verify-readback",
        action="store_true",
        help="Decode each persisted artifact and compare with the dataset",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the JSON report instead of the table",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for progress output on stderr (default: INFO)",
    )
    args: argparse.Namespace = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    storage: Storage = (
        MemoryStorage() if args.in_memory else FileStorage(args.output_dir)
    )
    orchestrator: BenchmarkOrchestrator = build_orchestrator(
        storage=storage,
        verify_readback=args.verify_readback,
    )

    dataset = build_sample_dataset()
    logger.info("Sample dataset prepared with %d employees", len(dataset["employee"]))

    report: BenchmarkReport = orchestrator.run(dataset)

    if args.json:
        print(report_to_json(report=report))
    else:
        print(format_report(report=report))

    return 0 if all(r.succeeded for r in report.records) else 1


if __name__ == "__main__":
    sys.exit(main())
