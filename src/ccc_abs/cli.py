"""
CCC ABS CLI entry point.

This module provides the command-line interface for running tactics
against an Azure Storage Account.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from ccc_abs import __version__
from ccc_abs.observability.logging import configure_logging

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="ccc-abs",
        description="CCC ABS - Common Cloud Controls assessment for Azure Blob Storage",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ccc-abs {__version__}",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )

    parser.add_argument(
        "--log-format",
        choices=["human", "json"],
        default="human",
        help="Log output format (default: human)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Run a tactic against a storage account")
    run_parser.add_argument(
        "--config",
        help="Path to a JSON or YAML configuration file",
    )
    run_parser.add_argument(
        "--resource-id",
        help="Resource ID of the storage account to assess",
    )
    run_parser.add_argument(
        "--allowed-regions",
        help="Comma-separated list of allowed regions, the first is used for test deployments",
    )
    run_parser.add_argument(
        "--tactic",
        help="Tactic to run (default: tlp_red)",
    )
    run_parser.add_argument(
        "--invasive",
        action="store_true",
        default=None,
        help="Allow tests that create and delete resources in the account",
    )
    run_parser.add_argument(
        "--output",
        choices=["json", "table"],
        help="Output format (default: table)",
    )
    run_parser.add_argument(
        "-o",
        "--output-file",
        help="Write the report to a file instead of stdout",
    )

    # tactics command
    subparsers.add_parser("tactics", help="List tactics and their test requirements")

    # version command
    subparsers.add_parser("version", help="Show version")

    return parser


def format_table(data: list[dict[str, Any]]) -> str:
    """
    Format data as ASCII table.

    Args:
        data: List of dictionaries

    Returns:
        Formatted table string
    """
    if not data:
        return ""

    headers = list(data[0].keys())

    widths = {h: len(str(h)) for h in headers}
    for row in data:
        for h in headers:
            widths[h] = max(widths[h], len(str(row.get(h, ""))))

    lines = [
        " | ".join(str(h).ljust(widths[h]) for h in headers),
        "-+-".join("-" * widths[h] for h in headers),
    ]
    for row in data:
        lines.append(" | ".join(str(row.get(h, "")).ljust(widths[h]) for h in headers))

    return "\n".join(lines)


def format_report(report: Any, format_type: str) -> str:
    """
    Format a RunReport for output.

    Args:
        report: RunReport of a finished run
        format_type: Output format (json, table)

    Returns:
        Formatted string
    """
    if format_type == "json":
        return report.to_json()

    rows = []
    for test_set_id, test_set in report.test_sets.items():
        rows.append({
            "id": f"{test_set_id} (provisional)" if test_set.provisional else test_set_id,
            "result": "PASS" if test_set.passed else "FAIL",
            "message": test_set.message,
        })
        for test_id, test in test_set.tests.items():
            rows.append({
                "id": f"  {test_id}",
                "result": "PASS" if test.passed else "FAIL",
                "message": test.message,
            })

    summary = (
        f"Tactic {report.tactic_name}: {report.passed_count} passed, "
        f"{report.failed_count} failed"
    )
    return f"{format_table(rows)}\n\n{summary}"


def load_run_config(args: argparse.Namespace) -> Any:
    """
    Build the assessment configuration for the run command.

    The configuration file, or the CCC_ABS_* environment variables when no
    file is given, is loaded first; command line options override it.
    """
    from ccc_abs.config import AssessmentConfig, load_config_from_env

    if args.config:
        config = AssessmentConfig.from_file(args.config)
    else:
        config = load_config_from_env()

    if args.resource_id:
        config.storage_account_resource_id = args.resource_id.lower()
    if args.allowed_regions:
        config.allowed_regions = [
            r.strip() for r in args.allowed_regions.split(",") if r.strip()
        ]
    if args.tactic:
        config.tactic = args.tactic
    if args.invasive is not None:
        config.invasive = args.invasive
    if args.output:
        config.output = args.output

    return config


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run a tactic.

    Steps:
        1. Load configuration
        2. Initialize the engine against the target account
        3. Run the tactic
        4. Print or write the report

    Returns:
        Exit code (0 when the run completed, 1 when it could not start or the
        report could not be written)
    """
    from ccc_abs import bootstrap as engine_bootstrap
    from ccc_abs.catalog.tactics import build_registry
    from ccc_abs.cloud.base import CloudProviderError
    from ccc_abs.engine import AssessmentRunner

    try:
        config = load_run_config(args)
        registry = build_registry()
        if config.tactic not in registry:
            print(f"Error: Unknown tactic '{config.tactic}'")
            print(f"Valid tactics: {', '.join(registry.names())}")
            return 1

        env = engine_bootstrap.bootstrap(config)
    except CloudProviderError as e:
        logger.error(f"Initialization failed: {e}")
        print(f"Error: {e}")
        return 1

    report = AssessmentRunner(env, registry).run(config.tactic)
    output = format_report(report, config.output)

    if args.output_file:
        try:
            with open(args.output_file, "w", encoding="utf-8") as f:
                f.write(output)
        except OSError as e:
            logger.error(f"Failed to write report to {args.output_file}: {e}")
            print(f"Error: Failed to write report to {args.output_file}: {e}")
            return 1
        print(f"Report written to: {args.output_file}")
    else:
        print(output)

    return 0


def cmd_tactics(args: argparse.Namespace) -> int:
    """List registered tactics with their test requirements."""
    from ccc_abs.catalog.tactics import build_registry

    registry = build_registry()
    for name in registry.names():
        definitions = registry.get(name)
        print(f"{name} ({len(definitions)} test requirements)")
        for definition in definitions:
            suffix = " (provisional)" if definition.provisional else ""
            print(f"  {definition.id}{suffix}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = "INFO"
    if args.verbose:
        level = "DEBUG"
    configure_logging(level=level, format=args.log_format)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "version":
        print(f"CCC ABS version {__version__}")
        return 0

    command_handlers = {
        "run": cmd_run,
        "tactics": cmd_tactics,
    }

    handler = command_handlers.get(args.command)
    if handler:
        return handler(args)

    print(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
