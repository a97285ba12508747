"""CLI main module: inspect one literal and print its report.

Usage:
    numinspect 0.1
    numinspect 0.1 single
    numinspect 0.1 double --json
    python -m numinspect.cli 1e-3 double --config numinspect.yaml
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from enum import IntEnum
from pathlib import Path

from numinspect.core.config import InspectorConfig, load_config
from numinspect.core.errors import ConfigError, ParseError, UnsupportedTypeError
from numinspect.core.inspector import ByteOrder, InspectionReport
from numinspect.core.logging import get_logger, setup_logging
from numinspect.core.pipeline import inspect_literal

logger = get_logger(__name__)

LABEL_WIDTH = 20


class ExitCode(IntEnum):
    """Process exit status for each outcome."""

    OK = 0
    HELP = 1
    NO_REPORT = 3
    USAGE_ERROR = -1
    UNSUPPORTED_TYPE = -2
    PARSE_ERROR = -3
    CONFIG_ERROR = -4


class UsageError(Exception):
    """Command line could not be parsed."""

    pass


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="numinspect",
        description="number inspector: show how a literal is stored as an IEEE-754 float",
        epilog="Negative literals such as -inf may need a preceding '--'.",
        add_help=False,
    )
    parser.add_argument(
        "-h",
        "--help",
        action="store_true",
        help="Show this help text",
    )
    parser.add_argument(
        "value",
        nargs="?",
        help="The value to inspect",
    )
    parser.add_argument(
        "type",
        nargs="?",
        default=None,
        help="The type of value: single (float), double or auto ([deduce]); default from config, else auto",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML/JSON config file",
    )
    parser.add_argument(
        "--byte-order",
        choices=[order.value for order in ByteOrder],
        default=None,
        help="Storage byte order for the bit string (default: native)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject characters after the numeric prefix",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the report as JSON",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Append JSON lines log records to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug messages to stderr",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> InspectorConfig:
    """Load the config file, if any, and apply command-line overrides."""
    config = load_config(args.config) if args.config else InspectorConfig()

    overrides: dict[str, object] = {}
    if args.byte_order:
        overrides["byte_order"] = ByteOrder(args.byte_order)
    if args.strict:
        overrides["strict_parsing"] = True
    if overrides:
        config = config.model_copy(update=overrides)

    logger.debug("resolved config", {"config_file": args.config, **config.model_dump(mode="json")})
    return config


def _number(value: float, precision: int) -> str:
    if math.isnan(value):
        return "-nan" if math.copysign(1.0, value) < 0 else "nan"
    return format(value, f".{precision}g")


def format_report(report: InspectionReport, precision: int) -> str:
    """Render a report in labelled, right-aligned columns."""

    def row(label: str, text: str) -> str:
        return f"{label + ': ':>{LABEL_WIDTH}}{text}"

    lines = [
        "",
        row("Input", report.literal),
        row("Floating Point", str(report.round_trips).lower()),
    ]
    if report.rendered is not None:
        lines.append(row("Internal", report.rendered))
    lines.append("")

    if report.exponent_value is None:
        fp_format = f"{_number(report.significand, precision)} * {report.radix}^undefined"
    else:
        fp_format = f"{_number(report.significand, precision)} * {report.radix}^{report.exponent_value}"

    lines.extend(
        [
            row("bits", f"[{report.sign} {report.exponent} {report.mantissa}]"),
            row("size", f"{report.size_bits} bits"),
            row("machine epsilon", _number(report.epsilon, precision)),
            row("nextafter", _number(report.adjacent, precision)),
            row("fp-format", fp_format),
        ]
    )
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """Inspect ``args.value`` and print the report."""
    try:
        config = resolve_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    selector = args.type or config.default_type
    try:
        report = inspect_literal(args.value, selector, config)
    except UnsupportedTypeError as e:
        logger.info("unsupported type", {"type": str(selector)})
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.UNSUPPORTED_TYPE
    except ParseError as e:
        logger.info("parse failed", {"literal": args.value, "reason": e.reason})
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.PARSE_ERROR

    if report is None:
        logger.info("no report produced", {"literal": args.value})
        print(f"No report: {args.value!r} has no decimal point; pass a type to inspect it", file=sys.stderr)
        return ExitCode.NO_REPORT

    logger.info(
        "inspected literal",
        {
            "literal": report.literal,
            "width": report.width.value,
            "bits": report.bits,
            "round_trips": report.round_trips,
        },
    )
    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        print(format_report(report, config.render_precision))
    return ExitCode.OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return ExitCode.USAGE_ERROR

    if args.help:
        parser.print_help()
        return ExitCode.HELP
    if args.value is None:
        print(f"{parser.prog}: error: the following arguments are required: value", file=sys.stderr)
        return ExitCode.USAGE_ERROR

    setup_logging(args.log_file, level=logging.DEBUG if args.verbose else logging.WARNING)
    return int(run(args))


if __name__ == "__main__":
    sys.exit(main())
