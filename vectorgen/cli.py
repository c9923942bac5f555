"""
vectorgen command line.

Usage:
    vectorgen tests/canonical/le_test_vectors.json pdl_canonical > test_canonical.py
    vectorgen vectors.json decoders.le -p Packet_Scalar_Field -p Packet_Enum_Field
    vectorgen vectors.json decoders.le --all-packets -o test_canonical.py

Environment:
    VECTORGEN_PACKETS: comma-separated allow-list used when no -p is given.
    VECTORGEN_LOG_LEVEL: log level (default: info). Logs go to stderr.

Exit status is 0 on success, 1 when generation fails and 2 on usage errors.
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from vectorgen.emit import emit_tests
from vectorgen.errors import GenerationError, IoError
from vectorgen.log import configure_logging
from vectorgen.naming import (
    DEFAULT_ACCESSOR_FORMAT,
    AccessorNaming,
    accessor_format,
    check_module,
)
from vectorgen.selection import DEFAULT_PACKETS, select_vectors
from vectorgen.vectors import load_vectors

PACKETS_ENV = "VECTORGEN_PACKETS"

log = structlog.get_logger()


@dataclass
class GeneratorConfig:
    """Resolved settings for one generator run."""

    input_path: Path
    module: str

    # None selects every packet
    packets: tuple[str, ...] | None = DEFAULT_PACKETS

    accessor: AccessorNaming = field(default_factory=accessor_format)

    # None writes to stdout
    output: Path | None = None


def packets_from_env() -> tuple[str, ...] | None:
    """Read the allow-list from VECTORGEN_PACKETS, if set."""
    value = os.environ.get(PACKETS_ENV, "")
    names = tuple(name.strip() for name in value.split(",") if name.strip())
    return names or None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vectorgen",
        description="Generate pytest unit tests from canonical packet test vectors.",
    )
    parser.add_argument("input", type=Path, help="JSON file with test vectors")
    parser.add_argument(
        "module",
        type=_module_name,
        help="dotted module providing the <Name>Packet decoder classes",
    )

    packets = parser.add_mutually_exclusive_group()
    packets.add_argument(
        "-p",
        "--packet",
        dest="packets",
        action="append",
        metavar="NAME",
        help=f"packet to generate tests for (repeatable, default: {', '.join(DEFAULT_PACKETS)})",
    )
    packets.add_argument(
        "--all-packets",
        action="store_true",
        help="generate tests for every packet in the input",
    )

    parser.add_argument(
        "--accessor-format",
        default=DEFAULT_ACCESSOR_FORMAT,
        metavar="FMT",
        help="accessor name template for a field (default: %(default)s)",
    )
    parser.add_argument("-o", "--output", type=Path, help="write to a file instead of stdout")
    parser.add_argument("--log-level", help="log level (default: $VECTORGEN_LOG_LEVEL or info)")
    return parser


def _module_name(value: str) -> str:
    try:
        return check_module(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Resolve parsed arguments and the environment into a GeneratorConfig.

    The allow-list comes from -p, then VECTORGEN_PACKETS, then the default.

    Raises:
        ValueError: If the accessor format is malformed.
    """
    if args.all_packets:
        packets = None
    elif args.packets:
        packets = tuple(args.packets)
    else:
        packets = packets_from_env() or DEFAULT_PACKETS

    return GeneratorConfig(
        input_path=args.input,
        module=args.module,
        packets=packets,
        accessor=accessor_format(args.accessor_format),
        output=args.output,
    )


def generate(config: GeneratorConfig) -> str:
    """Run the load, select and emit pipeline and return the module text."""
    log.info(
        "reading_vectors",
        input=str(config.input_path),
        packets="all" if config.packets is None else len(config.packets),
    )

    groups = load_vectors(config.input_path)
    selection = select_vectors(groups, config.packets)
    return emit_tests(selection, config.module, config.accessor, source=config.input_path.name)


def write_output(code: str, output: Path | None) -> None:
    """Write the generated module in a single write."""
    if output is None:
        sys.stdout.write(code)
        sys.stdout.flush()
        return

    try:
        output.write_text(code, encoding="utf-8")
    except OSError as e:
        raise IoError(output, str(e), action="write") from e
    log.info("output_written", path=str(output), size=len(code))


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = config_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        write_output(generate(config), config.output)
    except GenerationError as e:
        log.error("generation_failed", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


def run() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    run()
