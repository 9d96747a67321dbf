"""Command-line interface for server-info."""

from __future__ import annotations

import argparse
import json
import logging
import math
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .config import DEFAULT_FILE_SYSTEM_TYPES, InfoConfig

if TYPE_CHECKING:
    from .info import ServerInfo

SECTIONS = ["uptime", "version", "cpu", "cpu-load", "memory", "disks", "volumes"]

# cpu-load blocks for the sample interval, so it is opt-in
DEFAULT_SECTIONS = [s for s in SECTIONS if s != "cpu-load"]


def _non_negative_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if not (math.isfinite(value) and value >= 0):
        raise argparse.ArgumentTypeError(f"must be a finite number >= 0, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="server-info",
        description="Report CPU, memory, disk and uptime information from procfs",
    )
    parser.add_argument(
        "sections",
        nargs="*",
        metavar="SECTION",
        help=f"Sections to report: {', '.join(SECTIONS)} "
        f"(default: all except cpu-load)",
    )
    parser.add_argument(
        "--proc-root",
        type=Path,
        default=Path("/proc"),
        help="Base path of the proc filesystem (default: /proc)",
    )
    parser.add_argument(
        "--fs-type",
        action="append",
        default=[],
        help="File system type to include in volumes, repeatable "
        f"(default: {','.join(DEFAULT_FILE_SYSTEM_TYPES)})",
    )
    parser.add_argument(
        "-s",
        "--sample-seconds",
        type=_non_negative_float,
        default=1.0,
        help="Wait between the two CPU load samples (default: 1.0)",
    )
    parser.add_argument(
        "-r",
        "--rounding",
        type=int,
        default=2,
        help="Decimal places for percentages (default: 2)",
    )
    parser.add_argument(
        "--bytes",
        action="store_true",
        help="Report raw byte counts instead of formatted sizes",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    return parser


def collect(
    info: ServerInfo,
    sections: list[str],
    sample_seconds: float = 1.0,
    rounding: int = 2,
    format_sizes: bool = True,
) -> dict[str, object]:
    """Gather the requested sections into a JSON-serializable dict."""
    report: dict[str, object] = {}

    for section in sections:
        if section == "uptime":
            sample = info.uptime()
            report["uptime"] = sample.as_dict() if sample is not None else None
        elif section == "version":
            report["version"] = info.version_info().as_dict()
        elif section == "cpu":
            report["cpu"] = info.cpu_info()
        elif section == "cpu-load":
            loads = info.cpu_load(sample_seconds, rounding)
            report["cpu_load"] = {k: v.as_dict() for k, v in loads.items()}
        elif section == "memory":
            usage = info.memory_usage()
            if usage is None:
                report["memory"] = None
            else:
                report["memory"] = {
                    "usage": usage.formatted() if format_sizes else usage.as_dict(),
                    "load": info.memory_load(rounding).as_dict(),
                }
        elif section == "disks":
            report["disks"] = {
                name: p.as_dict(format_sizes) for name, p in info.disk_info().items()
            }
        elif section == "volumes":
            report["volumes"] = [v.as_dict(format_sizes) for v in info.volumes_info()]

    return report


def main(argv: list[str] | None = None) -> None:
    """Entry point for the server-info CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    unknown = [s for s in args.sections if s not in SECTIONS]
    if unknown:
        parser.error(f"unknown section(s): {', '.join(unknown)}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    # Import here so --help works without touching the package internals
    from .info import ServerInfo

    info = ServerInfo(
        InfoConfig(proc_root=args.proc_root, file_system_types=args.fs_type)
    )
    try:
        report = collect(
            info,
            args.sections or DEFAULT_SECTIONS,
            sample_seconds=args.sample_seconds,
            rounding=args.rounding,
            format_sizes=not args.bytes,
        )
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)

    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
