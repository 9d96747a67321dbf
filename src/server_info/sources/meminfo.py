"""Memory accounting from /proc/meminfo.

Values in the file are kibibytes (``MemTotal:  16384000 kB``).  They are
scaled to bytes with a configurable factor; the default of 1000 keeps the
figures this tool has always reported (see DESIGN.md).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from pathlib import Path

from ..helpers import format_bytes, percent
from ..procfs import parse_digits, read_lines

DEFAULT_SCALE = 1000


def parse_meminfo(lines: Iterable[str], scale: int = DEFAULT_SCALE) -> dict[str, int]:
    """Parse meminfo lines into ``{key: bytes}``.

    Lines without a colon are skipped.  Hugepage counters such as
    ``HugePages_Total`` carry no unit but are scaled all the same.
    """
    table: dict[str, int] = {}
    for line in lines:
        key, sep, value = line.partition(":")
        if not sep or not key.strip():
            continue
        table[key.strip()] = parse_digits(value) * scale
    return table


def read_meminfo(
    proc_root: str | Path = "/proc",
    scale: int = DEFAULT_SCALE,
) -> dict[str, int]:
    """Read /proc/meminfo.  Missing file gives ``{}``."""
    return parse_meminfo(read_lines(Path(proc_root) / "meminfo"), scale)


@dataclass(frozen=True)
class MemoryUsage:
    """Headline memory figures in bytes."""

    total: int
    free: int
    available: int
    used: int
    cached: int
    active: int
    inactive: int
    swap_total: int
    swap_free: int

    @classmethod
    def from_table(cls, table: Mapping[str, int]) -> MemoryUsage:
        total = table.get("MemTotal", 0)
        available = table.get("MemAvailable", 0)
        return cls(
            total=total,
            free=table.get("MemFree", 0),
            available=available,
            used=total - available,
            cached=table.get("Cached", 0),
            active=table.get("Active", 0),
            inactive=table.get("Inactive", 0),
            swap_total=table.get("SwapTotal", 0),
            swap_free=table.get("SwapFree", 0),
        )

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    def formatted(self, precision: int = 2) -> dict[str, int | str]:
        return {k: format_bytes(v, precision) for k, v in asdict(self).items()}


@dataclass(frozen=True)
class MemoryLoad:
    """RAM and swap utilization in percent."""

    load: float
    swap_load: float

    @classmethod
    def from_table(cls, table: Mapping[str, int], rounding: int = 2) -> MemoryLoad:
        usage = MemoryUsage.from_table(table)
        swap_used = usage.swap_total - usage.swap_free
        return cls(
            load=percent(usage.used, usage.total, rounding),
            swap_load=percent(swap_used, usage.swap_total, rounding),
        )

    def as_dict(self) -> dict[str, float]:
        return asdict(self)
