"""Cumulative CPU and scheduler counters from /proc/stat.

A single read is only meaningful when compared with a later one; see
:mod:`server_info.load` for the delta computation.
"""

from __future__ import annotations

import contextlib
from collections.abc import Iterable
from dataclasses import dataclass, field, fields
from pathlib import Path

from ..procfs import parse_digits, read_lines


@dataclass(frozen=True)
class CpuTimes:
    """Time-in-state counters of one ``cpu*`` row, in jiffies."""

    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0

    @property
    def idle_time(self) -> int:
        # guest time is already part of user/nice in the kernel's accounting,
        # so it is counted with idle here to avoid adding it twice.
        return self.idle + self.guest + self.guest_nice

    @property
    def active_time(self) -> int:
        return (
            self.user
            + self.nice
            + self.system
            + self.irq
            + self.softirq
            + self.steal
            + self.iowait
        )

    @property
    def total_time(self) -> int:
        return self.active_time + self.idle_time


@dataclass(frozen=True)
class StatSnapshot:
    """One read of /proc/stat.

    ``cpus`` is keyed by row id (``"cpu"`` for the aggregate row, then
    ``"cpu0"``, ``"cpu1"``, ...) in file order.
    """

    cpus: dict[str, CpuTimes] = field(default_factory=dict, hash=False)
    ctxt: int = 0
    btime: int = 0
    processes: int = 0
    procs_running: int = 0
    procs_blocked: int = 0
    intr: int = 0


_COUNTER_NAMES = [f.name for f in fields(CpuTimes)]

# Scalar lines parsed by digit extraction, tolerant of odd spacing.
_SCALAR_PREFIXES = ("ctxt", "btime", "processes", "procs_running", "procs_blocked")


def parse_cpu_line(line: str) -> tuple[str, CpuTimes]:
    """Parse a ``cpu`` or ``cpuN`` row.

    Fields (all in jiffies):
        user, nice, system, idle, iowait, irq, softirq, steal, guest,
        guest_nice

    Older kernels expose fewer columns; those and any non-numeric column
    are zero.

    Returns:
        Tuple of (row id, counters).
    """
    parts = line.split()
    values: list[int] = []
    for raw in parts[1 : len(_COUNTER_NAMES) + 1]:
        try:
            values.append(int(raw))
        except ValueError:
            values.append(0)
    # Pad with zeros if the kernel exposes fewer fields
    while len(values) < len(_COUNTER_NAMES):
        values.append(0)
    return parts[0], CpuTimes(**dict(zip(_COUNTER_NAMES, values)))


def parse_stat(lines: Iterable[str]) -> StatSnapshot:
    """Parse /proc/stat lines into a :class:`StatSnapshot`."""
    cpus: dict[str, CpuTimes] = {}
    scalars: dict[str, int] = {}

    for line in lines:
        if line.startswith("cpu"):
            row_id, times = parse_cpu_line(line)
            cpus[row_id] = times
        elif line.startswith("intr"):
            # First field after "intr" is the total interrupt count
            with contextlib.suppress(IndexError, ValueError):
                scalars["intr"] = int(line.split()[1])
        else:
            for prefix in _SCALAR_PREFIXES:
                if line.startswith(prefix):
                    scalars[prefix] = parse_digits(line)
                    break

    return StatSnapshot(cpus=cpus, **scalars)


def read_stat(proc_root: str | Path = "/proc") -> StatSnapshot:
    """Read /proc/stat.  Missing file gives an empty snapshot."""
    return parse_stat(read_lines(Path(proc_root) / "stat"))
