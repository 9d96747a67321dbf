"""CPU utilization from two /proc/stat snapshots.

Utilization is the share of elapsed jiffies spent outside idle between
the two reads.  The computation is pure; taking the snapshots and waiting
between them is up to the caller (see ``ServerInfo.cpu_load``).

References:
    https://en.wikipedia.org/wiki/Load_(computing)
    https://stackoverflow.com/questions/23367857
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from .sources.stat import CpuTimes, StatSnapshot


@dataclass(frozen=True)
class CpuLoad:
    """Utilization of one ``cpu*`` row in percent."""

    label: str
    load: float

    def as_dict(self) -> dict[str, str | float]:
        return asdict(self)


def cpu_label(row_id: str) -> str:
    """Display label for a row id: ``cpu`` -> ``CPU``, ``cpu3`` -> ``Core#3``."""
    suffix = row_id[3:]
    if suffix.isdigit():
        return f"Core#{int(suffix)}"
    return "CPU"


def utilization(first: CpuTimes, second: CpuTimes) -> float:
    """Fraction of non-idle time between two counter reads.

    When no time elapsed (or the counters went backwards) the result is
    ``total_delta - idle_delta`` instead of a ratio, so it never divides
    by zero.
    """
    total_delta = second.total_time - first.total_time
    idle_delta = second.idle_time - first.idle_time
    if total_delta > 0:
        return (total_delta - idle_delta) / total_delta
    return float(total_delta - idle_delta)


def calculate_cpu_load(
    first: StatSnapshot,
    second: StatSnapshot,
    rounding: int | None = 2,
) -> dict[str, CpuLoad]:
    """Compute per-row CPU load between two snapshots.

    Args:
        first: Earlier snapshot.
        second: Later snapshot.
        rounding: Decimal places of the percentage, ``None`` to keep full
            precision.

    Returns:
        ``{row_id: CpuLoad}`` in the order of *first*.  Rows missing from
        either snapshot (a CPU hot-plugged between reads) are left out.
    """
    results: dict[str, CpuLoad] = {}
    for row_id, before in first.cpus.items():
        after = second.cpus.get(row_id)
        if after is None:
            continue
        pct = utilization(before, after) * 100
        if rounding is not None:
            pct = round(pct, rounding)
        results[row_id] = CpuLoad(label=cpu_label(row_id), load=pct)
    return results
