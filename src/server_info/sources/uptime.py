"""System uptime from /proc/uptime.

The file holds two real numbers: seconds since boot and the summed idle
time of all CPUs.  Only the first one is used.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..procfs import read_lines


@dataclass(frozen=True)
class UptimeSample:
    """Uptime observed at ``now``."""

    now: datetime
    uptime_seconds: int
    started: datetime

    @property
    def current_unix(self) -> int:
        return int(self.now.timestamp())

    @property
    def started_unix(self) -> int:
        return int(self.started.timestamp())

    def _parts(self) -> tuple[int, int, int, int]:
        days, rest = divmod(self.uptime_seconds, 86400)
        hours, rest = divmod(rest, 3600)
        minutes, seconds = divmod(rest, 60)
        return days, hours, minutes, seconds

    @property
    def uptime(self) -> str:
        """Uptime as ``D:HH:MM:SS``."""
        days, hours, minutes, seconds = self._parts()
        return f"{days}:{hours:02d}:{minutes:02d}:{seconds:02d}"

    @property
    def uptime_text(self) -> str:
        days, hours, minutes, seconds = self._parts()
        return (
            f"{days} days, {hours} hours, {minutes} minutes "
            f"and {seconds} seconds"
        )

    def as_dict(self) -> dict[str, int | str]:
        return {
            "current_unix": self.current_unix,
            "uptime_unix": self.uptime_seconds,
            "started_unix": self.started_unix,
            "current": self.now.strftime("%Y-%m-%d %H:%M:%S"),
            "started": self.started.strftime("%Y-%m-%d %H:%M:%S"),
            "uptime": self.uptime,
            "uptime_text": self.uptime_text,
        }


def read_uptime(
    proc_root: str | Path = "/proc",
    now: float | None = None,
) -> UptimeSample | None:
    """Read /proc/uptime.

    Args:
        proc_root: Base path to the proc filesystem.
        now: Unix time to measure against (default: current time).

    Returns:
        An :class:`UptimeSample`, or ``None`` if the file is missing,
        empty, or does not start with a finite number.

    Both ``now`` and the uptime are truncated to whole seconds, so
    ``current_unix`` and ``started_unix`` carry no sub-second part.
    """
    lines = read_lines(Path(proc_root) / "uptime")
    if not lines or not lines[0].strip():
        return None

    try:
        uptime_seconds = int(float(lines[0].split()[0]))
    except (ValueError, OverflowError):
        return None

    now_unix = int(time.time() if now is None else now)
    return UptimeSample(
        now=datetime.fromtimestamp(now_unix),
        uptime_seconds=uptime_seconds,
        started=datetime.fromtimestamp(now_unix - uptime_seconds),
    )
