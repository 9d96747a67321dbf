"""Mount table from /proc/mounts and live usage of mounted volumes.

A typical server has dozens of mounts (proc, sysfs, cgroup, tmpfs, ...),
so volumes are restricted to an allow-list of file system types.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import asdict, dataclass, replace
from pathlib import Path

from ..helpers import format_bytes, percent
from ..procfs import read_lines

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MountRecord:
    """One row of the mount table.

    The space fields are only set for volumes (see :func:`volumes`).
    """

    mount_point: str
    device: str
    file_system_type: str
    total_bytes: int | None = None
    free_bytes: int | None = None
    used_bytes: int | None = None
    used_percent: float | None = None

    def as_dict(self, format_sizes: bool = False) -> dict[str, object]:
        data: dict[str, object] = asdict(self)
        if self.total_bytes is None:
            for key in ("total_bytes", "free_bytes", "used_bytes", "used_percent"):
                del data[key]
        elif format_sizes:
            for key in ("total_bytes", "free_bytes", "used_bytes"):
                data[key] = format_bytes(data[key])  # type: ignore[arg-type]
        return data


def parse_mounts(lines: Iterable[str]) -> list[MountRecord]:
    """Parse mount table lines.

    Format: ``device mount_point fs_type options dump pass``.  Only the
    first three columns are kept; rows with fewer are skipped.
    """
    mounts: list[MountRecord] = []
    for line in lines:
        parts = line.split()
        if len(parts) < 3:
            continue
        mounts.append(
            MountRecord(
                mount_point=parts[1],
                device=parts[0],
                file_system_type=parts[2],
            )
        )
    return mounts


def read_mounts(proc_root: str | Path = "/proc") -> list[MountRecord]:
    """Read /proc/mounts.  Missing file gives ``[]``."""
    return parse_mounts(read_lines(Path(proc_root) / "mounts"))


def volumes(
    mounts: Iterable[MountRecord],
    file_system_types: Iterable[str],
) -> list[MountRecord]:
    """Filter mounts by file system type and add their disk usage.

    This is the one place that queries the live filesystem instead of a
    pseudo-file.  Mounts whose usage cannot be queried are skipped.
    """
    allowed = set(file_system_types)
    result: list[MountRecord] = []
    for mount in mounts:
        if mount.file_system_type not in allowed:
            continue
        try:
            usage = shutil.disk_usage(mount.mount_point)
        except OSError as exc:
            log.debug("Cannot query usage of %s: %s", mount.mount_point, exc)
            continue
        # total - free: root-reserved blocks count as used
        used = usage.total - usage.free
        result.append(
            replace(
                mount,
                total_bytes=usage.total,
                free_bytes=usage.free,
                used_bytes=used,
                used_percent=percent(used, usage.total),
            )
        )
    return result
