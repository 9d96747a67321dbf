"""Kernel identity strings from /proc/version and /proc/version_signature."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path

from ..procfs import read_lines


@dataclass(frozen=True)
class VersionInfo:
    """First line of each version pseudo-file, ``None`` when absent.

    ``version_signature`` only exists on Ubuntu kernels.
    """

    version: str | None = None
    version_signature: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return asdict(self)


def _first_line(path: Path) -> str | None:
    lines = read_lines(path)
    return lines[0] if lines else None


def read_version_info(proc_root: str | Path = "/proc") -> VersionInfo:
    root = Path(proc_root)
    return VersionInfo(
        version=_first_line(root / "version"),
        version_signature=_first_line(root / "version_signature"),
    )
