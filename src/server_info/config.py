"""Configuration for a server-info session."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

# Linux mounts 50+ file systems on a plain web server; only these are
# reported as volumes unless overridden.
DEFAULT_FILE_SYSTEM_TYPES = ["ext", "ext2", "ext3", "ext4", "fat32", "ntfs", "vboxsf"]


@dataclass
class InfoConfig:
    """Runtime configuration for :class:`~server_info.info.ServerInfo`."""

    # Base path of the proc filesystem
    proc_root: Path = field(default_factory=lambda: Path("/proc"))

    # File system types included in volume info (empty = defaults)
    file_system_types: list[str] = field(
        default_factory=lambda: list(DEFAULT_FILE_SYSTEM_TYPES)
    )

    # Multiplier from meminfo values (kB) to bytes
    meminfo_scale: int = 1000

    def __post_init__(self) -> None:
        self.proc_root = Path(self.proc_root)
        if not self.file_system_types:
            self.file_system_types = list(DEFAULT_FILE_SYSTEM_TYPES)
