"""Query session over procfs.

:class:`ServerInfo` ties the source parsers together behind one object.
Every query re-reads its pseudo-file except memory, which is read once
per session: create a new session when fresh memory figures are needed.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterable

from .config import InfoConfig
from .load import CpuLoad, calculate_cpu_load
from .sources.cpuinfo import read_cpuinfo
from .sources.meminfo import MemoryLoad, MemoryUsage, read_meminfo
from .sources.mounts import MountRecord, read_mounts, volumes
from .sources.partitions import PartitionRecord, read_partitions
from .sources.stat import StatSnapshot, read_stat
from .sources.uptime import UptimeSample, read_uptime
from .sources.version import VersionInfo, read_version_info


class ServerInfo:
    """One session of system queries against a proc root.

    Nothing is validated at construction; a missing proc root simply makes
    every query come back empty.
    """

    def __init__(
        self,
        config: InfoConfig | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._config = config or InfoConfig()
        # Wait between the two CPU load snapshots
        self._sleep = sleep or time.sleep

        # Memory table, populated once on first use and never reset
        self._memory_lock = threading.Lock()
        self._memory_cache: dict[str, int] | None = None

    @classmethod
    def get(cls, proc_root: str = "/proc") -> ServerInfo:
        """Session with default settings for *proc_root*."""
        return cls(InfoConfig(proc_root=proc_root))

    @property
    def config(self) -> InfoConfig:
        return self._config

    @property
    def file_system_types(self) -> list[str]:
        """File system types reported by :meth:`volumes_info`."""
        return list(self._config.file_system_types)

    # ------------------------------------------------------------------
    # Static information
    # ------------------------------------------------------------------

    def uptime(self) -> UptimeSample | None:
        return read_uptime(self._config.proc_root)

    def version_info(self) -> VersionInfo:
        return read_version_info(self._config.proc_root)

    def cpu_info(
        self,
        core: int | None = None,
        fields: Iterable[str] | None = None,
    ) -> list[dict[str, str]] | dict[str, str]:
        """Per-core identity records, or a single core's record.

        Args:
            core: Return only this core (``{}`` if out of range).
            fields: Normalized keys to keep, e.g. ``["model_name"]``.
        """
        cores = read_cpuinfo(self._config.proc_root, fields)
        if core is None:
            return cores
        if 0 <= core < len(cores):
            return cores[core]
        return {}

    # ------------------------------------------------------------------
    # CPU counters
    # ------------------------------------------------------------------

    def cpu_snapshot(self) -> StatSnapshot:
        return read_stat(self._config.proc_root)

    def cpu_load(
        self,
        sample_seconds: float = 1,
        rounding: int | None = 2,
    ) -> dict[str, CpuLoad]:
        """Sample CPU load over *sample_seconds*.

        Blocks for the whole interval between the two snapshots.
        """
        first = self.cpu_snapshot()
        self._sleep(sample_seconds)
        second = self.cpu_snapshot()
        return calculate_cpu_load(first, second, rounding)

    # ------------------------------------------------------------------
    # Memory
    # ------------------------------------------------------------------

    def memory_info(self) -> dict[str, int]:
        """Full meminfo table in bytes, cached for the session."""
        with self._memory_lock:
            if self._memory_cache is None:
                self._memory_cache = read_meminfo(
                    self._config.proc_root, self._config.meminfo_scale
                )
            return dict(self._memory_cache)

    def memory_usage(self) -> MemoryUsage | None:
        """Headline memory figures, ``None`` if meminfo is unavailable."""
        table = self.memory_info()
        if not table:
            return None
        return MemoryUsage.from_table(table)

    def memory_load(self, rounding: int = 2) -> MemoryLoad:
        return MemoryLoad.from_table(self.memory_info(), rounding)

    # ------------------------------------------------------------------
    # Disks
    # ------------------------------------------------------------------

    def mounts(self) -> list[MountRecord]:
        return read_mounts(self._config.proc_root)

    def volumes_info(self) -> list[MountRecord]:
        """Mounts of the configured file system types with disk usage."""
        return volumes(self.mounts(), self._config.file_system_types)

    def partitions(self) -> list[PartitionRecord]:
        return read_partitions(self._config.proc_root)

    def disk_info(self) -> dict[str, PartitionRecord]:
        """Partitions keyed by device name."""
        return {p.name: p for p in self.partitions()}
