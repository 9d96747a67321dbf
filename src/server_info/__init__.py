"""CPU, memory, disk and uptime information read from procfs.

:class:`ServerInfo` is the entry point; the parsers for the individual
pseudo-files live in :mod:`server_info.sources`.
"""

from server_info.config import InfoConfig
from server_info.helpers import format_bytes
from server_info.info import ServerInfo
from server_info.load import CpuLoad, calculate_cpu_load

__all__ = [
    "CpuLoad",
    "InfoConfig",
    "ServerInfo",
    "calculate_cpu_load",
    "format_bytes",
]
