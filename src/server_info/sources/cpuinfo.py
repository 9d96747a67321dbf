"""Per-core CPU identity from /proc/cpuinfo.

The file is a sequence of ``key : value`` blocks, one per logical CPU,
separated by blank lines.  Keys come with mixed case, embedded spaces and
tab padding (``model name\\t: ...``), so they are normalized to
``model_name`` style identifiers.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..procfs import read_lines


def normalize_key(raw: str) -> str:
    """``"cpu MHz\\t\\t"`` -> ``"cpu_mhz"``."""
    return raw.strip().lower().replace(" ", "_")


def parse_cpuinfo(
    lines: Iterable[str],
    fields: Iterable[str] | None = None,
) -> list[dict[str, str]]:
    """Group cpuinfo lines into one record per core.

    Args:
        lines: Raw lines of /proc/cpuinfo.
        fields: Normalized keys to keep.  ``None`` or empty keeps all.

    Returns:
        One dict per core, in file order.  A core whose keys were all
        filtered out is still present as an empty dict so that list
        indices keep matching core ids.
    """
    wanted = set(fields) if fields else None
    cores: list[dict[str, str]] = []
    current: dict[str, str] = {}
    in_block = False

    for line in lines:
        if not line.strip():
            if in_block:
                cores.append(current)
                current = {}
                in_block = False
            continue

        in_block = True
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = normalize_key(key)
        if wanted is None or key in wanted:
            current[key] = value.strip()

    if in_block:
        cores.append(current)

    return cores


def read_cpuinfo(
    proc_root: str | Path = "/proc",
    fields: Iterable[str] | None = None,
) -> list[dict[str, str]]:
    """Read and parse /proc/cpuinfo.  Missing file gives ``[]``."""
    return parse_cpuinfo(read_lines(Path(proc_root) / "cpuinfo"), fields)
