"""Block device partitions from /proc/partitions.

The table is header-driven::

    major minor  #blocks  name

       8        0  488386584 sda
       8        1     524288 sda1

Field names come from the header row and values are zipped to them by
position, so a reordered header is honoured and a malformed one silently
mislabels the columns.  ``#blocks`` counts 1 KiB blocks.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..helpers import format_bytes
from ..procfs import read_lines

BLOCK_SIZE = 1024

# ASCII only: str.isdigit() also accepts digits int() rejects, such as "²"
_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class PartitionRecord:
    """One partition row, plus the raw header-zipped fields."""

    name: str
    major: int
    minor: int
    blocks: int
    fields: dict[str, int | str] = field(default_factory=dict, hash=False)

    @property
    def id(self) -> str:
        return f"{self.major}:{self.minor}"

    @property
    def bytes(self) -> int:
        return self.blocks * BLOCK_SIZE

    def as_dict(self, format_sizes: bool = False) -> dict[str, int | str]:
        data: dict[str, int | str] = {
            "id": self.id,
            "blocks": self.blocks,
            "bytes": self.bytes,
        }
        if format_sizes:
            data["formatted"] = format_bytes(self.bytes)
        return data


def _coerce(value: str) -> int | str:
    return int(value) if _DIGITS.fullmatch(value) else value


def _as_int(value: int | str | None) -> int:
    return value if isinstance(value, int) else 0


def parse_partition_rows(lines: Iterable[str]) -> list[dict[str, int | str]]:
    """Zip each data row to the header names.

    Purely numeric values become ints.  A row shorter than the header
    lacks the trailing keys; extra values are dropped.
    """
    header: list[str] | None = None
    rows: list[dict[str, int | str]] = []
    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        if header is None:
            header = tokens
            continue
        rows.append({key: _coerce(value) for key, value in zip(header, tokens)})
    return rows


def parse_partitions(lines: Iterable[str]) -> list[PartitionRecord]:
    """Parse partition table lines.  Rows without a ``name`` are skipped."""
    records: list[PartitionRecord] = []
    for row in parse_partition_rows(lines):
        name = row.get("name")
        if name is None or name == "":
            continue
        records.append(
            PartitionRecord(
                name=str(name),
                major=_as_int(row.get("major")),
                minor=_as_int(row.get("minor")),
                blocks=_as_int(row.get("#blocks")),
                fields=row,
            )
        )
    return records


def read_partitions(proc_root: str | Path = "/proc") -> list[PartitionRecord]:
    """Read /proc/partitions.  Missing file gives ``[]``."""
    return parse_partitions(read_lines(Path(proc_root) / "partitions"))
