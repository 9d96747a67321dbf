"""Tests for the /proc/partitions parser."""

from __future__ import annotations

from pathlib import Path

import pytest

from server_info.sources.partitions import (
    parse_partition_rows,
    parse_partitions,
    read_partitions,
)

SAMPLE_PARTITIONS = """\
major minor  #blocks  name

   8        0  488386584 sda
   8        1     204800 sda1
   8        2  488180736 sda2
 259        0  976762584 nvme0n1
"""


@pytest.fixture()
def fake_proc(tmp_path: Path) -> Path:
    """Create a fake /proc tree with partitions."""
    (tmp_path / "partitions").write_text(SAMPLE_PARTITIONS)
    return tmp_path


class TestParsePartitionRows:
    """Tests for the header-driven row parsing."""

    def test_header_zip(self) -> None:
        rows = parse_partition_rows(["major minor #blocks name", "8 1 204800 sda1"])
        assert rows == [{"major": 8, "minor": 1, "#blocks": 204800, "name": "sda1"}]

    def test_reordered_header(self) -> None:
        rows = parse_partition_rows(["name #blocks", "sda 10"])
        assert rows == [{"name": "sda", "#blocks": 10}]

    def test_short_row(self) -> None:
        rows = parse_partition_rows(["major minor #blocks name", "8 1"])
        assert rows == [{"major": 8, "minor": 1}]

    def test_non_ascii_digits_stay_strings(self) -> None:
        rows = parse_partition_rows(["major minor #blocks name", "8 1 ²04800 sda1"])
        assert rows == [{"major": 8, "minor": 1, "#blocks": "²04800", "name": "sda1"}]

    def test_non_ascii_digits_degrade_to_zero_blocks(self) -> None:
        (record,) = parse_partitions(["major minor #blocks name", "8 1 ²04800 sda1"])
        assert record.name == "sda1"
        assert record.blocks == 0

    def test_record_is_hashable(self) -> None:
        (record,) = parse_partitions(["major minor #blocks name", "8 1 204800 sda1"])
        assert record in {record}


class TestParsePartitions:
    """Tests for read_partitions()."""

    def test_rows(self, fake_proc: Path) -> None:
        names = [p.name for p in read_partitions(fake_proc)]
        assert names == ["sda", "sda1", "sda2", "nvme0n1"]

    def test_record(self, fake_proc: Path) -> None:
        sda1 = read_partitions(fake_proc)[1]
        assert sda1.major == 8
        assert sda1.minor == 1
        assert sda1.blocks == 204800
        assert sda1.bytes == 204800 * 1024
        assert sda1.id == "8:1"

    def test_raw_fields(self, fake_proc: Path) -> None:
        nvme = read_partitions(fake_proc)[3]
        assert nvme.fields == {
            "major": 259,
            "minor": 0,
            "#blocks": 976762584,
            "name": "nvme0n1",
        }

    def test_row_without_name_skipped(self) -> None:
        assert parse_partitions(["major minor #blocks name", "8 1 100"]) == []

    def test_as_dict(self, fake_proc: Path) -> None:
        sda1 = read_partitions(fake_proc)[1]
        assert sda1.as_dict(format_sizes=True) == {
            "id": "8:1",
            "blocks": 204800,
            "bytes": 209715200,
            "formatted": "200 MB",
        }

    def test_header_only(self) -> None:
        assert parse_partitions(["major minor  #blocks  name", ""]) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_partitions(tmp_path / "nonexistent") == []
