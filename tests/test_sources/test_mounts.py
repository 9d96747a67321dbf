"""Tests for the mount table parser and volume usage."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from server_info.sources.mounts import MountRecord, parse_mounts, read_mounts, volumes

SAMPLE_MOUNTS = """\
sysfs /sys sysfs rw,nosuid,nodev,noexec,relatime 0 0
proc /proc proc rw,nosuid,nodev,noexec,relatime 0 0
/dev/sda1 / ext4 rw,relatime,errors=remount-ro 0 0
tmpfs /run tmpfs rw,nosuid,nodev,size=1632224k,mode=755 0 0
/dev/sdb1   /data    xfs rw,relatime 0 0
"""

_MOD = "server_info.sources.mounts"


@pytest.fixture()
def fake_proc(tmp_path: Path) -> Path:
    """Create a fake /proc tree with mounts."""
    (tmp_path / "mounts").write_text(SAMPLE_MOUNTS)
    return tmp_path


class TestParseMounts:
    """Tests for parse_mounts()."""

    def test_all_rows(self, fake_proc: Path) -> None:
        assert len(read_mounts(fake_proc)) == 5

    def test_columns(self, fake_proc: Path) -> None:
        root = read_mounts(fake_proc)[2]
        assert root.device == "/dev/sda1"
        assert root.mount_point == "/"
        assert root.file_system_type == "ext4"
        assert root.total_bytes is None

    def test_irregular_spacing(self, fake_proc: Path) -> None:
        data = read_mounts(fake_proc)[4]
        assert data.mount_point == "/data"
        assert data.file_system_type == "xfs"

    def test_short_rows_skipped(self) -> None:
        assert parse_mounts(["", "/dev/sda1 /"]) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_mounts(tmp_path / "nonexistent") == []


class TestVolumes:
    """Tests for volumes()."""

    def test_filters_by_type(self, tmp_path: Path) -> None:
        mounts = [
            MountRecord(str(tmp_path), "/dev/sda1", "ext4"),
            MountRecord("/proc", "proc", "proc"),
        ]
        result = volumes(mounts, ["ext4"])
        assert [v.device for v in result] == ["/dev/sda1"]

    def test_usage_from_live_filesystem(self, tmp_path: Path) -> None:
        (vol,) = volumes([MountRecord(str(tmp_path), "/dev/sda1", "ext4")], ["ext4"])
        assert vol.total_bytes is not None and vol.total_bytes > 0
        assert vol.used_bytes == vol.total_bytes - vol.free_bytes
        assert 0.0 <= vol.used_percent <= 100.0

    def test_used_percent(self) -> None:
        usage = MagicMock(total=1000, used=250, free=750)
        with patch(f"{_MOD}.shutil.disk_usage", return_value=usage):
            (vol,) = volumes([MountRecord("/", "/dev/sda1", "ext4")], ["ext4"])
        assert vol.used_bytes == 250
        assert vol.used_percent == 25.0

    def test_zero_total_guard(self) -> None:
        usage = MagicMock(total=0, used=0, free=0)
        with patch(f"{_MOD}.shutil.disk_usage", return_value=usage):
            (vol,) = volumes([MountRecord("/", "/dev/sda1", "ext4")], ["ext4"])
        assert vol.used_percent == 0.0

    def test_unqueryable_mount_skipped(self, tmp_path: Path) -> None:
        mounts = [MountRecord(str(tmp_path / "gone"), "/dev/sdc1", "ext4")]
        assert volumes(mounts, ["ext4"]) == []


class TestMountRecordAsDict:
    """Tests for MountRecord.as_dict()."""

    def test_plain_mount_has_no_space_keys(self) -> None:
        data = MountRecord("/", "/dev/sda1", "ext4").as_dict()
        assert data == {
            "mount_point": "/",
            "device": "/dev/sda1",
            "file_system_type": "ext4",
        }

    def test_formatted_sizes(self) -> None:
        record = MountRecord("/", "/dev/sda1", "ext4", 2048, 1024, 1024, 50.0)
        data = record.as_dict(format_sizes=True)
        assert data["total_bytes"] == "2 KB"
        assert data["used_percent"] == 50.0
