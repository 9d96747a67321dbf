"""Tests for the pseudo-file reader helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from server_info.procfs import parse_digits, read_lines


class TestReadLines:
    """Tests for read_lines()."""

    def test_splits_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "stat"
        path.write_text("cpu 1 2 3\nctxt 4\n")
        assert read_lines(path) == ["cpu 1 2 3", "ctxt 4"]

    def test_keeps_blank_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "cpuinfo"
        path.write_text("a : 1\n\nb : 2\n")
        assert read_lines(path) == ["a : 1", "", "b : 2"]

    def test_accepts_str(self, tmp_path: Path) -> None:
        path = tmp_path / "uptime"
        path.write_text("1.0 2.0\n")
        assert read_lines(str(path)) == ["1.0 2.0"]

    def test_missing_file(self, tmp_path: Path) -> None:
        assert read_lines(tmp_path / "nonexistent") == []

    def test_directory(self, tmp_path: Path) -> None:
        assert read_lines(tmp_path) == []

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "version_signature"
        path.write_text("")
        assert read_lines(path) == []

    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "meminfo"
        path.write_text("MemTotal: 1 kB\n")
        with patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            assert read_lines(path) == []

    def test_miss_logged_at_debug(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="server_info.procfs"):
            read_lines(tmp_path / "nonexistent")
        assert "not found" in caplog.text


class TestParseDigits:
    """Tests for parse_digits()."""

    def test_label_and_value(self) -> None:
        assert parse_digits("ctxt 98765432") == 98765432

    def test_unit_suffix(self) -> None:
        assert parse_digits("      16384000 kB") == 16384000

    def test_no_digits(self) -> None:
        assert parse_digits("kB") == 0

    def test_sign_ignored(self) -> None:
        assert parse_digits("-42") == 42
