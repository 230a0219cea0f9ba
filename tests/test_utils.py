"""Tests for shared utilities."""

from __future__ import annotations

import errno

import pytest

from tidytree.models.entries import FileEntry, ScanProgress
from tidytree.utils import bytes_to_human, describe_os_error, format_elapsed, remove_files
from tests.fakes import build


class TestBytesToHuman:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (512, "512 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (1024**2, "1.0 MB"),
            (5 * 1024**3, "5.0 GB"),
            (-2048, "-2.0 KB"),
        ],
    )
    def test_formats(self, size, expected):
        assert bytes_to_human(size) == expected


class TestFormatElapsed:
    def test_formats(self):
        assert format_elapsed(0.25) == "250 ms"
        assert format_elapsed(12.34) == "12.3s"
        assert format_elapsed(125) == "2m 5s"


class TestDescribeOsError:
    def test_reasons(self):
        assert describe_os_error(PermissionError(errno.EACCES, "Permission denied")) == "permission denied"
        assert describe_os_error(FileNotFoundError(errno.ENOENT, "No such file")) == "not found"
        assert describe_os_error(OSError(errno.ENOTEMPTY, "Directory not empty")) == "Directory not empty"


class TestRemoveFiles:
    def test_outcome_per_file(self):
        root = build({"a": b"1", "b": b"22", "c": b"333"})
        root.fail_remove = {"b"}
        targets = [
            FileEntry(path=name, name=name, size=len(h.content), last_modified=0, parent=root, handle=h)
            for name, h in root.entries.items()
        ]
        orphan = FileEntry(path="x", name="x", size=1, last_modified=0)
        events: list[ScanProgress] = []

        outcomes, freed, gone = remove_files([*targets, orphan], on_progress=events.append)

        assert [(o.path, o.deleted, o.reason) for o in outcomes] == [
            ("a", True, None),
            ("b", False, "permission denied"),
            ("c", True, None),
            ("x", False, "no parent handle"),
        ]
        assert freed == 4
        assert gone == {"a", "c"}
        assert [e.current for e in events] == [1, 2, 3, 4]
        assert events[-1].status == "Removing 4/4 files"
