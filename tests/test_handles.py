"""Tests for the local filesystem handles."""

from __future__ import annotations

import os

import pytest

from tidytree.core.handles import LocalDirectory, LocalFile, LocalOther


class TestLocalDirectory:
    def test_children_sorted_and_typed(self, local_tree):
        children = list(LocalDirectory(local_tree).children())
        assert [c.name for c in children] == ["a", "c", "docs"]
        assert all(c.kind == "directory" for c in children)

        files = list(LocalDirectory(local_tree / "docs").children())
        assert [c.name for c in files] == ["x.txt", "y.txt", "z.txt"]
        assert all(isinstance(c, LocalFile) for c in files)

    def test_symlinks_reported_as_other(self, tmp_path):
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "f").write_text("x")
        os.symlink(tmp_path / "real", tmp_path / "link")
        os.symlink(tmp_path / "real" / "f", tmp_path / "flink")

        kinds = {c.name: c.kind for c in LocalDirectory(tmp_path).children()}
        assert kinds == {"flink": "other", "link": "other", "real": "directory"}

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs os.mkfifo")
    def test_fifo_reported_as_other(self, tmp_path):
        os.mkfifo(tmp_path / "pipe")

        (child,) = LocalDirectory(tmp_path).children()
        assert isinstance(child, LocalOther)
        assert child.name == "pipe"

    def test_children_of_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            list(LocalDirectory(tmp_path / "missing").children())

    def test_exists(self, tmp_path):
        (tmp_path / "f").write_text("x")
        assert LocalDirectory(tmp_path).exists()
        assert not LocalDirectory(tmp_path / "missing").exists()
        assert not LocalDirectory(tmp_path / "f").exists()

    def test_symlinked_root_exists(self, tmp_path):
        (tmp_path / "real").mkdir()
        (tmp_path / "real" / "f").write_text("x")
        os.symlink(tmp_path / "real", tmp_path / "link")

        root = LocalDirectory(tmp_path / "link")
        assert root.exists()
        assert [c.name for c in root.children()] == ["f"]

    def test_remove_file(self, tmp_path):
        (tmp_path / "f").write_text("x")
        LocalDirectory(tmp_path).remove_entry("f")
        assert not (tmp_path / "f").exists()

    def test_remove_nested_directory_recursive(self, local_tree):
        LocalDirectory(local_tree).remove_entry("a", recursive=True)
        assert not (local_tree / "a").exists()

    def test_remove_non_empty_directory_requires_recursive(self, local_tree):
        with pytest.raises(OSError):
            LocalDirectory(local_tree).remove_entry("a")
        assert (local_tree / "a" / "b").is_dir()

    def test_remove_missing_raises_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LocalDirectory(tmp_path).remove_entry("nope")


class TestLocalFile:
    def test_stat(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"12345")
        os.utime(path, (1_000_000, 1_000_000))

        st = LocalFile(path).stat()
        assert st.size == 5
        assert st.mtime == 1_000_000

    def test_read_chunks(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"abcdefghij")

        chunks = list(LocalFile(path).read_chunks(chunk_size=4))
        assert chunks == [b"abcd", b"efgh", b"ij"]

    def test_read_empty_file_yields_nothing(self, tmp_path):
        path = tmp_path / "empty"
        path.touch()
        assert list(LocalFile(path).read_chunks()) == []
