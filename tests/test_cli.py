"""Tests for the command line interface."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from tidytree.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def junk_tree(tmp_path):
    root = tmp_path / "junk"
    (root / "Temp").mkdir(parents=True)
    (root / "Temp" / "setup.tmp").write_bytes(b"x" * 100)
    (root / "Pictures").mkdir()
    (root / "Pictures" / "Thumbs.db").write_bytes(b"y" * 10)
    (root / "letter.docx").write_bytes(b"z")
    return root


class TestCategoriesCommand:
    def test_json(self, runner):
        result = runner.invoke(main, ["categories", "--json"])
        assert result.exit_code == 0
        ids = [c["id"] for c in json.loads(result.output)]
        assert ids == [
            "temp-system",
            "cache-browser",
            "log-files",
            "installer-residuals",
            "thumb-cache",
            "crash-dumps",
        ]

    def test_text(self, runner):
        result = runner.invoke(main, ["categories"])
        assert result.exit_code == 0
        assert "Thumbnail Cache" in result.output


class TestEmptyCommand:
    def test_removes_empty_folders(self, runner, local_tree):
        result = runner.invoke(main, ["empty", str(local_tree), "--yes"])

        assert result.exit_code == 0
        assert "a/b" in result.output
        assert "Removed 2 folder(s), 0 failed" in result.output
        assert not (local_tree / "a").exists()

    def test_json(self, runner, local_tree):
        result = runner.invoke(main, ["empty", str(local_tree), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "done"
        assert [o["path"] for o in data["outcomes"]] == ["a/b", "a"]
        assert all(o["deleted"] for o in data["outcomes"])

    def test_declined_confirmation_changes_nothing(self, runner, local_tree):
        result = runner.invoke(main, ["empty", str(local_tree)], input="n\n")

        assert result.exit_code != 0
        assert (local_tree / "a" / "b").is_dir()

    def test_missing_root(self, runner, tmp_path):
        result = runner.invoke(main, ["empty", str(tmp_path / "missing"), "--yes"])
        assert result.exit_code == 1
        assert "does not exist" in result.output


class TestDuplicatesCommand:
    def test_preview_json(self, runner, local_tree):
        result = runner.invoke(main, ["duplicates", str(local_tree), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [g["files"] for g in data["groups"]] == [["docs/x.txt", "docs/y.txt"]]
        assert data["total_wasted_bytes"] == len(b"same content")
        assert (local_tree / "docs" / "y.txt").exists()

    def test_preview_text(self, runner, local_tree):
        result = runner.invoke(main, ["duplicates", str(local_tree)])

        assert result.exit_code == 0
        assert "docs/y.txt" in result.output
        assert "1 redundant copies in 1 groups" in result.output

    def test_type_filter(self, runner, local_tree):
        result = runner.invoke(main, ["duplicates", str(local_tree), "--type", "images", "--json"])
        assert json.loads(result.output)["groups"] == []

    def test_delete(self, runner, local_tree):
        result = runner.invoke(main, ["duplicates", str(local_tree), "--delete", "--yes", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["status"] == "deleted"
        assert [o["path"] for o in data["outcomes"]] == ["docs/y.txt"]
        assert (local_tree / "docs" / "x.txt").exists()
        assert not (local_tree / "docs" / "y.txt").exists()

    def test_delete_nothing(self, runner, tmp_path):
        (tmp_path / "only").write_text("one")
        result = runner.invoke(main, ["duplicates", str(tmp_path), "--delete", "--yes"])
        assert "No duplicate files found." in result.output


class TestJunkCommand:
    def test_preview_json(self, runner, junk_tree):
        result = runner.invoke(main, ["junk", str(junk_tree), "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["files_scanned"] == 3
        assert {f["path"] for f in data["files"]} == {"Pictures/Thumbs.db", "Temp/setup.tmp"}
        counts = {c["id"]: c["count"] for c in data["categories"]}
        assert counts["thumb-cache"] == 1
        assert counts["crash-dumps"] == 0

    def test_preview_text(self, runner, junk_tree):
        result = runner.invoke(main, ["junk", str(junk_tree)])

        assert result.exit_code == 0
        assert "thumb-cache" in result.output
        assert "2 of 3 files selected" in result.output

    def test_clean_selected_category(self, runner, junk_tree):
        result = runner.invoke(main, ["junk", str(junk_tree), "--clean", "-c", "thumb-cache", "--yes", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [o["path"] for o in data["outcomes"]] == ["Pictures/Thumbs.db"]
        assert data["freed_bytes"] == 10
        assert (junk_tree / "Temp" / "setup.tmp").exists()

    def test_clean_with_confirmation(self, runner, junk_tree):
        result = runner.invoke(main, ["junk", str(junk_tree), "--clean"], input="y\n")

        assert result.exit_code == 0
        assert "Removed 2 file(s)" in result.output
        assert (junk_tree / "letter.docx").exists()

    def test_unknown_category(self, runner, junk_tree):
        result = runner.invoke(main, ["junk", str(junk_tree), "-c", "nope"])
        assert result.exit_code == 1
        assert "Unknown category: nope" in result.output
