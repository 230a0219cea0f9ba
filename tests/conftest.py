"""Shared test fixtures."""

from __future__ import annotations

import pytest

from tidytree.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Redirect the settings file to a temp directory."""
    config_home = tmp_path / "config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "tidytree" / "settings.json"


@pytest.fixture
def local_tree(tmp_path):
    """A small real tree on disk:

    tree/a/b/            (empty)
    tree/c/file.txt
    tree/docs/x.txt      same content as y.txt
    tree/docs/y.txt
    tree/docs/z.txt
    """
    root = tmp_path / "tree"
    (root / "a" / "b").mkdir(parents=True)
    (root / "c").mkdir()
    (root / "c" / "file.txt").write_text("keep me")
    docs = root / "docs"
    docs.mkdir()
    (docs / "x.txt").write_bytes(b"same content")
    (docs / "y.txt").write_bytes(b"same content")
    (docs / "z.txt").write_bytes(b"other stuff!")
    return root
