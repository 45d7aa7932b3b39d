import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from list_sidebar.infrastructure.filesystem import atomic_write_text, write_recovery_copy
from list_sidebar.infrastructure.vault_store import VaultFileStore


def test_find(tmp_path):
    (tmp_path / "notes").mkdir()
    (tmp_path / "notes" / "lists.md").write_text("x", encoding="utf-8")
    store = VaultFileStore(tmp_path)

    assert store.find("notes/lists.md") == tmp_path / "notes" / "lists.md"
    assert store.find("notes/missing.md") is None
    assert store.find("notes") is None
    assert store.find("") is None


def test_find_outside_vault(tmp_path):
    vault = tmp_path / "vault"
    vault.mkdir()
    (tmp_path / "secret.md").write_text("x", encoding="utf-8")
    assert VaultFileStore(vault).find("../secret.md") is None


def test_create_and_read(tmp_path):
    store = VaultFileStore(tmp_path)
    path = store.create("sub/lists.md", "## A <!-- expanded:true -->\n\n")
    assert path == tmp_path / "sub" / "lists.md"
    assert store.read(path) == "## A <!-- expanded:true -->\n\n"

    with pytest.raises(FileExistsError):
        store.create("sub/lists.md", "other")


def test_write_leaves_no_temp_files(tmp_path):
    store = VaultFileStore(tmp_path)
    path = store.create("lists.md", "one")
    store.write(path, "two")
    assert path.read_text(encoding="utf-8") == "two"
    assert [p.name for p in tmp_path.iterdir()] == ["lists.md"]


def test_files_skip_hidden(tmp_path):
    (tmp_path / ".obsidian").mkdir()
    (tmp_path / ".obsidian" / "app.json").write_text("{}", encoding="utf-8")
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "Note.md").write_text("", encoding="utf-8")
    (tmp_path / "a.md").write_text("", encoding="utf-8")
    (tmp_path / ".a.md.tmp-1").write_text("", encoding="utf-8")

    assert VaultFileStore(tmp_path).files() == ["a.md", "b/Note.md"]


def test_relative(tmp_path):
    store = VaultFileStore(tmp_path)
    assert store.relative(tmp_path / "x" / "y.md") == "x/y.md"


def test_atomic_write_creates_parents(tmp_path):
    target = tmp_path / "deep" / "dir" / "f.md"
    atomic_write_text(target, "hello\n")
    assert target.read_text(encoding="utf-8") == "hello\n"


def test_recovery_copy(tmp_path):
    rec = write_recovery_copy(tmp_path / "lists.md", "## A <!-- expanded:true -->\n\n",
                              recovery_dir=tmp_path / "recovery")
    assert rec.parent == tmp_path / "recovery"
    assert rec.name.startswith("lists.recovery.")
    assert rec.read_text(encoding="utf-8").startswith("## A")
