"""
Document store behaviour against a temporary storage directory.
"""
from __future__ import annotations

import json
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

# Garante que o pacote api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from api.repositories.json_storage import (  # noqa: E402
    CorruptDocumentError,
    JsonDocumentStore,
    StorageError,
    StorageUnavailableError,
)


@pytest.fixture()
def store(tmp_path):
    s = JsonDocumentStore(tmp_path / "storage")
    s.ensure_layout()
    return s


def test_ensure_layout_creates_media_dirs(tmp_path):
    root = tmp_path / "storage"
    store = JsonDocumentStore(root)
    store.ensure_layout()
    store.ensure_layout()
    for sub in ("inbox_media", "media", "media/welcome_page", "media/welcome_inbox"):
        assert (root / sub).is_dir()


def test_read_missing_materializes_default(store):
    value = store.read("things.json", {"a": [1, 2]})
    assert value == {"a": [1, 2]}
    on_disk = json.loads(store.path_for("things.json").read_text(encoding="utf-8"))
    assert on_disk == {"a": [1, 2]}


def test_read_missing_does_not_share_default_instance(store):
    default = []
    value = store.read("list.json", default)
    value.append("x")
    assert default == []


def test_read_existing_ignores_default(store):
    store.write("doc.json", ["kept"])
    assert store.read("doc.json", ["default"]) == ["kept"]


def test_write_replaces_whole_document(store):
    store.write("doc.json", {"a": 1, "b": 2})
    store.write("doc.json", {"c": 3})
    assert store.read("doc.json", {}) == {"c": 3}
    leftovers = [p.name for p in store.root.iterdir() if p.name.endswith(".tmp")]
    assert leftovers == []


def test_write_keeps_non_ascii(store):
    store.write("doc.json", {"name": "Joao Ç"})
    assert "Ç" in store.path_for("doc.json").read_text(encoding="utf-8")


def test_corrupt_document_raises(store):
    store.path_for("broken.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(CorruptDocumentError):
        store.read("broken.json", [])
    # o arquivo corrompido nao e sobrescrito pelo default
    assert store.path_for("broken.json").read_text(encoding="utf-8") == "{not json"


def test_missing_root_is_storage_unavailable(tmp_path):
    store = JsonDocumentStore(tmp_path / "does-not-exist")
    with pytest.raises(StorageUnavailableError):
        store.write("doc.json", [])


def test_unserializable_value_rejected(store):
    with pytest.raises(StorageError):
        store.write("doc.json", {"when": object()})
    assert not store.path_for("doc.json").exists()


def test_update_is_serialized_per_document(store):
    def _append(i):
        store.update("counter.json", [], lambda cur: cur + [i])

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(_append, range(50)))

    assert sorted(store.read("counter.json", [])) == list(range(50))


def test_lock_is_shared_for_same_path(store):
    assert store.lock_for("a.json") is store.lock_for("a.json")
    assert store.lock_for("a.json") is not store.lock_for("b.json")
