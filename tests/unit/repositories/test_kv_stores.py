from pathlib import Path

import pytest

from learning_feeds.core.repository.kv_store import KeyValueStore, KeyValueStoreError
from learning_feeds.data.file.kv_store import FileKeyValueStore
from learning_feeds.data.memory.kv_store import InMemoryKeyValueStore


@pytest.fixture(params=["memory", "file"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> KeyValueStore:
    if request.param == "memory":
        return InMemoryKeyValueStore()
    return FileKeyValueStore(tmp_path / "cache")


def test_get_set_delete(store: KeyValueStore) -> None:
    assert store.get("feeds") is None

    store.set("feeds", '{"results": []}')
    assert store.get("feeds") == '{"results": []}'

    store.set("feeds", "{}")
    assert store.get("feeds") == "{}"

    store.delete("feeds")
    assert store.get("feeds") is None

    # deleting a missing key is not an error
    store.delete("feeds")


def test_keys_are_independent(store: KeyValueStore) -> None:
    store.set("one", "1")
    store.set("two", "2")

    store.delete("one")

    assert store.get("one") is None
    assert store.get("two") == "2"


def test_file_store_survives_new_instance(tmp_path: Path) -> None:
    FileKeyValueStore(tmp_path).set("learningos_feeds_cache", "cached")

    assert FileKeyValueStore(tmp_path).get("learningos_feeds_cache") == "cached"
    assert [p.suffix for p in tmp_path.iterdir()] == [".json"]


def test_file_store_errors(tmp_path: Path) -> None:
    not_a_dir = tmp_path / "file"
    not_a_dir.write_text("")
    store = FileKeyValueStore(not_a_dir)

    with pytest.raises(KeyValueStoreError):
        store.set("feeds", "{}")

    with pytest.raises(KeyValueStoreError):
        store.get("feeds")


def test_file_store_undecodable_value(tmp_path: Path) -> None:
    store = FileKeyValueStore(tmp_path)
    store.set("feeds", "{}")
    [path] = tmp_path.iterdir()
    path.write_bytes(b"\xff\xfe\x00garbage")

    with pytest.raises(KeyValueStoreError):
        store.get("feeds")
