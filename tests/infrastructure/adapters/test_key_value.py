from flashdeck.infrastructure.adapters.key_value import FileKeyValueStore, MemoryKeyValueStore


def test_memory_store():
    store = MemoryKeyValueStore()
    assert store.get("a") is None
    store.set("a", "1")
    assert store.get("a") == "1"
    store.delete("a")
    store.delete("a")
    assert store.data == {}


def test_file_store_creates_root(tmp_path):
    store = FileKeyValueStore(tmp_path / "nested" / "dir")
    store.set("vocabulary-stats", '{"points": 1}')

    assert (tmp_path / "nested" / "dir" / "vocabulary-stats.json").read_text() == '{"points": 1}'
    assert store.get("vocabulary-stats") == '{"points": 1}'
    assert not list((tmp_path / "nested" / "dir").glob("*.tmp"))


def test_file_store_missing_and_delete(tmp_path):
    store = FileKeyValueStore(tmp_path)
    assert store.get("nope") is None
    store.delete("nope")

    store.set("k", "v")
    store.delete("k")
    assert store.get("k") is None


def test_file_store_ignores_undecodable_files(tmp_path, caplog):
    (tmp_path / "bad.json").write_bytes(b"\xff\xfe\x00garbage")
    assert FileKeyValueStore(tmp_path).get("bad") is None
    assert "not valid UTF-8" in caplog.text
