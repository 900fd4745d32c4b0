"""
Tests für die Persistenzstrategien.
"""

import pytest

from registry_mqtt.mqtt.persistence import FilePersistence, MemoryPersistence, PersistedMessage


@pytest.fixture(params=["memory", "file"])
def persistence(request, tmp_path):
    if request.param == "memory":
        store = MemoryPersistence()
    else:
        store = FilePersistence(tmp_path / "store")
    store.open("test-1", "tcp://localhost:1883")
    yield store
    store.close()


def test_put_get_remove(persistence):
    message = PersistedMessage(topic="t", payload="p", qos=1)

    persistence.put("k1", message)

    assert persistence.contains_key("k1")
    assert persistence.get("k1") == message
    persistence.remove("k1")
    assert persistence.get("k1") is None
    assert not persistence.contains_key("k1")


def test_remove_missing_key_is_ignored(persistence):
    persistence.remove("missing")


def test_keys_and_clear(persistence):
    persistence.put("001", PersistedMessage(topic="t", payload="a"))
    persistence.put("002", PersistedMessage(topic="t", payload="b"))

    assert persistence.keys() == ["001", "002"]
    persistence.clear()
    assert persistence.keys() == []


def test_file_persistence_survives_reopen(tmp_path):
    first = FilePersistence(tmp_path)
    first.open("test-1", "tcp://localhost:1883")
    first.put("001", PersistedMessage(topic="t", payload="(aas-1,sm-1)", qos=2, retain=True))
    first.close()

    second = FilePersistence(tmp_path)
    second.open("test-1", "tcp://localhost:1883")

    assert second.keys() == ["001"]
    assert second.get("001") == PersistedMessage(topic="t", payload="(aas-1,sm-1)", qos=2, retain=True)


def test_file_persistence_separates_clients(tmp_path):
    first = FilePersistence(tmp_path)
    first.open("client-a", "tcp://localhost:1883")
    first.put("001", PersistedMessage(topic="t", payload="a"))

    second = FilePersistence(tmp_path)
    second.open("client-b", "tcp://localhost:1883")

    assert second.keys() == []
    assert second.client_dir != first.client_dir


def test_file_persistence_requires_open(tmp_path):
    store = FilePersistence(tmp_path)

    with pytest.raises(RuntimeError):
        store.keys()


def test_memory_persistence_close_discards():
    store = MemoryPersistence()
    store.open("test-1", "tcp://localhost:1883")
    store.put("001", PersistedMessage(topic="t", payload="a"))

    store.close()

    assert store.keys() == []
