import json
import logging
import pytest

from moveplan.errors import StorageError
from moveplan.storage import MemoryStore, QSettingsStore, load_inventory, save_inventory
from moveplan.utils import INVENTORY_KEY

from conftest import FailingStore


def test_missing_key_gives_empty_inventory(kv, issuer):
    inv = load_inventory(kv, issuer)
    assert inv.rooms == [] and inv.total_weight == 0


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", "42", '{"rooms": {"a": 1}}', "[" * 200000],
                         ids=["syntax", "list", "number", "rooms-dict", "deep-nesting"])
def test_corrupt_record_is_replaced_with_empty_state(issuer, caplog, raw):
    kv = MemoryStore({INVENTORY_KEY: raw})
    with caplog.at_level(logging.WARNING, logger="moveplan.storage"):
        inv = load_inventory(kv, issuer)
    assert inv.rooms == []
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_save_then_load(furnished, kv, issuer):
    save_inventory(kv, furnished.inventory)
    data = json.loads(kv.get(INVENTORY_KEY))
    assert [r["name"] for r in data["rooms"]] == ["Kitchen", "Bedroom", "Garage"]
    again = load_inventory(kv, issuer)
    assert again.total_weight == furnished.inventory.total_weight


def test_save_failure_raises_storage_error(furnished):
    with pytest.raises(StorageError):
        save_inventory(FailingStore(), furnished.inventory)


def test_qsettings_store_round_trip(tmp_path):
    path = str(tmp_path / "moveplan.ini")
    value = json.dumps({"rooms": [{"name": "Kid's room, upstairs", "items": []}], "totalWeight": 0})
    QSettingsStore(path).set(INVENTORY_KEY, value)

    reopened = QSettingsStore(path)
    assert reopened.get(INVENTORY_KEY) == value
    assert reopened.get("missing-key") is None


def test_qsettings_store_from_env(tmp_path, monkeypatch):
    path = tmp_path / "env.ini"
    monkeypatch.setenv("MOVEPLAN_SETTINGS_FILE", str(path))
    kv = QSettingsStore.from_env()
    kv.set("k", "v")
    assert QSettingsStore(str(path)).get("k") == "v"


def test_deeply_nested_record_does_not_block_startup(issuer):
    from moveplan.store import InventoryStore

    store = InventoryStore(MemoryStore({INVENTORY_KEY: "[" * 200000}), issuer=issuer)
    assert store.inventory.rooms == []
    assert not store.restore('{"rooms": ' + "[" * 200000)
