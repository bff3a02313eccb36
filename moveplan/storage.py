from __future__ import annotations
import json, logging
from typing import Dict, Optional, Protocol

from PySide6.QtCore import QSettings

from .errors import StorageError
from .identity import IdIssuer
from .models import Inventory
from .state import InventoryState
from .utils import INVENTORY_KEY, SETTINGS_APP, SETTINGS_ORG, settings_file

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class QSettingsStore:
    """
    Key/value store on top of QSettings.

    Without a path the native location for (org, app) is used; with a path
    the data goes to an INI file (portable installs, tests).
    """

    def __init__(self, path: Optional[str] = None, org: str = SETTINGS_ORG, app: str = SETTINGS_APP):
        if path:
            self._s = QSettings(path, QSettings.Format.IniFormat)
        else:
            self._s = QSettings(org, app)

    @classmethod
    def from_env(cls) -> "QSettingsStore":
        return cls(settings_file())

    def get(self, key: str) -> Optional[str]:
        if not self._s.contains(key):
            return None
        v = self._s.value(key, "", type=str)
        return v if isinstance(v, str) else None

    def set(self, key: str, value: str) -> None:
        self._s.setValue(key, value)
        self._s.sync()
        if self._s.status() != QSettings.Status.NoError:
            raise StorageError(f"settings write failed for {key!r}: {self._s.status()}")


def load_inventory(kv: KeyValueStore, issuer: IdIssuer, key: str = INVENTORY_KEY) -> Inventory:
    """Never fails on bad data: anything unreadable becomes an empty inventory."""
    state = InventoryState(issuer)
    try:
        raw = kv.get(key)
    except (StorageError, OSError) as e:
        logger.warning("Unable to read inventory state: %s", e)
        return Inventory()
    if not raw:
        return Inventory()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        logger.warning("Unable to parse inventory state: %s", e)
        return Inventory()
    if not isinstance(data, dict) or not isinstance(data.get("rooms", []), list):
        logger.warning("Ignoring malformed inventory record (%s)", type(data).__name__)
        return Inventory()
    return state.deserialize(data)


def dumps_inventory(inventory: Inventory) -> str:
    # issuer is only needed for loading
    return json.dumps(InventoryState(issuer=None).serialize(inventory), ensure_ascii=False)


def save_inventory(kv: KeyValueStore, inventory: Inventory, key: str = INVENTORY_KEY) -> None:
    try:
        kv.set(key, dumps_inventory(inventory))
    except OSError as e:
        raise StorageError(str(e)) from e
