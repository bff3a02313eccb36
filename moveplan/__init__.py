from .utils import *
from .errors import MovePlanError, StorageError, CapabilityUnavailable
from .models import Category, LabelSettings, Item, Room, Inventory, EditMode, Target
from .catalog import (CATEGORIES, CATEGORY_LABELS, get_category_definition, infer_category,
                      resolve_weight, format_weight)
from .identity import IdIssuer, SecureIdIssuer, TimeRandomIssuer, default_issuer, resolve_by_code
from .state import InventoryState, recalculate
from .storage import KeyValueStore, MemoryStore, QSettingsStore, load_inventory, save_inventory
from .factory import ItemFactory
from .edit_mode import EditModeCoordinator, PanelSlot
from .labels import LabelProjection, default_label_settings
from .store import InventoryStore
from .scan import ScanSession, ScanResult, ScanStatus, IterableCodeSource, UnavailableCameraSource
from .search import filter_rooms, RoomMatch
from .undo import UndoManager

# widgets (view, properties, labels_panel, label_render) are imported from their modules
# so the engine stays usable without a GUI platform plugin

__all__ = [
    "InventoryStore", "Inventory", "Room", "Item", "Category", "LabelSettings",
    "EditMode", "Target", "EditModeCoordinator", "PanelSlot", "LabelProjection",
    "CATEGORIES", "CATEGORY_LABELS", "get_category_definition", "infer_category",
    "resolve_weight", "format_weight", "default_label_settings",
    "IdIssuer", "SecureIdIssuer", "TimeRandomIssuer", "default_issuer", "resolve_by_code",
    "InventoryState", "recalculate", "KeyValueStore", "MemoryStore", "QSettingsStore",
    "load_inventory", "save_inventory", "ItemFactory",
    "ScanSession", "ScanResult", "ScanStatus", "IterableCodeSource", "UnavailableCameraSource",
    "filter_rooms", "RoomMatch", "UndoManager",
    "MovePlanError", "StorageError", "CapabilityUnavailable",
]
