from __future__ import annotations
import json, logging
from typing import Any, Callable, Optional, Tuple, Union

from .catalog import format_weight, get_category_definition, resolve_weight
from .edit_mode import EditModeCoordinator, find_item, find_room
from .errors import StorageError
from .factory import ItemFactory
from .identity import IdIssuer, default_issuer, resolve_by_code
from .labels import LabelProjection, propagate
from .models import Inventory, Item, LabelSettings, Room
from .state import InventoryState, recalculate
from .storage import KeyValueStore, dumps_inventory, load_inventory, save_inventory
from .utils import INVENTORY_KEY

logger = logging.getLogger(__name__)

Confirm = Union[bool, Callable[[str], bool]]

ITEM_FIELDS = ("category", "weight", "include", "highValue")


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def _index(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


class InventoryStore:
    """
    Owner of the room -> item tree.

    Mutations are silent no-ops on invalid input. Each successful one is
    followed by recalculate(), a write to the key-value store and on_commit.
    Positions passed in are only trusted for the duration of the call: panels,
    menus and the label panel keep ids, not indices.
    """

    def __init__(self, kv: KeyValueStore, issuer: Optional[IdIssuer] = None,
                 status_cb: Optional[Callable[[str], None]] = None,
                 on_commit: Optional[Callable[[str], None]] = None,
                 key: str = INVENTORY_KEY):
        self.kv = kv
        self.key = key
        self.issuer = issuer or default_issuer()
        self.factory = ItemFactory(self.issuer)
        self.state = InventoryState(self.issuer)
        self._status_cb = status_cb
        self.on_commit = on_commit
        self.last_error: Optional[str] = None
        self._inventory = load_inventory(kv, self.issuer, key)
        self.edit = EditModeCoordinator(lambda: self._inventory)
        self.labels = LabelProjection(lambda: self._inventory)
        recalculate(self._inventory)

    @property
    def inventory(self) -> Inventory:
        return self._inventory

    # ---------- plumbing ----------
    def recalculate(self) -> Inventory:
        return recalculate(self._inventory)

    def persist(self) -> bool:
        try:
            save_inventory(self.kv, self._inventory, self.key)
        except (StorageError, OSError) as e:
            # in-memory state stays authoritative for the session
            self.last_error = str(e)
            logger.warning("Unable to save inventory state: %s", e)
            self._status(f"Warning: changes not saved ({e})")
            return False
        self.last_error = None
        return True

    def _commit(self, label: str) -> None:
        self.recalculate()
        self.persist()
        logger.debug("commit: %s", label)
        if self.on_commit:
            self.on_commit(label)

    def _status(self, text: str) -> None:
        if self._status_cb:
            self._status_cb(text)

    def _room_at(self, room_index: Any) -> Optional[Room]:
        ri = _index(room_index)
        if ri is None or not (0 <= ri < len(self._inventory.rooms)):
            return None
        return self._inventory.rooms[ri]

    def _item_at(self, room_index: Any, item_index: Any) -> Optional[Tuple[Room, Item]]:
        room = self._room_at(room_index)
        ii = _index(item_index)
        if room is None or ii is None or not (0 <= ii < len(room.items)):
            return None
        return room, room.items[ii]

    def _close_panel_on(self, target_id: str) -> None:
        if self.edit.panel and self.edit.panel.target_id == target_id:
            self.edit.close_panel()

    def _forget(self, ids) -> None:
        ids = list(ids)
        self.edit.forget(ids)
        self.labels.forget(ids)

    @staticmethod
    def _confirmed(confirm: Confirm, prompt: str) -> bool:
        if callable(confirm):
            return bool(confirm(prompt))
        return confirm is True

    # ---------- lookup ----------
    def position_of(self, item_id: str) -> Optional[Tuple[int, int]]:
        hit = find_item(self._inventory, item_id)
        return (hit[0], hit[1]) if hit else None

    def room_position(self, room_id: str) -> Optional[int]:
        hit = find_room(self._inventory, room_id)
        return hit[0] if hit else None

    def find_item(self, item_id: str) -> Optional[Tuple[Room, Item]]:
        hit = find_item(self._inventory, item_id)
        return (hit[2], hit[3]) if hit else None

    def find_room(self, room_id: str) -> Optional[Room]:
        hit = find_room(self._inventory, room_id)
        return hit[1] if hit else None

    def resolve_by_code(self, code: str) -> Optional[Tuple[Room, Item]]:
        return resolve_by_code(self._inventory, code)

    # ---------- rooms ----------
    def add_room(self, name: str) -> Optional[Room]:
        room = self.factory.create_room(name)
        if room is None:
            return None
        self._inventory.rooms.append(room)
        self._commit("room.add")
        return room

    def rename_room(self, room_index: int, new_name: str) -> bool:
        room = self._room_at(room_index)
        name = (new_name or "").strip()
        if room is None or not name:
            return False
        old = room.name
        room.name = name
        for item in room.items:
            propagate(item, "room", old, name)
        self._close_panel_on(room.id)
        self._commit("room.rename")
        return True

    def delete_room(self, room_index: int, confirm: Confirm) -> bool:
        room = self._room_at(room_index)
        if room is None:
            return False
        prompt = f"Delete room '{room.name}' and its {len(room.items)} item(s)?"
        if not self._confirmed(confirm, prompt):
            return False
        self._inventory.rooms.remove(room)
        self._forget([room.id] + [it.id for it in room.items])
        self._commit("room.delete")
        return True

    # ---------- items ----------
    def add_item(self, room_index: int, label: str, category: Optional[str] = None,
                 notes: str = "") -> Optional[Item]:
        room = self._room_at(room_index)
        if room is None:
            return None
        item = self.factory.create_item(label, category, notes)
        if item is None:
            return None
        room.items.append(item)
        self._commit("item.add")
        return item

    def update_item_field(self, room_index: int, item_index: int, field: str, value: Any) -> bool:
        hit = self._item_at(room_index, item_index)
        if hit is None or field not in ITEM_FIELDS:
            return False
        _, item = hit
        old_weight = format_weight(item.weight)
        if field == "category":
            cat = get_category_definition(value)
            if cat.label == item.category:
                return False
            # custom weights do not survive a category change
            item.category = cat.label
            item.weight = cat.default_weight
        elif field == "weight":
            item.weight = resolve_weight(value, get_category_definition(item.category))
        elif field == "include":
            item.include_in_estimate = _as_bool(value)
        else:
            item.is_high_value = _as_bool(value)
        propagate(item, "weight", old_weight, format_weight(item.weight))
        self._commit(f"item.{field}")
        return True

    def update_item_notes(self, room_index: int, item_index: int, notes: str) -> bool:
        hit = self._item_at(room_index, item_index)
        if hit is None:
            return False
        _, item = hit
        new = (notes or "").strip()
        if new == item.notes:
            return False
        propagate(item, "notes", item.notes, new)
        item.notes = new
        self._commit("item.notes")
        return True

    def rename_item(self, room_index: int, item_index: int, new_label: str) -> bool:
        hit = self._item_at(room_index, item_index)
        label = (new_label or "").strip()
        if hit is None or not label:
            return False
        _, item = hit
        propagate(item, "title", item.label, label)
        item.label = label
        self._close_panel_on(item.id)
        self._commit("item.rename")
        return True

    def move_item(self, source_room_index: int, item_index: int, dest_room_index: int) -> bool:
        hit = self._item_at(source_room_index, item_index)
        dest = self._room_at(dest_room_index)
        if hit is None or dest is None:
            return False
        src, item = hit
        if src is dest:
            return False
        src.items.remove(item)
        dest.items.append(item)
        propagate(item, "room", src.name, dest.name)
        self._close_panel_on(item.id)
        self._commit("item.move")
        return True

    def delete_item(self, room_index: int, item_index: int, confirm: Confirm) -> bool:
        hit = self._item_at(room_index, item_index)
        if hit is None:
            return False
        room, item = hit
        if not self._confirmed(confirm, f"Delete '{item.label}' from {room.name}?"):
            return False
        room.items.remove(item)
        self._forget([item.id])
        self._commit("item.delete")
        return True

    # ---------- labels ----------
    def open_label(self, item_id: str) -> Optional[LabelSettings]:
        """Open the label panel; the merged record is written back and saved."""
        settings = self.labels.open(item_id)
        if settings is not None:
            self.persist()
        return settings

    def update_label(self, item_id: str, **fields: Any) -> Optional[LabelSettings]:
        settings = self.labels.update(item_id, **fields)
        if settings is not None:
            self._commit("label.update")
        return settings

    def reset_label(self, item_id: str) -> Optional[LabelSettings]:
        settings = self.labels.reset(item_id)
        if settings is not None:
            self._commit("label.reset")
        return settings

    # ---------- snapshots ----------
    def snapshot(self) -> str:
        return dumps_inventory(self._inventory)

    def restore(self, snapshot: str) -> bool:
        """Replace the tree with a snapshot (undo/redo, import). Not a commit."""
        try:
            data = json.loads(snapshot)
        except (TypeError, ValueError, RecursionError) as e:
            logger.warning("Unable to parse snapshot: %s", e)
            return False
        if not isinstance(data, dict) or not isinstance(data.get("rooms"), list):
            logger.warning("Ignoring snapshot without a rooms list")
            return False
        self._replace(self.state.deserialize(data))
        self.persist()
        return True

    def reload(self) -> None:
        self._replace(load_inventory(self.kv, self.issuer, self.key))

    def _replace(self, inventory: Inventory) -> None:
        self._inventory = inventory
        self.edit.reset()
        self.labels.close()
        recalculate(self._inventory)
