from __future__ import annotations
from typing import Any, Dict, List, Set

from .catalog import get_category_definition, infer_category, is_known_category, resolve_weight
from .identity import IdIssuer
from .models import Inventory, Item, Room
from .utils import UNLABELED_ITEM, UNNAMED_ROOM, round_half_up


def recalculate(inventory: Inventory) -> Inventory:
    """Room and total weights in one pass; idempotent."""
    total = 0
    for room in inventory.rooms:
        room.room_weight = round_half_up(sum(it.weight for it in room.items if it.include_in_estimate))
        total += room.room_weight
    inventory.total_weight = total
    return inventory


def _text(value: Any, fallback: str = "") -> str:
    if value is None or isinstance(value, (dict, list)):
        return fallback
    txt = str(value).strip()
    return txt or fallback


def _flag(value: Any, default: bool) -> bool:
    return value if isinstance(value, bool) else default


class InventoryState:
    """Persisted record <-> Inventory. Edit modes never cross this boundary."""

    def __init__(self, issuer: IdIssuer):
        self.issuer = issuer

    def serialize(self, inventory: Inventory) -> Dict:
        rooms: List[Dict] = []
        for room in inventory.rooms:
            items: List[Dict] = []
            for it in room.items:
                rec = {
                    "id": it.id,
                    "label": it.label,
                    "category": it.category,
                    "weight": it.weight,
                    "notes": it.notes,
                    "includeInEstimate": it.include_in_estimate,
                    "isHighValue": it.is_high_value,
                    "qrValue": it.qr_value or it.id,
                }
                if it.label_settings is not None:
                    rec["labelSettings"] = dict(it.label_settings)
                items.append(rec)
            rooms.append({"id": room.id, "name": room.name, "roomWeight": room.room_weight, "items": items})
        return {"rooms": rooms, "totalWeight": inventory.total_weight}

    def deserialize(self, data: Any) -> Inventory:
        return recalculate(self.normalize(data))

    # ---- migration ----
    def normalize(self, data: Any) -> Inventory:
        """Any stored shape -> canonical Inventory. Runs on every load."""
        inv = Inventory()
        if not isinstance(data, dict):
            return inv
        raw_rooms = data.get("rooms")
        if not isinstance(raw_rooms, list):
            return inv

        seen: Set[str] = set()
        for r in raw_rooms:
            if not isinstance(r, dict):
                continue
            room = Room(id=self._unique(r.get("id"), "room", seen), name=_text(r.get("name"), UNNAMED_ROOM))
            raw_items = r.get("items")
            for d in raw_items if isinstance(raw_items, list) else []:
                if isinstance(d, dict):
                    room.items.append(self._normalize_item(d, seen))
            inv.rooms.append(room)
        return inv

    def _normalize_item(self, d: Dict, seen: Set[str]) -> Item:
        label = _text(d.get("label"), UNLABELED_ITEM)
        category = d.get("category")
        if not is_known_category(category):
            category = infer_category(label)
        raw_id = d.get("id")
        item_id = self._unique(raw_id, "item", seen)
        qr = _text(d.get("qrValue"))
        if not qr or (qr == _text(raw_id) and item_id != qr):
            # missing, or pointed at an id we had to replace
            qr = item_id
        ls = d.get("labelSettings")
        return Item(
            id=item_id,
            label=label,
            category=category,
            weight=resolve_weight(d.get("weight"), get_category_definition(category)),
            include_in_estimate=_flag(d.get("includeInEstimate"), True),
            is_high_value=_flag(d.get("isHighValue"), False),
            notes=_text(d.get("notes")),
            qr_value=qr,
            label_settings=dict(ls) if isinstance(ls, dict) else None,
        )

    def _unique(self, raw: Any, prefix: str, seen: Set[str]) -> str:
        value = _text(raw)
        while not value or value in seen:
            value = self.issuer.issue(prefix)
        seen.add(value)
        return value
