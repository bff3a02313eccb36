from __future__ import annotations
from typing import Any, Callable, Dict, Optional, Tuple

from .catalog import format_weight
from .edit_mode import find_item
from .models import Inventory, Item, LabelSettings, Room
from .utils import (LABEL_BODY_RANGE, LABEL_BODY_SIZE, LABEL_TITLE_RANGE, LABEL_TITLE_SIZE,
                    clamp_int)

TEXT_FIELDS = ("title", "room", "weight", "notes")


def default_label_settings(room: Room, item: Item) -> Dict[str, Any]:
    return LabelSettings(
        title=item.label,
        room=room.name,
        weight=format_weight(item.weight),
        notes=item.notes,
        title_size=LABEL_TITLE_SIZE,
        body_size=LABEL_BODY_SIZE,
    ).to_record()


def propagate(item: Item, field: str, old: str, new: str) -> bool:
    """Push a data change into the label unless the user overrode that field."""
    ls = item.label_settings
    if ls is None or ls.get(field) != old:
        return False
    ls[field] = new
    return True


class LabelProjection:
    """
    Per-item label records, created lazily on first open.

    Stored values are overrides: ensure() refreshes the derived defaults and
    lays them underneath, so fields added later show up on old items too.
    """

    def __init__(self, inventory: Callable[[], Inventory]):
        self._inventory = inventory
        self.active_item_id: Optional[str] = None

    def ensure(self, room: Room, item: Item) -> LabelSettings:
        merged = default_label_settings(room, item)
        if item.label_settings:
            merged.update({k: v for k, v in item.label_settings.items() if k in merged and v is not None})
        settings = LabelSettings.from_record(merged)
        item.label_settings = settings.to_record()
        return settings

    def update(self, item_id: str, **fields: Any) -> Optional[LabelSettings]:
        """title/room/weight/notes as text, title_size/body_size as ints."""
        hit = find_item(self._inventory(), item_id)
        if hit is None:
            return None
        _, _, room, item = hit
        current = self.ensure(room, item)
        rec = current.to_record()
        for name in TEXT_FIELDS:
            if name in fields and fields[name] is not None:
                rec[name] = str(fields[name])
        if "title_size" in fields:
            rec["titleSize"] = clamp_int(fields["title_size"], *LABEL_TITLE_RANGE, current.title_size)
        if "body_size" in fields:
            rec["bodySize"] = clamp_int(fields["body_size"], *LABEL_BODY_RANGE, current.body_size)
        item.label_settings = rec
        return LabelSettings.from_record(rec)

    def reset(self, item_id: str) -> Optional[LabelSettings]:
        """Drop every override and go back to derived values."""
        hit = find_item(self._inventory(), item_id)
        if hit is None:
            return None
        _, _, room, item = hit
        item.label_settings = None
        return self.ensure(room, item)

    # ---------- label panel slot ----------
    def open(self, item_id: str) -> Optional[LabelSettings]:
        hit = find_item(self._inventory(), item_id)
        if hit is None:
            return None
        self.active_item_id = item_id
        return self.ensure(hit[2], hit[3])

    def close(self) -> None:
        self.active_item_id = None

    def active_position(self) -> Optional[Tuple[int, int]]:
        if self.active_item_id is None:
            return None
        hit = find_item(self._inventory(), self.active_item_id)
        if hit is None:
            self.active_item_id = None
            return None
        return hit[0], hit[1]

    def forget(self, ids) -> None:
        if self.active_item_id in set(ids):
            self.active_item_id = None
