from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from .utils import LABEL_TITLE_SIZE, LABEL_BODY_SIZE, LABEL_TITLE_RANGE, LABEL_BODY_RANGE, clamp_int


class EditMode:
    NONE = "none"
    MOVE = "move"
    RENAME = "rename"


class Target:
    ITEM = "item"
    ROOM = "room"


@dataclass(frozen=True)
class Category:
    label: str
    default_weight: float


@dataclass
class LabelSettings:
    title: str = ""
    room: str = ""
    weight: str = ""
    notes: str = ""
    title_size: int = LABEL_TITLE_SIZE
    body_size: int = LABEL_BODY_SIZE

    # persisted keys are camelCase
    def to_record(self) -> Dict[str, Any]:
        return {"title": self.title, "room": self.room, "weight": self.weight,
                "notes": self.notes, "titleSize": self.title_size, "bodySize": self.body_size}

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "LabelSettings":
        def text(key):
            value = data.get(key)
            return "" if value is None or isinstance(value, (dict, list)) else str(value)
        return cls(text("title"), text("room"), text("weight"), text("notes"),
                   clamp_int(data.get("titleSize"), *LABEL_TITLE_RANGE, LABEL_TITLE_SIZE),
                   clamp_int(data.get("bodySize"), *LABEL_BODY_RANGE, LABEL_BODY_SIZE))


@dataclass
class Item:
    id: str
    label: str
    category: str
    weight: float
    include_in_estimate: bool = True
    is_high_value: bool = False
    notes: str = ""
    qr_value: str = ""
    # stored overrides, camelCase keys as persisted; None until the label panel opens
    label_settings: Optional[Dict[str, Any]] = None
    edit_mode: str = EditMode.NONE   # transient

    def matches_code(self, code: str) -> bool:
        return self.id == code or (bool(self.qr_value) and self.qr_value == code)


@dataclass
class Room:
    id: str
    name: str
    items: List[Item] = field(default_factory=list)
    room_weight: int = 0
    edit_mode: str = EditMode.NONE   # transient, only NONE | RENAME


@dataclass
class Inventory:
    rooms: List[Room] = field(default_factory=list)
    total_weight: int = 0

    def room_names(self) -> List[str]:
        return [r.name for r in self.rooms]

    def iter_items(self):
        for room in self.rooms:
            for item in room.items:
                yield room, item
