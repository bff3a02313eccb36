from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple

from .models import Inventory, Item, Room
from .utils import norm


@dataclass
class RoomMatch:
    room_index: int
    room: Room
    items: List[Tuple[int, Item]] = field(default_factory=list)


def filter_rooms(inventory: Inventory, query: str) -> List[RoomMatch]:
    """
    Live search over room names, item labels and notes.

    A room whose name matches keeps all of its items; otherwise only matching
    items are kept and rooms left empty by the filter are dropped. Positions
    are recomputed on every call.
    """
    q = norm(query)
    out: List[RoomMatch] = []
    for ri, room in enumerate(inventory.rooms):
        everything = [(ii, it) for ii, it in enumerate(room.items)]
        if not q or q in norm(room.name):
            out.append(RoomMatch(ri, room, everything))
            continue
        hits = [(ii, it) for ii, it in everything if q in norm(it.label) or q in norm(it.notes)]
        if hits:
            out.append(RoomMatch(ri, room, hits))
    return out
