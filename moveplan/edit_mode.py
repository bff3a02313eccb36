from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from .models import EditMode, Inventory, Item, Room, Target

# which panels each row kind supports
_ALLOWED = {
    Target.ITEM: (EditMode.MOVE, EditMode.RENAME),
    Target.ROOM: (EditMode.RENAME,),
}


@dataclass(frozen=True)
class PanelSlot:
    mode: str
    target: str
    target_id: str


def find_item(inventory: Inventory, item_id: str) -> Optional[Tuple[int, int, Room, Item]]:
    for ri, room in enumerate(inventory.rooms):
        for ii, item in enumerate(room.items):
            if item.id == item_id:
                return ri, ii, room, item
    return None


def find_room(inventory: Inventory, room_id: str) -> Optional[Tuple[int, Room]]:
    for ri, room in enumerate(inventory.rooms):
        if room.id == room_id:
            return ri, room
    return None


class EditModeCoordinator:
    """
    Single-slot holders for the transient UI focus.

    One contextual panel (item move/rename or room rename) and one action
    menu (item or room) at most; a panel and a menu are never open together.
    Rows are addressed by id, positions are recomputed on every query.
    The edit_mode flags on rows mirror the panel slot.
    """

    def __init__(self, inventory: Callable[[], Inventory]):
        self._inventory = inventory
        self.panel: Optional[PanelSlot] = None
        self.active_menu_id: Optional[str] = None
        self.active_room_menu_id: Optional[str] = None

    # ---------- panels ----------
    def open_exclusive(self, mode: str, target: str, target_id: str) -> bool:
        if mode not in _ALLOWED.get(target, ()):
            return False
        row = self._row(target, target_id)
        if row is None:
            return False
        self.close_all_menus()
        self._clear_flags()
        row.edit_mode = mode
        self.panel = PanelSlot(mode, target, target_id)
        return True

    def toggle_panel(self, mode: str, target: str, target_id: str) -> bool:
        """Menu-button behaviour: the same button closes its own panel."""
        if self.panel == PanelSlot(mode, target, target_id):
            self.close_panel()
            return False
        return self.open_exclusive(mode, target, target_id)

    def close_panel(self) -> None:
        self._clear_flags()
        self.panel = None

    def is_open(self, mode: str, target: str, target_id: str) -> bool:
        return self.panel == PanelSlot(mode, target, target_id)

    def active_panel_position(self) -> Optional[Tuple[int, Optional[int]]]:
        """(room_index, item_index) of the open panel; item_index None for rooms."""
        if self.panel is None:
            return None
        inv = self._inventory()
        if self.panel.target == Target.ITEM:
            hit = find_item(inv, self.panel.target_id)
            return (hit[0], hit[1]) if hit else None
        hit = find_room(inv, self.panel.target_id)
        return (hit[0], None) if hit else None

    # ---------- menus ----------
    def open_menu(self, target: str, target_id: str) -> bool:
        if self._row(target, target_id) is None:
            return False
        self.close_panel()
        self.close_all_menus()
        if target == Target.ITEM:
            self.active_menu_id = target_id
        else:
            self.active_room_menu_id = target_id
        return True

    def toggle_menu(self, target: str, target_id: str) -> bool:
        current = self.active_menu_id if target == Target.ITEM else self.active_room_menu_id
        if current == target_id:
            self.close_all_menus()
            return False
        return self.open_menu(target, target_id)

    def close_all_menus(self) -> None:
        # also what a click outside any menu does
        self.active_menu_id = None
        self.active_room_menu_id = None

    def active_menu_position(self) -> Optional[Tuple[int, Optional[int]]]:
        inv = self._inventory()
        if self.active_menu_id:
            hit = find_item(inv, self.active_menu_id)
            return (hit[0], hit[1]) if hit else None
        if self.active_room_menu_id:
            hit = find_room(inv, self.active_room_menu_id)
            return (hit[0], None) if hit else None
        return None

    # ---------- housekeeping ----------
    def forget(self, ids: Iterable[str]) -> None:
        gone = set(ids)
        if self.panel and self.panel.target_id in gone:
            self.close_panel()
        if self.active_menu_id in gone:
            self.active_menu_id = None
        if self.active_room_menu_id in gone:
            self.active_room_menu_id = None

    def reset(self) -> None:
        self.panel = None
        self.close_all_menus()
        self._clear_flags()

    def _row(self, target: str, target_id: str):
        inv = self._inventory()
        if target == Target.ITEM:
            hit = find_item(inv, target_id)
            return hit[3] if hit else None
        if target == Target.ROOM:
            hit = find_room(inv, target_id)
            return hit[1] if hit else None
        return None

    def _clear_flags(self) -> None:
        for room in self._inventory().rooms:
            room.edit_mode = EditMode.NONE
            for item in room.items:
                item.edit_mode = EditMode.NONE
