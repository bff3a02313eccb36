from __future__ import annotations
from typing import Optional, Tuple

from PySide6.QtCore import Qt, Signal, QPoint
from PySide6.QtGui import QBrush, QColor
from PySide6.QtWidgets import QAbstractItemView, QMenu, QTreeWidget, QTreeWidgetItem

from .catalog import format_weight
from .models import EditMode, Target
from .search import filter_rooms
from .store import InventoryStore

ROW_KEY = Qt.UserRole
HIGH_VALUE_COLOR = QColor("#B42318")
EXCLUDED_COLOR = QColor("#98A2B3")


class InventoryTree(QTreeWidget):
    """Rooms as top-level rows, items underneath. Rows carry (target, id), never positions."""

    panelRequested = Signal(str, str, str)   # mode, target, id
    labelRequested = Signal(str)             # item id
    addItemRequested = Signal(str)           # room id
    deleteRequested = Signal(str, str)       # target, id
    rowSelected = Signal(str, str)           # target, id ("" "" when nothing)

    def __init__(self, store: InventoryStore, parent=None):
        super().__init__(parent)
        self.store = store
        self.query = ""
        self.setColumnCount(3)
        self.setHeaderLabels(["Room / item", "Category", "Weight"])
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_menu)
        self.itemSelectionChanged.connect(self._on_selection)
        self.setColumnWidth(0, 320)
        self.setColumnWidth(1, 140)

    # ---------- rendering ----------
    def refresh(self, query: Optional[str] = None):
        if query is not None:
            self.query = query
        keep = self.selected_row()
        self.blockSignals(True)
        self.clear()
        matches = filter_rooms(self.store.inventory, self.query)
        for m in matches:
            room = m.room
            top = QTreeWidgetItem([f"{room.name}  ({len(room.items)} items)", "",
                                   format_weight(room.room_weight)])
            top.setData(0, ROW_KEY, (Target.ROOM, room.id))
            f = top.font(0); f.setBold(True); top.setFont(0, f)
            if room.edit_mode == EditMode.RENAME:
                top.setText(0, top.text(0) + "  [renaming]")
            self.addTopLevelItem(top)
            for _, it in m.items:
                row = QTreeWidgetItem([it.label, it.category, format_weight(it.weight)])
                row.setData(0, ROW_KEY, (Target.ITEM, it.id))
                if it.is_high_value:
                    row.setForeground(0, QBrush(HIGH_VALUE_COLOR))
                    row.setToolTip(0, "High value")
                if not it.include_in_estimate:
                    for col in range(3):
                        row.setForeground(col, QBrush(EXCLUDED_COLOR))
                    f = row.font(2); f.setStrikeOut(True); row.setFont(2, f)
                if it.edit_mode != EditMode.NONE:
                    row.setText(0, f"{it.label}  [{it.edit_mode}]")
                if it.notes:
                    row.setToolTip(0, it.notes)
                top.addChild(row)
            top.setExpanded(True)
        self.blockSignals(False)
        if keep:
            self.select_row(*keep)

    def selected_row(self) -> Optional[Tuple[str, str]]:
        items = self.selectedItems()
        if not items:
            return None
        data = items[0].data(0, ROW_KEY)
        return tuple(data) if data else None

    def select_row(self, target: str, target_id: str) -> bool:
        for i in range(self.topLevelItemCount()):
            top = self.topLevelItem(i)
            for node in [top] + [top.child(j) for j in range(top.childCount())]:
                data = node.data(0, ROW_KEY)
                if data and tuple(data) == (target, target_id):
                    self.setCurrentItem(node)
                    self.scrollToItem(node)
                    return True
        return False

    def _on_selection(self):
        row = self.selected_row()
        self.rowSelected.emit(*(row or ("", "")))

    # ---------- action menus ----------
    def _show_menu(self, pos: QPoint):
        node = self.itemAt(pos)
        data = node.data(0, ROW_KEY) if node else None
        if not data:
            self.store.edit.close_all_menus()
            return
        target, target_id = data
        if not self.store.edit.open_menu(target, target_id):
            return
        self.refresh()

        menu = QMenu(self)
        if target == Target.ITEM:
            menu.addAction("Rename…", lambda: self.panelRequested.emit(EditMode.RENAME, target, target_id))
            menu.addAction("Move to room…", lambda: self.panelRequested.emit(EditMode.MOVE, target, target_id))
            menu.addAction("Label…", lambda: self.labelRequested.emit(target_id))
            menu.addSeparator()
            menu.addAction("Delete item", lambda: self.deleteRequested.emit(target, target_id))
        else:
            menu.addAction("Add item…", lambda: self.addItemRequested.emit(target_id))
            menu.addAction("Rename…", lambda: self.panelRequested.emit(EditMode.RENAME, target, target_id))
            menu.addSeparator()
            menu.addAction("Delete room", lambda: self.deleteRequested.emit(target, target_id))
        menu.exec(self.viewport().mapToGlobal(pos))
        # closed by a pick or by clicking elsewhere
        self.store.edit.close_all_menus()
