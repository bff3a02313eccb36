# moveplan/properties.py
from __future__ import annotations
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QLineEdit, QDoubleSpinBox, QComboBox,
    QLabel, QHBoxLayout, QPushButton, QGroupBox, QCheckBox, QPlainTextEdit
)

from .catalog import CATEGORY_LABELS, format_weight
from .models import EditMode, Target
from .store import InventoryStore
from .utils import MAX_ITEM_WEIGHT


class PropertyPanel(QWidget):
    """Field editor for the selected row plus the move/rename panels."""
    changed = Signal(str)   # commit label, the window re-renders on it

    def __init__(self, store: InventoryStore, parent=None):
        super().__init__(parent)
        self.store = store
        self._target: Optional[str] = None
        self._target_id: Optional[str] = None

        self.setMinimumWidth(280)
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(10)

        self.lbl_title = QLabel("Nothing selected")
        self.lbl_title.setStyleSheet("font-weight: 600;")
        root.addWidget(self.lbl_title)

        # ------- Room -------
        self.frm_room = QWidget()
        fr = QFormLayout(self.frm_room)
        fr.setLabelAlignment(Qt.AlignRight)
        self.lbl_room_name = QLabel("-")
        self.lbl_room_count = QLabel("-")
        self.lbl_room_weight = QLabel("-")
        fr.addRow("Name:", self.lbl_room_name)
        fr.addRow("Items:", self.lbl_room_count)
        fr.addRow("Estimated weight:", self.lbl_room_weight)
        root.addWidget(self.frm_room)

        # ------- Item -------
        self.frm_item = QWidget()
        fi = QFormLayout(self.frm_item)
        fi.setLabelAlignment(Qt.AlignRight)
        self.lbl_item_label = QLabel("-")
        self.cmb_category = QComboBox(); self.cmb_category.addItems(CATEGORY_LABELS)
        self.sp_weight = QDoubleSpinBox()
        self.sp_weight.setRange(0, MAX_ITEM_WEIGHT); self.sp_weight.setDecimals(1); self.sp_weight.setSingleStep(5)
        self.sp_weight.setSuffix(" lbs")
        self.chk_include = QCheckBox("Include in estimate")
        self.chk_high = QCheckBox("High value")
        self.ed_notes = QPlainTextEdit(); self.ed_notes.setFixedHeight(70)
        self.lbl_code = QLabel("-"); self.lbl_code.setTextInteractionFlags(Qt.TextSelectableByMouse)
        fi.addRow("Label:", self.lbl_item_label)
        fi.addRow("Category:", self.cmb_category)
        fi.addRow("Weight:", self.sp_weight)
        fi.addRow("", self.chk_include)
        fi.addRow("", self.chk_high)
        fi.addRow("Notes:", self.ed_notes)
        fi.addRow("Code:", self.lbl_code)
        root.addWidget(self.frm_item)

        self.cmb_category.activated.connect(self._apply_category)
        self.sp_weight.editingFinished.connect(self._apply_weight)
        self.chk_include.toggled.connect(lambda on: self._apply_field("include", on))
        self.chk_high.toggled.connect(lambda on: self._apply_field("highValue", on))

        btn_notes = QPushButton("Save notes")
        btn_notes.clicked.connect(self._apply_notes)
        fi.addRow("", btn_notes)

        # ------- Rename panel -------
        self.grp_rename = QGroupBox("Rename")
        gr = QHBoxLayout(self.grp_rename)
        self.ed_rename = QLineEdit()
        self.btn_rename_ok = QPushButton("Save")
        self.btn_rename_cancel = QPushButton("Cancel")
        gr.addWidget(self.ed_rename, 1); gr.addWidget(self.btn_rename_ok); gr.addWidget(self.btn_rename_cancel)
        self.ed_rename.returnPressed.connect(self._confirm_rename)
        self.btn_rename_ok.clicked.connect(self._confirm_rename)
        self.btn_rename_cancel.clicked.connect(self._cancel_panel)
        root.addWidget(self.grp_rename)

        # ------- Move panel -------
        self.grp_move = QGroupBox("Move to room")
        gm = QHBoxLayout(self.grp_move)
        self.cmb_dest = QComboBox()
        self.btn_move_ok = QPushButton("Move")
        self.btn_move_cancel = QPushButton("Cancel")
        gm.addWidget(self.cmb_dest, 1); gm.addWidget(self.btn_move_ok); gm.addWidget(self.btn_move_cancel)
        self.btn_move_ok.clicked.connect(self._confirm_move)
        self.btn_move_cancel.clicked.connect(self._cancel_panel)
        root.addWidget(self.grp_move)

        root.addStretch(1)
        self.clear()

    # ---------- API ----------
    def clear(self):
        self._target = self._target_id = None
        self.lbl_title.setText("Nothing selected")
        self.frm_room.setVisible(False)
        self.frm_item.setVisible(False)
        self.sync_panels()

    def load_row(self, target: str, target_id: str):
        if target == Target.ROOM and self.store.find_room(target_id):
            self._target, self._target_id = target, target_id
        elif target == Target.ITEM and self.store.find_item(target_id):
            self._target, self._target_id = target, target_id
        else:
            self.clear()
            return
        self.reload()

    def reload(self):
        """Re-read the current row by id; it may have moved or vanished."""
        if self._target == Target.ROOM:
            room = self.store.find_room(self._target_id)
            if room is None:
                return self.clear()
            self.lbl_title.setText("Properties: Room")
            self.lbl_room_name.setText(room.name)
            self.lbl_room_count.setText(str(len(room.items)))
            self.lbl_room_weight.setText(format_weight(room.room_weight))
            self.frm_room.setVisible(True)
            self.frm_item.setVisible(False)
        elif self._target == Target.ITEM:
            hit = self.store.find_item(self._target_id)
            if hit is None:
                return self.clear()
            room, item = hit
            self.lbl_title.setText(f"Properties: Item in {room.name}")
            for w in (self.cmb_category, self.sp_weight, self.chk_include, self.chk_high):
                w.blockSignals(True)
            self.lbl_item_label.setText(item.label)
            self.cmb_category.setCurrentText(item.category)
            self.sp_weight.setValue(item.weight)
            self.chk_include.setChecked(item.include_in_estimate)
            self.chk_high.setChecked(item.is_high_value)
            self.ed_notes.setPlainText(item.notes)
            self.lbl_code.setText(item.qr_value or item.id)
            for w in (self.cmb_category, self.sp_weight, self.chk_include, self.chk_high):
                w.blockSignals(False)
            self.frm_room.setVisible(False)
            self.frm_item.setVisible(True)
        self.sync_panels()

    def open_panel(self, mode: str, target: str, target_id: str):
        if self.store.edit.open_exclusive(mode, target, target_id):
            self.load_row(target, target_id)
            self.changed.emit("panel.open")

    def sync_panels(self):
        panel = self.store.edit.panel
        self.grp_rename.setVisible(bool(panel and panel.mode == EditMode.RENAME))
        self.grp_move.setVisible(bool(panel and panel.mode == EditMode.MOVE))
        if panel is None:
            return
        if panel.mode == EditMode.RENAME:
            if panel.target == Target.ROOM:
                room = self.store.find_room(panel.target_id)
                self.ed_rename.setText(room.name if room else "")
            else:
                hit = self.store.find_item(panel.target_id)
                self.ed_rename.setText(hit[1].label if hit else "")
            self.ed_rename.setFocus()
        else:
            hit = self.store.find_item(panel.target_id)
            self.cmb_dest.clear()
            for room in self.store.inventory.rooms:
                if hit and room is hit[0]:
                    continue
                self.cmb_dest.addItem(room.name, room.id)

    # ---------- apply handlers ----------
    def _item_pos(self):
        if self._target != Target.ITEM:
            return None
        return self.store.position_of(self._target_id)

    def _apply_field(self, field: str, value):
        pos = self._item_pos()
        if pos and self.store.update_item_field(pos[0], pos[1], field, value):
            self.changed.emit(f"item.{field}")
            self.reload()

    def _apply_category(self, *_):
        self._apply_field("category", self.cmb_category.currentText())

    def _apply_weight(self):
        # editingFinished also fires on focus-out; only write a value the user changed
        hit = self.store.find_item(self._target_id) if self._target == Target.ITEM else None
        if hit is None or self.sp_weight.value() == round(hit[1].weight, 1):
            return
        self._apply_field("weight", self.sp_weight.value())

    def _apply_notes(self):
        pos = self._item_pos()
        if pos and self.store.update_item_notes(pos[0], pos[1], self.ed_notes.toPlainText()):
            self.changed.emit("item.notes")

    def _confirm_rename(self):
        panel = self.store.edit.panel
        if panel is None or panel.mode != EditMode.RENAME:
            return
        text = self.ed_rename.text()
        if panel.target == Target.ROOM:
            ri = self.store.room_position(panel.target_id)
            ok = ri is not None and self.store.rename_room(ri, text)
        else:
            pos = self.store.position_of(panel.target_id)
            ok = pos is not None and self.store.rename_item(pos[0], pos[1], text)
        if ok:
            self.changed.emit("rename")
            self.reload()

    def _confirm_move(self):
        panel = self.store.edit.panel
        if panel is None or panel.mode != EditMode.MOVE:
            return
        pos = self.store.position_of(panel.target_id)
        dest = self.store.room_position(self.cmb_dest.currentData() or "")
        if pos is None or dest is None:
            return
        if self.store.move_item(pos[0], pos[1], dest):
            self.changed.emit("item.move")
            self.reload()

    def _cancel_panel(self):
        self.store.edit.close_panel()
        self.sync_panels()
        self.changed.emit("panel.close")
