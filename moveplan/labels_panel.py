from __future__ import annotations
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QLineEdit, QSpinBox, QLabel, QHBoxLayout,
    QPushButton, QFileDialog, QMessageBox
)

from .label_render import render_label, save_label
from .store import InventoryStore
from .utils import LABEL_BODY_RANGE, LABEL_TITLE_RANGE


class LabelPanel(QWidget):
    changed = Signal(str)

    def __init__(self, store: InventoryStore, parent=None):
        super().__init__(parent)
        self.store = store
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        self.lbl_title = QLabel("Open a label from an item's menu")
        self.lbl_title.setStyleSheet("font-weight: 600;")
        root.addWidget(self.lbl_title)

        self.form = QWidget()
        f = QFormLayout(self.form)
        self.ed_title = QLineEdit(); self.ed_room = QLineEdit()
        self.ed_weight = QLineEdit(); self.ed_notes = QLineEdit()
        self.sp_title = QSpinBox(); self.sp_title.setRange(*LABEL_TITLE_RANGE); self.sp_title.setSuffix(" px")
        self.sp_body = QSpinBox(); self.sp_body.setRange(*LABEL_BODY_RANGE); self.sp_body.setSuffix(" px")
        f.addRow("Title:", self.ed_title)
        f.addRow("Room:", self.ed_room)
        f.addRow("Weight:", self.ed_weight)
        f.addRow("Notes:", self.ed_notes)
        f.addRow("Title size:", self.sp_title)
        f.addRow("Body size:", self.sp_body)
        root.addWidget(self.form)

        self.preview = QLabel()
        self.preview.setAlignment(Qt.AlignCenter)
        self.preview.setMinimumHeight(180)
        root.addWidget(self.preview, 1)

        row = QHBoxLayout()
        self.btn_reset = QPushButton("Reset to item")
        self.btn_save = QPushButton("Save PNG…")
        self.btn_close = QPushButton("Close")
        row.addWidget(self.btn_reset); row.addWidget(self.btn_save); row.addStretch(1); row.addWidget(self.btn_close)
        root.addLayout(row)

        for ed in (self.ed_title, self.ed_room, self.ed_weight, self.ed_notes):
            ed.editingFinished.connect(self._apply)
        self.sp_title.editingFinished.connect(self._apply)
        self.sp_body.editingFinished.connect(self._apply)
        self.btn_reset.clicked.connect(self._reset)
        self.btn_save.clicked.connect(self._save_png)
        self.btn_close.clicked.connect(self.close_label)
        self._set_enabled(False)

    # ---------- API ----------
    def open_label(self, item_id: str):
        if self.store.open_label(item_id) is None:
            return
        self.reload()

    def close_label(self):
        self.store.labels.close()
        self.reload()

    def reload(self):
        item_id = self.store.labels.active_item_id
        hit = self.store.find_item(item_id) if item_id else None
        if hit is None:
            self.store.labels.close()
            self.lbl_title.setText("Open a label from an item's menu")
            self.preview.clear()
            self._set_enabled(False)
            return
        room, item = hit
        s = self.store.labels.ensure(room, item)
        self.lbl_title.setText(f"Label: {item.label}")
        for w, v in ((self.ed_title, s.title), (self.ed_room, s.room),
                     (self.ed_weight, s.weight), (self.ed_notes, s.notes)):
            w.blockSignals(True); w.setText(v); w.blockSignals(False)
        for w, v in ((self.sp_title, s.title_size), (self.sp_body, s.body_size)):
            w.blockSignals(True); w.setValue(v); w.blockSignals(False)
        self._set_enabled(True)
        self._render(s, item.qr_value or item.id, item.is_high_value)

    # ---------- helpers ----------
    def _set_enabled(self, on: bool):
        self.form.setEnabled(on)
        self.btn_reset.setEnabled(on); self.btn_save.setEnabled(on); self.btn_close.setEnabled(on)

    def _render(self, settings, payload: str, high_value: bool):
        img = render_label(settings, payload, high_value)
        pm = QPixmap.fromImage(img)
        self.preview.setPixmap(pm.scaledToWidth(max(200, self.preview.width() - 8), Qt.SmoothTransformation))

    def _apply(self):
        item_id = self.store.labels.active_item_id
        if not item_id:
            return
        self.store.update_label(item_id, title=self.ed_title.text(), room=self.ed_room.text(),
                                weight=self.ed_weight.text(), notes=self.ed_notes.text(),
                                title_size=self.sp_title.value(), body_size=self.sp_body.value())
        self.changed.emit("label.update")
        self.reload()

    def _reset(self):
        item_id = self.store.labels.active_item_id
        if item_id and self.store.reset_label(item_id):
            self.changed.emit("label.reset")
            self.reload()

    def _save_png(self):
        item_id = self.store.labels.active_item_id
        hit = self.store.find_item(item_id) if item_id else None
        if hit is None:
            return
        room, item = hit
        path, _ = QFileDialog.getSaveFileName(self, "Save label", f"{item.label}.png", "PNG (*.png)")
        if not path:
            return
        img = render_label(self.store.labels.ensure(room, item), item.qr_value or item.id, item.is_high_value)
        if not save_label(img, path):
            QMessageBox.critical(self, "Save failed", f"Could not write {path}")
