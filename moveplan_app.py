#!/usr/bin/env python3
# -*- coding: utf-8 -*-
from __future__ import annotations
import sys, json, os, logging
from PySide6.QtCore import Qt, QSizeF
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QToolBar, QStatusBar, QFileDialog, QMessageBox,
    QDockWidget, QStyle, QLabel, QLineEdit, QInputDialog
)
from moveplan import (InventoryStore, UndoManager, QSettingsStore, ScanSession, IterableCodeSource,
                      UnavailableCameraSource, CATEGORY_LABELS, format_weight, infer_category, Target)
from moveplan.view import InventoryTree
from moveplan.properties import PropertyPanel
from moveplan.labels_panel import LabelPanel

logger = logging.getLogger("moveplan")


class MainWindow(QMainWindow):
    def __init__(self, kv=None, camera=None):
        super().__init__()
        self.setWindowTitle("Move Planner")
        self.resize(1180, 800)

        # 1) store + undo; the baseline snapshot is pushed after loading
        self.undo_manager = UndoManager(on_change=self._update_actions)
        self.store = InventoryStore(kv if kv is not None else QSettingsStore.from_env(),
                                    status_cb=self._status, on_commit=self._on_commit)
        self.undo_manager.reset(self.store.snapshot())
        # camera backend is picked once; without one every scan reports "unavailable"
        self.camera = camera or UnavailableCameraSource()
        self.scan = ScanSession(self.store.resolve_by_code, status_cb=self._status)

        # 2) tree
        self.tree = InventoryTree(self.store)
        self.setCentralWidget(self.tree)

        # 3) docks
        self.props_panel = PropertyPanel(self.store, self)
        self.props_dock = QDockWidget("Properties", self)
        self.props_dock.setWidget(self.props_panel)
        self.props_dock.setMinimumWidth(320)
        self.addDockWidget(Qt.RightDockWidgetArea, self.props_dock)

        self.label_panel = LabelPanel(self.store, self)
        self.label_dock = QDockWidget("Label", self)
        self.label_dock.setWidget(self.label_panel)
        self.label_dock.setMinimumWidth(320)
        self.addDockWidget(Qt.RightDockWidgetArea, self.label_dock)

        # 4) toolbar/status
        self._build_toolbar()
        self.setStatusBar(QStatusBar(self))
        self.lbl_total = QLabel()
        self.statusBar().addPermanentWidget(self.lbl_total)

        # 5) wiring
        self.tree.rowSelected.connect(self._on_row_selected)
        self.tree.panelRequested.connect(self._open_panel)
        self.tree.labelRequested.connect(self._open_label)
        self.tree.addItemRequested.connect(self._add_item_dialog)
        self.tree.deleteRequested.connect(self._delete_row)
        self.props_panel.changed.connect(lambda _: self._refresh())
        self.label_panel.changed.connect(lambda _: self._refresh())

        self._refresh()
        self._update_actions()

    # ---------- toolbar ----------
    def _build_toolbar(self):
        tb = QToolBar("Main", self)
        tb.setMovable(False)
        tb.setIconSize(QSizeF(18, 18).toSize())
        tb.setToolButtonStyle(Qt.ToolButtonTextBesideIcon)
        self.addToolBar(Qt.TopToolBarArea, tb)
        style = self.style()

        self.ed_room = QLineEdit(); self.ed_room.setPlaceholderText("New room name")
        self.ed_room.setFixedWidth(200)
        self.ed_room.returnPressed.connect(self._add_room)
        tb.addWidget(self.ed_room)
        self.act_add_room = QAction(style.standardIcon(QStyle.SP_FileDialogNewFolder), "Add room", self)
        self.act_add_room.triggered.connect(self._add_room)
        tb.addAction(self.act_add_room)
        tb.addSeparator()

        self.act_undo = QAction(style.standardIcon(QStyle.SP_ArrowBack), "Undo", self)
        self.act_undo.setShortcut(QKeySequence("Ctrl+Z"))
        self.act_undo.triggered.connect(self._undo)
        self.act_redo = QAction(style.standardIcon(QStyle.SP_ArrowForward), "Redo", self)
        self.act_redo.setShortcut(QKeySequence("Ctrl+Y"))
        self.act_redo.triggered.connect(self._redo)
        tb.addAction(self.act_undo); tb.addAction(self.act_redo)
        tb.addSeparator()

        self.act_find = QAction(style.standardIcon(QStyle.SP_FileDialogContentsView), "Find by code…", self)
        self.act_find.setShortcut(QKeySequence("Ctrl+F"))
        self.act_find.triggered.connect(self._find_by_code)
        self.act_scan = QAction(style.standardIcon(QStyle.SP_ComputerIcon), "Scan label", self)
        self.act_scan.triggered.connect(self._scan_camera)
        tb.addAction(self.act_find); tb.addAction(self.act_scan)
        tb.addSeparator()

        self.act_export = QAction(style.standardIcon(QStyle.SP_DialogSaveButton), "Export JSON…", self)
        self.act_export.setShortcut(QKeySequence("Ctrl+E"))
        self.act_export.triggered.connect(self._export_json_dialog)
        self.act_import = QAction(style.standardIcon(QStyle.SP_DirOpenIcon), "Import JSON…", self)
        self.act_import.setShortcut(QKeySequence("Ctrl+O"))
        self.act_import.triggered.connect(self._import_json_dialog)
        tb.addAction(self.act_export); tb.addAction(self.act_import)

        tb.addSeparator()
        self.ed_search = QLineEdit(); self.ed_search.setPlaceholderText("Search rooms, items, notes")
        self.ed_search.setClearButtonEnabled(True)
        self.ed_search.textChanged.connect(lambda q: self.tree.refresh(q))
        tb.addWidget(self.ed_search)

    # ---------- store events ----------
    def _on_commit(self, label: str):
        self.undo_manager.push(self.store.snapshot())
        self._status(f"Saved: {label}")

    def _refresh(self):
        self.tree.refresh()
        self.props_panel.reload()
        self.label_panel.reload()
        self.lbl_total.setText(f"Total estimate: {format_weight(self.store.inventory.total_weight)}")

    def _update_actions(self):
        if hasattr(self, "act_undo"):
            self.act_undo.setEnabled(self.undo_manager.can_undo())
            self.act_redo.setEnabled(self.undo_manager.can_redo())

    def _on_row_selected(self, target: str, target_id: str):
        if target:
            self.props_panel.load_row(target, target_id)
        else:
            self.props_panel.clear()

    # ---------- actions ----------
    def _add_room(self):
        room = self.store.add_room(self.ed_room.text())
        if room is None:
            return
        self.ed_room.clear()
        self._refresh()
        self.tree.select_row(Target.ROOM, room.id)

    def _add_item_dialog(self, room_id: str):
        room = self.store.find_room(room_id)
        if room is None:
            return
        label, ok = QInputDialog.getText(self, "Add item", f"Box or item for {room.name}:")
        if not ok or not label.strip():
            return
        guess = infer_category(label)
        category, ok = QInputDialog.getItem(self, "Category", "Category:", CATEGORY_LABELS,
                                            CATEGORY_LABELS.index(guess), False)
        if not ok:
            return
        notes, _ = QInputDialog.getText(self, "Notes", "Notes (optional):")
        # re-resolve: the dialogs ran an event loop
        ri = self.store.room_position(room_id)
        if ri is None:
            return
        item = self.store.add_item(ri, label, category, notes)
        self._refresh()
        if item:
            self.tree.select_row(Target.ITEM, item.id)

    def _open_panel(self, mode: str, target: str, target_id: str):
        self.props_panel.open_panel(mode, target, target_id)
        self.tree.select_row(target, target_id)
        self.props_dock.show(); self.props_dock.raise_()

    def _open_label(self, item_id: str):
        self.label_panel.open_label(item_id)
        self.label_dock.show(); self.label_dock.raise_()

    def _ask(self, prompt: str) -> bool:
        return QMessageBox.question(self, "Confirm", prompt) == QMessageBox.Yes

    def _delete_row(self, target: str, target_id: str):
        if target == Target.ROOM:
            ri = self.store.room_position(target_id)
            done = ri is not None and self.store.delete_room(ri, self._ask)
        else:
            pos = self.store.position_of(target_id)
            done = pos is not None and self.store.delete_item(pos[0], pos[1], self._ask)
        if done:
            self._refresh()

    def _show_found(self, result):
        if result.ok:
            self.ed_search.clear()
            self.tree.refresh("")
            self.tree.select_row(Target.ITEM, result.item.id)
        else:
            QMessageBox.information(self, "Scan", result.message)

    def _find_by_code(self):
        code, ok = QInputDialog.getText(self, "Find by code", "Item code:")
        if not ok:
            return
        self._show_found(self.scan.run(IterableCodeSource([code])))

    def _scan_camera(self):
        self._show_found(self.scan.run(self.camera))

    def _undo(self):
        snap = self.undo_manager.undo()
        if snap is None: return
        self.store.restore(snap)
        self._refresh()

    def _redo(self):
        snap = self.undo_manager.redo()
        if snap is None: return
        self.store.restore(snap)
        self._refresh()

    def _export_json_dialog(self):
        path, _ = QFileDialog.getSaveFileName(self, "Export JSON", "move_inventory.json", "JSON (*.json)")
        if not path:
            return
        if not path.lower().endswith(".json"):
            path += ".json"
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(json.loads(self.store.snapshot()), f, ensure_ascii=False, indent=2)
            logger.info("Exported inventory to %s", path)
            self._status(f"Exported: {os.path.basename(path)}")
        except OSError as e:
            QMessageBox.critical(self, "Export failed", str(e))

    def _import_json_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "Import JSON", "", "JSON (*.json)")
        if not path:
            return
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            QMessageBox.critical(self, "Import failed", str(e))
            return
        if not self.store.restore(raw):
            QMessageBox.critical(self, "Import failed", "Not a move inventory file.")
            return
        self.undo_manager.push(self.store.snapshot())
        self._refresh()
        logger.info("Imported inventory from %s", path)
        self._status(f"Imported: {os.path.basename(path)}")

    def _status(self, text: str):
        if self.statusBar():
            self.statusBar().showMessage(text, 3000)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    win = MainWindow()
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
