import pytest

pytest.importorskip("PySide6.QtWidgets")

from moveplan.models import Target
from moveplan.storage import MemoryStore


@pytest.fixture
def window(qapp):
    from moveplan_app import MainWindow
    win = MainWindow(kv=MemoryStore())
    yield win
    win.close()


def test_add_room_from_toolbar(window):
    window.ed_room.setText("Kitchen")
    window._add_room()
    assert window.store.inventory.room_names() == ["Kitchen"]
    assert window.tree.topLevelItemCount() == 1
    assert window.ed_room.text() == ""
    assert window.undo_manager.can_undo()


def test_undo_redo_through_window(window):
    window.ed_room.setText("Garage")
    window._add_room()
    window.store.add_item(0, "Workbench table")
    window._refresh()
    assert window.tree.topLevelItem(0).childCount() == 1

    window._undo()
    assert window.store.inventory.rooms[0].items == []
    window._redo()
    assert window.store.inventory.rooms[0].items[0].label == "Workbench table"


def test_search_filters_tree(window):
    for name in ("Kitchen", "Bedroom"):
        window.ed_room.setText(name)
        window._add_room()
    window.store.add_item(1, "Queen bed")
    window.ed_search.setText("queen")
    assert window.tree.topLevelItemCount() == 1
    window.ed_search.setText("")
    assert window.tree.topLevelItemCount() == 2


def test_selecting_item_loads_label_panel(window):
    window.ed_room.setText("Office")
    window._add_room()
    item = window.store.add_item(0, "Desk chair")
    window._refresh()
    window._open_label(item.id)
    assert window.store.labels.active_item_id == item.id
    assert window.tree.select_row(Target.ITEM, item.id)
    assert "20 lbs" in window.lbl_total.text()


def test_focus_out_keeps_fractional_weight(window):
    window.ed_room.setText("Attic")
    window._add_room()
    item = window.store.add_item(0, "Old trunk")
    window.store.update_item_field(0, 0, "weight", 37.5)
    window.props_panel.load_row(Target.ITEM, item.id)
    assert window.props_panel.sp_weight.value() == 37.5
    window.props_panel._apply_weight()
    assert item.weight == 37.5

    window.props_panel.sp_weight.setValue(45)
    window.props_panel._apply_weight()
    assert item.weight == 45
