from moveplan.models import EditMode, Target


def _ids(store):
    inv = store.inventory
    return inv.rooms[1].id, inv.rooms[1].items[0].id, inv.rooms[1].items[1].id


def test_only_one_panel_at_a_time(furnished):
    edit = furnished.edit
    room_id, bed_id, dresser_id = _ids(furnished)
    assert edit.open_exclusive(EditMode.MOVE, Target.ITEM, bed_id)
    assert edit.open_exclusive(EditMode.RENAME, Target.ITEM, dresser_id)
    flags = [(i.label, i.edit_mode) for _, i in furnished.inventory.iter_items() if i.edit_mode != EditMode.NONE]
    assert flags == [("Oak Dresser", EditMode.RENAME)]

    assert edit.open_exclusive(EditMode.RENAME, Target.ROOM, room_id)
    assert all(i.edit_mode == EditMode.NONE for _, i in furnished.inventory.iter_items())
    assert furnished.inventory.rooms[1].edit_mode == EditMode.RENAME
    assert edit.active_panel_position() == (1, None)


def test_rooms_have_no_move_panel(furnished):
    room_id, _, _ = _ids(furnished)
    assert not furnished.edit.open_exclusive(EditMode.MOVE, Target.ROOM, room_id)
    assert not furnished.edit.open_exclusive(EditMode.RENAME, Target.ITEM, "item-404")
    assert furnished.edit.panel is None


def test_toggle_panel_closes_the_same_panel(furnished):
    edit = furnished.edit
    _, bed_id, _ = _ids(furnished)
    assert edit.toggle_panel(EditMode.MOVE, Target.ITEM, bed_id)
    assert edit.is_open(EditMode.MOVE, Target.ITEM, bed_id)
    # switching mode on the same row swaps panels
    assert edit.toggle_panel(EditMode.RENAME, Target.ITEM, bed_id)
    assert not edit.is_open(EditMode.MOVE, Target.ITEM, bed_id)
    assert not edit.toggle_panel(EditMode.RENAME, Target.ITEM, bed_id)
    assert edit.panel is None
    assert furnished.inventory.rooms[1].items[0].edit_mode == EditMode.NONE


def test_menu_and_panel_are_exclusive(furnished):
    edit = furnished.edit
    room_id, bed_id, dresser_id = _ids(furnished)
    edit.open_exclusive(EditMode.MOVE, Target.ITEM, bed_id)
    assert edit.open_menu(Target.ITEM, dresser_id)
    assert edit.panel is None
    assert edit.active_menu_position() == (1, 1)

    assert edit.open_menu(Target.ROOM, room_id)
    assert edit.active_menu_id is None and edit.active_room_menu_id == room_id

    edit.open_exclusive(EditMode.RENAME, Target.ITEM, bed_id)
    assert edit.active_room_menu_id is None


def test_toggle_menu_and_click_outside(furnished):
    edit = furnished.edit
    _, bed_id, _ = _ids(furnished)
    assert edit.toggle_menu(Target.ITEM, bed_id)
    assert not edit.toggle_menu(Target.ITEM, bed_id)
    assert edit.active_menu_id is None
    edit.open_menu(Target.ITEM, bed_id)
    edit.close_all_menus()
    assert edit.active_menu_position() is None


def test_positions_follow_ids(furnished):
    edit = furnished.edit
    _, _, dresser_id = _ids(furnished)
    edit.open_menu(Target.ITEM, dresser_id)
    furnished.delete_item(1, 0, True)
    assert edit.active_menu_position() == (1, 0)


def test_reset_clears_everything(furnished):
    edit = furnished.edit
    _, bed_id, _ = _ids(furnished)
    edit.open_exclusive(EditMode.MOVE, Target.ITEM, bed_id)
    edit.reset()
    assert edit.panel is None and edit.active_panel_position() is None
    assert furnished.inventory.rooms[1].items[0].edit_mode == EditMode.NONE
