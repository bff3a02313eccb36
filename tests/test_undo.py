from moveplan.undo import UndoManager


def test_baseline_is_never_undone():
    u = UndoManager()
    u.reset("a")
    assert not u.can_undo()
    assert u.undo() is None


def test_undo_redo_cycle():
    changes = []
    u = UndoManager(on_change=lambda: changes.append(1))
    u.reset("a")
    u.push("b")
    u.push("b")
    u.push("c")
    assert u.undo() == "b"
    assert u.undo() == "a"
    assert u.can_redo()
    assert u.redo() == "b"
    u.push("d")
    assert not u.can_redo()
    assert u.top() == "d"
    assert changes


def test_limit_drops_oldest():
    u = UndoManager(limit=3)
    for s in "abcde":
        u.push(s)
    assert u.undo() == "d"
    assert u.undo() == "c"
    assert u.undo() is None


def test_store_snapshots_drive_undo(furnished):
    u = UndoManager()
    u.reset(furnished.snapshot())
    furnished.delete_item(1, 0, True)
    u.push(furnished.snapshot())
    assert furnished.restore(u.undo())
    assert furnished.inventory.rooms[1].items[0].label == "Queen bed"
    assert furnished.restore(u.redo())
    assert len(furnished.inventory.rooms[1].items) == 2
