from moveplan.search import filter_rooms


def test_empty_query_keeps_everything(furnished):
    out = filter_rooms(furnished.inventory, "  ")
    assert [m.room.name for m in out] == ["Kitchen", "Bedroom", "Garage"]
    assert len(out[1].items) == 3


def test_room_name_match_keeps_all_items(furnished):
    out = filter_rooms(furnished.inventory, "bed")
    names = [m.room.name for m in out]
    assert names == ["Bedroom"]
    assert len(out[0].items) == 3


def test_item_label_and_notes_match(furnished):
    out = filter_rooms(furnished.inventory, "FRAGILE")
    assert [m.room.name for m in out] == ["Kitchen"]
    assert [it.label for _, it in out[0].items] == ["Box of pans"]

    out = filter_rooms(furnished.inventory, "oak")
    assert out[0].room_index == 1
    assert out[0].items[0][0] == 1


def test_no_match(furnished):
    assert filter_rooms(furnished.inventory, "piano") == []
