import random

from moveplan.identity import SecureIdIssuer, TimeRandomIssuer, default_issuer, resolve_by_code
from moveplan.models import Inventory, Item, Room


def _inventory():
    box = Item(id="box-1", label="Books", category="Moving Box", weight=45, qr_value="box-1")
    legacy = Item(id="item-abc", label="Lamp", category="Miscellaneous", weight=10, qr_value="old-qr-7")
    return Inventory(rooms=[Room(id="room-1", name="Study", items=[box]),
                            Room(id="room-2", name="Hall", items=[legacy])])


def test_secure_issuer_unique_and_prefixed():
    issuer = SecureIdIssuer()
    ids = {issuer.issue() for _ in range(2000)}
    assert len(ids) == 2000
    assert all(i.startswith("item-") for i in ids)
    assert issuer.issue("room").startswith("room-")


def test_time_random_issuer_unique():
    issuer = TimeRandomIssuer(random.Random(7))
    ids = [issuer.issue() for _ in range(500)]
    assert len(set(ids)) == 500


def test_default_issuer_is_secure():
    assert isinstance(default_issuer(), SecureIdIssuer)


def test_resolve_by_code_matches_id():
    hit = resolve_by_code(_inventory(), "box-1")
    assert hit is not None
    room, item = hit
    assert room.name == "Study" and item.id == "box-1"


def test_resolve_by_code_matches_distinct_qr_value():
    inv = _inventory()
    assert resolve_by_code(inv, "old-qr-7")[1].id == "item-abc"
    assert resolve_by_code(inv, "item-abc")[1].label == "Lamp"


def test_resolve_by_code_misses_are_none():
    inv = _inventory()
    assert resolve_by_code(inv, "box-999") is None
    assert resolve_by_code(inv, "") is None
    assert resolve_by_code(inv, None) is None
    assert resolve_by_code(inv, "  box-1 ")[1].id == "box-1"


def test_resolve_by_code_first_match_wins():
    inv = _inventory()
    inv.rooms[1].items.append(Item(id="dupe", label="Second", category="Miscellaneous", weight=1,
                                   qr_value="box-1"))
    room, item = resolve_by_code(inv, "box-1")
    assert room.name == "Study" and item.label == "Books"
