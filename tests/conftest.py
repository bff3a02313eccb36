import os
import sys
from pathlib import Path
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from moveplan.storage import MemoryStore
from moveplan.store import InventoryStore


class CountingIssuer:
    """Predictable ids for assertions."""

    def __init__(self):
        self.n = 0

    def issue(self, prefix="item"):
        self.n += 1
        return f"{prefix}-{self.n}"


class FailingStore(MemoryStore):
    def set(self, key, value):
        raise OSError("quota exceeded")


@pytest.fixture
def issuer():
    return CountingIssuer()


@pytest.fixture
def kv():
    return MemoryStore()


@pytest.fixture
def store(kv, issuer):
    return InventoryStore(kv, issuer=issuer)


@pytest.fixture
def furnished(store):
    """Kitchen [pans box, table], Bedroom [bed, dresser, lamp], Garage []."""
    store.add_room("Kitchen")
    store.add_room("Bedroom")
    store.add_room("Garage")
    store.add_item(0, "Box of pans", notes="Fragile")
    store.add_item(0, "Dining table")
    store.add_item(1, "Queen bed")
    store.add_item(1, "Oak Dresser")
    store.add_item(1, "Lamp")
    return store


@pytest.fixture(scope="session")
def qapp():
    widgets = pytest.importorskip("PySide6.QtWidgets")
    app = widgets.QApplication.instance() or widgets.QApplication([])
    yield app
