import pytest

pytest.importorskip("PySide6.QtGui")

from moveplan.label_render import qr_matrix, render_label, save_label
from moveplan.models import LabelSettings


def test_qr_matrix_is_square():
    m = qr_matrix("item-3f9a2c1d")
    assert len(m) >= 21
    assert all(len(row) == len(m) for row in m)
    # finder pattern in the top-left corner
    assert m[0][0] and m[0][6] and m[6][0]


def test_longer_payload_grows_the_code():
    assert len(qr_matrix("x" * 200)) > len(qr_matrix("x"))


def test_render_and_save(qapp, tmp_path):
    settings = LabelSettings(title="Box of pans", room="Kitchen", weight="40 lbs", notes="Fragile")
    img = render_label(settings, "item-1", high_value=True, w=400, h=240)
    assert (img.width(), img.height()) == (400, 240)
    target = tmp_path / "pans"
    assert save_label(img, str(target))
    assert (tmp_path / "pans.png").exists()
