from __future__ import annotations
import logging
from typing import List

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from PySide6.QtCore import Qt, QRectF
from PySide6.QtGui import QColor, QFont, QImage, QPainter, QPen, QTextOption

from .models import LabelSettings
from .utils import LABEL_ACCENT, LABEL_BG, LABEL_FG, LABEL_H, LABEL_MARGIN, LABEL_MUTED, LABEL_W

logger = logging.getLogger(__name__)


def qr_matrix(payload: str) -> List[List[bool]]:
    qr = qrcode.QRCode(version=None, error_correction=ERROR_CORRECT_M, box_size=1, border=0)
    qr.add_data(payload)
    qr.make(fit=True)
    return qr.get_matrix()


def _wrap() -> QTextOption:
    opt = QTextOption(Qt.AlignLeft)
    opt.setWrapMode(QTextOption.WordWrap)
    return opt


def _draw_qr(p: QPainter, matrix: List[List[bool]], area: QRectF):
    n = len(matrix)
    if not n:
        return
    cell = min(area.width(), area.height()) / n
    p.setPen(Qt.NoPen)
    p.setBrush(QColor(LABEL_FG))
    for y, row in enumerate(matrix):
        for x, on in enumerate(row):
            if on:
                p.drawRect(QRectF(area.left() + x * cell, area.top() + y * cell, cell, cell))


def render_label(settings: LabelSettings, payload: str, high_value: bool = False,
                 w: int = LABEL_W, h: int = LABEL_H) -> QImage:
    """Printable tag: text on the left, QR of the item code on the right. Needs a QGuiApplication (fonts)."""
    img = QImage(w, h, QImage.Format.Format_ARGB32)
    img.fill(QColor(LABEL_BG))
    p = QPainter(img)
    p.setRenderHint(QPainter.Antialiasing, True)
    m = LABEL_MARGIN

    if high_value:
        p.fillRect(QRectF(0, 0, 12, h), QColor(LABEL_ACCENT))

    qr_side = h - 2 * m
    qr_area = QRectF(w - m - qr_side, m, qr_side, qr_side)
    _draw_qr(p, qr_matrix(payload), qr_area)

    text_w = qr_area.left() - 2 * m
    y = float(m)
    p.setPen(QPen(QColor(LABEL_FG)))
    f = QFont("", settings.title_size, QFont.Bold)
    p.setFont(f)
    title_h = settings.title_size * 2.2
    p.drawText(QRectF(m + 8, y, text_w, title_h), settings.title, _wrap())
    y += title_h

    body = QFont("", settings.body_size)
    p.setFont(body)
    line_h = settings.body_size * 1.8
    for line in (settings.room, settings.weight):
        if line:
            p.drawText(QRectF(m + 8, y, text_w, line_h), Qt.AlignLeft, line)
            y += line_h
    if settings.notes:
        p.setPen(QPen(QColor(LABEL_MUTED)))
        p.drawText(QRectF(m + 8, y, text_w, h - y - m), settings.notes, _wrap())

    p.setPen(QPen(QColor(LABEL_MUTED)))
    p.setFont(QFont("", max(8, settings.body_size - 4)))
    p.drawText(QRectF(qr_area.left(), qr_area.bottom(), qr_side, m), Qt.AlignCenter, payload)
    p.end()
    return img


def save_label(img: QImage, path: str) -> bool:
    if not path.lower().endswith(".png"):
        path += ".png"
    if not img.save(path, "PNG"):
        logger.warning("Unable to write label image to %s", path)
        return False
    return True
