from __future__ import annotations
import os, math
from typing import Any, Optional

# ===== Storage =====
INVENTORY_KEY = "pcs-move-inventory"
CHECKLIST_KEY = "pcs-checklist"   # owned by the checklist page, kept here so keys never collide
SETTINGS_ORG = "MovePlanner"
SETTINGS_APP = "MovePlanner"
SETTINGS_FILE_ENV = "MOVEPLAN_SETTINGS_FILE"

# ===== Weights =====
WEIGHT_UNIT = "lbs"
MAX_ITEM_WEIGHT = 100000.0   # keeps room sums finite

# ===== Labels =====
LABEL_TITLE_SIZE = 28
LABEL_BODY_SIZE = 14
LABEL_TITLE_RANGE = (12, 72)
LABEL_BODY_RANGE = (8, 48)
LABEL_W = 600
LABEL_H = 360
LABEL_MARGIN = 24
LABEL_BG = "#FFFFFF"
LABEL_FG = "#111827"
LABEL_ACCENT = "#B42318"      # high value stripe
LABEL_MUTED = "#667085"

# ===== Defaults for broken records =====
UNNAMED_ROOM = "Unnamed room"
UNLABELED_ITEM = "Unlabeled item"


def settings_file() -> Optional[str]:
    path = os.getenv(SETTINGS_FILE_ENV, "").strip()
    return path or None


def to_number(value: Any) -> Optional[float]:
    """Parse user input into a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def round_half_up(v: float) -> int:
    # same result as Math.round for non-negative sums
    return int(math.floor(v + 0.5))


def clamp_int(value: Any, lo: int, hi: int, fallback: int) -> int:
    num = to_number(value)
    if num is None:
        return fallback
    return max(lo, min(hi, int(round(num))))


def norm(text: Any) -> str:
    return str(text or "").strip().lower()
