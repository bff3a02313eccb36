from __future__ import annotations
from typing import Any, List, Tuple
from .models import Category
from .utils import MAX_ITEM_WEIGHT, WEIGHT_UNIT, norm, to_number

# ===== Categories (lbs) =====
# Last entry is the fallback for anything unknown.
CATEGORIES: List[Category] = [
    Category("Moving Box", 40.0),
    Category("Sofa", 150.0),
    Category("Bed", 120.0),
    Category("Dresser", 100.0),
    Category("Table", 60.0),
    Category("Appliance", 180.0),
    Category("Chair", 20.0),
    Category("Miscellaneous", 40.0),
]
FALLBACK_CATEGORY = CATEGORIES[-1]
CATEGORY_LABELS = [c.label for c in CATEGORIES]

# Order matters: first match wins, box keywords go first ("bookshelf box" is a box).
CATEGORY_RULES: List[Tuple[Tuple[str, ...], str]] = [
    (("box",), "Moving Box"),
    (("sofa", "couch"), "Sofa"),
    (("bed",), "Bed"),
    (("dresser",), "Dresser"),
    (("table",), "Table"),
    (("fridge", "refrigerator", "appliance"), "Appliance"),
    (("chair",), "Chair"),
]

_BY_LABEL = {c.label: c for c in CATEGORIES}


def get_category_definition(label: Any) -> Category:
    return _BY_LABEL.get(label, FALLBACK_CATEGORY) if isinstance(label, str) else FALLBACK_CATEGORY


def is_known_category(label: Any) -> bool:
    return isinstance(label, str) and label in _BY_LABEL


def infer_category(label: Any) -> str:
    """Plain substring match, so "Xbox" is a Moving Box."""
    text = norm(label)
    if not text:
        return FALLBACK_CATEGORY.label
    for keywords, category in CATEGORY_RULES:
        if any(k in text for k in keywords):
            return category
    return FALLBACK_CATEGORY.label


def resolve_weight(raw: Any, category: Any) -> float:
    """Positive finite user weight (capped at MAX_ITEM_WEIGHT), else the category default. Never raises."""
    cat = category if isinstance(category, Category) else get_category_definition(category)
    num = to_number(raw)
    if num is not None and num > 0:
        return min(num, MAX_ITEM_WEIGHT)
    return cat.default_weight


def format_weight(weight: float) -> str:
    w = float(weight)
    txt = str(int(w)) if w.is_integer() else f"{w:.1f}".rstrip("0").rstrip(".")
    return f"{txt} {WEIGHT_UNIT}"
