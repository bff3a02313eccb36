from __future__ import annotations
from typing import Optional

from .catalog import get_category_definition, infer_category, is_known_category
from .identity import IdIssuer
from .models import Item, Room


class ItemFactory:
    def __init__(self, issuer: IdIssuer):
        self.issuer = issuer

    def create_room(self, name: str) -> Optional[Room]:
        name = (name or "").strip()
        if not name:
            return None
        return Room(id=self.issuer.issue("room"), name=name)

    def create_item(self, label: str, category: Optional[str] = None, notes: str = "") -> Optional[Item]:
        label = (label or "").strip()
        if not label:
            return None
        # explicit choice wins, otherwise guess from the label
        cat = category if is_known_category(category) else infer_category(label)
        item_id = self.issuer.issue("item")
        return Item(
            id=item_id,
            label=label,
            category=cat,
            weight=get_category_definition(cat).default_weight,
            notes=(notes or "").strip(),
            qr_value=item_id,
        )
