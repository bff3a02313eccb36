from __future__ import annotations
import random, secrets, string, time
from typing import Optional, Protocol, Tuple

from .models import Inventory, Item, Room

_ALPHABET = string.digits + string.ascii_lowercase


class IdIssuer(Protocol):
    def issue(self, prefix: str = "item") -> str: ...


class SecureIdIssuer:
    """64 random bits from the OS generator; collisions are negligible."""

    def __init__(self, nbytes: int = 8):
        self.nbytes = nbytes

    def issue(self, prefix: str = "item") -> str:
        return f"{prefix}-{secrets.token_hex(self.nbytes)}"


def _base36(n: int) -> str:
    out = ""
    while n:
        n, r = divmod(n, 36)
        out = _ALPHABET[r] + out
    return out or "0"


class TimeRandomIssuer:
    """Timestamp + random suffix, for hosts without a secure random source."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._last = ""

    def issue(self, prefix: str = "item") -> str:
        while True:
            stamp = _base36(time.time_ns() // 1_000_000)
            tail = "".join(self._rng.choice(_ALPHABET) for _ in range(8))
            value = f"{prefix}-{stamp}{tail}"
            if value != self._last:
                self._last = value
                return value


def default_issuer() -> IdIssuer:
    try:
        secrets.token_bytes(1)
    except NotImplementedError:
        # os.urandom missing on this platform
        return TimeRandomIssuer()
    return SecureIdIssuer()


def resolve_by_code(inventory: Inventory, code) -> Optional[Tuple[Room, Item]]:
    """Scanned/typed code -> (room, item). Legacy items may carry qrValue == id."""
    needle = str(code or "").strip()
    if not needle:
        return None
    for room, item in inventory.iter_items():
        if item.matches_code(needle):
            return room, item
    return None
