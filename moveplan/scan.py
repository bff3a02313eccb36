from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Optional, Protocol, Tuple

from .errors import CapabilityUnavailable
from .models import Item, Room

logger = logging.getLogger(__name__)

Resolver = Callable[[str], Optional[Tuple[Room, Item]]]


class ScanStatus:
    FOUND = "found"
    NOT_FOUND = "not_found"
    UNAVAILABLE = "unavailable"
    CANCELLED = "cancelled"
    EXHAUSTED = "exhausted"   # stream ended without any decoded code


@dataclass
class ScanResult:
    status: str
    code: str = ""
    room: Optional[Room] = None
    item: Optional[Item] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == ScanStatus.FOUND


class CodeSource(Protocol):
    """Decoded strings from a camera/decoder, None for frames with nothing readable."""

    def frames(self) -> Iterable[Optional[str]]: ...
    def stop(self) -> None: ...


class UnavailableCameraSource:
    """Default when no camera/decoder backend is installed."""

    def __init__(self, reason: str = "Camera scanning is not supported on this device."):
        self.reason = reason

    def frames(self) -> Iterator[Optional[str]]:
        raise CapabilityUnavailable(self.reason)

    def stop(self) -> None:
        pass


class IterableCodeSource:
    """Pre-decoded frames: manual entry, file decoders, tests."""

    def __init__(self, frames: Iterable[Optional[str]]):
        self._frames = frames
        self.stopped = False

    def frames(self) -> Iterator[Optional[str]]:
        for f in self._frames:
            if self.stopped:
                return
            yield f

    def stop(self) -> None:
        self.stopped = True


class ScanSession:
    def __init__(self, resolver: Resolver, status_cb: Optional[Callable[[str], None]] = None):
        self.resolver = resolver
        self._status_cb = status_cb
        self._cancelled = False
        self._source: Optional[CodeSource] = None

    def _report(self, result: ScanResult) -> ScanResult:
        if self._status_cb and result.message:
            self._status_cb(result.message)
        return result

    def lookup(self, code: str) -> ScanResult:
        code = (code or "").strip()
        hit = self.resolver(code) if code else None
        if hit is None:
            return self._report(ScanResult(ScanStatus.NOT_FOUND, code, message=f"No item found for code '{code}'."))
        room, item = hit
        return self._report(ScanResult(ScanStatus.FOUND, code, room, item, f"Found {item.label} in {room.name}."))

    def run(self, source: CodeSource, max_frames: Optional[int] = None) -> ScanResult:
        """Read until the first decoded code, cancel, or end of stream."""
        self._cancelled = False
        self._source = source
        seen = 0
        try:
            for code in source.frames():
                if self._cancelled:
                    return self._report(ScanResult(ScanStatus.CANCELLED, message="Scan cancelled."))
                seen += 1
                if code and code.strip():
                    return self.lookup(code)
                if max_frames is not None and seen >= max_frames:
                    break
        except (CapabilityUnavailable, PermissionError, OSError) as e:
            logger.warning("Camera unavailable: %s", e)
            return self._report(ScanResult(ScanStatus.UNAVAILABLE, message=f"Camera unavailable: {e}"))
        finally:
            source.stop()
            self._source = None
        if self._cancelled:
            return self._report(ScanResult(ScanStatus.CANCELLED, message="Scan cancelled."))
        return self._report(ScanResult(ScanStatus.EXHAUSTED, message="No code detected."))

    def cancel(self) -> None:
        self._cancelled = True
        if self._source is not None:
            self._source.stop()
