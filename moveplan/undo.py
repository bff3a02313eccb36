from __future__ import annotations
from typing import Optional, Callable, List

class UndoManager:
    """Snapshot stack; the first push is the baseline and is never undone."""

    def __init__(self, on_change: Optional[Callable[[], None]] = None, limit: int = 100):
        self._undo_stack: List[str] = []
        self._redo_stack: List[str] = []
        self.limit = max(2, int(limit))
        self.on_change = on_change

    def push(self, snapshot: str):
        if self._undo_stack and self._undo_stack[-1] == snapshot:
            return
        self._undo_stack.append(snapshot)
        if len(self._undo_stack) > self.limit:
            del self._undo_stack[0]
        self._redo_stack.clear()
        if self.on_change: self.on_change()

    def reset(self, snapshot: str):
        self._undo_stack = [snapshot]
        self._redo_stack.clear()
        if self.on_change: self.on_change()

    def can_undo(self) -> bool:
        return len(self._undo_stack) > 1

    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    def undo(self) -> Optional[str]:
        if not self.can_undo():
            return None
        current = self._undo_stack.pop()
        self._redo_stack.append(current)
        if self.on_change: self.on_change()
        return self._undo_stack[-1]

    def redo(self) -> Optional[str]:
        if not self.can_redo():
            return None
        snap = self._redo_stack.pop()
        self._undo_stack.append(snap)
        if self.on_change: self.on_change()
        return snap

    def top(self) -> Optional[str]:
        return self._undo_stack[-1] if self._undo_stack else None
