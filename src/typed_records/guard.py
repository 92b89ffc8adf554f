"""Recursion guard for walking possibly cyclic record graphs."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator


class RecursionGuard:
    """Tracks the objects currently being visited on this thread.

    Each thread sees its own stack, so equality or rendering running on one
    thread never short-circuits a walk on another. Entries are object ids;
    an object stays alive while it is on the stack, so ids cannot be reused
    underneath us.
    """

    def __init__(self) -> None:
        self._local = threading.local()

    @property
    def _stack(self) -> list[int]:
        stack = getattr(self._local, "stack", None)
        if stack is None:
            stack = self._local.stack = []
        return stack

    def is_inspecting(self, obj: Any) -> bool:
        """Return whether obj is being visited somewhere up the call stack."""
        return id(obj) in self._stack

    @contextmanager
    def inspecting(self, obj: Any) -> Iterator[None]:
        """Mark obj as being visited for the duration of the with-block."""
        stack = self._stack
        stack.append(id(obj))
        try:
            yield
        finally:
            stack.pop()

    def __len__(self) -> int:
        return len(self._stack)


# Shared by equality and rendering
recursion_guard = RecursionGuard()
