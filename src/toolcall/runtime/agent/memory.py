"""In-process interaction history fed back into the agent prompt."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Interaction:
    """One exchange between the user and the agent."""

    request: str
    response: str

    def render(self) -> str:
        return f"User Request: {self.request}\nAgent Response: {self.response}"


class Memory:
    """Append-only list of interactions, rendered oldest first.

    Not persisted; a new process starts with an empty history.
    """

    __slots__ = ("_items", "_lock")

    def __init__(self) -> None:
        self._items: list[Interaction] = []
        self._lock = threading.Lock()

    def append(self, request: str, response: str) -> None:
        with self._lock:
            self._items.append(Interaction(request, response))

    def interactions(self) -> tuple[Interaction, ...]:
        with self._lock:
            return tuple(self._items)

    def render(self) -> str:
        """History blocks separated by blank lines; empty string when there is none."""
        return "\n\n".join(i.render() for i in self.interactions()).strip()

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __bool__(self) -> bool:
        return len(self) > 0

    __str__ = render
