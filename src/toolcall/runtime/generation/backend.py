"""Model backend contract consumed by the generation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


@runtime_checkable
class ModelBackend(Protocol):
    """Submit a prompt, receive its response as ordered text fragments.

    Implementations are typically async generators. Cancellation is delivered
    as ``asyncio.CancelledError`` at the implementation's next await, so a
    backend only needs to await between fragments to be cancelable.
    """

    def stream(self, prompt: str) -> AsyncIterator[str]: ...
