"""Mock utilities for generation and agent testing.

Provides MockBackend for:
- Scripted fragment streams without a model server
- Simulating slow producers, mid-stream failures and cancellation
- Recording submitted prompts for verification
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Sequence


@dataclass
class MockBackend:
    """Scripted model backend with prompt recording.

    Attributes:
        fragments: Fragments yielded for every prompt
        responder: Computes fragments from the prompt instead (overrides ``fragments``)
        delay: Seconds awaited before each fragment
        raises: Exception raised once ``fail_after`` fragments were yielded
        fail_after: Fragments emitted before ``raises`` fires
        endless: Repeat ``fragments`` until cancelled
    """

    fragments: Sequence[str] = ()
    responder: Callable[[str], Sequence[str]] | None = None
    delay: float = 0.0
    raises: Exception | None = None
    fail_after: int = 0
    endless: bool = False
    prompts: list[str] = field(default_factory=list)
    emitted: int = 0
    cancelled: int = 0
    closed: int = 0

    @classmethod
    def replying(cls, text: str, *, chunk: int = 4, **kwargs: object) -> MockBackend:
        """Backend that streams ``text`` in ``chunk``-sized pieces."""
        return cls(fragments=[text[i:i + chunk] for i in range(0, len(text), chunk)], **kwargs)  # type: ignore[arg-type]

    @property
    def call_count(self) -> int:
        return len(self.prompts)

    @property
    def last_prompt(self) -> str | None:
        return self.prompts[-1] if self.prompts else None

    def assert_called(self) -> None:
        if not self.prompts:
            raise AssertionError("Expected backend to receive a prompt")

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        self.prompts.append(prompt)
        script = list(self.responder(prompt) if self.responder else self.fragments)
        try:
            while True:
                for fragment in script:
                    if self.raises is not None and self.emitted >= self.fail_after:
                        raise self.raises
                    await asyncio.sleep(self.delay)
                    self.emitted += 1
                    yield fragment
                if not (self.endless and script):
                    break
            if self.raises is not None:
                raise self.raises
        except asyncio.CancelledError:
            self.cancelled += 1
            raise
        finally:
            self.closed += 1
