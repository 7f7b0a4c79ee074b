"""Cancelable, streaming token generation.

One ``generate`` call starts one producer task that pulls fragments from the
model backend and pushes them through a bounded, ordered channel to the
consumer. Live sessions are tracked by key so any in-flight generation can be
aborted with ``stop(key)``.

Lifecycle per session:
    Active      generate() registered the key and spawned the producer
    Delivering  fragments flow; a full channel blocks the producer (nothing dropped)
    Cancelled   stop(key) popped the key and cancelled the producer
    Completed   backend finished (or failed); channel closed, key released

The live-session table is guarded by one lock, held only for dict access and
never across an await, so a stalled consumer cannot block ``stop``.

Example:
    >>> engine = GenerationEngine(OllamaBackend("llama3.2"))
    >>> stream = engine.generate("Say hi", key="req-1")
    >>> async for fragment in stream:
    ...     print(fragment, end="")
    >>> engine.stop("req-1")   # from anywhere, while it is still running
"""

from __future__ import annotations

import asyncio
import threading
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from uuid import uuid4

from toolcall.foundation.config import get_settings
from toolcall.foundation.errors import GenerationBackendError, SessionNotFoundError
from toolcall.runtime.observability import get_logger

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from .backend import ModelBackend

_EOF = object()


class GenerationStream:
    """Ordered, closable channel of text fragments for one session.

    Iterate with ``async for``. Iteration ends when the producer finishes or
    is cancelled, after any fragments already buffered. If the backend failed,
    the end of iteration raises ``GenerationBackendError`` once.
    """

    __slots__ = ("key", "_queue", "_closed", "_cancelled", "_error", "_error_reported", "_task", "_delivered", "_started")

    def __init__(self, key: str, maxsize: int) -> None:
        self.key = key
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self._cancelled = False
        self._error: GenerationBackendError | None = None
        self._error_reported = False
        self._task: asyncio.Task[None] | None = None
        self._delivered = 0
        self._started = time.perf_counter()

    # ─── Consumer side ───────────────────────────────────────────────

    def __aiter__(self) -> GenerationStream:
        return self

    async def __anext__(self) -> str:
        while True:
            if self._closed and self._queue.empty():
                if self._error is not None and not self._error_reported:
                    self._error_reported = True
                    raise self._error
                raise StopAsyncIteration
            item = await self._queue.get()
            if item is _EOF:
                continue
            self._delivered += 1
            return item  # type: ignore[return-value]

    async def collect(self) -> str:
        """Consume the rest of the stream and return the joined text."""
        return "".join([fragment async for fragment in self])

    async def wait(self) -> None:
        """Wait for the producer to finish, whatever the outcome."""
        if self._task is not None:
            await asyncio.wait([self._task])

    def cancel(self) -> None:
        """Cancel the producer directly (the engine releases the key when it ends)."""
        if self._task is not None and not self._task.done():
            self._task.cancel()

    @property
    def done(self) -> bool:
        """Channel closed: no more fragments will be produced."""
        return self._closed

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def error(self) -> GenerationBackendError | None:
        return self._error

    @property
    def delivered(self) -> int:
        """Fragments handed to the consumer so far."""
        return self._delivered

    # ─── Producer side ───────────────────────────────────────────────

    async def _put(self, fragment: str) -> None:
        await self._queue.put(fragment)

    def _close(self) -> None:
        """Close without blocking; a full queue is drained by the consumer first."""
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put_nowait(_EOF)
        except asyncio.QueueFull:
            pass

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "closed" if self._closed else "open"
        return f"GenerationStream(key={self.key!r}, state={state}, buffered={self._queue.qsize()})"


@dataclass(slots=True)
class GenerationSession:
    """A live generation: its key, prompt, output channel and producer task."""

    key: str
    prompt: str
    stream: GenerationStream
    loop: asyncio.AbstractEventLoop
    task: asyncio.Task[None] | None = field(default=None, repr=False)

    def cancel(self) -> None:
        """Cancel the producer, safely from any thread."""
        if self.task is None:
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self.loop:
            self.task.cancel()
        else:
            self.loop.call_soon_threadsafe(self.task.cancel)


class GenerationEngine:
    """Runs cancelable streaming generations against a model backend.

    Args:
        backend: Fragment source (see ``ModelBackend``)
        buffer_size: Fragments buffered per session before the producer blocks
            (default from ``TOOLCALL_GENERATION_BUFFER_SIZE``)
    """

    __slots__ = ("_backend", "_buffer_size", "_sessions", "_lock", "_log")

    def __init__(self, backend: ModelBackend, *, buffer_size: int | None = None) -> None:
        self._backend = backend
        self._buffer_size = buffer_size or get_settings().generation.buffer_size
        self._sessions: dict[str, GenerationSession] = {}
        self._lock = threading.Lock()
        self._log = get_logger("toolcall.generation")

    @property
    def backend(self) -> ModelBackend:
        return self._backend

    def generate(self, prompt: str, *, key: str | None = None) -> GenerationStream:
        """Start generating for ``prompt`` and return its fragment stream.

        Must be called from a running event loop. ``key`` identifies the
        session for ``stop``; it defaults to a fresh request id. Reusing a
        live key replaces the table entry: the earlier session keeps running
        but can no longer be stopped by key.
        """
        loop = asyncio.get_running_loop()
        key = key or uuid4().hex
        stream = GenerationStream(key, self._buffer_size)
        session = GenerationSession(key=key, prompt=prompt, stream=stream, loop=loop)
        session.task = stream._task = loop.create_task(self._produce(session), name=f"generation:{key}")
        session.task.add_done_callback(lambda _: self._finish(session))

        with self._lock:
            replaced = self._sessions.get(key)
            self._sessions[key] = session
        if replaced is not None:
            self._log.warning("session key reused; earlier session no longer stoppable", session=key)
        self._log.debug("session started", session=key, prompt_chars=len(prompt))
        return stream

    @asynccontextmanager
    async def session(self, prompt: str, *, key: str | None = None) -> AsyncIterator[GenerationStream]:
        """Scoped generation: the producer is cancelled if still running on exit."""
        stream = self.generate(prompt, key=key)
        try:
            yield stream
        finally:
            if not stream.done:
                stream.cancel()
                await stream.wait()

    def stop(self, key: str) -> None:
        """Cancel the live session for ``key``.

        Raises:
            SessionNotFoundError: Unknown key, or the session already finished.
        """
        with self._lock:
            session = self._sessions.pop(key, None)
        if session is None:
            raise SessionNotFoundError.create(key, f"prompt {key!r} not found or already completed", recoverable=False)
        session.cancel()
        self._log.info("generation stop requested", session=key)

    def active_keys(self) -> set[str]:
        with self._lock:
            return set(self._sessions)

    def is_active(self, key: str) -> bool:
        with self._lock:
            return key in self._sessions

    async def shutdown(self) -> None:
        """Cancel every live session and wait for the producers to exit."""
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for s in sessions:
            s.cancel()
        loop = asyncio.get_running_loop()
        local = [s.task for s in sessions if s.task is not None and s.loop is loop]
        if local:
            await asyncio.wait(local)

    # ─────────────────────────────────────────────────────────────────
    # Producer
    # ─────────────────────────────────────────────────────────────────

    async def _produce(self, session: GenerationSession) -> None:
        stream = session.stream
        fragments: AsyncIterator[str] | None = None
        try:
            fragments = self._backend.stream(session.prompt)
            async for fragment in fragments:
                await stream._put(fragment)
        except GenerationBackendError as e:
            stream._error = e
            self._log.error("error generating tokens", session=session.key, error=e.error.message)
        except Exception as e:
            err = GenerationBackendError.create(session.key, f"backend failed: {type(e).__name__}: {e}", recoverable=True)
            err.__cause__ = e
            stream._error = err
            self._log.error("error generating tokens", session=session.key, error=f"{type(e).__name__}: {e}")
        finally:
            if fragments is not None and (aclose := getattr(fragments, "aclose", None)) is not None:
                await aclose()

    def _finish(self, session: GenerationSession) -> None:
        """Terminal transition: release the key (if still ours) and close the channel."""
        with self._lock:
            if self._sessions.get(session.key) is session:
                del self._sessions[session.key]
        stream = session.stream
        if session.task is not None and session.task.cancelled():
            stream._cancelled = True
            self._log.info("generation cancelled", session=session.key)
        else:
            self._log.debug("session completed", session=session.key, failed=stream.error is not None,
                            duration_ms=round((time.perf_counter() - stream._started) * 1000, 2))
        stream._close()
