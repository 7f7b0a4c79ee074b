"""Ollama model backend: streamed ``/api/generate`` over httpx.

The server answers with newline-delimited JSON objects. Each carries a
``response`` fragment; the last one sets ``done``. An ``error`` field or a
non-2xx status fails the stream with ``GenerationBackendError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import orjson

from toolcall.foundation.config import get_settings
from toolcall.foundation.errors import GenerationBackendError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class OllamaBackend:
    """Streams completions from a local or remote Ollama server.

    Args:
        model: Model name (default from settings)
        base_url: Server URL (default from settings)
        temperature: Sampling temperature (default 0.0)
        format: Response format constraint, ``"json"`` or ``""`` for none
        timeout: Request timeout in seconds
        client: Preconfigured ``httpx.AsyncClient`` (tests pass one with a mock transport)
    """

    def __init__(
        self,
        model: str | None = None,
        *,
        base_url: str | None = None,
        temperature: float | None = None,
        format: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        cfg = get_settings().generation
        self.model = model or cfg.model
        if base_url:
            cfg = cfg.model_copy(update={"base_url": base_url})
        self.base_url = cfg.base_url.rstrip("/")
        self.url = cfg.generate_url
        self.temperature = cfg.temperature if temperature is None else temperature
        self.format = cfg.format if format is None else format
        self.timeout = timeout or cfg.request_timeout
        self._client = client  # Lazy httpx client
        self._owns_client = client is None

    def payload(self, prompt: str) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": True,
            "options": {"temperature": self.temperature},
        }
        if self.format:
            body["format"] = self.format
        return body

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the httpx client if this backend created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def stream(self, prompt: str) -> AsyncIterator[str]:
        client = await self._get_client()
        try:
            async with client.stream("POST", self.url, json=self.payload(prompt)) as response:
                if response.is_error:
                    body = (await response.aread()).decode("utf-8", errors="replace")
                    raise GenerationBackendError.create(
                        self.model, f"HTTP {response.status_code} from {self.url}: {body.strip() or response.reason_phrase}"
                    )
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    try:
                        data = orjson.loads(line)
                    except orjson.JSONDecodeError as e:
                        raise GenerationBackendError.create(self.model, f"malformed stream line: {line[:80]!r}") from e
                    if err := data.get("error"):
                        raise GenerationBackendError.create(self.model, str(err))
                    if fragment := data.get("response"):
                        yield fragment
                    if data.get("done"):
                        return
        except httpx.TimeoutException as e:
            raise GenerationBackendError.create(self.model, f"request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise GenerationBackendError.create(self.model, f"network error: {e}") from e

    def __repr__(self) -> str:
        return f"OllamaBackend(model={self.model!r}, url={self.url!r})"
