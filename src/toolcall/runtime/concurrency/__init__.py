"""Sync/async bridging for callers outside an event loop."""

from .interop import run_sync

__all__ = ["run_sync"]
