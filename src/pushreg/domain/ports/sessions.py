"""Port for acquiring an opaque session token."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SessionSource(Protocol):
    """Asynchronously issues a session token or raises on failure."""

    async def fetch_session(self) -> str: ...


__all__ = ["SessionSource"]
