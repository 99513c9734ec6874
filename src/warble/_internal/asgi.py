"""Typed ASGI definitions.

The transport talks to the engine through raw ASGI dicts. HTTPScope is
the typed view of an ``http`` scope used when building a Request.
Users never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

# Raw ASGI types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """Typed HTTP scope parsed from raw ASGI scope dict."""

    type: str
    method: str
    path: str
    query_string: bytes
    headers: tuple[tuple[bytes, bytes], ...]
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            type=scope["type"],
            method=scope["method"],
            path=scope["path"],
            query_string=scope.get("query_string", b""),
            headers=tuple(tuple(pair) for pair in scope.get("headers", ())),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
