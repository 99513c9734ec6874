"""Immutable HTTP request.

Frozen metadata with async body access. The engine loads form bodies
before dispatch, so form lookups from handlers are synchronous.
"""

from __future__ import annotations

import json as json_module
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from warble._internal.asgi import HTTPScope, Receive, Scope
from warble._internal.multimap import first_value
from warble.http.forms import FormData, is_form_content_type, parse_form_data
from warble.http.headers import Headers
from warble.http.query import QueryParams

logger = logging.getLogger("warble.server")

# Methods whose bodies are parsed as forms
FORM_METHODS = frozenset({"POST", "PUT", "PATCH"})

_EMPTY_FORM = FormData()


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers, query) is frozen at creation.
    Body is accessed asynchronously via ``.body()``, ``.text()``, ``.json()``.
    The parsed form is available synchronously via ``.form`` once
    ``load_form()`` has run (the engine does this before dispatch).
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for body and parsed form data
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def url(self) -> str:
        """Request path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    @property
    def form(self) -> FormData:
        """Parsed form body, or an empty FormData if none was loaded."""
        return self._cache.get("_form", _EMPTY_FORM)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached: the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes, None]:
        """Stream the request body in chunks.

        Once the body has been read (``body()``, or the engine's form
        preload) the cached bytes are yielded as a single chunk.
        """
        if "_body" in self._cache:
            cached = self._cache["_body"]
            if cached:
                yield cached
            return
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(await self.body())

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    async def load_form(self, max_size: int) -> FormData:
        """Read and parse the body as a form, when the request carries one.

        Only ``POST``, ``PUT`` and ``PATCH`` requests with a form content
        type are parsed. Bodies larger than *max_size* and malformed
        bodies yield an empty form, so lookups fall back to the query
        string. The result is cached and exposed as ``.form``.
        """
        if "_form" in self._cache:
            return self._cache["_form"]

        form = _EMPTY_FORM
        ct = self.content_type
        if self.method in FORM_METHODS and is_form_content_type(ct):
            declared = self.content_length
            if declared is not None and declared > max_size:
                logger.debug("form body too large (%d bytes) for %s %s", declared, self.method, self.path)
            else:
                raw = await self.body()
                if len(raw) > max_size:
                    logger.debug("form body too large (%d bytes) for %s %s", len(raw), self.method, self.path)
                else:
                    try:
                        form = parse_form_data(raw, ct or "")
                    except ValueError as exc:
                        logger.debug("unparsable form body for %s %s: %s", self.method, self.path, exc)

        self._cache["_form"] = form
        return form

    def form_value(self, key: str) -> str:
        """First value for *key* from the form body, then the query string, else ``""``."""
        return first_value((self.form, self.query), key)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        http = HTTPScope.from_scope(scope)
        return cls(
            method=http.method,
            path=http.path,
            headers=Headers(http.headers),
            query=QueryParams(http.query_string),
            http_version=http.http_version,
            server=http.server,
            client=http.client,
            _receive=receive,
        )
