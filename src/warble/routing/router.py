"""Exact-match router.

A flat dict from ``route_key(method, path)`` to ``Route``. No path
parameters, no wildcards, no trailing-slash normalization: a request
matches only when method and path are identical to a registration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from warble._internal.invoke import invoke
from warble._internal.types import Handler
from warble.routing.route import Route, route_key

if TYPE_CHECKING:
    from warble.context import Context

logger = logging.getLogger("warble.routing")

NOT_FOUND_FORMAT = "404 NOT FOUND: %s\n"


class Router:
    """Dispatch table from (method, path) to handler.

    Usage::

        router = Router()
        router.add("GET", "/ping", ping)
        router.lookup("GET", "/ping")   # ping
        router.lookup("POST", "/ping")  # None

    Thread safety:
        Registration happens during setup. Once serving starts the
        table is only read, so dispatch takes no locks.
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, Route] = {}

    def add(self, method: str, pattern: str, handler: Handler) -> None:
        """Register *handler* for *method* and *pattern*.

        Any strings are accepted. Registering the same pair again
        replaces the earlier handler.
        """
        route = Route(method=method, path=pattern, handler=handler)
        if route.key in self._routes:
            logger.debug("replacing handler for %s %s", method, pattern)
        else:
            logger.debug("registered %s %s", method, pattern)
        self._routes[route.key] = route

    def lookup(self, method: str, path: str) -> Handler | None:
        """Return the handler registered for *method* and *path*, or ``None``."""
        route = self._routes.get(route_key(method, path))
        return route.handler if route is not None else None

    async def dispatch(self, ctx: Context) -> None:
        """Run the handler matching the context, or write the 404 fallback."""
        handler = self.lookup(ctx.method, ctx.path)
        if handler is None:
            logger.debug("no route for %s %s", ctx.method, ctx.path)
            ctx.string(404, NOT_FOUND_FORMAT, ctx.path)
            return
        await invoke(handler, ctx)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, ordered by first registration."""
        return list(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, key: object) -> bool:
        return key in self._routes
