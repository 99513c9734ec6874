"""Shared type aliases used across warble modules."""

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from warble.context import Context

# Route handler: takes the request Context, writes the response, returns nothing.
# ``async def`` handlers are awaited.
Handler: TypeAlias = Callable[["Context"], Awaitable[None] | None]

# JSON object shorthand: ``ctx.json(200, H(ok=True))``
H: TypeAlias = dict[str, Any]
