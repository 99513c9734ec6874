"""Invoke helpers: call sync or async handlers uniformly.

Warble handlers can be ``def`` or ``async def``. The router is the only
caller of user-provided handlers, but the sync/async check lives here so
it stays in exactly one place.

Usage::

    from warble._internal.invoke import invoke

    await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's a coroutine.

    Works with both sync and async callables::

        # sync: returns immediately, no await needed
        def ping(ctx):
            ctx.string(200, "pong")

        # async: returns coroutine, awaited automatically
        async def upload(ctx):
            raw = await ctx.request.body()
            ctx.data(200, raw)
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
