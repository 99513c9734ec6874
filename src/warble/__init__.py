"""Warble: a minimal HTTP routing shim for ASGI servers.

Exact (method, path) routing to handler functions, plus a per-request
Context with helpers for reading query/form values and writing text,
JSON, HTML, or raw responses.

Basic usage::

    import warble

    engine = warble.new()

    def ping(ctx):
        ctx.string(200, "pong")

    engine.get("/ping", ping)
    engine.run(":8080")

Serving needs an ASGI server (``pip install warble[server]`` for pounce).
"""

from importlib import import_module

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Context",
    "Engine",
    "EngineConfig",
    "H",
    "Response",
    "ResponseWriter",
    "Router",
    "WarbleError",
    "new",
]

# Public name -> defining module. Resolved on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "warble.errors",
    "Context": "warble.context",
    "Engine": "warble.engine",
    "EngineConfig": "warble.config",
    "H": "warble._internal.types",
    "Response": "warble.http.response",
    "ResponseWriter": "warble.http.response",
    "Router": "warble.routing.router",
    "WarbleError": "warble.errors",
    "new": "warble.engine",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(import_module(module_name), name)
