"""Warble engine: the public facade.

Mutable during setup (route registration). Frozen once serving starts:
``run()`` or an ASGI lifespan startup marks the engine as serving, and
later registrations raise ``RuntimeError``.
"""

from collections.abc import Callable
from typing import Any

from warble._internal.asgi import Receive, Scope, Send
from warble._internal.types import Handler
from warble.config import EngineConfig
from warble.context import Context
from warble.http.request import Request
from warble.http.response import ResponseWriter
from warble.routing.router import Router
from warble.server.sender import send_response


class Engine:
    """The warble engine: a route table plus the ASGI entry point.

    Usage::

        from warble import Engine

        engine = Engine()

        def ping(ctx):
            ctx.string(200, "pong")

        engine.get("/ping", ping)

        @engine.post("/echo")
        def echo(ctx):
            ctx.json(200, {"name": ctx.post_form("name")})

        engine.run(":8080")

    The engine itself is the ASGI application, so any ASGI server can
    host it (``pounce myapp:engine``, ``uvicorn myapp:engine``).
    """

    __slots__ = ("_router", "_serving", "config")

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config: EngineConfig = config or EngineConfig()
        self._router = Router()
        self._serving = False

    def __repr__(self) -> str:
        return f"<Engine routes={len(self._router)}>"

    # -- Route registration --

    def add_route(self, method: str, pattern: str, handler: Handler) -> None:
        """Register *handler* for an exact *method* and *pattern*.

        Registering the same pair again replaces the earlier handler.
        """
        self._check_not_serving()
        self._router.add(method, pattern, handler)

    def get(self, pattern: str, handler: Handler | None = None) -> Any:
        """Register a GET handler, directly or as a decorator.

        ::

            engine.get("/ping", ping)

            @engine.get("/pong")
            def pong(ctx): ...
        """
        return self._register("GET", pattern, handler)

    def post(self, pattern: str, handler: Handler | None = None) -> Any:
        """Register a POST handler, directly or as a decorator."""
        return self._register("POST", pattern, handler)

    def _register(
        self,
        method: str,
        pattern: str,
        handler: Handler | None,
    ) -> Handler | Callable[[Handler], Handler]:
        if handler is not None:
            self.add_route(method, pattern, handler)
            return handler

        def decorator(func: Handler) -> Handler:
            self.add_route(method, pattern, func)
            return func

        return decorator

    @property
    def router(self) -> Router:
        return self._router

    # -- Server --

    def run(self, address: str | None = None, *, app_path: str | None = None) -> None:
        """Bind *address* and serve until the server stops.

        *address* is ``"host:port"`` or ``":port"`` (all interfaces).
        Without it, ``config.host`` and ``config.port`` are used. Blocks
        the calling thread; bind and serve failures propagate.

        Args:
            address: Listen address.
            app_path: Optional ``"module:attribute"`` import string,
                required by the transport when ``config.reload`` is set.
        """
        from warble.server.serve import parse_address, run_server

        if address:
            host, port = parse_address(address)
        else:
            host, port = self.config.host, self.config.port

        self._serving = True
        run_server(
            self,
            host,
            port,
            workers=self.config.workers,
            reload=self.config.reload,
            log_level=self.config.log_level,
            ssl_certfile=self.config.ssl_certfile,
            ssl_keyfile=self.config.ssl_keyfile,
            app_path=app_path,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point. The transport calls this once per request.

        Builds a fresh Request, ResponseWriter and Context, dispatches
        through the router, then flushes the finished response.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        request = Request.from_asgi(scope, receive)
        await request.load_form(self.config.max_form_size)

        writer = ResponseWriter()
        await self._router.dispatch(Context(writer, request))

        await send_response(writer.to_response(), send, head=request.method == "HEAD")

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge the ASGI lifespan protocol.

        Startup marks the engine as serving. There are no hooks to run.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                self._serving = True
                await send({"type": "lifespan.startup.complete"})
            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _check_not_serving(self) -> None:
        if self._serving:
            msg = (
                "Cannot register routes after the engine has started serving. "
                "Register every route before calling engine.run()."
            )
            raise RuntimeError(msg)


def new(config: EngineConfig | None = None) -> Engine:
    """Create an Engine with an empty route table."""
    return Engine(config)
