"""Server launcher.

The transport is pounce: it owns the listening socket, TLS, HTTP
parsing and response flushing, and calls the engine as a plain ASGI
application. This module only turns an address into host/port and
starts the server.
"""

from __future__ import annotations

import logging

from warble.errors import ConfigurationError

logger = logging.getLogger("warble.server")

ALL_INTERFACES = "0.0.0.0"


def parse_address(address: str) -> tuple[str, int]:
    """Split a ``"host:port"`` address.

    Examples::

        "127.0.0.1:8080" -> ("127.0.0.1", 8080)
        ":8080"          -> ("0.0.0.0", 8080)   # all interfaces
        "[::1]:8080"     -> ("::1", 8080)

    Raises:
        ConfigurationError: If the port is missing or not a valid number.
    """
    host, sep, port_str = address.rpartition(":")
    if not sep:
        msg = f"Address {address!r} is missing a port (expected 'host:port' or ':port')"
        raise ConfigurationError(msg)

    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]

    try:
        port = int(port_str)
    except ValueError:
        msg = f"Address {address!r} has an invalid port {port_str!r}"
        raise ConfigurationError(msg) from None
    if not 0 <= port <= 65535:
        msg = f"Address {address!r} has an out-of-range port {port}"
        raise ConfigurationError(msg)

    return host or ALL_INTERFACES, port


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    ssl_certfile: str | None = None,
    ssl_keyfile: str | None = None,
    app_path: str | None = None,
) -> None:
    """Serve *app* with pounce until the server stops.

    Blocks the calling thread. Bind and serve failures (for example
    ``OSError`` when the port is taken) propagate to the caller.

    Args:
        app: ASGI callable (a warble Engine).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count.
        reload: Restart on file changes. Needs *app_path* so the
            engine can be re-imported.
        log_level: Transport log level.
        ssl_certfile: TLS certificate path (enables HTTPS).
        ssl_keyfile: TLS private key path.
        app_path: Optional ``"module:attribute"`` import string.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
        log_level=log_level,
        ssl_certfile=ssl_certfile,
        ssl_keyfile=ssl_keyfile,
    )
    logger.info("serving on %s:%d", host, port)
    server = Server(config, app, app_path=app_path)
    server.run()
