"""Per-request Context: read helpers over the Request, write helpers over the ResponseWriter.

One Context is created for every inbound request and discarded when the
handler returns. Handlers receive it as their only argument::

    def ping(ctx: Context) -> None:
        ctx.string(200, "pong")

Every write helper sets the content type, commits the status, then
writes the body. Headers must therefore be set before the status is
committed; changes made afterwards are not sent.
"""

import dataclasses
import json as json_module
import logging
from typing import Any

from warble._internal.multimap import first_value
from warble.http.request import Request
from warble.http.response import ResponseWriter, write_error

logger = logging.getLogger("warble.server")


def _encode_default(value: Any) -> Any:
    """JSON fallback: dataclass instances encode as objects, anything else fails."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


class Context:
    """The request/response exchange seen by a handler.

    Attributes:
        writer: The response sink.
        request: The immutable inbound request.
        path: Request path, exactly as received.
        method: Request method, exactly as received.
        status_code: Last status passed to ``status()``, ``0`` until then.
    """

    __slots__ = ("method", "path", "request", "status_code", "writer")

    def __init__(self, writer: ResponseWriter, request: Request) -> None:
        self.writer = writer
        self.request = request
        self.path = request.path
        self.method = request.method
        self.status_code = 0

    def __repr__(self) -> str:
        return f"<Context {self.method} {self.path}>"

    # -- Read helpers --

    def query(self, key: str) -> str:
        """First value of *key* in the URL query string, or ``""``."""
        return first_value((self.request.query,), key)

    def post_form(self, key: str) -> str:
        """First value of *key* from the form body, then the query string, or ``""``."""
        return self.request.form_value(key)

    # -- Write helpers --

    def status(self, code: int) -> None:
        self.status_code = code
        self.writer.write_header(code)

    def set_header(self, key: str, value: str) -> None:
        self.writer.headers.set(key, value)

    def string(self, code: int, format: str, *values: Any) -> None:
        """Write a ``text/plain`` body built with printf-style formatting.

        ``ctx.string(200, "hello %s", name)``. With no *values*, *format*
        is written verbatim, so a literal ``%`` needs no escaping.
        """
        self.set_header("Content-Type", "text/plain")
        self.status(code)
        text = format % values if values else format
        self.writer.write(text.encode("utf-8"))

    def json(self, code: int, obj: Any) -> None:
        """Write *obj* as an ``application/json`` body.

        The body is encoded before anything is committed. If *obj* cannot
        be encoded (unsupported type, NaN, circular reference) the reply
        is a 500 whose body is the encoder's error message. If the handler
        already committed a status, that status is kept and the error text
        is appended to the body; ``status_code`` reports what was sent.
        """
        try:
            payload = json_module.dumps(
                obj,
                default=_encode_default,
                ensure_ascii=False,
                allow_nan=False,
                separators=(",", ":"),
            )
        except (TypeError, ValueError) as exc:
            logger.warning("JSON encoding failed for %s %s: %s", self.method, self.path, exc)
            write_error(self.writer, str(exc), 500)
            # A status committed earlier stays on the wire
            self.status_code = self.writer.status or 500
            return

        self.set_header("Content-Type", "application/json")
        self.status(code)
        self.writer.write(payload.encode("utf-8") + b"\n")

    def data(self, code: int, data: bytes) -> None:
        """Write raw bytes verbatim. No content type is set."""
        self.status(code)
        self.writer.write(data)

    def html(self, code: int, html: str) -> None:
        """Write *html* verbatim as ``text/html``. Markup is not escaped."""
        self.set_header("Content-Type", "text/html")
        self.status(code)
        self.writer.write(html.encode("utf-8"))
