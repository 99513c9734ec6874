"""HTTP response: a mutable writer for handlers, a frozen snapshot for the wire.

``ResponseWriter`` is the response sink handed to every Context. It has
two states: *open* (headers mutable, no status yet) and *committed*
(status and header block fixed). The first ``write_header()`` or
``write()`` commits. Body bytes are buffered and flushed by the engine
once the handler returns.

``Response`` is the immutable result of a finished exchange. The sender
turns it into ASGI messages and the TestClient hands it to tests.
"""

import logging
from dataclasses import dataclass

from warble.http.headers import ResponseHeaders

logger = logging.getLogger("warble.server")


@dataclass(frozen=True, slots=True)
class Response:
    """A finished HTTP response.

    Header names are lowercase. ``content_type`` is ``None`` when the
    handler never set one (``Context.data()`` does not).
    """

    body: bytes = b""
    status: int = 200
    headers: tuple[tuple[str, str], ...] = ()

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive), or *default*."""
        key = name.lower()
        for header_name, value in self.headers:
            if header_name == key:
                return value
        return default

    @property
    def content_type(self) -> str | None:
        return self.header("content-type")

    @property
    def text(self) -> str:
        """Body as string."""
        return self.body.decode("utf-8")


class ResponseWriter:
    """Buffered response sink with commit-once status semantics.

    Usage::

        writer = ResponseWriter()
        writer.headers.set("Content-Type", "text/plain")
        writer.write_header(201)
        writer.write(b"created")
        writer.to_response().status  # 201

    Thread safety:
        Owned by the single task handling one request. Not shared.
    """

    __slots__ = ("_body", "_committed_headers", "_headers", "_status")

    def __init__(self) -> None:
        self._headers = ResponseHeaders()
        self._committed_headers: ResponseHeaders | None = None
        self._status: int | None = None
        self._body = bytearray()

    @property
    def headers(self) -> ResponseHeaders:
        """Mutable header map. Changes made after commit are not sent."""
        return self._headers

    @property
    def committed(self) -> bool:
        return self._status is not None

    @property
    def status(self) -> int | None:
        """The committed status code, or ``None`` while still open."""
        return self._status

    def write_header(self, status: int) -> None:
        """Commit *status* and the current header block.

        Only the first call takes effect; later calls log a warning.
        """
        if self._status is not None:
            logger.warning(
                "superfluous write_header(%d) call; status %d already committed",
                status,
                self._status,
            )
            return
        self._status = status
        self._committed_headers = self._headers.copy()

    def write(self, data: bytes) -> int:
        """Append *data* to the body, committing status 200 if still open."""
        if self._status is None:
            self.write_header(200)
        self._body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        """Snapshot the exchange. An untouched writer yields an empty 200."""
        headers = self._committed_headers if self._committed_headers is not None else self._headers
        return Response(
            body=bytes(self._body),
            status=self._status if self._status is not None else 200,
            headers=tuple(
                (name, value) for name in headers for value in headers.get_list(name)
            ),
        )


def write_error(writer: ResponseWriter, message: str, status: int) -> None:
    """Reply with a plain-text error: *message* plus a newline, as *status*."""
    writer.headers.pop("content-length", None)
    writer.headers.set("Content-Type", "text/plain; charset=utf-8")
    writer.headers.set("X-Content-Type-Options", "nosniff")
    writer.write_header(status)
    writer.write(message.encode("utf-8") + b"\n")
