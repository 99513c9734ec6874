"""Form body parsing: URL-encoded and multipart.

Implements ``MultiValueMapping`` for consistent access across
``Headers``, ``QueryParams``, and ``FormData``.

Parsing is synchronous: the engine reads the whole body before the
handler runs, so ``Context.post_form()`` never has to await.

URL-encoded forms use stdlib ``urllib.parse``. Multipart forms use
``python-multipart``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

FORM_CONTENT_TYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})


@dataclass(frozen=True, slots=True)
class UploadFile:
    """A file part from a multipart form submission, held in memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def __repr__(self) -> str:
        return f"UploadFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


class FormData(Mapping[str, str]):
    """Immutable parsed form data.

    Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol.
    Holds string field values and, for multipart bodies, uploaded files.
    File parts are not field values: ``form["avatar"]`` raises ``KeyError``
    while ``form.files["avatar"]`` returns the ``UploadFile``.
    """

    __slots__ = ("_data", "_files")

    def __init__(
        self,
        data: dict[str, list[str]] | None = None,
        files: dict[str, UploadFile] | None = None,
    ) -> None:
        object.__setattr__(self, "_data", data or {})
        object.__setattr__(self, "_files", files or {})

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"FormData({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkboxes, multi-selects)."""
        return list(self._data.get(key, []))


def media_type(content_type: str | None) -> str:
    """Lowercased media type without parameters (``"text/html; charset=x"`` -> ``"text/html"``)."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_form_content_type(content_type: str | None) -> bool:
    """True if the body is one of the two form encodings."""
    return media_type(content_type) in FORM_CONTENT_TYPES


def parse_form_data(body: bytes, content_type: str) -> FormData:
    """Parse form body into FormData.

    Supports:
    - ``application/x-www-form-urlencoded``
    - ``multipart/form-data``

    Raises:
        ValueError: If the content type is not a form encoding, or a
            multipart body has no boundary.
    """
    ct = media_type(content_type)

    if ct == "application/x-www-form-urlencoded":
        return _parse_urlencoded(body)

    if ct == "multipart/form-data":
        return _parse_multipart(body, content_type)

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_urlencoded(body: bytes) -> FormData:
    parsed = parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True)
    return FormData(parsed)


def _parse_multipart(body: bytes, content_type: str) -> FormData:
    """Parse multipart form data with python-multipart's callback parser."""
    from python_multipart.multipart import MultipartParser, parse_options_header

    _, options = parse_options_header(content_type)
    boundary = options.get(b"boundary")
    if not boundary:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    data: dict[str, list[str]] = {}
    files: dict[str, UploadFile] = {}

    # Per-part state; header names and values may arrive in several chunks
    part_headers: dict[str, str] = {}
    header_field = bytearray()
    header_value = bytearray()
    part_data = bytearray()

    def on_part_begin() -> None:
        part_headers.clear()
        part_data.clear()

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        header_field.extend(chunk[start:end])

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        header_value.extend(chunk[start:end])

    def on_header_end() -> None:
        part_headers[header_field.decode("latin-1").lower()] = header_value.decode("latin-1")
        header_field.clear()
        header_value.clear()

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        part_data.extend(chunk[start:end])

    def on_part_end() -> None:
        disposition = part_headers.get("content-disposition")
        if disposition is None:
            return
        _, params = parse_options_header(disposition)
        name = params.get(b"name")
        if name is None:
            return
        field_name = name.decode("utf-8")
        filename = params.get(b"filename")
        if filename is not None:
            files[field_name] = UploadFile(
                filename=filename.decode("utf-8"),
                content_type=part_headers.get("content-type", "application/octet-stream"),
                content=bytes(part_data),
            )
        else:
            data.setdefault(field_name, []).append(part_data.decode("utf-8", errors="replace"))

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
        "on_header_end": on_header_end,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
    }

    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()

    return FormData(data, files)
