"""Case-insensitive HTTP headers.

``Headers`` is the immutable request side: it stores the raw byte pairs
from the ASGI scope and decodes on access.

``ResponseHeaders`` is the mutable response side owned by a
``ResponseWriter``. ``set`` replaces (last call wins), ``add`` appends.
"""

from collections.abc import Iterator, Mapping, MutableMapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    ``__getitem__`` returns the first matching value.
    ``get_list`` returns all values for a header.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        object.__setattr__(self, "_raw", raw)

    def __getitem__(self, key: str) -> str:
        key_lower = key.lower().encode("latin-1")
        for name, value in self._raw:
            if name.lower() == key_lower:
                return value.decode("latin-1")
        raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        key_lower = key.lower().encode("latin-1")
        return any(name.lower() == key_lower for name, _ in self._raw)

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for name, _ in self._raw:
            key = name.decode("latin-1").lower()
            if key not in seen:
                seen.add(key)
                yield key

    def __len__(self) -> int:
        return len(set(self))

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        try:
            return self[key]
        except KeyError:
            return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]


class ResponseHeaders(MutableMapping[str, str]):
    """Mutable, case-insensitive response headers.

    Keys are stored lowercased (the form ASGI expects on the wire).
    Item assignment behaves like ``set``: it replaces every existing
    value for the key.

    Usage::

        headers = ResponseHeaders()
        headers.set("Content-Type", "text/plain")
        headers.add("Set-Cookie", "a=1")
        headers.add("Set-Cookie", "b=2")
        headers.get_list("set-cookie")  # ["a=1", "b=2"]
    """

    __slots__ = ("_data",)

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, list[str]] = {}
        if initial:
            for name, value in initial.items():
                self.set(name, value)

    def set(self, key: str, value: str) -> None:
        """Replace all values for *key* with *value*."""
        self._data[key.lower()] = [value]

    def add(self, key: str, value: str) -> None:
        """Append *value* to *key*, keeping existing values."""
        self._data.setdefault(key.lower(), []).append(value)

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key.lower(), []))

    def copy(self) -> "ResponseHeaders":
        """Return an independent copy (used when the header block is committed)."""
        clone = ResponseHeaders()
        clone._data = {name: list(values) for name, values in self._data.items()}
        return clone

    def __getitem__(self, key: str) -> str:
        values = self._data.get(key.lower())
        if not values:
            raise KeyError(key)
        return values[0]

    def __setitem__(self, key: str, value: str) -> None:
        self.set(key, value)

    def __delitem__(self, key: str) -> None:
        try:
            del self._data[key.lower()]
        except KeyError:
            raise KeyError(key) from None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"ResponseHeaders({self._data!r})"
