"""Multi-value lookups shared by query strings, form bodies and headers.

``QueryParams``, ``FormData`` and ``Headers`` all satisfy
``MultiValueMapping``. ``first_value`` is the single lookup rule behind
``Context.query()`` and ``Context.post_form()``: the first source that
has the key wins, and a missing key reads as ``""``.
"""

from collections.abc import Iterable, Iterator
from typing import Protocol, runtime_checkable


@runtime_checkable
class MultiValueMapping(Protocol):
    """A read-only string mapping where a key can carry several values."""

    def __contains__(self, key: object) -> bool: ...
    def __iter__(self) -> Iterator[str]: ...
    def get(self, key: str, default: str | None = None) -> str | None: ...
    def get_list(self, key: str) -> list[str]: ...


def first_value(sources: Iterable[MultiValueMapping], key: str) -> str:
    """First value of *key* across *sources*, in order, or ``""``.

    A blank value (``name=``) counts as present and stops the search.
    """
    for source in sources:
        value = source.get(key)
        if value is not None:
            return value
    return ""
