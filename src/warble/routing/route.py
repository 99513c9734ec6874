"""Route records and the composite lookup key."""

from dataclasses import dataclass

from warble._internal.types import Handler

KEY_SEPARATOR = "-"


def route_key(method: str, path: str) -> str:
    """Build the lookup key for *method* and *path*, both taken verbatim.

    ``route_key("GET", "/ping") == "GET-/ping"``
    """
    return f"{method}{KEY_SEPARATOR}{path}"


@dataclass(frozen=True, slots=True)
class Route:
    """A registered route, as reported by ``Router.routes``."""

    method: str
    path: str
    handler: Handler

    @property
    def key(self) -> str:
        return route_key(self.method, self.path)
