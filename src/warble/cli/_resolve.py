"""Engine import resolution: resolves ``"module:attribute"`` strings to Engine instances.

Shared by ``warble run`` and ``warble routes``.
"""

import importlib

from warble.engine import Engine
from warble.errors import ConfigurationError


def resolve_engine(import_string: str) -> Engine:
    """Resolve an import string to a warble Engine instance.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"engine"`` (``"myapp"`` resolves to ``myapp.engine``).
    A callable that is not an Engine is treated as a factory and called
    with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        ConfigurationError: If the factory fails or the result is not an Engine.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "engine"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Engine):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise ConfigurationError(msg) from exc

    if not isinstance(obj, Engine):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a warble.Engine instance"
        raise ConfigurationError(msg)

    return obj
