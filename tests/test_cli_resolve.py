"""Tests for warble.cli._resolve: Engine import resolution."""

import types

import pytest

from warble.cli._resolve import resolve_engine
from warble.engine import Engine
from warble.errors import ConfigurationError


@pytest.fixture
def _fake_engine_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module with warble engines on sys.modules."""
    mod = types.ModuleType("_fake_warble_app")
    mod.engine = Engine()  # type: ignore[attr-defined]
    mod.custom = Engine()  # type: ignore[attr-defined]
    mod.not_an_engine = "just a string"  # type: ignore[attr-defined]
    mod.make_engine = Engine  # type: ignore[attr-defined]
    mod.make_string = lambda: "nope"  # type: ignore[attr-defined]

    def broken() -> Engine:
        raise RuntimeError("factory exploded")

    mod.broken = broken  # type: ignore[attr-defined]
    monkeypatch.setitem(__import__("sys").modules, "_fake_warble_app", mod)


@pytest.mark.usefixtures("_fake_engine_module")
class TestResolveEngine:
    def test_explicit_attribute(self) -> None:
        assert isinstance(resolve_engine("_fake_warble_app:engine"), Engine)

    def test_custom_attribute(self) -> None:
        engine = resolve_engine("_fake_warble_app:custom")
        assert engine is __import__("sys").modules["_fake_warble_app"].custom

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'engine'."""
        engine = resolve_engine("_fake_warble_app")
        assert engine is __import__("sys").modules["_fake_warble_app"].engine

    def test_factory_called(self) -> None:
        assert isinstance(resolve_engine("_fake_warble_app:make_engine"), Engine)

    def test_factory_error_wrapped(self) -> None:
        with pytest.raises(ConfigurationError, match="factory exploded"):
            resolve_engine("_fake_warble_app:broken")

    def test_factory_wrong_type(self) -> None:
        with pytest.raises(ConfigurationError, match="not a warble.Engine"):
            resolve_engine("_fake_warble_app:make_string")

    def test_not_an_engine(self) -> None:
        with pytest.raises(ConfigurationError, match="resolved to str"):
            resolve_engine("_fake_warble_app:not_an_engine")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AttributeError):
            resolve_engine("_fake_warble_app:nonexistent")


class TestResolveErrors:
    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_engine("_definitely_not_a_module_xyz:engine")
