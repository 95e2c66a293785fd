"""Tests for CapabilityRegistry."""

from __future__ import annotations

import pytest

from nativeprobe.domain.capability import NativeCapability
from nativeprobe.domain.errors import CapabilityNotFoundError
from nativeprobe.domain.registry import CapabilityRegistry
from tests.conftest import FakeCapability


class TestRegister:
    def test_resolve_exact_name_returns_fresh_instance(self) -> None:
        reg = CapabilityRegistry()
        reg.register("fake", lambda: FakeCapability("fake"))
        first = reg.resolve("fake")
        second = reg.resolve("fake")
        assert first is not second
        assert first.name == "fake"

    def test_resolved_capability_satisfies_protocol(self) -> None:
        reg = CapabilityRegistry()
        reg.register("fake", lambda: FakeCapability("fake"))
        assert isinstance(reg.resolve("fake"), NativeCapability)

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            CapabilityRegistry().register("  ", lambda: FakeCapability("x"))

    def test_non_callable_factory_rejected(self) -> None:
        with pytest.raises(TypeError):
            CapabilityRegistry().register("x", "not callable")  # type: ignore[arg-type]

    def test_builtin_cannot_be_overridden(self) -> None:
        reg = CapabilityRegistry()
        reg.register("sqlite", lambda: FakeCapability("sqlite"))
        with pytest.raises(ValueError, match="built-in"):
            reg.register("sqlite", lambda: FakeCapability("other"), source="plugin:x")

    def test_plugin_registration_can_be_replaced(self) -> None:
        reg = CapabilityRegistry()
        reg.register("drv", lambda: FakeCapability("a"), source="plugin:a")
        reg.register("drv", lambda: FakeCapability("b"), source="plugin:b")
        assert reg.resolve("drv").name == "b"


class TestPrefix:
    def test_prefix_factory_receives_suffix(self) -> None:
        reg = CapabilityRegistry()
        reg.register_prefix("lib:", lambda suffix: FakeCapability(f"lib:{suffix}"))
        assert reg.resolve("lib:z").name == "lib:z"

    def test_bare_prefix_is_not_resolvable(self) -> None:
        reg = CapabilityRegistry()
        reg.register_prefix("lib:", lambda suffix: FakeCapability(suffix))
        with pytest.raises(CapabilityNotFoundError):
            reg.resolve("lib:")

    def test_plugin_name_under_builtin_prefix_rejected(self) -> None:
        reg = CapabilityRegistry()
        reg.register_prefix("lib:", lambda s: FakeCapability(f"lib:{s}"))
        with pytest.raises(ValueError, match="built-in 'lib:' family"):
            reg.register("lib:z", lambda: FakeCapability("shadow"), source="plugin:x")
        assert reg.resolve("lib:z").name == "lib:z"

    def test_plugin_prefix_under_builtin_prefix_rejected(self) -> None:
        reg = CapabilityRegistry()
        reg.register_prefix("lib:", lambda s: FakeCapability(s))
        with pytest.raises(ValueError, match="built-in"):
            reg.register_prefix("lib:ssl:", lambda s: FakeCapability(s), source="plugin:x")

    def test_plugin_prefix_outside_builtin_family_allowed(self) -> None:
        reg = CapabilityRegistry()
        reg.register_prefix("lib:", lambda s: FakeCapability(s))
        reg.register_prefix("drv:", lambda s: FakeCapability(f"drv:{s}"), source="plugin:x")
        assert reg.resolve("drv:a").name == "drv:a"

    def test_prefix_must_end_with_colon(self) -> None:
        with pytest.raises(ValueError, match="must end with"):
            CapabilityRegistry().register_prefix("lib", lambda s: FakeCapability(s))


class TestResolve:
    def test_unknown_name_raises_not_found(self) -> None:
        with pytest.raises(CapabilityNotFoundError) as excinfo:
            CapabilityRegistry().resolve("missing")
        assert excinfo.value.capability == "missing"

    def test_prefix_match_requires_full_prefix(self) -> None:
        reg = CapabilityRegistry()
        reg.register_prefix("lib:", lambda s: FakeCapability(s))
        with pytest.raises(CapabilityNotFoundError):
            reg.resolve("libz")

    def test_entries_sorted_with_sources(self) -> None:
        reg = CapabilityRegistry()
        reg.register("zeta", lambda: FakeCapability("zeta"), source="plugin:p")
        reg.register("alpha", lambda: FakeCapability("alpha"))
        reg.register_prefix("lib:", lambda s: FakeCapability(s))
        assert reg.entries() == [
            {"name": "alpha", "source": "builtin"},
            {"name": "lib:<name>", "source": "builtin"},
            {"name": "zeta", "source": "plugin:p"},
        ]
