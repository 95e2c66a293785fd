"""Shared pytest fixtures and test helpers for nativeprobe tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from nativeprobe.domain.registry import CapabilityRegistry
from nativeprobe.services.telemetry import disable_telemetry


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """``-v`` runs enable telemetry on the test thread's context."""
    yield
    disable_telemetry()


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory used as CWD, free of outside config."""
    monkeypatch.delenv("NATIVEPROBE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def _isolated_project(project_root: Path) -> None:
    """Use via ``@pytest.mark.usefixtures("_isolated_project")``."""


@pytest.fixture
def registry() -> CapabilityRegistry:
    """Registry populated with the fake capabilities below."""
    reg = CapabilityRegistry()
    reg.register("good", lambda: FakeCapability("good"))
    reg.register("off", lambda: FakeCapability("off", load_value=False))
    reg.register("load_boom", lambda: FakeCapability("load_boom", load_error=OSError("no .so")))
    reg.register(
        "ctor_boom",
        lambda: FakeCapability("ctor_boom", construct_error=RuntimeError("init failed")),
    )
    reg.register("not_bool", lambda: FakeCapability("not_bool", load_value=1))
    return reg


# ---------------------------------------------------------------------------
# Fake capabilities
# ---------------------------------------------------------------------------


class FakeInstance:
    version = "9.9.9"

    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


class FakeCapability:
    """Capability whose load/construct behaviour is fixed at creation."""

    def __init__(
        self,
        name: str,
        *,
        load_value: object = True,
        load_error: Exception | None = None,
        construct_error: Exception | None = None,
    ) -> None:
        self.name = name
        self.load_value = load_value
        self.load_error = load_error
        self.construct_error = construct_error
        self.load_calls = 0
        self.instances: list[FakeInstance] = []

    def load(self) -> bool:
        self.load_calls += 1
        if self.load_error is not None:
            raise self.load_error
        return self.load_value  # type: ignore[return-value]

    def construct(self) -> FakeInstance:
        if self.construct_error is not None:
            raise self.construct_error
        instance = FakeInstance()
        self.instances.append(instance)
        return instance


PLUGIN_SRC = """\
from nativeprobe.plugins import hookimpl


class _Good:
    name = "fake_good"

    def load(self):
        return True

    def construct(self):
        return object()


class _Off:
    name = "fake_off"

    def load(self):
        return False

    def construct(self):
        raise AssertionError("construct must be skipped")


class _LoadBoom:
    name = "fake_load_boom"

    def load(self):
        raise OSError("libfake.so: cannot open shared object file")

    def construct(self):
        return object()


class _CtorBoom:
    name = "fake_ctor_boom"

    def load(self):
        return True

    def construct(self):
        raise RuntimeError("native init failed")


class FakeCapabilitiesPlugin:
    @hookimpl
    def register_capabilities(self):
        return {
            "fake_good": _Good,
            "fake_off": _Off,
            "fake_load_boom": _LoadBoom,
            "fake_ctor_boom": _CtorBoom,
        }
"""


def write_fake_plugin(root: Path) -> Path:
    """Install the fake-capability plugin in *root*'s local plugin dir."""
    plugin_dir = root / ".nativeprobe" / "plugins"
    plugin_dir.mkdir(parents=True, exist_ok=True)
    path = plugin_dir / "fake_caps.py"
    path.write_text(PLUGIN_SRC, encoding="utf-8")
    return path
