"""ProbeService: confirm a native capability loads and initializes.

The run is strictly linear: platform name, resolve, load, construct.
Each step raises its own :class:`ProbeError` subclass; the first one ends
the run and is converted to a ServiceError here, never above.

A ``load()`` that returns False is not a failure: the result is ``ok``
with ``status == "unavailable"`` and construction is skipped.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from nativeprobe.domain.errors import (
    CapabilityNotFoundError,
    ConstructionError,
    InvocationError,
    ProbeError,
    ProbeStatus,
)
from nativeprobe.infrastructure.platform import host_os_name
from nativeprobe.services.base import BaseService
from nativeprobe.services.result import ServiceResult
from nativeprobe.services.telemetry import timed, timed_step

if TYPE_CHECKING:
    from nativeprobe.domain.capability import NativeCapability
    from nativeprobe.domain.registry import CapabilityRegistry
    from nativeprobe.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

# Instance attributes copied into the result payload when present.
_DESCRIBED_ATTRS = ("version", "path")


class ProbeService(BaseService):
    """Run the load probe against a named capability."""

    def __init__(
        self,
        registry: CapabilityRegistry,
        *,
        plugins: PluginManager | None = None,
        os_name: Callable[[], str] = host_os_name,
    ) -> None:
        super().__init__(registry, plugins=plugins)
        self._os_name = os_name

    @timed
    def probe(self, capability: str) -> ServiceResult:
        """Probe *capability* and classify the outcome.

        Both successes and failures carry ``capability`` and ``os_name``
        in ``data``; a failure's ``error.code`` names the step that failed.
        """
        warnings: list[str] = []
        with timed_step("platform"):
            os_name = self._platform_name()
        context: dict[str, Any] = {"capability": capability, "os_name": os_name}

        try:
            outcome = self._run_steps(capability, warnings)
        except ProbeError as exc:
            logger.debug("Probe of %s failed at %s", capability, exc.step, exc_info=True)
            self._notify(capability, ProbeStatus.FAILED, exc.code.value, warnings)
            return ServiceResult.failure(
                "probe",
                exc.code.value,
                str(exc),
                detail=_failure_detail(exc, os_name),
                data=context,
                warnings=warnings,
            )

        self._notify(capability, ProbeStatus(outcome["status"]), None, warnings)
        return ServiceResult.success("probe", {**context, **outcome}, warnings=warnings)

    def _notify(
        self, capability: str, status: ProbeStatus, error_code: str | None, warnings: list[str]
    ) -> None:
        payload = {"capability": capability, "status": status.value, "error_code": error_code}
        self._dispatch_event("post_probe", payload, warnings)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _platform_name(self) -> str:
        try:
            name = self._os_name()
        except Exception:
            logger.debug("Host OS name unavailable", exc_info=True)
            return ""
        return name or ""

    def _run_steps(self, name: str, warnings: list[str]) -> dict[str, Any]:
        with timed_step("resolve"):
            capability = self._resolve(name)

        with timed_step("load") as timing:
            loaded = self._load(capability, name)
            if timing is not None:
                timing.note("loaded", loaded)

        if not loaded:
            logger.debug("Capability %s reported unavailable", name)
            return {"status": ProbeStatus.UNAVAILABLE.value, "loaded": False}

        with timed_step("construct"):
            instance = self._construct(capability, name)

        outcome: dict[str, Any] = {"status": ProbeStatus.LOADED.value, "loaded": True}
        try:
            outcome.update(_describe(instance, warnings))
        finally:
            _release(instance, warnings)
        return outcome

    def _resolve(self, name: str) -> NativeCapability:
        try:
            return self._registry.resolve(name)
        except CapabilityNotFoundError:
            raise
        except Exception as exc:
            msg = f"Capability {name!r} could not be resolved: {type(exc).__name__}: {exc}"
            raise CapabilityNotFoundError(msg, capability=name) from exc

    @staticmethod
    def _load(capability: NativeCapability, name: str) -> bool:
        load = getattr(capability, "load", None)
        if not callable(load):
            msg = f"Capability {name!r} has no callable load()"
            raise InvocationError(msg, capability=name)
        try:
            loaded = load()
        except Exception as exc:
            msg = f"{name}.load() raised {type(exc).__name__}: {exc}"
            raise InvocationError(msg, capability=name) from exc
        if not isinstance(loaded, bool):
            msg = f"{name}.load() returned {type(loaded).__name__}, expected bool"
            raise InvocationError(msg, capability=name)
        return loaded

    @staticmethod
    def _construct(capability: NativeCapability, name: str) -> object:
        construct = getattr(capability, "construct", None)
        if not callable(construct):
            msg = f"Capability {name!r} has no callable construct()"
            raise ConstructionError(msg, capability=name)
        try:
            return construct()
        except Exception as exc:
            msg = f"{name}.construct() raised {type(exc).__name__}: {exc}"
            raise ConstructionError(msg, capability=name) from exc


def _failure_detail(exc: ProbeError, os_name: str) -> dict[str, Any]:
    cause = exc.__cause__
    return {
        "step": exc.step.value,
        "capability": exc.capability,
        "os_name": os_name,
        "exception": type(cause or exc).__name__,
        "traceback": "".join(traceback.format_exception(exc)),
    }


def _describe(instance: object, warnings: list[str]) -> dict[str, Any]:
    """Copy the instance's version/path into the payload.

    An attribute that cannot be read or stringified becomes a warning;
    the probe has already succeeded by this point.
    """
    kind = type(instance).__name__
    described: dict[str, Any] = {"instance": kind}
    for attr in _DESCRIBED_ATTRS:
        try:
            value = getattr(instance, attr, None)
            if value is not None:
                described[attr] = str(value)
        except Exception as exc:
            logger.debug("Reading %s.%s failed", kind, attr, exc_info=True)
            warnings.append(f"Could not read {kind}.{attr}: {type(exc).__name__}: {exc}")
    return described


def _release(instance: object, warnings: list[str]) -> None:
    kind = type(instance).__name__
    try:
        close = getattr(instance, "close", None)
        if callable(close):
            close()
    except Exception:
        logger.debug("Closing %s failed", kind, exc_info=True)
        warnings.append(f"Failed to release {kind}")
