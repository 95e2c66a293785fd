"""Probe failure taxonomy.

Each probe step that can fail has exactly one error code. Exceptions are
raised inside the step and converted to a ServiceError once, at the
service boundary.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Failure kinds reported in ``ServiceError.code``."""

    CAPABILITY_NOT_FOUND = "CAPABILITY_NOT_FOUND"
    INVOCATION_ERROR = "INVOCATION_ERROR"
    CONSTRUCTION_ERROR = "CONSTRUCTION_ERROR"


class ProbeStep(StrEnum):
    """The linear steps of a probe run."""

    PLATFORM = "platform"
    RESOLVE = "resolve"
    LOAD = "load"
    CONSTRUCT = "construct"


class ProbeStatus(StrEnum):
    """Classification of a probe run."""

    LOADED = "loaded"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class ProbeError(Exception):
    """Base class for probe failures.

    Attributes:
        code: The failure kind.
        step: The probe step that failed.
        capability: Name of the capability being probed.
    """

    code: ErrorCode
    step: ProbeStep

    def __init__(self, message: str, *, capability: str) -> None:
        super().__init__(message)
        self.capability = capability


class CapabilityNotFoundError(ProbeError):
    """The named capability is not registered in this process."""

    code = ErrorCode.CAPABILITY_NOT_FOUND
    step = ProbeStep.RESOLVE


class InvocationError(ProbeError):
    """``load()`` raised, is missing, or returned something other than a bool."""

    code = ErrorCode.INVOCATION_ERROR
    step = ProbeStep.LOAD


class ConstructionError(ProbeError):
    """``construct()`` raised or the capability cannot be constructed."""

    code = ErrorCode.CONSTRUCTION_ERROR
    step = ProbeStep.CONSTRUCT
