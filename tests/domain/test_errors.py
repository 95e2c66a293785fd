"""Tests for the probe failure taxonomy."""

import pytest

from nativeprobe.domain.errors import (
    CapabilityNotFoundError,
    ConstructionError,
    ErrorCode,
    InvocationError,
    ProbeError,
    ProbeStep,
)


@pytest.mark.parametrize(
    ("exc_cls", "code", "step"),
    [
        (CapabilityNotFoundError, ErrorCode.CAPABILITY_NOT_FOUND, ProbeStep.RESOLVE),
        (InvocationError, ErrorCode.INVOCATION_ERROR, ProbeStep.LOAD),
        (ConstructionError, ErrorCode.CONSTRUCTION_ERROR, ProbeStep.CONSTRUCT),
    ],
)
def test_error_kind_maps_to_code_and_step(
    exc_cls: type[ProbeError], code: ErrorCode, step: ProbeStep
) -> None:
    exc = exc_cls("failed", capability="sqlite")
    assert isinstance(exc, ProbeError)
    assert exc.code == code
    assert exc.step == step
    assert exc.capability == "sqlite"
    assert str(exc) == "failed"


def test_codes_serialize_as_plain_strings() -> None:
    assert ErrorCode.INVOCATION_ERROR == "INVOCATION_ERROR"
    assert f"{ProbeStep.LOAD}" == "load"
