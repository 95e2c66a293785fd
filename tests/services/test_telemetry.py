"""Tests for step timing."""

from __future__ import annotations

from nativeprobe.services.result import ServiceResult
from nativeprobe.services.telemetry import StepTiming, enable_telemetry, timed, timed_step


@timed
def _op() -> ServiceResult:
    with timed_step("first") as timing:
        if timing is not None:
            timing.note("k", "v")
    with timed_step("second"):
        pass
    return ServiceResult(ok=True, op="op", meta={"count": 1})


@timed
def _plain() -> int:
    return 7


class TestStepTiming:
    def test_as_dict_omits_empty_notes(self) -> None:
        assert set(StepTiming("s").as_dict()) == {"step", "duration_ms"}

    def test_as_dict_includes_notes(self) -> None:
        timing = StepTiming("s")
        timing.note("loaded", True)
        assert timing.as_dict()["notes"] == {"loaded": True}


class TestTimed:
    def test_disabled_leaves_result_alone(self) -> None:
        assert _op().meta == {"count": 1}

    def test_enabled_appends_steps_in_order(self) -> None:
        enable_telemetry()
        result = _op()
        assert result.meta is not None
        assert result.meta["count"] == 1
        telemetry = result.meta["telemetry"]
        assert telemetry["operation"] == "_op"
        assert telemetry["total_ms"] >= 0
        assert [row["step"] for row in telemetry["steps"]] == ["first", "second"]
        assert telemetry["steps"][0]["notes"] == {"k": "v"}

    def test_non_result_return_untouched(self) -> None:
        enable_telemetry()
        assert _plain() == 7

    def test_step_outside_timed_call_yields_none(self) -> None:
        enable_telemetry()
        with timed_step("orphan") as timing:
            assert timing is None
