"""Tests for scenario steps."""

from typing import Any

import pytest

from site_smoke.browsers.base import BrowserSession
from site_smoke.errors import AssertionMismatchError, NavigationFailedError
from site_smoke.models.config import SuiteConfig
from site_smoke.steps import (
    Step,
    assert_text,
    click,
    navigate,
    run_step,
    run_steps,
    type_text,
)
from site_smoke.testing.fake import FakeElement, FakeSession
from site_smoke.testing.site import FakeSite


def make_step(name: str, action: Any, reaches: str | None = None) -> Step:
    return Step(
        name=name,
        action=action,
        reaches=reaches or name.title(),
        failure_reason=f"{name.title()}Failed",
    )


async def passing(session: BrowserSession[Any]) -> str:
    return "ok"


async def mismatching(session: BrowserSession[Any]) -> str:
    raise AssertionMismatchError("success", "oops")


async def crashing(session: BrowserSession[Any]) -> str:
    raise RuntimeError("boom")


class TestRunStep:
    """Tests for run_step."""

    async def test_pass_outcome(self, session: FakeSession) -> None:
        """Records the action's detail on success."""
        outcome, error = await run_step(make_step("check", passing), session)

        assert outcome.status == "pass"
        assert outcome.detail == "ok"
        assert outcome.duration >= 0
        assert error is None

    async def test_step_error_is_a_failure(self, session: FakeSession) -> None:
        """Expected browser errors produce fail outcomes with expected vs actual."""
        outcome, error = await run_step(make_step("check", mismatching), session)

        assert outcome.status == "fail"
        assert outcome.detail == "expected text containing 'success', got 'oops'"
        assert isinstance(error, AssertionMismatchError)

    async def test_unexpected_exception_is_an_error(self, session: FakeSession) -> None:
        """Other exceptions produce error outcomes without a trace by default."""
        outcome, error = await run_step(make_step("check", crashing), session)

        assert outcome.status == "error"
        assert outcome.detail == "RuntimeError: boom"
        assert outcome.trace is None
        assert isinstance(error, RuntimeError)

    async def test_debug_records_trace(self, session: FakeSession) -> None:
        """Debug mode keeps the traceback of unexpected errors."""
        outcome, _ = await run_step(make_step("check", crashing), session, debug=True)

        assert outcome.trace is not None
        assert "RuntimeError: boom" in outcome.trace


class TestReasonFor:
    """Tests for Step.reason_for."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (NavigationFailedError("https://example.test", 500), "NavigationFailed"),
            (AssertionMismatchError("a", "b"), "CheckFailed"),
            (TimeoutError("slow"), "CheckFailed"),
            (RuntimeError("boom"), "UnexpectedError"),
        ],
    )
    def test_maps_errors_to_reasons(self, error: Exception, expected: str) -> None:
        """Maps error types to scenario failure reasons."""
        assert make_step("check", passing).reason_for(error) == expected


class TestRunSteps:
    """Tests for run_steps."""

    async def test_reaches_last_state(self, session: FakeSession) -> None:
        """All passing steps end in the last step's state."""
        result = await run_steps(
            "demo",
            [make_step("one", passing), make_step("two", passing)],
            session,
        )

        assert result.passed
        assert result.final_state == "Two"
        assert [s.name for s in result.steps] == ["one", "two"]

    async def test_halts_at_first_failure(self, session: FakeSession) -> None:
        """Later steps are neither attempted nor recorded."""
        attempted: list[str] = []

        async def tracking(session: BrowserSession[Any]) -> str:
            attempted.append("three")
            return "ok"

        result = await run_steps(
            "demo",
            [
                make_step("one", passing),
                make_step("two", mismatching),
                make_step("three", tracking),
            ],
            session,
        )

        assert not result.passed
        assert result.failure is not None
        assert result.failure.reason == "TwoFailed"
        assert result.failure.last_state == "One"
        assert result.final_state == "One"
        assert [s.name for s in result.steps] == ["one", "two"]
        assert attempted == []

    async def test_failure_on_first_step_reports_init(self, session: FakeSession) -> None:
        """A failing first step leaves the scenario in Init."""
        result = await run_steps("demo", [make_step("one", crashing)], session)

        assert result.failure is not None
        assert result.failure.reason == "UnexpectedError"
        assert result.failure.last_state == "Init"


class TestActions:
    """Tests for the step action builders."""

    async def test_navigate_reports_status(
        self, config: SuiteConfig, session: FakeSession
    ) -> None:
        """Navigation detail includes the URL and status."""
        detail = await navigate(config)(session)

        assert detail == "https://example.test loaded (status 200)"

    async def test_navigate_raises_on_error_status(
        self, config: SuiteConfig, session: FakeSession
    ) -> None:
        """Non-OK responses raise NavigationFailedError."""
        with pytest.raises(NavigationFailedError) as exc_info:
            await navigate(config, "missing")(session)

        assert exc_info.value.status == 404
        assert exc_info.value.url == "https://example.test/missing"

    async def test_click_and_type(self, config: SuiteConfig, session: FakeSession) -> None:
        """Click and type resolve their element first."""
        await navigate(config, "contact")(session)
        field = session.page.elements['input[name="email"]'][0]

        await type_text(('input[name="email"]',), "a@b.test", 100)(session)
        await click(('button[type="submit"]',), 100)(session)

        assert field.value == "a@b.test"
        assert session.page.elements['button[type="submit"]'][0].clicks == 1

    async def test_assert_text_is_case_insensitive(self) -> None:
        """Matches tokens regardless of case."""
        session = FakeSession(FakeSite())
        session.page.add(".banner", FakeElement(text="  SUCCESS!  "))

        assert await assert_text((".banner",), "success", 100)(session) == "SUCCESS!"

    async def test_assert_text_raises_on_mismatch(self) -> None:
        """Raises AssertionMismatchError carrying the actual text."""
        session = FakeSession(FakeSite())
        session.page.add(".banner", FakeElement(text="Try again"))

        with pytest.raises(AssertionMismatchError) as exc_info:
            await assert_text((".banner",), "success", 100)(session)

        assert exc_info.value.actual == "Try again"
