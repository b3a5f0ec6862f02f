"""Scenario steps: named browser actions with structured outcomes."""

import logging
import time
import traceback
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any

from site_smoke.browsers.base import BrowserSession
from site_smoke.errors import AssertionMismatchError, NavigationFailedError, StepError
from site_smoke.models.config import SuiteConfig
from site_smoke.models.result import ScenarioFailure, ScenarioResult, StepOutcome
from site_smoke.selectors import Selector, read_text, resolve

log = logging.getLogger(__name__)

type Action = Callable[[BrowserSession[Any]], Awaitable[str | None]]

INITIAL_STATE = "Init"
NAVIGATION_FAILED = "NavigationFailed"
UNEXPECTED_ERROR = "UnexpectedError"


@dataclass(frozen=True, kw_only=True)
class Step:
    """A named action that moves a scenario into the state ``reaches``.

    The action returns an optional detail string describing what it observed.
    Any StepError it raises fails the step with ``failure_reason``.
    """

    name: str
    action: Action
    reaches: str
    failure_reason: str

    def reason_for(self, error: BaseException) -> str:
        """Map the error that stopped this step to a scenario failure reason."""
        if isinstance(error, NavigationFailedError):
            return NAVIGATION_FAILED
        if isinstance(error, (StepError, TimeoutError)):
            return self.failure_reason
        return UNEXPECTED_ERROR


async def run_step(
    step: Step, session: BrowserSession[Any], *, debug: bool = False
) -> tuple[StepOutcome, Exception | None]:
    """Run one step and return its outcome and the error that failed it.

    Expected browser failures become ``fail`` outcomes; anything else becomes
    an ``error`` outcome. Exceptions never propagate.
    """
    start = time.monotonic()
    try:
        detail = await step.action(session)
    except (StepError, TimeoutError) as e:
        log.debug("Step %r failed: %s", step.name, e)
        outcome = StepOutcome(
            name=step.name,
            status="fail",
            duration=time.monotonic() - start,
            detail=str(e),
        )
        return outcome, e
    except Exception as e:
        log.warning("Step %r raised %s: %s", step.name, type(e).__name__, e)
        outcome = StepOutcome(
            name=step.name,
            status="error",
            duration=time.monotonic() - start,
            detail=f"{type(e).__name__}: {e}",
            trace="".join(traceback.format_exception(e)) if debug else None,
        )
        return outcome, e

    outcome = StepOutcome(
        name=step.name,
        status="pass",
        duration=time.monotonic() - start,
        detail=detail or "",
    )
    return outcome, None


async def run_steps(
    scenario_id: str,
    steps: Sequence[Step],
    session: BrowserSession[Any],
    *,
    debug: bool = False,
) -> ScenarioResult:
    """Run steps in order, halting at the first one that does not pass.

    Steps after a failure are neither attempted nor recorded.
    """
    state = INITIAL_STATE
    outcomes: list[StepOutcome] = []

    for step in steps:
        outcome, error = await run_step(step, session, debug=debug)
        outcomes.append(outcome)

        if error is not None:
            failure = ScenarioFailure(
                reason=step.reason_for(error),
                last_state=state,
                detail=outcome.detail,
            )
            log.info(
                "Scenario %s failed at %s: %s", scenario_id, state, failure.reason
            )
            return ScenarioResult(
                scenario_id=scenario_id,
                steps=tuple(outcomes),
                final_state=state,
                failure=failure,
            )

        state = step.reaches

    return ScenarioResult(scenario_id=scenario_id, steps=tuple(outcomes), final_state=state)


def contains_token(text: str, token: str) -> bool:
    """Case-insensitive containment check."""
    return token.lower() in text.lower()


def navigate(config: SuiteConfig, path: str = "") -> Action:
    """Build an action that loads a page and requires an OK response."""
    url = config.url(path)

    async def action(session: BrowserSession[Any]) -> str:
        response = await session.navigate(
            url,
            wait_until=config.wait_until,
            timeout_ms=config.timeouts.navigation_ms,
        )
        if not response.ok:
            raise NavigationFailedError(url, response.status)
        return f"{url} loaded (status {response.status})"

    return action


def click(selector: Selector, timeout_ms: int) -> Action:
    """Build an action that resolves an element and clicks it."""

    async def action(session: BrowserSession[Any]) -> str:
        handle = await resolve(session, selector, timeout_ms)
        await session.click(handle)
        return "clicked"

    return action


def type_text(selector: Selector, text: str, timeout_ms: int) -> Action:
    """Build an action that resolves an input and types text into it."""

    async def action(session: BrowserSession[Any]) -> str:
        handle = await resolve(session, selector, timeout_ms)
        await session.type(handle, text)
        return f"typed {text!r}"

    return action


def assert_text(selector: Selector, token: str, timeout_ms: int) -> Action:
    """Build an action that requires an element's text to contain token."""

    async def action(session: BrowserSession[Any]) -> str:
        handle = await resolve(session, selector, timeout_ms)
        text = await read_text(session, handle)
        if not contains_token(text, token):
            raise AssertionMismatchError(token, text)
        return text

    return action
