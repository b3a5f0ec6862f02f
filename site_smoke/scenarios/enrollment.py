"""Duplicate-enrollment verification scenario.

The scenario enrolls in the first listed course, enrolls again, and requires
the second attempt to be rejected::

    Init -> CourseSelected -> FirstEnrollAttempted -> FirstEnrollConfirmed
         -> SecondEnrollAttempted -> DuplicateRejected -> Verified

Each transition is one step. The first failing transition halts the run and
the result reports the failure reason together with the last state reached.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from site_smoke.browsers.base import BrowserSession
from site_smoke.errors import (
    AssertionMismatchError,
    ElementNotFoundError,
    StepTimeoutError,
)
from site_smoke.models.config import SuiteConfig
from site_smoke.scenarios.base import Scenario
from site_smoke.selectors import read_text, resolve, resolve_optional
from site_smoke.steps import Step, assert_text, contains_token, navigate

log = logging.getLogger(__name__)


class EnrollmentState(StrEnum):
    """States of the enrollment flow, in causal order."""

    INIT = "Init"
    COURSE_SELECTED = "CourseSelected"
    FIRST_ENROLL_ATTEMPTED = "FirstEnrollAttempted"
    FIRST_ENROLL_CONFIRMED = "FirstEnrollConfirmed"
    SECOND_ENROLL_ATTEMPTED = "SecondEnrollAttempted"
    DUPLICATE_REJECTED = "DuplicateRejected"
    VERIFIED = "Verified"


class FailureReason(StrEnum):
    """Why the enrollment flow stopped."""

    COURSE_NOT_FOUND = "CourseNotFound"
    ENROLL_CONTROL_MISSING = "EnrollControlMissing"
    ENROLLMENT_NOT_CONFIRMED = "EnrollmentNotConfirmed"
    DUPLICATE_NOT_PREVENTED = "DuplicateNotPrevented"
    LISTING_STATUS_MISMATCH = "ListingStatusMismatch"


class EnrollmentRun:
    """Page state carried between the steps of a single enrollment run.

    The enroll button handle is reused for the second attempt; it stays valid
    because both clicks happen on the same page.
    """

    def __init__(self, config: SuiteConfig) -> None:
        self.config = config
        self.course_title: str | None = None
        self.enroll_button: Any = None

    @property
    def timeout_ms(self) -> int:
        return self.config.timeouts.element_ms

    async def select_course(self, session: BrowserSession[Any]) -> str:
        await navigate(self.config, "courses")(session)
        card = await resolve(session, self.config.selectors.course_card, self.timeout_ms)
        self.course_title = await self._read_title(session, within=card)
        await session.click(card)

        if self.course_title is None:
            try:
                await session.wait_for_load_state(self.config.timeouts.navigation_ms)
            except StepTimeoutError:
                log.debug("Course page still loading, reading its title anyway")
            self.course_title = await self._read_title(session)
        return f"selected course {self.course_title or '(untitled)'}"

    async def first_enroll(self, session: BrowserSession[Any]) -> str:
        self.enroll_button = await resolve(
            session, self.config.selectors.enroll_button, self.timeout_ms
        )
        await session.click(self.enroll_button)
        return "clicked enroll"

    async def confirm_enrollment(self, session: BrowserSession[Any]) -> str:
        return await assert_text(
            self.config.selectors.success_indicator,
            self.config.tokens.success,
            self.timeout_ms,
        )(session)

    async def second_enroll(self, session: BrowserSession[Any]) -> str:
        await session.click(self.enroll_button)
        return "clicked enroll again"

    async def reject_duplicate(self, session: BrowserSession[Any]) -> str:
        return await assert_text(
            self.config.selectors.error_indicator,
            self.config.tokens.duplicate,
            self.timeout_ms,
        )(session)

    async def verify_listing(self, session: BrowserSession[Any]) -> str:
        await navigate(self.config, "courses")(session)
        card = await self.find_selected_card(session)

        status = await resolve_optional(
            session, self.config.selectors.enrolled_status, within=card
        )
        if status is None:
            raise ElementNotFoundError(self.config.selectors.enrolled_status)

        text = await read_text(session, status)
        if not contains_token(text, self.config.tokens.enrolled):
            raise AssertionMismatchError(self.config.tokens.enrolled, text)
        return text

    async def find_selected_card(self, session: BrowserSession[Any]) -> Any:
        """Return the listing card of the selected course.

        Falls back to the first card when no title was recorded.
        """
        first = await resolve(session, self.config.selectors.course_card, self.timeout_ms)
        if self.course_title is None:
            return first

        for candidate in self.config.selectors.course_card:
            for card in await session.query_selector_all(candidate):
                if self.course_title in await session.text_content(card):
                    return card

        log.debug("No card mentions %r, using the first card", self.course_title)
        return first

    async def _read_title(
        self, session: BrowserSession[Any], *, within: Any = None
    ) -> str | None:
        handle = await resolve_optional(
            session, self.config.selectors.course_title, within=within
        )
        if handle is None:
            return None
        return await read_text(session, handle) or None


@dataclass(frozen=True, kw_only=True)
class EnrollmentScenario(Scenario):
    """Verify that enrolling twice in the same course is rejected."""

    @property
    def scenario_id(self) -> str:
        return "enrollment"

    def build_steps(self) -> Sequence[Step]:
        run = EnrollmentRun(self.config)
        return (
            Step(
                name="select course",
                action=run.select_course,
                reaches=EnrollmentState.COURSE_SELECTED,
                failure_reason=FailureReason.COURSE_NOT_FOUND,
            ),
            Step(
                name="first enroll",
                action=run.first_enroll,
                reaches=EnrollmentState.FIRST_ENROLL_ATTEMPTED,
                failure_reason=FailureReason.ENROLL_CONTROL_MISSING,
            ),
            Step(
                name="confirm enrollment",
                action=run.confirm_enrollment,
                reaches=EnrollmentState.FIRST_ENROLL_CONFIRMED,
                failure_reason=FailureReason.ENROLLMENT_NOT_CONFIRMED,
            ),
            Step(
                name="second enroll",
                action=run.second_enroll,
                reaches=EnrollmentState.SECOND_ENROLL_ATTEMPTED,
                failure_reason=FailureReason.ENROLL_CONTROL_MISSING,
            ),
            Step(
                name="reject duplicate",
                action=run.reject_duplicate,
                reaches=EnrollmentState.DUPLICATE_REJECTED,
                failure_reason=FailureReason.DUPLICATE_NOT_PREVENTED,
            ),
            Step(
                name="verify listing status",
                action=run.verify_listing,
                reaches=EnrollmentState.VERIFIED,
                failure_reason=FailureReason.LISTING_STATUS_MISMATCH,
            ),
        )
