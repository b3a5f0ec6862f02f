"""General site checks: page load, navigation, layout, forms and assets."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from site_smoke import scripts
from site_smoke.browsers.base import BrowserSession
from site_smoke.errors import (
    AssertionMismatchError,
    ElementNotFoundError,
    StepError,
    StepTimeoutError,
)
from site_smoke.models.config import Viewport
from site_smoke.models.result import ScenarioResult
from site_smoke.scenarios.base import Scenario
from site_smoke.selectors import read_text, resolve, resolve_optional
from site_smoke.steps import Step, click, contains_token, navigate, type_text

log = logging.getLogger(__name__)

NAV = ("nav",)
FOOTER = ("footer",)
IMG = ("img",)
MENU_TOGGLE = (
    '[aria-label*="menu"]',
    ".hamburger",
    ".menu-toggle",
    "button[aria-expanded]",
)
CONTACT_FULL_NAME = ('input[name="fullName"]',)
CONTACT_EMAIL = ('input[name="email"]',)
CONTACT_MESSAGE = ('textarea[name="message"]',)
CONTACT_SUBMIT = ('button[type="submit"]',)
CONTACT_CONFIRMATION = ("h2", ".success-message", ".alert-success")


def format_links(links: Sequence[dict[str, Any]]) -> str:
    return ", ".join(f"{link['text']} ({link['href']})" for link in links)


@dataclass(frozen=True, kw_only=True)
class SiteScenario(Scenario):
    """Scenario whose steps start from a freshly loaded homepage."""

    def open_homepage(self) -> Step:
        return Step(
            name="open homepage",
            action=navigate(self.config),
            reaches="HomepageLoaded",
            failure_reason="HomepageUnavailable",
        )


@dataclass(frozen=True, kw_only=True)
class ViewportScenario(SiteScenario):
    """Scenario that resizes the viewport and restores it afterwards."""

    async def run(self, session: BrowserSession[Any]) -> ScenarioResult:
        try:
            return await super().run(session)
        finally:
            default = self.config.default_viewport
            await session.set_viewport(default.width, default.height)

    async def resize(self, session: BrowserSession[Any], viewport: Viewport) -> None:
        await session.set_viewport(viewport.width, viewport.height)
        await session.reload(
            wait_until=self.config.wait_until,
            timeout_ms=self.config.timeouts.navigation_ms,
        )


@dataclass(frozen=True, kw_only=True)
class HomepageScenario(SiteScenario):
    """The homepage loads with an OK status."""

    @property
    def scenario_id(self) -> str:
        return "homepage"

    def build_steps(self) -> Sequence[Step]:
        return (self.open_homepage(),)


@dataclass(frozen=True, kw_only=True)
class NavigationScenario(SiteScenario):
    """The main navigation contains links."""

    @property
    def scenario_id(self) -> str:
        return "navigation"

    async def collect_links(self, session: BrowserSession[Any]) -> str:
        await resolve(session, NAV, self.config.timeouts.element_ms)
        links = await session.evaluate(scripts.NAV_LINKS)
        if not links:
            raise ElementNotFoundError(["nav a"])
        for link in links:
            log.info("Navigation link: %s -> %s", link["text"], link["href"])
        return f"{len(links)} navigation links: {format_links(links)}"

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            Step(
                name="collect navigation links",
                action=self.collect_links,
                reaches="NavigationChecked",
                failure_reason="NavigationMissing",
            ),
        )


@dataclass(frozen=True, kw_only=True)
class MetaScenario(SiteScenario):
    """The page has a title; the meta description is reported."""

    @property
    def scenario_id(self) -> str:
        return "meta"

    async def read_meta(self, session: BrowserSession[Any]) -> str:
        title = (await session.title()).strip()
        if not title:
            raise AssertionMismatchError("a page title", title)
        description = await session.evaluate(scripts.META_DESCRIPTION)
        return f"Title: {title}; Meta Description: {description or 'Not found'}"

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            Step(
                name="read meta information",
                action=self.read_meta,
                reaches="MetaChecked",
                failure_reason="MissingTitle",
            ),
        )


@dataclass(frozen=True, kw_only=True)
class ResponsiveScenario(ViewportScenario):
    """The navigation renders at each configured viewport.

    Menu visibility is reported rather than asserted, since collapsing the
    navigation on small screens is legitimate.
    """

    @property
    def scenario_id(self) -> str:
        return "responsive"

    def check_viewport(self, viewport: Viewport) -> Step:
        async def action(session: BrowserSession[Any]) -> str:
            await self.resize(session, viewport)
            await resolve(session, NAV, self.config.timeouts.element_ms)
            visible = await session.evaluate(scripts.NAV_VISIBLE)
            return f"{viewport.name} menu visibility: {'Visible' if visible else 'Hidden'}"

        return Step(
            name=f"{viewport.name.lower()} layout",
            action=action,
            reaches=f"{viewport.name}Checked",
            failure_reason="LayoutCheckFailed",
        )

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            *(self.check_viewport(v) for v in self.config.responsive_viewports),
        )


@dataclass(frozen=True, kw_only=True)
class PerformanceScenario(SiteScenario):
    """Navigation timing metrics are available."""

    @property
    def scenario_id(self) -> str:
        return "performance"

    async def collect_timing(self, session: BrowserSession[Any]) -> str:
        metrics = await session.evaluate(scripts.PERFORMANCE_TIMING)
        if not metrics:
            raise StepError("Unable to collect performance metrics")
        return (
            f"Page Load Time: {metrics['loadTime']}ms; "
            f"DOM Content Loaded: {metrics['domContentLoaded']}ms"
        )

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            Step(
                name="collect performance metrics",
                action=self.collect_timing,
                reaches="PerformanceMeasured",
                failure_reason="MetricsUnavailable",
            ),
        )


@dataclass(frozen=True, kw_only=True)
class ConsoleErrorsScenario(SiteScenario):
    """Browser console errors raised by a fresh homepage load are reported.

    Only errors logged during the reload count; errors left over from earlier
    scenarios on a shared session are excluded. They are reported, not
    asserted.
    """

    @property
    def scenario_id(self) -> str:
        return "console-errors"

    async def collect_errors(self, session: BrowserSession[Any]) -> str:
        seen = len(session.console_errors)
        await session.reload(
            wait_until=self.config.wait_until,
            timeout_ms=self.config.timeouts.navigation_ms,
        )
        errors = session.console_errors[seen:]
        if not errors:
            return "No console errors"
        return f"{len(errors)} console errors: {'; '.join(errors)}"

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            Step(
                name="check console errors",
                action=self.collect_errors,
                reaches="ConsoleChecked",
                failure_reason="ConsoleCheckFailed",
            ),
        )


@dataclass(frozen=True, kw_only=True)
class ContactFormScenario(Scenario):
    """The contact form accepts a submission and thanks the sender."""

    @property
    def scenario_id(self) -> str:
        return "contact-form"

    async def fill_form(self, session: BrowserSession[Any]) -> str:
        form = self.config.contact_form
        timeout_ms = self.config.timeouts.element_ms
        for selector, value in (
            (CONTACT_FULL_NAME, form.full_name),
            (CONTACT_EMAIL, form.email),
            (CONTACT_MESSAGE, form.message),
        ):
            await type_text(selector, value, timeout_ms)(session)
        return "form filled out"

    async def submit(self, session: BrowserSession[Any]) -> str:
        await click(CONTACT_SUBMIT, self.config.timeouts.element_ms)(session)
        try:
            await session.wait_for_load_state(self.config.timeouts.element_ms)
        except StepTimeoutError:
            log.info("Form submitted without page navigation")
            return "submitted without navigation"
        return "submitted"

    async def confirm(self, session: BrowserSession[Any]) -> str:
        token = self.config.contact_form.success_token
        handle = await resolve_optional(session, CONTACT_CONFIRMATION)
        message = await read_text(session, handle) if handle is not None else ""
        if contains_token(message, token):
            return message

        errors = await session.evaluate(scripts.VALIDATION_ERRORS)
        if errors:
            raise StepError(f"Form validation errors: {errors}")
        raise StepError(
            f"Form submission status unclear: no message containing {token!r} "
            f"and no validation errors (found {message!r})"
        )

    def build_steps(self) -> Sequence[Step]:
        return (
            Step(
                name="open contact page",
                action=navigate(self.config, "contact"),
                reaches="ContactPageLoaded",
                failure_reason="ContactPageUnavailable",
            ),
            Step(
                name="fill contact form",
                action=self.fill_form,
                reaches="FormFilled",
                failure_reason="ContactFieldMissing",
            ),
            Step(
                name="submit contact form",
                action=self.submit,
                reaches="FormSubmitted",
                failure_reason="SubmitControlMissing",
            ),
            Step(
                name="confirm submission",
                action=self.confirm,
                reaches="SubmissionConfirmed",
                failure_reason="SubmissionNotConfirmed",
            ),
        )


@dataclass(frozen=True, kw_only=True)
class FooterLinksScenario(SiteScenario):
    """The footer contains links."""

    @property
    def scenario_id(self) -> str:
        return "footer-links"

    async def collect_links(self, session: BrowserSession[Any]) -> str:
        await resolve(session, FOOTER, self.config.timeouts.element_ms)
        links = await session.evaluate(scripts.FOOTER_LINKS)
        if not links:
            raise ElementNotFoundError(["footer a"])
        hidden = [link for link in links if not link["isVisible"]]
        detail = f"{len(links)} footer links: {format_links(links)}"
        if hidden:
            detail += f"; hidden: {format_links(hidden)}"
        return detail

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            Step(
                name="collect footer links",
                action=self.collect_links,
                reaches="FooterChecked",
                failure_reason="FooterLinksMissing",
            ),
        )


@dataclass(frozen=True, kw_only=True)
class ImagesScenario(SiteScenario):
    """The homepage shows images; missing alt text and broken images are reported."""

    @property
    def scenario_id(self) -> str:
        return "images"

    async def inspect_images(self, session: BrowserSession[Any]) -> str:
        await resolve(session, IMG, self.config.timeouts.element_ms)
        images = await session.evaluate(scripts.IMAGES)
        if not images:
            raise ElementNotFoundError(["img"])

        for image in images:
            log.debug(
                "Image %s alt=%r loaded=%s %sx%s",
                image["src"],
                image["alt"] if image["hasAlt"] else None,
                image["isLoaded"],
                image["width"],
                image["height"],
            )
        missing_alt = sum(1 for image in images if not image["hasAlt"])
        not_loaded = sum(1 for image in images if not image["isLoaded"])
        return (
            f"{len(images)} images, {missing_alt} missing alt text, "
            f"{not_loaded} not loaded"
        )

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            Step(
                name="inspect images",
                action=self.inspect_images,
                reaches="ImagesChecked",
                failure_reason="ImagesMissing",
            ),
        )


@dataclass(frozen=True, kw_only=True)
class MobileMenuScenario(ViewportScenario):
    """A menu toggle exists on small screens and can be opened."""

    @property
    def scenario_id(self) -> str:
        return "mobile-menu"

    async def open_menu(self, session: BrowserSession[Any]) -> str:
        await self.resize(session, self.config.mobile_viewport)
        toggle = await resolve_optional(session, MENU_TOGGLE)
        if toggle is None:
            raise ElementNotFoundError(MENU_TOGGLE)
        await session.click(toggle)
        await asyncio.sleep(self.config.menu_animation_delay)

        state = await session.evaluate(scripts.MENU_STATE)
        if state is None:
            return "menu opened; menu element not found"
        return (
            "menu opened; "
            + ", ".join(f"{key}={value}" for key, value in state.items())
        )

    def build_steps(self) -> Sequence[Step]:
        return (
            self.open_homepage(),
            Step(
                name="open mobile menu",
                action=self.open_menu,
                reaches="MobileMenuOpened",
                failure_reason="MobileMenuMissing",
            ),
        )
