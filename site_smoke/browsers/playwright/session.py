"""Playwright browser session implementation."""

import logging
from collections.abc import AsyncGenerator, Iterator, Sequence
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass, field
from typing import Any

from playwright.async_api import ConsoleMessage, ElementHandle, Page, async_playwright
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from site_smoke.browsers.base import BrowserSession, NavigationResponse
from site_smoke.browsers.playwright.config import PlaywrightConfig
from site_smoke.errors import ElementNotFoundError, StepTimeoutError
from site_smoke.models.config import WaitUntil

log = logging.getLogger(__name__)


@contextmanager
def translate_timeout(action: str) -> Iterator[None]:
    """Re-raise Playwright timeouts as StepTimeoutError."""
    try:
        yield
    except PlaywrightTimeoutError as e:
        raise StepTimeoutError(f"{action} timed out: {e}") from e


@dataclass(frozen=True, kw_only=True)
class PlaywrightSession(BrowserSession[ElementHandle]):
    """Browser session backed by a single Playwright page."""

    config: PlaywrightConfig
    page: Page = field(repr=False)
    _console_errors: list[str] = field(default_factory=list, repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: PlaywrightConfig
    ) -> AsyncGenerator["PlaywrightSession", None]:
        """Launch a browser and yield a session on a fresh page."""
        async with async_playwright() as playwright:
            browser_type = getattr(playwright, config.browser)
            log.info(
                "Launching %s (headless=%s, viewport=%dx%d)",
                config.browser,
                config.headless,
                config.viewport_width,
                config.viewport_height,
            )
            browser = await browser_type.launch(
                headless=config.headless, slow_mo=config.slow_mo
            )
            try:
                page = await browser.new_page(
                    viewport={
                        "width": config.viewport_width,
                        "height": config.viewport_height,
                    }
                )
                session = cls(config=config, page=page)
                page.on("console", session.on_console)
                yield session
            finally:
                await browser.close()
                log.info("Browser closed")

    def on_console(self, message: ConsoleMessage) -> None:
        """Record browser console errors."""
        if message.type == "error":
            self._console_errors.append(message.text)
            log.error("Browser console error: %s", message.text)

    @property
    def console_errors(self) -> Sequence[str]:
        return tuple(self._console_errors)

    async def navigate(
        self, url: str, *, wait_until: WaitUntil, timeout_ms: int
    ) -> NavigationResponse:
        log.debug("Navigating to %s (wait_until=%s)", url, wait_until)
        with translate_timeout(f"Navigation to {url}"):
            response = await self.page.goto(
                url, wait_until=wait_until, timeout=timeout_ms
            )
        if response is None:
            return NavigationResponse(url=self.page.url, status=None)
        return NavigationResponse(url=response.url, status=response.status)

    async def reload(self, *, wait_until: WaitUntil, timeout_ms: int) -> NavigationResponse:
        with translate_timeout("Reload"):
            response = await self.page.reload(wait_until=wait_until, timeout=timeout_ms)
        if response is None:
            return NavigationResponse(url=self.page.url, status=None)
        return NavigationResponse(url=response.url, status=response.status)

    async def query_selector(
        self, selector: str, *, within: ElementHandle | None = None
    ) -> ElementHandle | None:
        root = within if within is not None else self.page
        if self.config.wait_state == "attached":
            return await root.query_selector(selector)
        for handle in await root.query_selector_all(selector):
            if await handle.is_visible():
                return handle
        return None

    async def query_selector_all(
        self, selector: str, *, within: ElementHandle | None = None
    ) -> Sequence[ElementHandle]:
        root = within if within is not None else self.page
        return await root.query_selector_all(selector)

    async def wait_for_selector(self, selector: str, timeout_ms: int) -> ElementHandle:
        with translate_timeout(f"Waiting for {selector!r}"):
            handle = await self.page.wait_for_selector(
                selector, timeout=timeout_ms, state=self.config.wait_state
            )
        if handle is None:
            raise ElementNotFoundError([selector])
        return handle

    async def click(self, handle: ElementHandle) -> None:
        with translate_timeout("Click"):
            await handle.click(timeout=self.config.action_timeout_ms)

    async def type(self, handle: ElementHandle, text: str) -> None:
        with translate_timeout("Typing"):
            await handle.fill(text, timeout=self.config.action_timeout_ms)

    async def text_content(self, handle: ElementHandle) -> str:
        return await handle.text_content() or ""

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    async def set_viewport(self, width: int, height: int) -> None:
        await self.page.set_viewport_size({"width": width, "height": height})

    async def title(self) -> str:
        return await self.page.title()

    async def wait_for_load_state(self, timeout_ms: int) -> None:
        with translate_timeout("Waiting for network idle"):
            await self.page.wait_for_load_state("networkidle", timeout=timeout_ms)
