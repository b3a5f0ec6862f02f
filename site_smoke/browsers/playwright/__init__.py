"""Playwright browser adapter module."""

from site_smoke.browsers.playwright.config import PlaywrightConfig
from site_smoke.browsers.playwright.manifest import playwright_manifest
from site_smoke.browsers.playwright.session import PlaywrightSession

__all__ = ["PlaywrightConfig", "PlaywrightSession", "playwright_manifest"]
