"""Playwright browser manifest."""

from site_smoke.browsers.manifest import BrowserManifest
from site_smoke.browsers.playwright.config import PlaywrightConfig
from site_smoke.browsers.playwright.session import PlaywrightSession

playwright_manifest = BrowserManifest(
    config_cls=PlaywrightConfig,
    session_factory=PlaywrightSession.from_config,
)
