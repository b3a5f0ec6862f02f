"""Fixtures for unit tests using the in-memory browser session."""

import pytest

from site_smoke.models.config import SuiteConfig
from site_smoke.testing.fake import FakeSession
from site_smoke.testing.site import BASE_URL, FakeSite


@pytest.fixture
def config() -> SuiteConfig:
    """Suite configuration pointing at the fake site."""
    return SuiteConfig(base_url=BASE_URL, menu_animation_delay=0)


@pytest.fixture
def site() -> FakeSite:
    """Fake site with a single course and well-behaved enrollment."""
    return FakeSite()


@pytest.fixture
def session(site: FakeSite) -> FakeSession:
    """Fake browser session rendering the fake site."""
    return FakeSession(site)
