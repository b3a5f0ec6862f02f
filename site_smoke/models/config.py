"""Models for the smoke-test suite configuration."""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from yarl import URL

DEFAULT_BASE_URL = "https://opus4i.com"

type WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]
type SessionMode = Literal["shared", "per-scenario"]


class ConfigModel(BaseModel):
    """Immutable base for the suite configuration sections."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class Viewport(ConfigModel):
    """Named browser viewport size."""

    name: str = Field(default="Desktop", description="Label used in step details")
    width: int = Field(default=1920, gt=0)
    height: int = Field(default=1080, gt=0)


class Timeouts(ConfigModel):
    """Per-step timeouts in milliseconds."""

    navigation_ms: int = Field(default=30000, gt=0, description="Page loads")
    element_ms: int = Field(default=5000, gt=0, description="Element waits")


class EnrollmentSelectors(ConfigModel):
    """Candidate selectors for the elements of the enrollment flow."""

    course_card: Sequence[str] = ('.course-card', '[data-testid="course-item"]')
    course_title: Sequence[str] = ("h1", ".course-title")
    enroll_button: Sequence[str] = ('button:has-text("Enroll")', ".enroll-button")
    success_indicator: Sequence[str] = (".success-message", ".alert-success")
    error_indicator: Sequence[str] = (
        ".error-message",
        ".alert-error",
        '[role="alert"]',
    )
    enrolled_status: Sequence[str] = (
        ".enrollment-status",
        ".status-badge",
        ".course-status",
    )


class EnrollmentTokens(ConfigModel):
    """Text tokens the enrollment indicators must contain (case-insensitive)."""

    success: str = "success"
    duplicate: str = "already enrolled"
    enrolled: str = "enrolled"


class ContactForm(ConfigModel):
    """Values typed into the contact form."""

    full_name: str = "Test User"
    email: str = "test@example.com"
    message: str = "This is an automated test message."
    success_token: str = "thank"


class SuiteConfig(ConfigModel):
    """Complete configuration of a smoke-test run."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Site under test")
    wait_until: WaitUntil = "networkidle"
    timeouts: Timeouts = Field(default_factory=Timeouts)
    session_mode: SessionMode = "shared"
    default_viewport: Viewport = Field(default_factory=Viewport)
    responsive_viewports: Sequence[Viewport] = (
        Viewport(name="Mobile", width=375, height=667),
        Viewport(name="Tablet", width=768, height=1024),
        Viewport(name="Desktop", width=1920, height=1080),
    )
    mobile_viewport: Viewport = Field(
        default_factory=lambda: Viewport(name="Mobile", width=375, height=667)
    )
    menu_animation_delay: float = Field(
        default=0.5, ge=0, description="Seconds to wait after opening the menu"
    )
    selectors: EnrollmentSelectors = Field(default_factory=EnrollmentSelectors)
    tokens: EnrollmentTokens = Field(default_factory=EnrollmentTokens)
    contact_form: ContactForm = Field(default_factory=ContactForm)
    debug: bool = False

    def url(self, path: str = "") -> str:
        """Return an absolute URL for a path on the site under test."""
        base = URL(self.base_url)
        if not path.strip("/"):
            return str(base)
        return str(base.with_path(base.path.rstrip("/") + "/" + path.lstrip("/")))
