"""Configuration for the Playwright browser adapter."""

from typing import Literal

from pydantic import BaseModel, Field


class PlaywrightConfig(BaseModel):
    """Configuration for the Playwright browser adapter."""

    browser: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    viewport_width: int = Field(default=1920, gt=0)
    viewport_height: int = Field(default=1080, gt=0)
    slow_mo: float = Field(default=0, ge=0, description="Delay between actions (ms)")
    action_timeout_ms: int = Field(default=5000, gt=0)
    # "attached" matches presence in the DOM, "visible" also requires layout
    wait_state: Literal["attached", "visible"] = "visible"
