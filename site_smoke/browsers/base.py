"""Abstract base class for browser sessions."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from site_smoke.models.config import WaitUntil


@dataclass(frozen=True, kw_only=True)
class NavigationResponse:
    """Main-frame response of a navigation.

    ``status`` is None when the browser reported no response, e.g. for a
    same-document navigation. Such navigations count as successful.
    """

    url: str
    status: int | None

    @property
    def ok(self) -> bool:
        return self.status is None or 200 <= self.status < 300


class BrowserSession[H](ABC):
    """A live browser page driven by scenarios.

    Generic type H is the adapter's element handle. Scenarios treat handles as
    opaque and only pass them back into the session that produced them.

    Sessions are created and released by the runner; scenarios never close
    them. Operations that wait on the page raise StepTimeoutError when their
    timeout elapses.
    """

    @property
    @abstractmethod
    def console_errors(self) -> Sequence[str]:
        """Browser console messages of type error seen so far."""

    @abstractmethod
    async def navigate(
        self, url: str, *, wait_until: WaitUntil, timeout_ms: int
    ) -> NavigationResponse:
        """Load url in the page and wait for the given load state."""

    @abstractmethod
    async def reload(self, *, wait_until: WaitUntil, timeout_ms: int) -> NavigationResponse:
        """Reload the current page."""

    @abstractmethod
    async def query_selector(self, selector: str, *, within: H | None = None) -> H | None:
        """Return the first element matching selector, without waiting.

        Only elements in the state the adapter waits for are returned, so an
        element this finds is one wait_for_selector would also accept.
        """

    @abstractmethod
    async def query_selector_all(
        self, selector: str, *, within: H | None = None
    ) -> Sequence[H]:
        """Return all elements matching selector, without waiting."""

    @abstractmethod
    async def wait_for_selector(self, selector: str, timeout_ms: int) -> H:
        """Wait until an element matches selector and return it."""

    @abstractmethod
    async def click(self, handle: H) -> None:
        """Click an element."""

    @abstractmethod
    async def type(self, handle: H, text: str) -> None:
        """Type text into an input element."""

    @abstractmethod
    async def text_content(self, handle: H) -> str:
        """Return the element's text, or an empty string when it has none."""

    @abstractmethod
    async def evaluate(self, script: str, arg: Any = None) -> Any:
        """Run a read-only script in the page and return its result."""

    @abstractmethod
    async def set_viewport(self, width: int, height: int) -> None:
        """Resize the page viewport."""

    @abstractmethod
    async def title(self) -> str:
        """Return the document title."""

    @abstractmethod
    async def wait_for_load_state(self, timeout_ms: int) -> None:
        """Wait until the page has no network activity."""
