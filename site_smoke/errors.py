"""Errors raised by browser steps.

Every error here is recoverable at the scenario level: steps turn them into
``fail`` outcomes with a readable detail.
"""

from collections.abc import Sequence


class StepError(Exception):
    """Base error for a failed browser step."""


class ElementNotFoundError(StepError):
    """Raised when no selector candidate matched an element."""

    def __init__(
        self, candidates: Sequence[str], last_error: BaseException | None = None
    ) -> None:
        self.candidates = tuple(candidates)
        self.last_error = last_error
        message = f"No element matched any of {list(self.candidates)}"
        if last_error is not None:
            message = f"{message} (last error: {last_error})"
        super().__init__(message)


class StepTimeoutError(StepError, TimeoutError):
    """Raised when a browser action did not complete within its timeout."""


class AssertionMismatchError(StepError):
    """Raised when actual text does not contain the expected token."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected text containing {expected!r}, got {actual!r}")


class NavigationFailedError(StepError):
    """Raised when a navigation returned a non-OK response status."""

    def __init__(self, url: str, status: int | None) -> None:
        self.url = url
        self.status = status
        super().__init__(f"Navigation to {url} failed with status {status}")
