"""Resolution of ordered selector candidates to a single element.

A Selector lists equivalent queries for one semantic element, e.g. an enroll
button that may be ``.enroll-button`` or a button with the text "Enroll".
Candidates are always tried in order and the first match wins.

Timeout policy: the budget is shared across candidates. An instant pass
queries every candidate without waiting; if none is present, candidates are
waited on in order, each receiving the remaining budget divided evenly across
the candidates still untried.
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

from site_smoke.browsers.base import BrowserSession
from site_smoke.errors import ElementNotFoundError, StepTimeoutError

log = logging.getLogger(__name__)

type Selector = Sequence[str]

MIN_CANDIDATE_TIMEOUT_MS = 1


async def resolve_optional[H](
    session: BrowserSession[H], selector: Selector, *, within: H | None = None
) -> H | None:
    """Return the element of the first present candidate, without waiting."""
    for candidate in selector:
        if (handle := await session.query_selector(candidate, within=within)) is not None:
            log.debug("Resolved %r immediately", candidate)
            return handle
    return None


async def resolve[H](
    session: BrowserSession[H], selector: Selector, timeout_ms: int
) -> H:
    """Resolve a selector to an element, waiting up to timeout_ms in total.

    Raises:
        ElementNotFoundError: If no candidate matched within the budget

    """
    candidates = tuple(selector)
    if not candidates:
        raise ElementNotFoundError(candidates)

    if (handle := await resolve_optional(session, candidates)) is not None:
        return handle

    deadline = time.monotonic() + timeout_ms / 1000
    last_error: Exception | None = None

    for index, candidate in enumerate(candidates):
        remaining_ms = max(0.0, (deadline - time.monotonic()) * 1000)
        share_ms = max(
            MIN_CANDIDATE_TIMEOUT_MS, int(remaining_ms / (len(candidates) - index))
        )
        try:
            handle = await session.wait_for_selector(candidate, share_ms)
        except (StepTimeoutError, ElementNotFoundError) as e:
            log.debug("Candidate %r not found within %dms", candidate, share_ms)
            last_error = e
            continue
        log.debug("Resolved %r after waiting", candidate)
        return handle

    raise ElementNotFoundError(candidates, last_error)


async def read_text(session: BrowserSession[Any], handle: Any) -> str:
    """Return an element's text with surrounding whitespace removed."""
    return (await session.text_content(handle)).strip()
