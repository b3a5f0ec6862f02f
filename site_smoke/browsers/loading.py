"""Discovery of browser adapters registered under the site_smoke.browsers group."""

import logging
from collections.abc import Sequence
from importlib.metadata import entry_points
from typing import Any

from site_smoke.browsers.manifest import BrowserManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "site_smoke.browsers"


class BrowserNotFoundError(Exception):
    """Raised when no usable browser adapter is registered under a key."""


def available_browsers() -> Sequence[str]:
    """Return the keys of all installed browser adapters, sorted."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_browser_manifest(key: str) -> BrowserManifest[Any]:
    """Import the manifest of the adapter registered as key.

    Only the selected adapter is imported, so adapters whose browser library
    is not installed do not break the others.

    Raises:
        BrowserNotFoundError: If the key is unknown or does not point at a
            BrowserManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise BrowserNotFoundError(
            f"Browser '{key}' not found. Available browsers: {list(available_browsers())}"
        )

    entry = matches[key]
    manifest = entry.load()
    if not isinstance(manifest, BrowserManifest):
        raise BrowserNotFoundError(
            f"Browser '{key}' ({entry.value}) is not a BrowserManifest"
        )

    log.debug("Loaded browser adapter %s from %s", key, entry.value)
    return manifest
