"""Browser manifest definition for the plugin system."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from site_smoke.browsers.base import BrowserSession


@dataclass(frozen=True, kw_only=True)
class BrowserManifest[ConfigT: BaseModel]:
    """Manifest describing a browser adapter plugin.

    The manifest contains references to the configuration class and the
    session factory so that adapters are only imported once selected by key.
    """

    config_cls: type[ConfigT]
    session_factory: Callable[
        [ConfigT], AbstractAsyncContextManager[BrowserSession[Any]]
    ]
