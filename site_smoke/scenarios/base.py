"""Abstract base classes for scenarios."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from site_smoke.browsers.base import BrowserSession
from site_smoke.models.config import SuiteConfig
from site_smoke.models.result import ScenarioResult
from site_smoke.steps import Step, run_steps


@dataclass(frozen=True, kw_only=True)
class Scenario(ABC):
    """One end-to-end user flow verified against a browser session.

    Scenarios act through the session but never close it. ``run`` records
    failures in the returned result instead of raising.
    """

    __test__ = False

    config: SuiteConfig

    @property
    @abstractmethod
    def scenario_id(self) -> str:
        """Stable name used in reports and for filtering."""

    @abstractmethod
    def build_steps(self) -> Sequence[Step]:
        """Return fresh steps for a single run."""

    async def run(self, session: BrowserSession[Any]) -> ScenarioResult:
        """Run the scenario's steps against session."""
        return await run_steps(
            self.scenario_id, self.build_steps(), session, debug=self.config.debug
        )
