"""Runner for executing scenarios against browser sessions."""

import logging
import traceback
from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any

from site_smoke.browsers.base import BrowserSession
from site_smoke.models.config import SessionMode
from site_smoke.models.result import ScenarioFailure, ScenarioResult, StepOutcome
from site_smoke.report import TestReport
from site_smoke.scenarios.base import Scenario
from site_smoke.steps import INITIAL_STATE, UNEXPECTED_ERROR

log = logging.getLogger(__name__)

type SessionFactory = Callable[[], AbstractAsyncContextManager[BrowserSession[Any]]]


@dataclass(frozen=True, kw_only=True)
class Runner:
    """Runs scenarios strictly in sequence.

    In "shared" mode one session serves every scenario; in "per-scenario" mode
    each scenario gets a fresh one. Sessions are always released, and a
    failing scenario never prevents the next from running. Errors opening a
    session propagate to the caller.
    """

    session_factory: SessionFactory
    session_mode: SessionMode = "shared"
    debug: bool = False

    async def run(self, scenarios: Sequence[Scenario]) -> TestReport:
        """Run all scenarios and return the report.

        Args:
            scenarios: Scenarios in execution order

        Returns:
            Report with one result per scenario

        """
        report = TestReport(show_traces=self.debug)
        if not scenarios:
            log.info("No scenarios to run")
            return report

        log.info(
            "Running %d scenario(s) with %s session(s)...",
            len(scenarios),
            self.session_mode,
        )

        if self.session_mode == "shared":
            async with self.session_factory() as session:
                for scenario in scenarios:
                    report.record(await self._run_scenario(scenario, session))
        else:
            for scenario in scenarios:
                async with self.session_factory() as session:
                    report.record(await self._run_scenario(scenario, session))

        log.info("Scenario execution completed")
        return report

    async def _run_scenario(
        self, scenario: Scenario, session: BrowserSession[Any]
    ) -> ScenarioResult:
        """Run one scenario, converting unexpected errors into an error result."""
        log.info("Running scenario %s", scenario.scenario_id)
        try:
            result = await scenario.run(session)
        except Exception as e:
            log.error(
                "Scenario %s raised: %s",
                scenario.scenario_id,
                e,
                exc_info=e if self.debug else None,
            )
            return ScenarioResult(
                scenario_id=scenario.scenario_id,
                steps=(
                    StepOutcome(
                        name=scenario.scenario_id,
                        status="error",
                        duration=0.0,
                        detail=f"{type(e).__name__}: {e}",
                        trace="".join(traceback.format_exception(e))
                        if self.debug
                        else None,
                    ),
                ),
                final_state=INITIAL_STATE,
                failure=ScenarioFailure(
                    reason=UNEXPECTED_ERROR, last_state=INITIAL_STATE, detail=str(e)
                ),
            )

        log.info(
            "Scenario completed: scenario=%s passed=%s duration=%.1fs",
            result.scenario_id,
            result.passed,
            result.duration,
        )
        return result
