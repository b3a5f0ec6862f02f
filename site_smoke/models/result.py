"""Models for step and scenario results."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

type StepStatus = Literal["pass", "fail", "error"]


@dataclass(frozen=True, kw_only=True)
class StepOutcome:
    """Outcome of a single scenario step.

    ``trace`` is only populated for error outcomes when debugging is enabled.
    """

    name: str
    status: StepStatus
    duration: float
    detail: str = ""
    trace: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == "pass"


@dataclass(frozen=True, kw_only=True)
class ScenarioFailure:
    """Why a scenario stopped, and the last state it reached."""

    reason: str
    last_state: str
    detail: str = ""


@dataclass(frozen=True, kw_only=True)
class ScenarioResult:
    """Ordered step outcomes of one scenario run."""

    scenario_id: str
    steps: Sequence[StepOutcome]
    final_state: str
    failure: ScenarioFailure | None = None

    @property
    def passed(self) -> bool:
        return self.failure is None

    @property
    def duration(self) -> float:
        return sum(step.duration for step in self.steps)
