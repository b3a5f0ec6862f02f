"""Aggregation and rendering of scenario results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, TypedDict

from site_smoke.models.result import ScenarioResult

STATUS_SYMBOLS = {
    "pass": "✅",
    "fail": "❌",
    "error": "❌",
}


class Summary(TypedDict):
    total: int
    passed: int
    failed: int


@dataclass(kw_only=True)
class TestReport:
    """Ordered scenario results of one run.

    Only the runner records results; callers read the summary and rendering.
    """

    __test__ = False

    show_traces: bool = False
    _results: list[ScenarioResult] = field(default_factory=list)

    @property
    def results(self) -> Sequence[ScenarioResult]:
        return tuple(self._results)

    def record(self, result: ScenarioResult) -> None:
        self._results.append(result)

    def summarize(self) -> Summary:
        passed = sum(1 for result in self._results if result.passed)
        return {
            "total": len(self._results),
            "passed": passed,
            "failed": len(self._results) - passed,
        }

    def exit_status(self) -> int:
        return 0 if self.summarize()["failed"] == 0 else 1

    def render_text(self) -> str:
        """Render per-step lines followed by a summary line."""
        lines: list[str] = []
        for result in self._results:
            lines.append(f"\n{result.scenario_id}:")
            for step in result.steps:
                symbol = STATUS_SYMBOLS[step.status]
                line = f"{symbol} {step.name}"
                if step.detail:
                    line += f": {step.detail}"
                lines.append(line)
                if self.show_traces and step.trace:
                    lines.append(step.trace.rstrip())
            if result.failure is not None:
                lines.append(
                    f"❌ {result.scenario_id} failed: {result.failure.reason} "
                    f"(last state: {result.failure.last_state})"
                )

        summary = self.summarize()
        lines.append(
            f"\n📊 Test Results: {summary['passed']}/{summary['total']} tests passed"
        )
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible representation of the report."""
        return {
            **self.summarize(),
            "results": [
                {
                    "scenario": result.scenario_id,
                    "passed": result.passed,
                    "final_state": result.final_state,
                    "failure": (
                        {
                            "reason": result.failure.reason,
                            "last_state": result.failure.last_state,
                            "detail": result.failure.detail,
                        }
                        if result.failure is not None
                        else None
                    ),
                    "duration": round(result.duration, 3),
                    "steps": [
                        {
                            "name": step.name,
                            "status": step.status,
                            "detail": step.detail,
                            "duration": round(step.duration, 3),
                        }
                        for step in result.steps
                    ],
                }
                for result in self._results
            ],
        }
