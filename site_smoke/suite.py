"""Assembly of the default scenario suite."""

from collections.abc import Mapping, Sequence

from site_smoke.models.config import SuiteConfig
from site_smoke.scenarios.base import Scenario
from site_smoke.scenarios.enrollment import EnrollmentScenario
from site_smoke.scenarios.site import (
    ConsoleErrorsScenario,
    ContactFormScenario,
    FooterLinksScenario,
    HomepageScenario,
    ImagesScenario,
    MetaScenario,
    MobileMenuScenario,
    NavigationScenario,
    PerformanceScenario,
    ResponsiveScenario,
)

SCENARIOS: Mapping[str, type[Scenario]] = {
    "homepage": HomepageScenario,
    "navigation": NavigationScenario,
    "meta": MetaScenario,
    "responsive": ResponsiveScenario,
    "performance": PerformanceScenario,
    "console-errors": ConsoleErrorsScenario,
    "contact-form": ContactFormScenario,
    "footer-links": FooterLinksScenario,
    "images": ImagesScenario,
    "mobile-menu": MobileMenuScenario,
    "enrollment": EnrollmentScenario,
}


class UnknownScenarioError(Exception):
    """Raised when a requested scenario name is not registered."""


def build_suite(config: SuiteConfig, names: Sequence[str] = ()) -> Sequence[Scenario]:
    """Instantiate scenarios in suite order.

    Args:
        config: Suite configuration shared by all scenarios
        names: Scenario names to include (empty means all)

    Returns:
        Scenarios in registry order, regardless of the order of names

    Raises:
        UnknownScenarioError: If a name is not registered

    """
    if unknown := [name for name in names if name not in SCENARIOS]:
        raise UnknownScenarioError(
            f"Unknown scenario(s) {unknown}. Available scenarios: {list(SCENARIOS)}"
        )

    selected = set(names) if names else set(SCENARIOS)
    return [
        scenario_cls(config=config)
        for name, scenario_cls in SCENARIOS.items()
        if name in selected
    ]
