"""CLI entry point for the site smoke-test suite."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Sequence
from typing import Any

from site_smoke.browsers.loading import available_browsers, load_browser_manifest
from site_smoke.models.config import DEFAULT_BASE_URL, SuiteConfig
from site_smoke.runner import Runner
from site_smoke.suite import SCENARIOS, build_suite


def debug_enabled() -> bool:
    """Whether the DEBUG environment variable requests debug output."""
    return bool(os.environ.get("DEBUG"))


def load_suite_config(
    config_json: str = "{}",
    *,
    base_url: str | None = None,
    session_mode: str | None = None,
    debug: bool = False,
) -> SuiteConfig:
    """Build the suite configuration from JSON plus command line overrides."""
    data: dict[str, Any] = json.loads(config_json)
    if base_url is not None:
        data["base_url"] = base_url
    if session_mode is not None:
        data["session_mode"] = session_mode
    if debug:
        data["debug"] = True
    return SuiteConfig.model_validate(data)


async def run(
    suite_config: SuiteConfig,
    browser_key: str = "playwright",
    browser_config_json: str = "{}",
    scenario_names: Sequence[str] = (),
    json_output: bool = False,
) -> int:
    """Run the suite and return the exit code.

    Errors raised outside any scenario (unknown browser, invalid configuration,
    failure to launch the browser) are fatal and return 1.
    """
    log = logging.getLogger("site_smoke")

    try:
        log.info("Loading browser: %s", browser_key)
        manifest = load_browser_manifest(browser_key)
        browser_config = manifest.config_cls(**json.loads(browser_config_json))

        scenarios = build_suite(suite_config, scenario_names)
        log.info("Starting test suite for %s...", suite_config.base_url)

        runner = Runner(
            session_factory=lambda: manifest.session_factory(browser_config),
            session_mode=suite_config.session_mode,
            debug=suite_config.debug,
        )
        report = await runner.run(scenarios)
    except Exception as e:
        log.error(
            "Test suite failed: %s", e, exc_info=e if suite_config.debug else None
        )
        print(f"\n❌ Test suite failed: {e}")
        return 1

    print(report.render_text())
    if json_output:
        print(json.dumps(report.to_dict(), indent=2))

    return report.exit_status()


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run browser smoke tests against a website"
    )
    parser.add_argument(
        "--base-url",
        default=None,
        help=f"Base URL of the site under test (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--browser",
        default="playwright",
        help=(
            "Browser adapter key (default: playwright; installed: "
            f"{', '.join(available_browsers())})"
        ),
    )
    parser.add_argument(
        "--browser-config",
        default="{}",
        help="JSON configuration for the browser adapter",
    )
    parser.add_argument(
        "--config",
        default="{}",
        help="JSON configuration for the suite (timeouts, selectors, tokens)",
    )
    parser.add_argument(
        "--session-mode",
        choices=["shared", "per-scenario"],
        default=None,
        help="Share one browser session or open one per scenario",
    )
    parser.add_argument(
        "--scenario",
        action="append",
        default=[],
        choices=list(SCENARIOS),
        help="Scenario to run (repeatable, default: all)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report after the text report",
    )

    args = parser.parse_args()
    debug = debug_enabled()

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        suite_config = load_suite_config(
            args.config,
            base_url=args.base_url,
            session_mode=args.session_mode,
            debug=debug,
        )
    except ValueError as e:
        logging.getLogger("site_smoke").error("Invalid configuration: %s", e)
        sys.exit(1)

    exit_code = asyncio.run(
        run(
            suite_config,
            browser_key=args.browser,
            browser_config_json=args.browser_config,
            scenario_names=args.scenario,
            json_output=args.json,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
