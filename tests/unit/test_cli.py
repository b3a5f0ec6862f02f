"""Tests for CLI module."""

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import Mock, patch

import pytest
from pydantic import BaseModel, ValidationError

from site_smoke.browsers.loading import BrowserNotFoundError
from site_smoke.browsers.manifest import BrowserManifest
from site_smoke.cli import debug_enabled, load_suite_config, main, run
from site_smoke.models.config import SuiteConfig
from site_smoke.testing.fake import FakeSession
from site_smoke.testing.site import FakeSite


class FakeBrowserConfig(BaseModel):
    """Configuration accepted by the fake browser manifest."""

    headless: bool = True


def fake_manifest(site: FakeSite) -> BrowserManifest[FakeBrowserConfig]:
    """Create a manifest whose sessions render the given site."""

    @asynccontextmanager
    async def factory(config: FakeBrowserConfig) -> AsyncGenerator[FakeSession, None]:
        yield FakeSession(site)

    return BrowserManifest(config_cls=FakeBrowserConfig, session_factory=factory)


class TestLoadSuiteConfig:
    """Tests for load_suite_config."""

    def test_defaults(self) -> None:
        """Empty JSON gives the default configuration."""
        assert load_suite_config() == SuiteConfig()

    def test_overrides_take_precedence(self) -> None:
        """Command line overrides win over JSON values."""
        config = load_suite_config(
            '{"base_url": "https://json.test", "session_mode": "shared"}',
            base_url="https://flag.test",
            session_mode="per-scenario",
            debug=True,
        )

        assert config.base_url == "https://flag.test"
        assert config.session_mode == "per-scenario"
        assert config.debug

    def test_invalid_values_raise(self) -> None:
        """Invalid configuration raises a validation error."""
        with pytest.raises(ValidationError):
            load_suite_config('{"timeouts": {"element_ms": -1}}')


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("true", True), ("", False), (None, False)],
)
def test_debug_enabled(
    monkeypatch: pytest.MonkeyPatch, value: str | None, expected: bool
) -> None:
    """Any non-empty DEBUG value enables debug output."""
    if value is None:
        monkeypatch.delenv("DEBUG", raising=False)
    else:
        monkeypatch.setenv("DEBUG", value)

    assert debug_enabled() is expected


class TestRun:
    """Tests for run function."""

    async def test_returns_zero_when_all_pass(
        self, config: SuiteConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Prints the report and returns 0 when every scenario passes."""
        with patch(
            "site_smoke.cli.load_browser_manifest",
            return_value=fake_manifest(FakeSite()),
        ):
            exit_code = await run(config)

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "✅ reject duplicate: You are already enrolled in this course." in out
        assert "📊 Test Results: 11/11 tests passed" in out

    async def test_returns_one_when_duplicate_not_prevented(
        self, config: SuiteConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A failing scenario yields exit code 1 and a failure line."""
        with patch(
            "site_smoke.cli.load_browser_manifest",
            return_value=fake_manifest(FakeSite(duplicate_text=None)),
        ):
            exit_code = await run(config, scenario_names=["enrollment"])

        assert exit_code == 1
        out = capsys.readouterr().out
        assert "❌ reject duplicate:" in out
        assert (
            "❌ enrollment failed: DuplicateNotPrevented "
            "(last state: SecondEnrollAttempted)"
        ) in out
        assert "📊 Test Results: 0/1 tests passed" in out

    async def test_json_output(
        self, config: SuiteConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """JSON output follows the text report with matching counts."""
        with patch(
            "site_smoke.cli.load_browser_manifest",
            return_value=fake_manifest(FakeSite()),
        ):
            await run(config, scenario_names=["homepage", "meta"], json_output=True)

        out = capsys.readouterr().out
        output = json.loads(out[out.index("{"):])
        assert output["total"] == 2
        assert output["passed"] == 2
        assert [r["scenario"] for r in output["results"]] == ["homepage", "meta"]

    async def test_browser_config_is_parsed(self, config: SuiteConfig) -> None:
        """The browser config JSON is validated by the manifest's config class."""
        factory = Mock(side_effect=fake_manifest(FakeSite()).session_factory)
        manifest = BrowserManifest(config_cls=FakeBrowserConfig, session_factory=factory)

        with patch("site_smoke.cli.load_browser_manifest", return_value=manifest):
            await run(
                config,
                browser_config_json='{"headless": false}',
                scenario_names=["homepage"],
            )

        factory.assert_called_once_with(FakeBrowserConfig(headless=False))

    async def test_unknown_browser_is_fatal(
        self, config: SuiteConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Errors outside scenarios return 1 without a report."""
        with patch(
            "site_smoke.cli.load_browser_manifest",
            side_effect=BrowserNotFoundError("Browser 'x' not found"),
        ):
            exit_code = await run(config, browser_key="x")

        assert exit_code == 1
        out = capsys.readouterr().out
        assert "❌ Test suite failed: Browser 'x' not found" in out
        assert "Test Results" not in out

    async def test_session_launch_failure_is_fatal(
        self, config: SuiteConfig, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A browser that cannot start returns 1 without a stack trace."""

        @asynccontextmanager
        async def failing(config: FakeBrowserConfig) -> AsyncGenerator[FakeSession, None]:
            raise RuntimeError("Executable doesn't exist")
            yield  # pragma: no cover

        manifest = BrowserManifest(config_cls=FakeBrowserConfig, session_factory=failing)

        with patch("site_smoke.cli.load_browser_manifest", return_value=manifest):
            exit_code = await run(config)

        assert exit_code == 1
        assert "Test suite failed: Executable doesn't exist" in caplog.text
        assert "Traceback" not in caplog.text


class TestMain:
    """Tests for the main entry point."""

    def test_exits_with_run_status(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Parses flags, runs the suite and exits with its status."""
        monkeypatch.setattr(
            "sys.argv",
            [
                "site-smoke",
                "--base-url",
                "https://example.test",
                "--scenario",
                "enrollment",
                "--session-mode",
                "per-scenario",
            ],
        )
        monkeypatch.delenv("DEBUG", raising=False)

        async def fake_run(suite_config: SuiteConfig, **kwargs: object) -> int:
            assert suite_config.base_url == "https://example.test"
            assert suite_config.session_mode == "per-scenario"
            assert kwargs["scenario_names"] == ["enrollment"]
            assert kwargs["browser_key"] == "playwright"
            return 1

        with patch("site_smoke.cli.run", side_effect=fake_run):
            with pytest.raises(SystemExit) as exc_info:
                main()

        assert exc_info.value.code == 1

    def test_invalid_config_exits_with_one(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Malformed configuration JSON exits with 1."""
        monkeypatch.setattr("sys.argv", ["site-smoke", "--config", "{not json"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
