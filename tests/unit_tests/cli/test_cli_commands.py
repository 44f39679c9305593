"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import resource_builder.application.use_cases as use_cases_module
from resource_builder.application.options import BuildOptions
from resource_builder.application.results import BuildResult, BuildSummary, FileFailure
from resource_builder.cli import cli as cli_module
from resource_builder.errors import NotFoundError

runner = CliRunner()


def _capture_build(
    monkeypatch: pytest.MonkeyPatch, summary: BuildSummary | None = None
) -> dict[str, object]:
    called: dict[str, object] = {}

    def fake_build(root: Path, *, options: BuildOptions, reporter: object) -> BuildSummary:
        called["root"] = root
        called["options"] = options
        called["reporter"] = reporter
        return summary or BuildSummary()

    monkeypatch.setattr(use_cases_module, "build_resource", fake_build)
    return called


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the build and doctor commands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "build" in result.output
    assert "doctor" in result.output


def test_no_arguments_builds_current_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The bare command builds the working directory with defaults."""
    called = _capture_build(monkeypatch)
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli_module.app, [])

    assert result.exit_code == 0
    assert called["root"] == tmp_path
    assert called["options"] == BuildOptions()
    assert isinstance(called["reporter"], cli_module.ConsoleReporter)


def test_build_forwards_options(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Command options are merged into BuildOptions."""
    called = _capture_build(monkeypatch)

    result = runner.invoke(
        cli_module.app,
        [
            "build",
            str(tmp_path),
            "--manifest",
            "resource.lua",
            "--ignore-dir",
            "vendor",
            "--ignore-file",
            "client/extra.js",
            "--jobs",
            "3",
            "--minifier",
            "rjsmin",
        ],
    )

    assert result.exit_code == 0, result.output
    options = called["options"]
    assert isinstance(options, BuildOptions)
    assert called["root"] == tmp_path
    assert options.manifest_name == "resource.lua"
    assert "vendor" in options.discovery.ignore_dirs
    assert "client/extra.js" in options.discovery.ignore_files
    assert options.jobs == 3
    assert options.minifier == "rjsmin"


def test_partial_build_exits_zero_by_default(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Per-file failures keep the historical zero exit status."""
    summary = BuildSummary(
        scripts_found=2,
        built=(BuildResult("a.js", "build/a.js"),),
        failed=(FileFailure("b.js", "boom"),),
    )
    _capture_build(monkeypatch, summary)

    result = runner.invoke(cli_module.app, ["build", str(tmp_path)])

    assert result.exit_code == 0


def test_partial_build_with_strict_exits_three(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """--strict surfaces partial builds as a distinct exit status."""
    summary = BuildSummary(scripts_found=1, failed=(FileFailure("b.js", "boom"),))
    _capture_build(monkeypatch, summary)

    result = runner.invoke(cli_module.app, ["build", str(tmp_path), "--strict"])

    assert result.exit_code == cli_module.PARTIAL_EXIT_CODE


def test_missing_root_reports_not_found(tmp_path: Path) -> None:
    """A missing root is fatal with the NotFoundError exit code."""
    result = runner.invoke(cli_module.app, ["build", str(tmp_path / "missing")])

    assert result.exit_code == NotFoundError.exit_code
    assert "NotFoundError" in result.output


def test_invalid_config_reports_config_error(tmp_path: Path) -> None:
    """An invalid config file aborts before any build work."""
    (tmp_path / "resource-builder.toml").write_text("jobs = 0", encoding="utf-8")

    result = runner.invoke(cli_module.app, ["build", str(tmp_path)])

    assert result.exit_code == 2
    assert "ConfigError" in result.output


def test_unexpected_error_exits_one_with_debug_traceback(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Unexpected crashes print a clean message and, under --debug, a traceback."""

    def fake_build(root: Path, **_: object) -> BuildSummary:
        raise RuntimeError("kaboom")

    monkeypatch.setattr(use_cases_module, "build_resource", fake_build)

    result = runner.invoke(cli_module.app, ["--debug", "build", str(tmp_path)])

    assert result.exit_code == 1
    assert "RuntimeError: kaboom" in result.output
    assert "Traceback" in result.output


def test_console_reporter_markers(capsys: pytest.CaptureFixture[str]) -> None:
    """Each event kind carries its status marker."""
    reporter = cli_module.ConsoleReporter()
    reporter.step("Building: a.js")
    reporter.success("Output: build/a.js")
    reporter.warning("No changes: index.html")
    reporter.failure("Error building b.js")

    captured = capsys.readouterr()
    assert "📦 Building: a.js" in captured.out
    assert "✓ Output: build/a.js" in captured.out
    assert "⚠ No changes: index.html" in captured.out
    assert "✗ Error building b.js" in captured.err


def test_doctor_lists_tools(monkeypatch: pytest.MonkeyPatch) -> None:
    """Doctor prints tool availability and package versions."""
    monkeypatch.setattr(cli_module.shutil, "which", lambda _name: None)

    result = runner.invoke(cli_module.app, ["doctor"])

    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "terser: <not found>" in result.output
    assert "pydantic:" in result.output
    assert "install Node.js" in result.output
