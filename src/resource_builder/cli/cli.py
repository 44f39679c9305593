#!/usr/bin/env python3
"""
resource_builder.cli.cli

Typer-based CLI for building a game-mod resource tree.

Running the command with no arguments builds the current directory with the
default configuration: every ``.js`` file is minified and obfuscated into a
sibling ``build/`` directory, then ``fxmanifest.lua`` and any HTML documents
are rewritten to reference the built files.

Examples
--------
Build the resource in the current directory:

    build-resource

Build another resource with four transform workers, failing on partial builds:

    build-resource build ../my-resource --jobs 4 --strict
"""

from __future__ import annotations

import logging
import shutil
import sys
import traceback
from pathlib import Path

import typer

from resource_builder.application.results import BuildSummary
from resource_builder.errors import BuildError

app = typer.Typer(
    name="build-resource",
    help="Minify and obfuscate resource scripts and rewrite their references.",
)

PARTIAL_EXIT_CODE = 3
NODE_TOOLS = ("node", "npx", "terser", "javascript-obfuscator")
PYTHON_PACKAGES = ("pydantic", "typer", "rjsmin")


# -----------------------------
# Console reporting
# -----------------------------
class ConsoleReporter:
    """Echo build progress with status markers."""

    def info(self, message: str) -> None:
        typer.echo(message)

    def step(self, message: str) -> None:
        typer.echo(f"📦 {message}")

    def success(self, message: str) -> None:
        typer.secho(f"✓ {message}", fg=typer.colors.GREEN)

    def warning(self, message: str) -> None:
        typer.secho(f"⚠ {message}", fg=typer.colors.YELLOW)

    def failure(self, message: str) -> None:
        typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)


def _print_build_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly fatal build error.

    Parameters
    ----------
    exc : Exception
        Exception that aborted the build.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _exit_code_for(summary: BuildSummary, strict: bool) -> int:
    if strict and summary.partial:
        return PARTIAL_EXIT_CODE
    return 0


def _run_build(
    *,
    root: Path,
    debug: bool,
    config_path: Path | None = None,
    manifest: str | None = None,
    ignore_dirs: list[str] | None = None,
    ignore_files: list[str] | None = None,
    jobs: int | None = None,
    minifier: str | None = None,
    strict: bool = False,
) -> None:
    try:
        from resource_builder.application.use_cases import build_resource
        from resource_builder.config import build_options, load_config

        config = load_config(root, config_path)
        options = build_options(
            config,
            manifest=manifest,
            extra_ignore_dirs=ignore_dirs,
            extra_ignore_files=ignore_files,
            jobs=jobs,
            minifier=minifier,
        )
        summary = build_resource(root, options=options, reporter=ConsoleReporter())
    except BuildError as exc:
        raise typer.Exit(code=_print_build_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_build_error(exc, debug))

    code = _exit_code_for(summary, strict)
    if code:
        raise typer.Exit(code=code)


# -----------------------------
# Global options
# -----------------------------
@app.callback(invoke_without_command=True)
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show tracebacks and debug logs."),
) -> None:
    """Initialize shared CLI state and build the current directory by default.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"debug": debug}
    if ctx.invoked_subcommand is None:
        _run_build(root=Path.cwd(), debug=debug)


# -----------------------------
# Commands
# -----------------------------
@app.command("build")
def build_cmd(
    ctx: typer.Context,
    root: Path = typer.Argument(
        Path("."),
        help="Resource root containing the manifest. Defaults to the current directory.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Configuration file. Defaults to ROOT/resource-builder.toml when present.",
    ),
    manifest: str | None = typer.Option(
        None, "--manifest", help="Manifest file name at the resource root."
    ),
    ignore_dir: list[str] | None = typer.Option(
        None, "--ignore-dir", help="Additional directory name to skip (repeatable)."
    ),
    ignore_file: list[str] | None = typer.Option(
        None,
        "--ignore-file",
        help="Additional root-relative file path to skip (repeatable).",
    ),
    jobs: int | None = typer.Option(
        None, "--jobs", min=1, help="Number of scripts transformed in parallel."
    ),
    minifier: str | None = typer.Option(
        None, "--minifier", help="Minifier adapter: terser or rjsmin."
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help=f"Exit with status {PARTIAL_EXIT_CODE} when any file failed.",
    ),
) -> None:
    """Build a resource tree.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    root : Path
        Resource root directory.
    jobs : int | None
        Parallel transform workers; rewriting always waits for all of them.
    strict : bool, default=False
        Whether per-file failures change the exit status.

    Notes
    -----
    - The default ``terser`` minifier and the obfuscator are Node tools; they
      are run from ``PATH`` or through ``npx``.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    _run_build(
        root=root,
        debug=debug,
        config_path=config_path,
        manifest=manifest,
        ignore_dirs=ignore_dir,
        ignore_files=ignore_file,
        jobs=jobs,
        minifier=minifier,
        strict=strict,
    )


@app.command("doctor")
def doctor_cmd() -> None:
    """Print toolchain availability and installed package versions."""
    import importlib.metadata as metadata

    typer.echo(f"Python: {sys.version.split()[0]}")
    for tool in NODE_TOOLS:
        location = shutil.which(tool)
        typer.echo(f"{tool}: {location or '<not found>'}")
    for package in PYTHON_PACKAGES:
        try:
            typer.echo(f"{package}: {metadata.version(package)}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{package}: <not installed>")

    if not shutil.which("npx") and not (
        shutil.which("terser") and shutil.which("javascript-obfuscator")
    ):
        typer.secho(
            "Note: install Node.js (npx) or the terser and javascript-obfuscator CLIs.",
            fg=typer.colors.YELLOW,
        )


if __name__ == "__main__":
    app()
