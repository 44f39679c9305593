"""Application use-cases orchestrating resource builds."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path

from resource_builder.adapters.minifiers import create_minifier
from resource_builder.adapters.obfuscators import JavascriptObfuscatorCli
from resource_builder.adapters.reporting import LoggingReporter
from resource_builder.application.options import BuildOptions
from resource_builder.application.ports import BuildReporter, Minifier, Obfuscator
from resource_builder.application.results import (
    BuildResult,
    BuildSummary,
    FileFailure,
)
from resource_builder.discovery import find_html, find_scripts, relative_posix
from resource_builder.rewrite import rewrite_html_files, rewrite_manifest

logger = logging.getLogger(__name__)


def output_path_for(source: Path, build_dir_name: str) -> Path:
    """Return the sibling build location for ``source``."""
    return source.parent / build_dir_name / source.name


def build_file(
    path: Path,
    *,
    root: Path,
    minifier: Minifier,
    obfuscator: Obfuscator,
    options: BuildOptions,
    reporter: BuildReporter,
) -> BuildResult | FileFailure:
    """Use-case: minify, obfuscate and write one script.

    Parameters
    ----------
    path : Path
        Absolute path of the source script.
    root : Path
        Resource root used to express result paths.
    minifier, obfuscator
        Transform collaborators.
    options : BuildOptions
        Transform options and build directory name.
    reporter : BuildReporter
        Progress sink.

    Returns
    -------
    BuildResult | FileFailure
        The root-relative mapping on success, or the recorded failure. Errors
        never escape so one bad script cannot abort the batch.
    """
    relative = relative_posix(path, root)
    output_path = output_path_for(path, options.build_dir_name)
    reporter.step(f"Building: {relative}")
    try:
        code = path.read_text(encoding="utf-8")
        minified = minifier.minify(code, options.minify)
        obfuscated = obfuscator.obfuscate(minified, options.obfuscate)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(obfuscated, encoding="utf-8")
    except Exception as exc:
        # Any failure stays scoped to this file; the batch continues.
        logger.debug("build of %s failed", relative, exc_info=True)
        reporter.failure(f"Error building {relative}: {exc}")
        return FileFailure(path=relative, error=str(exc))

    built = relative_posix(output_path, root)
    reporter.success(f"Output: {built}")
    return BuildResult(original_path=relative, built_path=built)


def _build_all(
    scripts: Sequence[Path],
    *,
    root: Path,
    minifier: Minifier,
    obfuscator: Obfuscator,
    options: BuildOptions,
    reporter: BuildReporter,
) -> list[BuildResult | FileFailure]:
    def run(path: Path) -> BuildResult | FileFailure:
        return build_file(
            path,
            root=root,
            minifier=minifier,
            obfuscator=obfuscator,
            options=options,
            reporter=reporter,
        )

    if options.jobs <= 1 or len(scripts) <= 1:
        return [run(path) for path in scripts]

    # Executor.map yields in submission order, i.e. discovery order.
    with ThreadPoolExecutor(max_workers=options.jobs) as pool:
        return list(pool.map(run, scripts))


def build_resource(
    root: Path,
    *,
    options: BuildOptions | None = None,
    minifier: Minifier | None = None,
    obfuscator: Obfuscator | None = None,
    reporter: BuildReporter | None = None,
) -> BuildSummary:
    """Use-case: build every script under ``root`` and rewrite references.

    Parameters
    ----------
    root : Path
        Resource root containing the manifest.
    options : BuildOptions | None, default=None
        Build configuration; defaults to ``BuildOptions()``.
    minifier : Minifier | None, default=None
        Defaults to the adapter named by ``options.minifier``.
    obfuscator : Obfuscator | None, default=None
        Defaults to ``JavascriptObfuscatorCli``.
    reporter : BuildReporter | None, default=None
        Defaults to ``LoggingReporter``.

    Returns
    -------
    BuildSummary
        Outcome of the run. Per-file failures are recorded, not raised.

    Raises
    ------
    NotFoundError
        If ``root`` is missing or not a directory.
    """
    options = options or BuildOptions()
    reporter = reporter or LoggingReporter()
    minifier = minifier or create_minifier(
        options.minifier, timeout=options.tool_timeout
    )
    obfuscator = obfuscator or JavascriptObfuscatorCli(timeout=options.tool_timeout)
    root = Path(root).resolve()
    discovery = options.discovery
    if options.build_dir_name not in discovery.ignore_dirs:
        discovery = replace(
            discovery, ignore_dirs=discovery.ignore_dirs | {options.build_dir_name}
        )

    reporter.info("🔍 Scanning for JavaScript files...")
    reporter.info(f"Ignoring directories: {', '.join(sorted(discovery.ignore_dirs))}")
    reporter.info(f"Ignoring files: {', '.join(sorted(discovery.ignore_files))}")

    scripts = find_scripts(root, discovery)
    if not scripts:
        reporter.info("No JavaScript files found.")
        return BuildSummary()

    reporter.info(f"Found {len(scripts)} file(s) to build")
    outcomes = _build_all(
        scripts,
        root=root,
        minifier=minifier,
        obfuscator=obfuscator,
        options=options,
        reporter=reporter,
    )
    built = tuple(item for item in outcomes if isinstance(item, BuildResult))
    failed = tuple(item for item in outcomes if isinstance(item, FileFailure))
    reporter.info("✨ Build complete!")

    summary = BuildSummary(scripts_found=len(scripts), built=built, failed=failed)
    if built:
        manifest_updated = rewrite_manifest(
            root / options.manifest_name, built, reporter
        )
        html_files = find_html(root, discovery)
        if html_files:
            reporter.info(f"🔧 Updating {len(html_files)} HTML file(s)...")
        html_updated, html_failed = rewrite_html_files(
            html_files, root, built, reporter
        )
        summary = BuildSummary(
            scripts_found=len(scripts),
            built=built,
            failed=failed,
            manifest_updated=manifest_updated,
            html_updated=html_updated,
            html_failed=html_failed,
        )

    _report_summary(summary, reporter)
    return summary


def _report_summary(summary: BuildSummary, reporter: BuildReporter) -> None:
    message = (
        f"Built {len(summary.built)}/{summary.scripts_found} script(s), "
        f"updated {len(summary.html_updated)} HTML file(s)"
    )
    if summary.partial:
        reporter.warning(
            f"{message}; {len(summary.failed) + len(summary.html_failed)} failure(s)"
        )
    else:
        reporter.success(message)
