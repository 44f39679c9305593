"""Textual rewriting of script references in the manifest and HTML documents.

Both rewriters are deliberately pattern based: the manifest is never parsed as
Lua and HTML is never parsed as a DOM. Mappings are applied in the order the
build produced them, and each one runs against the already-rewritten text.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from resource_builder.application.ports import BuildReporter
from resource_builder.application.results import BuildResult, FileFailure, HtmlRewrite
from resource_builder.discovery import normalize_separators, relative_posix

logger = logging.getLogger(__name__)

HTML_ATTRIBUTES = ("src", "href")


def _read_text(path: Path) -> str:
    # newline="" keeps CRLF line endings as they are on disk.
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def _write_text(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as handle:
        handle.write(text)


def _quoted_pattern(path: str) -> re.Pattern[str]:
    return re.compile(f"['\"]{re.escape(path)}['\"]")


def _attribute_pattern(attribute: str, path: str) -> re.Pattern[str]:
    return re.compile(f"{attribute}=['\"]{re.escape(path)}['\"]")


def rewrite_manifest_text(text: str, results: Iterable[BuildResult]) -> str:
    """Replace quoted original paths with single-quoted built paths.

    Parameters
    ----------
    text : str
        Full manifest content.
    results : Iterable[BuildResult]
        Mappings applied in order.

    Returns
    -------
    str
        Rewritten manifest content.
    """
    for result in results:
        replacement = f"'{result.built_path}'"
        text, count = _quoted_pattern(result.original_path).subn(
            lambda _match: replacement, text
        )
        logger.debug("manifest: %s matched %d time(s)", result.original_path, count)
    return text


def rewrite_manifest(
    manifest_path: Path,
    results: Sequence[BuildResult],
    reporter: BuildReporter,
) -> bool:
    """Rewrite the manifest file in place.

    Returns
    -------
    bool
        ``True`` when the manifest was written, ``False`` when it is missing or
        nothing in it referenced a built script.
    """
    if not manifest_path.is_file():
        reporter.warning(f"Manifest file not found: {manifest_path.name}")
        return False

    original = _read_text(manifest_path)
    rewritten = rewrite_manifest_text(original, results)
    if rewritten == original:
        reporter.info(f"No manifest references to update in {manifest_path.name}")
        return False

    _write_text(manifest_path, rewritten)
    reporter.success(f"Updated {manifest_path.name} with built file paths")
    return True


def _path_forms(
    result: BuildResult, html_dir: Path, root: Path
) -> list[tuple[str, str]]:
    """Root-relative and document-relative (original, built) pairs."""
    relative_original = normalize_separators(
        os.path.relpath(root / result.original_path, html_dir)
    )
    relative_built = normalize_separators(
        os.path.relpath(root / result.built_path, html_dir)
    )
    return [
        (result.original_path, result.built_path),
        (relative_original, relative_built),
    ]


def rewrite_html_text(
    text: str,
    html_dir: Path,
    root: Path,
    results: Iterable[BuildResult],
) -> tuple[str, list[tuple[str, str]]]:
    """Rewrite ``src``/``href`` attribute values that point at original scripts.

    Parameters
    ----------
    text : str
        HTML document content.
    html_dir : Path
        Directory containing the document, used for document-relative forms.
    root : Path
        Resource root that ``BuildResult`` paths are relative to.
    results : Iterable[BuildResult]
        Mappings applied in order.

    Returns
    -------
    tuple[str, list[tuple[str, str]]]
        Rewritten text and the ``(original, built)`` forms that matched, one
        entry per matching attribute.
    """
    replacements: list[tuple[str, str]] = []
    for result in results:
        for original, built in _path_forms(result, html_dir, root):
            for attribute in HTML_ATTRIBUTES:
                replacement = f'{attribute}="{built}"'
                text, count = _attribute_pattern(attribute, original).subn(
                    lambda _match, value=replacement: value, text
                )
                if count:
                    replacements.append((original, built))
    return text, replacements


def rewrite_html_files(
    html_files: Iterable[Path],
    root: Path,
    results: Sequence[BuildResult],
    reporter: BuildReporter,
) -> tuple[tuple[HtmlRewrite, ...], tuple[FileFailure, ...]]:
    """Rewrite every HTML document independently.

    A read or write error on one document is reported and recorded; the
    remaining documents are still processed.
    """
    updated: list[HtmlRewrite] = []
    failed: list[FileFailure] = []
    for html_path in html_files:
        relative = relative_posix(html_path, root)
        try:
            content = _read_text(html_path)
            rewritten, replacements = rewrite_html_text(
                content, html_path.parent, root, results
            )
            for original, built in replacements:
                reporter.info(f"  🔄 {original} → {built}")
            if not replacements:
                reporter.warning(f"No changes: {relative}")
                continue
            _write_text(html_path, rewritten)
        except (OSError, UnicodeDecodeError) as exc:
            reporter.failure(f"Error updating {relative}: {exc}")
            failed.append(FileFailure(path=relative, error=str(exc)))
            continue
        reporter.success(f"Updated: {relative}")
        updated.append(HtmlRewrite(path=relative, replacements=tuple(replacements)))
    return tuple(updated), tuple(failed)
