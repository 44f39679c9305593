"""Recursive discovery of script and markup files under a resource root."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from resource_builder.application.options import DiscoveryOptions
from resource_builder.errors import NotFoundError

logger = logging.getLogger(__name__)

SCRIPT_SUFFIX = ".js"
HTML_SUFFIX = ".html"


def normalize_separators(path: str) -> str:
    """Return ``path`` with backslashes replaced by forward slashes."""
    return path.replace("\\", "/")


def relative_posix(path: Path, root: Path) -> str:
    """Express ``path`` relative to ``root`` with forward-slash separators."""
    return normalize_separators(os.path.relpath(path, root))


def is_ignored_file(path: Path, root: Path, options: DiscoveryOptions) -> bool:
    """Check whether ``path`` exactly matches an ignored root-relative file."""
    relative = relative_posix(path, root)
    return any(
        relative == normalize_separators(ignored) for ignored in options.ignore_files
    )


def is_pruned_dir(name: str, options: DiscoveryOptions) -> bool:
    """Check whether a directory name is hidden or explicitly ignored."""
    return name.startswith(options.hidden_prefix) or name in options.ignore_dirs


def find_files(
    root: Path,
    suffix: str,
    options: DiscoveryOptions,
    *,
    apply_file_ignores: bool = True,
) -> list[Path]:
    """Collect files ending in ``suffix`` by depth-first traversal.

    Parameters
    ----------
    root : Path
        Directory to walk. Paths are returned as absolute paths under it.
    suffix : str
        File name suffix to match, e.g. ``".js"``.
    options : DiscoveryOptions
        Ignored directory names and root-relative file paths.
    apply_file_ignores : bool, default=True
        Whether ``options.ignore_files`` filters the result.

    Returns
    -------
    list[Path]
        Matching files in the order the file system reports them.

    Raises
    ------
    NotFoundError
        If ``root`` does not exist or is not a directory.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise NotFoundError(f"Resource root not found or not a directory: {root}")

    found: list[Path] = []
    _walk(root, root, suffix, options, apply_file_ignores, found)
    logger.debug("discovered %d '%s' file(s) under %s", len(found), suffix, root)
    return found


def _walk(
    directory: Path,
    root: Path,
    suffix: str,
    options: DiscoveryOptions,
    apply_file_ignores: bool,
    found: list[Path],
) -> None:
    with os.scandir(directory) as entries:
        for entry in entries:
            path = directory / entry.name
            if entry.is_dir():
                if not is_pruned_dir(entry.name, options):
                    _walk(path, root, suffix, options, apply_file_ignores, found)
            elif entry.name.endswith(suffix):
                if apply_file_ignores and is_ignored_file(path, root, options):
                    logger.debug("ignoring %s", relative_posix(path, root))
                    continue
                found.append(path)


def find_scripts(root: Path, options: DiscoveryOptions) -> list[Path]:
    """Discover buildable ``.js`` files, honouring ignored files."""
    return find_files(root, SCRIPT_SUFFIX, options)


def find_html(root: Path, options: DiscoveryOptions) -> list[Path]:
    """Discover ``.html`` documents whose references may need rewriting."""
    return find_files(root, HTML_SUFFIX, options, apply_file_ignores=False)
