"""Top-level API for building game-mod resource scripts."""

from __future__ import annotations

from pathlib import Path

from resource_builder.application.results import BuildSummary

__version__ = "0.1.0"


def build_resource_dir(
    root: Path,
    *,
    config_path: Path | None = None,
    jobs: int | None = None,
    minifier: str | None = None,
) -> BuildSummary:
    """Build every script under ``root`` using its configuration file.

    Parameters
    ----------
    root : Path
        Resource root containing the manifest.
    config_path : Path | None, default=None
        Explicit configuration file; defaults to ``resource-builder.toml``
        under ``root`` when present.
    jobs : int | None, default=None
        Parallel transform workers; overrides the configuration.
    minifier : str | None, default=None
        Minifier adapter name; overrides the configuration.

    Returns
    -------
    BuildSummary
        Outcome of the build.
    """
    from .application.use_cases import build_resource
    from .config import build_options, load_config

    config = load_config(root, config_path)
    options = build_options(config, jobs=jobs, minifier=minifier)
    return build_resource(root, options=options)


__all__ = ["build_resource_dir", "BuildSummary"]
