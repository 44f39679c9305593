"""Loading of build configuration and translation into ``BuildOptions``."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from pydantic import ValidationError

from resource_builder.application.options import (
    DEFAULT_IGNORE_DIRS,
    DEFAULT_IGNORE_FILES,
    BuildOptions,
    DiscoveryOptions,
    MinifyOptions,
    ObfuscateOptions,
)
from resource_builder.errors import ConfigError
from resource_builder.schemas import BuildConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "resource-builder.toml"


def load_config(root: Path, config_path: Path | None = None) -> BuildConfig:
    """Read and validate build configuration.

    Parameters
    ----------
    root : Path
        Resource root searched for ``resource-builder.toml``.
    config_path : Path | None, default=None
        Explicit configuration file. Unlike the default file it must exist.

    Returns
    -------
    BuildConfig
        Validated configuration, or defaults when no file is present.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not valid TOML, or fails validation.
    """
    path = config_path or Path(root) / CONFIG_FILENAME
    if config_path is None and not path.is_file():
        logger.debug("no %s under %s, using defaults", CONFIG_FILENAME, root)
        return BuildConfig()

    try:
        payload = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    try:
        return BuildConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid build configuration in {path}: {exc}") from exc


def build_options(
    config: BuildConfig,
    *,
    manifest: str | None = None,
    extra_ignore_dirs: Iterable[str] | None = None,
    extra_ignore_files: Iterable[str] | None = None,
    jobs: int | None = None,
    minifier: str | None = None,
) -> BuildOptions:
    """Build typed option object from configuration plus command overrides.

    The build directory name is always ignored during discovery so outputs
    are never rebuilt.
    """
    ignore_dirs = set(
        DEFAULT_IGNORE_DIRS if config.ignore_dirs is None else config.ignore_dirs
    )
    ignore_dirs.update(extra_ignore_dirs or [])
    ignore_dirs.add(config.build_dir)
    ignore_files = set(
        DEFAULT_IGNORE_FILES if config.ignore_files is None else config.ignore_files
    )
    ignore_files.update(extra_ignore_files or [])

    if jobs is not None and jobs < 1:
        raise ConfigError("jobs must be at least 1.")

    return BuildOptions(
        discovery=DiscoveryOptions(
            ignore_files=frozenset(ignore_files),
            ignore_dirs=frozenset(ignore_dirs),
        ),
        minify=replace(MinifyOptions(), **config.minify.model_dump(exclude_none=True)),
        obfuscate=replace(
            ObfuscateOptions(), **config.obfuscate.model_dump(exclude_none=True)
        ),
        manifest_name=manifest or config.manifest,
        build_dir_name=config.build_dir,
        jobs=jobs or config.jobs,
        minifier=minifier or config.minifier,
        tool_timeout=config.tool_timeout,
    )
