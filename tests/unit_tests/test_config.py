"""Unit tests for configuration loading and option building."""

from __future__ import annotations

from pathlib import Path

import pytest

from resource_builder.application.options import (
    BuildOptions,
    MinifyOptions,
    ObfuscateOptions,
)
from resource_builder.config import CONFIG_FILENAME, build_options, load_config
from resource_builder.errors import ConfigError
from resource_builder.schemas import BuildConfig


def test_defaults_without_config_file(tmp_path: Path) -> None:
    """No config file means the built-in defaults."""
    options = build_options(load_config(tmp_path))

    assert options == BuildOptions()


def test_config_file_overrides_defaults(tmp_path: Path) -> None:
    """Values from resource-builder.toml flow into typed options."""
    (tmp_path / CONFIG_FILENAME).write_text(
        """
manifest = "resource.lua"
build_dir = "dist"
ignore_files = ["tools/bundle.js"]
ignore_dirs = ["vendor"]
jobs = 4
minifier = "rjsmin"
tool_timeout = 90

[minify]
drop_console = true

[obfuscate]
self_defending = false
string_array_encoding = ["base64"]
""",
        encoding="utf-8",
    )

    options = build_options(load_config(tmp_path))

    assert options.manifest_name == "resource.lua"
    assert options.build_dir_name == "dist"
    assert options.discovery.ignore_files == frozenset({"tools/bundle.js"})
    assert options.discovery.ignore_dirs == frozenset({"vendor", "dist"})
    assert options.jobs == 4
    assert options.minifier == "rjsmin"
    assert options.tool_timeout == 90
    assert options.minify == MinifyOptions(drop_console=True)
    assert options.obfuscate == ObfuscateOptions(
        self_defending=False, string_array_encoding=("base64",)
    )


def test_command_overrides_take_precedence(tmp_path: Path) -> None:
    """Explicit overrides win over the config and extend ignore sets."""
    config = BuildConfig(jobs=2, manifest="a.lua")

    options = build_options(
        config,
        manifest="b.lua",
        extra_ignore_dirs=["vendor"],
        extra_ignore_files=["client/extra.js"],
        jobs=8,
        minifier="rjsmin",
    )

    assert options.manifest_name == "b.lua"
    assert options.jobs == 8
    assert options.minifier == "rjsmin"
    assert {"node_modules", "build", "vendor"} <= options.discovery.ignore_dirs
    assert {"client/bridge.js", "client/extra.js"} <= options.discovery.ignore_files


def test_missing_explicit_config_raises(tmp_path: Path) -> None:
    """An explicitly requested config file must exist."""
    with pytest.raises(ConfigError, match="Unable to read"):
        load_config(tmp_path, tmp_path / "nope.toml")


def test_invalid_toml_raises(tmp_path: Path) -> None:
    """Syntax errors are reported as ConfigError."""
    (tmp_path / CONFIG_FILENAME).write_text("jobs = = 2", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "body",
    [
        "jobs = 0",
        'minifier = "uglify"',
        "unknown = 1",
        'build_dir = "a/b"',
        "[obfuscate]\nstring_array_threshold = 1.5",
        "[obfuscate]\nsplit_strings_chunk_length = 0",
        '[minify]\ndrop_console = "yes"',
        'ignore_dirs = [""]',
    ],
)
def test_invalid_values_raise(tmp_path: Path, body: str) -> None:
    """Schema violations are reported as ConfigError."""
    (tmp_path / CONFIG_FILENAME).write_text(body, encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid build configuration"):
        load_config(tmp_path)


def test_zero_jobs_override_raises() -> None:
    """A non-positive job count is rejected."""
    with pytest.raises(ConfigError):
        build_options(BuildConfig(), jobs=0)
