"""Pydantic schemas for runtime validation of build configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resource_builder.application.options import (
    DEFAULT_BUILD_DIR,
    DEFAULT_MANIFEST,
)


class MinifyOverrides(BaseModel):
    """Partial ``MinifyOptions`` read from the ``[minify]`` table."""

    model_config = ConfigDict(extra="forbid", strict=True)

    drop_console: bool | None = None
    dead_code: bool | None = None
    drop_debugger: bool | None = None
    conditionals: bool | None = None
    evaluate: bool | None = None
    booleans: bool | None = None
    loops: bool | None = None
    unused: bool | None = None
    hoist_funs: bool | None = None
    keep_fargs: bool | None = None
    hoist_vars: bool | None = None
    if_return: bool | None = None
    join_vars: bool | None = None
    side_effects: bool | None = None
    mangle_toplevel: bool | None = None
    mangle_eval: bool | None = None
    keep_fnames: bool | None = None
    comments: bool | None = None
    beautify: bool | None = None


class ObfuscateOverrides(BaseModel):
    """Partial ``ObfuscateOptions`` read from the ``[obfuscate]`` table."""

    model_config = ConfigDict(extra="forbid")

    string_array: bool | None = None
    rotate_string_array: bool | None = None
    string_array_encoding: tuple[Literal["none", "base64", "rc4"], ...] | None = None
    string_array_threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    split_strings: bool | None = None
    split_strings_chunk_length: int | None = Field(default=None, ge=1)
    dead_code_injection: bool | None = None
    dead_code_injection_threshold: float | None = Field(default=None, ge=0.0, le=1.0)
    control_flow_flattening: bool | None = None
    control_flow_flattening_threshold: float | None = Field(
        default=None, ge=0.0, le=1.0
    )
    identifier_names_generator: (
        Literal["dictionary", "hexadecimal", "mangled", "mangled-shuffled"] | None
    ) = None
    rename_globals: bool | None = None
    self_defending: bool | None = None
    compact: bool | None = None
    unicode_escape_sequence: bool | None = None


class BuildConfig(BaseModel):
    """Validated contents of ``resource-builder.toml``."""

    model_config = ConfigDict(extra="forbid")

    manifest: str = DEFAULT_MANIFEST
    build_dir: str = DEFAULT_BUILD_DIR
    ignore_files: list[str] | None = None
    ignore_dirs: list[str] | None = None
    jobs: int = Field(default=1, ge=1)
    minifier: Literal["terser", "rjsmin"] = "terser"
    tool_timeout: float | None = Field(default=None, gt=0.0)
    minify: MinifyOverrides = Field(default_factory=MinifyOverrides)
    obfuscate: ObfuscateOverrides = Field(default_factory=ObfuscateOverrides)

    @field_validator("manifest", "build_dir")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty.")
        if "/" in value or "\\" in value:
            raise ValueError("must be a single path component.")
        return value

    @field_validator("ignore_files", "ignore_dirs")
    @classmethod
    def _validate_entries(cls, value: list[str] | None) -> list[str] | None:
        if value is not None and any(not item.strip() for item in value):
            raise ValueError("ignore lists cannot contain empty entries.")
        return value
