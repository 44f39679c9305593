"""Typed option objects shared across build use-cases."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_IGNORE_FILES: tuple[str, ...] = (
    "build.ts",
    "build.js",
    "client/bridge.js",
)
DEFAULT_IGNORE_DIRS: tuple[str, ...] = ("node_modules", "build")
DEFAULT_MANIFEST = "fxmanifest.lua"
DEFAULT_BUILD_DIR = "build"
HIDDEN_PREFIX = "."


@dataclass(frozen=True)
class DiscoveryOptions:
    """File discovery configuration."""

    ignore_files: frozenset[str] = frozenset(DEFAULT_IGNORE_FILES)
    ignore_dirs: frozenset[str] = frozenset(DEFAULT_IGNORE_DIRS)
    hidden_prefix: str = HIDDEN_PREFIX


@dataclass(frozen=True)
class MinifyOptions:
    """Minifier configuration (terser compress/mangle/output switches)."""

    drop_console: bool = False
    dead_code: bool = True
    drop_debugger: bool = True
    conditionals: bool = True
    evaluate: bool = True
    booleans: bool = True
    loops: bool = True
    unused: bool = True
    hoist_funs: bool = True
    keep_fargs: bool = False
    hoist_vars: bool = True
    if_return: bool = True
    join_vars: bool = True
    side_effects: bool = True
    mangle_toplevel: bool = True
    mangle_eval: bool = True
    keep_fnames: bool = False
    comments: bool = False
    beautify: bool = False


@dataclass(frozen=True)
class ObfuscateOptions:
    """Obfuscator configuration (javascript-obfuscator switches)."""

    string_array: bool = True
    rotate_string_array: bool = True
    string_array_encoding: tuple[str, ...] = ("rc4",)
    string_array_threshold: float = 0.75
    split_strings: bool = True
    split_strings_chunk_length: int = 10
    dead_code_injection: bool = True
    dead_code_injection_threshold: float = 0.4
    control_flow_flattening: bool = True
    control_flow_flattening_threshold: float = 0.75
    identifier_names_generator: str = "hexadecimal"
    rename_globals: bool = False
    self_defending: bool = True
    compact: bool = True
    unicode_escape_sequence: bool = False


@dataclass(frozen=True)
class BuildOptions:
    """Shared build options passed through use-cases."""

    discovery: DiscoveryOptions = DiscoveryOptions()
    minify: MinifyOptions = MinifyOptions()
    obfuscate: ObfuscateOptions = ObfuscateOptions()
    manifest_name: str = DEFAULT_MANIFEST
    build_dir_name: str = DEFAULT_BUILD_DIR
    jobs: int = 1
    minifier: str = "terser"
    tool_timeout: float | None = None
