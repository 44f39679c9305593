"""Script minifiers implementing the ``Minifier`` port."""

from __future__ import annotations

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import rjsmin

from resource_builder.adapters.node import resolve_node_tool, run_tool
from resource_builder.application.options import MinifyOptions
from resource_builder.application.ports import Minifier
from resource_builder.errors import ConfigError

MINIFIERS = ("terser", "rjsmin")


def terser_config(options: MinifyOptions) -> dict[str, object]:
    """Translate ``MinifyOptions`` into terser's ``minify()`` option object."""
    return {
        "compress": {
            "drop_console": options.drop_console,
            "dead_code": options.dead_code,
            "drop_debugger": options.drop_debugger,
            "conditionals": options.conditionals,
            "evaluate": options.evaluate,
            "booleans": options.booleans,
            "loops": options.loops,
            "unused": options.unused,
            "hoist_funs": options.hoist_funs,
            "keep_fargs": options.keep_fargs,
            "hoist_vars": options.hoist_vars,
            "if_return": options.if_return,
            "join_vars": options.join_vars,
            "side_effects": options.side_effects,
        },
        "mangle": {
            "toplevel": options.mangle_toplevel,
            "eval": options.mangle_eval,
            "keep_fnames": options.keep_fnames,
        },
        "format": {
            "comments": options.comments,
            "beautify": options.beautify,
        },
    }


class TerserMinifier:
    """Minify through the ``terser`` CLI, reading source from stdin."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def minify(self, code: str, options: MinifyOptions) -> str:
        """Minify ``code`` with terser.

        Parameters
        ----------
        code : str
            Script source.
        options : MinifyOptions
            Compress, mangle and output switches.

        Returns
        -------
        str
            Minified source.
        """
        command = resolve_node_tool("terser")
        with TemporaryDirectory(prefix="resource-builder-") as tmp:
            config_path = Path(tmp) / "terser.json"
            config_path.write_text(json.dumps(terser_config(options)), encoding="utf-8")
            return run_tool(
                [*command, "--config-file", str(config_path)],
                stdin=code,
                timeout=self.timeout,
            )


class RjsminMinifier:
    """Pure-Python comment and whitespace stripper.

    Notes
    -----
    ``rjsmin`` does not rename identifiers or fold code, so only
    ``MinifyOptions.comments`` has an effect here.
    """

    def minify(self, code: str, options: MinifyOptions) -> str:
        return rjsmin.jsmin(code, keep_bang_comments=options.comments)


def create_minifier(name: str, *, timeout: float | None = None) -> Minifier:
    """Instantiate the minifier adapter registered under ``name``."""
    if name == "terser":
        return TerserMinifier(timeout=timeout)
    if name == "rjsmin":
        return RjsminMinifier()
    raise ConfigError(
        f"Unknown minifier '{name}'. Available minifiers: {', '.join(MINIFIERS)}"
    )
