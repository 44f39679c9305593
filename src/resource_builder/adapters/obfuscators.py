"""Script obfuscators implementing the ``Obfuscator`` port."""

from __future__ import annotations

import json
from pathlib import Path
from tempfile import TemporaryDirectory

from resource_builder.adapters.node import resolve_node_tool, run_tool
from resource_builder.application.options import ObfuscateOptions
from resource_builder.errors import TransformError


def obfuscator_config(options: ObfuscateOptions) -> dict[str, object]:
    """Translate ``ObfuscateOptions`` into javascript-obfuscator's config keys."""
    return {
        "stringArray": options.string_array,
        "stringArrayRotate": options.rotate_string_array,
        "stringArrayEncoding": list(options.string_array_encoding),
        "stringArrayThreshold": options.string_array_threshold,
        "splitStrings": options.split_strings,
        "splitStringsChunkLength": options.split_strings_chunk_length,
        "deadCodeInjection": options.dead_code_injection,
        "deadCodeInjectionThreshold": options.dead_code_injection_threshold,
        "controlFlowFlattening": options.control_flow_flattening,
        "controlFlowFlatteningThreshold": options.control_flow_flattening_threshold,
        "identifierNamesGenerator": options.identifier_names_generator,
        "renameGlobals": options.rename_globals,
        "selfDefending": options.self_defending,
        "compact": options.compact,
        "unicodeEscapeSequence": options.unicode_escape_sequence,
    }


class JavascriptObfuscatorCli:
    """Obfuscate through the ``javascript-obfuscator`` CLI.

    The CLI only reads from files, so the source and its JSON config are
    staged in a temporary directory for each call.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def obfuscate(self, code: str, options: ObfuscateOptions) -> str:
        """Obfuscate ``code``.

        Parameters
        ----------
        code : str
            Minified script source.
        options : ObfuscateOptions
            Obfuscator switches.

        Returns
        -------
        str
            Obfuscated source.

        Raises
        ------
        TransformError
            If the tool fails or produces no output file.
        """
        command = resolve_node_tool("javascript-obfuscator")
        with TemporaryDirectory(prefix="resource-builder-") as tmp:
            workdir = Path(tmp)
            source = workdir / "input.js"
            output = workdir / "output.js"
            config = workdir / "obfuscator.json"
            source.write_text(code, encoding="utf-8")
            config.write_text(json.dumps(obfuscator_config(options)), encoding="utf-8")
            run_tool(
                [
                    *command,
                    str(source),
                    "--output",
                    str(output),
                    "--config",
                    str(config),
                ],
                timeout=self.timeout,
            )
            if not output.is_file():
                raise TransformError("javascript-obfuscator produced no output file.")
            return output.read_text(encoding="utf-8")
