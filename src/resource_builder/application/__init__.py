"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from resource_builder.application.options import (
    BuildOptions,
    DiscoveryOptions,
    MinifyOptions,
    ObfuscateOptions,
)
from resource_builder.application.ports import BuildReporter, Minifier, Obfuscator
from resource_builder.application.results import (
    BuildResult,
    BuildSummary,
    FileFailure,
    HtmlRewrite,
)


def build_resource(
    root: Path,
    *,
    options: BuildOptions | None = None,
    minifier: Minifier | None = None,
    obfuscator: Obfuscator | None = None,
    reporter: BuildReporter | None = None,
) -> BuildSummary:
    """Build a resource tree via lazy use-case import."""
    from resource_builder.application.use_cases import build_resource as _impl

    return _impl(
        root,
        options=options,
        minifier=minifier,
        obfuscator=obfuscator,
        reporter=reporter,
    )


__all__ = [
    "BuildOptions",
    "DiscoveryOptions",
    "MinifyOptions",
    "ObfuscateOptions",
    "BuildResult",
    "BuildSummary",
    "FileFailure",
    "HtmlRewrite",
    "build_resource",
]
