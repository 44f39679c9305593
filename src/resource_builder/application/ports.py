"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from typing import Protocol

from resource_builder.application.options import MinifyOptions, ObfuscateOptions


class Minifier(Protocol):
    """Shrink script source without changing its behaviour."""

    def minify(self, code: str, options: MinifyOptions) -> str:
        """Return minified source."""


class Obfuscator(Protocol):
    """Make script source harder to read without changing its behaviour."""

    def obfuscate(self, code: str, options: ObfuscateOptions) -> str:
        """Return obfuscated source."""


class BuildReporter(Protocol):
    """Receive user-facing progress events."""

    def info(self, message: str) -> None:
        """Report neutral progress."""

    def step(self, message: str) -> None:
        """Report the start of a unit of work."""

    def success(self, message: str) -> None:
        """Report a completed unit of work."""

    def warning(self, message: str) -> None:
        """Report a non-fatal problem."""

    def failure(self, message: str) -> None:
        """Report a unit of work that was skipped because it failed."""
