"""Application-layer result objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BuildResult:
    """Root-relative pairing of a source script and its built output."""

    original_path: str
    built_path: str


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be processed, with the reason."""

    path: str
    error: str


@dataclass(frozen=True)
class HtmlRewrite:
    """An HTML document whose references were rewritten."""

    path: str
    replacements: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class BuildSummary:
    """Structured outcome of one build run."""

    scripts_found: int = 0
    built: tuple[BuildResult, ...] = ()
    failed: tuple[FileFailure, ...] = ()
    manifest_updated: bool = False
    html_updated: tuple[HtmlRewrite, ...] = ()
    html_failed: tuple[FileFailure, ...] = ()

    @property
    def partial(self) -> bool:
        """Whether any script build or HTML rewrite failed."""
        return bool(self.failed or self.html_failed)

    @property
    def ok(self) -> bool:
        return not self.partial
