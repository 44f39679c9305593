"""Exception hierarchy for resource builds."""

from __future__ import annotations


class BuildError(Exception):
    """Base error for resource build failures.

    Attributes
    ----------
    exit_code : int
        Process exit code used by the CLI when the error is fatal.
    """

    exit_code = 1


class NotFoundError(BuildError):
    """Raised when a discovery root is missing or is not a directory."""

    exit_code = 2


class ConfigError(BuildError):
    """Raised when build configuration cannot be read or validated."""

    exit_code = 2


class DependencyError(BuildError):
    """Raised when a required external tool is not available."""


class TransformError(BuildError):
    """Raised when the minifier or obfuscator fails on a script."""
