"""Resolution and invocation of Node-based command line tools."""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Sequence

from resource_builder.errors import DependencyError, TransformError

logger = logging.getLogger(__name__)


def resolve_node_tool(executable: str, package: str | None = None) -> list[str]:
    """Return the command prefix used to run a Node CLI.

    Parameters
    ----------
    executable : str
        Binary name expected on ``PATH`` (e.g. ``terser``).
    package : str | None, default=None
        npm package providing the binary, used with ``npx``. Defaults to
        ``executable``.

    Returns
    -------
    list[str]
        ``[<executable path>]`` when installed, else ``["npx", "--yes", package]``.

    Raises
    ------
    DependencyError
        If neither the executable nor ``npx`` is available.
    """
    found = shutil.which(executable)
    if found:
        return [found]
    npx = shutil.which("npx")
    if npx:
        return [npx, "--yes", package or executable]
    raise DependencyError(
        f"'{executable}' is not installed and npx is unavailable. "
        f"Install Node.js, then: npm install -g {package or executable}"
    )


def run_tool(
    command: Sequence[str],
    *,
    stdin: str | None = None,
    timeout: float | None = None,
) -> str:
    """Run a tool and return its standard output.

    Raises
    ------
    DependencyError
        If the command cannot be started.
    TransformError
        If the command exits non-zero or exceeds ``timeout``.
    """
    logger.debug("running %s", " ".join(command))
    try:
        completed = subprocess.run(
            list(command),
            input=stdin,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise DependencyError(f"Unable to run '{command[0]}': {exc}") from exc
    except subprocess.TimeoutExpired as exc:
        raise TransformError(
            f"'{command[0]}' did not finish within {timeout} seconds."
        ) from exc

    if completed.returncode != 0:
        detail = (completed.stderr or completed.stdout or "").strip()
        raise TransformError(
            f"'{command[0]}' exited with status {completed.returncode}: {detail}"
        )
    return completed.stdout
