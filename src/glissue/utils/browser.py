"""Launch the user's web browser on a URL."""

from __future__ import annotations

import logging
import os
import shlex
import subprocess

import typer

logger = logging.getLogger(__name__)


class BrowserLaunchError(Exception):
    """The browser command could not be built or exited with an error."""


def browser_command(url: str, browser: str | None = None) -> list[str] | None:
    """Build the command line that opens ``url`` with a configured browser.

    Args:
        url: Address to open.
        browser: Explicit browser command. Falls back to ``$BROWSER``.

    Returns:
        Argument list suitable for ``subprocess.run``, or None when no browser
        is configured and the system default should be used.

    Raises:
        BrowserLaunchError: If the configured command is malformed.
    """
    browser = browser or os.environ.get("BROWSER")
    if not browser:
        return None

    try:
        args = shlex.split(browser)
    except ValueError as e:
        raise BrowserLaunchError(f"Invalid browser command {browser!r}: {e}") from e
    if not args:
        raise BrowserLaunchError("Browser command is empty")

    return [*args, url]


def open_in_browser(url: str, browser: str | None = None) -> None:
    """Open ``url`` in a browser and wait for the launcher to exit.

    Raises:
        BrowserLaunchError: If the command cannot be built, started, or fails.
    """
    cmd = browser_command(url, browser)
    if cmd is None:
        logger.debug(f"Opening {url} with the system default browser")
        returncode = typer.launch(url, wait=True)
        if returncode != 0:
            raise BrowserLaunchError(f"Default browser exited with status {returncode}")
        return

    logger.debug(f"Running browser command: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as e:
        raise BrowserLaunchError(f"Failed to start {cmd[0]}: {e}") from e

    if result.returncode != 0:
        stderr = result.stderr.strip()
        raise BrowserLaunchError(f"{cmd[0]} exited with status {result.returncode}" + (f": {stderr}" if stderr else ""))
