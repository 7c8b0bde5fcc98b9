"""Git-related utilities for detecting the current GitLab project."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def parse_remote_url(url: str) -> str | None:
    """Extract the project path from a git remote URL.

    Handles the common remote forms:
    - SSH scp-style: ``git@gitlab.com:group/sub/project.git``
    - SSH URL: ``ssh://git@gitlab.com:2222/group/project.git``
    - HTTPS: ``https://gitlab.com/group/sub/project.git``

    Nested group namespaces are kept intact.

    Args:
        url: Raw output of ``git remote get-url``.

    Returns:
        Project path such as ``group/sub/project``, or None if not parseable.
    """
    url = url.strip()
    if not url:
        return None

    if "://" in url:
        path = urlparse(url).path
    elif ":" in url and "@" in url.split(":", 1)[0]:
        # scp-style: user@host:path
        path = url.split(":", 1)[1]
    else:
        return None

    path = path.strip("/").removesuffix(".git").strip("/")

    # A project path needs at least a namespace and a name
    if path.count("/") < 1:
        return None
    return path


def get_current_repo(project_root: Path | None = None) -> str | None:
    """Get the current project path from the ``origin`` remote.

    Args:
        project_root: Directory to check. Defaults to current directory.

    Returns:
        Project path in ``namespace/project`` format, or None if git is
        unavailable, the directory is not a repository, or the remote
        cannot be parsed.
    """
    cwd = project_root or Path.cwd()

    try:
        result = subprocess.run(
            ["git", "remote", "get-url", "origin"],
            capture_output=True,
            text=True,
            cwd=cwd,
            timeout=10,
            check=False,
        )
    except FileNotFoundError:
        # Git not installed
        return None
    except subprocess.TimeoutExpired:
        return None

    if result.returncode != 0:
        return None

    repo = parse_remote_url(result.stdout)
    logger.debug(f"Detected repository from origin remote: {repo}")
    return repo
