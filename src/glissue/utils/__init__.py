"""Utility modules for glissue."""

from glissue.utils.browser import BrowserLaunchError, browser_command, open_in_browser
from glissue.utils.git import get_current_repo, parse_remote_url
from glissue.utils.timeago import time_ago, time_since

__all__ = [
    "BrowserLaunchError",
    "browser_command",
    "get_current_repo",
    "open_in_browser",
    "parse_remote_url",
    "time_ago",
    "time_since",
]
