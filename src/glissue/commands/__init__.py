"""Command groups composed into the glissue CLI."""

from glissue.commands.issue import ResolutionError, ViewRequest, build_issue_app, resolve_target, view_issue

__all__ = [
    "ResolutionError",
    "ViewRequest",
    "build_issue_app",
    "resolve_target",
    "view_issue",
]
