"""Rich renderers for glissue output."""

from glissue.views.issue import (
    NO_COMMENTS_MESSAGE,
    build_attribute_table,
    filter_user_notes,
    present,
    present_flag,
    render_comments,
    render_summary,
)

__all__ = [
    "NO_COMMENTS_MESSAGE",
    "build_attribute_table",
    "filter_user_notes",
    "present",
    "present_flag",
    "render_comments",
    "render_summary",
]
