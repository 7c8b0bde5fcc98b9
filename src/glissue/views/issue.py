"""Terminal rendering of a GitLab issue and its discussion notes."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from typing import TypeVar

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table
from rich.text import Text

from glissue.gitlab.models import Issue, Note
from glissue.utils.timeago import time_since

T = TypeVar("T")

NO_COMMENTS_MESSAGE = "There are no comments on this issue"
COMMENTS_BANNER = "\n".join(["-" * 44, "Comments / Notes", "-" * 44])

ATTRIBUTE_COL_WIDTH = 70
COMMENT_COL_WIDTH = 100


# =============================================================================
# Value normalization
# =============================================================================


def present(value: T | None, default: str) -> T | str:
    """Return ``default`` when ``value`` is absent (None or empty string)."""
    if value is None or value == "":
        return default
    return value


def present_flag(value: bool | None, default: str) -> bool | str:
    """Return ``default`` only when the flag is absent.

    ``False`` is a meaningful value and is returned unchanged, so
    ``present_flag(False, "None")`` renders as ``false``.
    """
    if value is None:
        return default
    return value


def format_cell(value: object) -> Text:
    """Render a table value as plain text (booleans in lower case)."""
    if isinstance(value, bool):
        return Text("true" if value else "false")
    if isinstance(value, (date, datetime)):
        return Text(value.isoformat())
    return Text(str(value))


# =============================================================================
# Summary
# =============================================================================


def state_style(is_open: bool) -> str:
    return "green" if is_open else "red"


def build_header(issue: Issue) -> Text:
    header = Text(issue.title)
    header.append(f" #{issue.iid}", style="dim")
    return header


def build_byline(issue: Issue, now: datetime | None = None) -> Text:
    """Build the ``(state) • opened by user (Name) 2 hours ago`` line."""
    byline = Text("(")
    byline.append(issue.state, style=state_style(issue.is_open))
    byline.append(")")
    byline.append(
        f" • opened by {issue.author.username} ({issue.author.name}) {time_since(issue.created_at, now)}",
        style="dim",
    )
    return byline


def build_attribute_table(issue: Issue, now: datetime | None = None) -> Table:
    """Build the two-column attribute table shown under the description.

    Args:
        issue: The fetched issue.
        now: Reference time for the "Closed By" age. Defaults to the current time.

    Returns:
        Rich table with one row per attribute.
    """
    labels = ", ".join(issue.labels)
    assignees = ", ".join(f"{a.username}({a.name})" for a in issue.assignees)

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Attribute", no_wrap=True)
    table.add_column("Value", max_width=ATTRIBUTE_COL_WIDTH, overflow="fold")

    rows: list[tuple[str, object]] = [
        ("Project ID:", issue.project_id),
        ("Labels:", present(labels, "None")),
        ("Milestone:", present(issue.milestone, "None")),
        ("Assignees:", present(assignees, "None")),
        ("Due date:", present(issue.due_date, "None")),
        ("Weight:", present(issue.weight, "None")),
        ("Confidential:", present_flag(issue.confidential, "None")),
        ("Discussion Locked:", present_flag(issue.discussion_locked, "false")),
        ("Subscribed:", present_flag(issue.subscribed, "false")),
    ]

    if issue.is_closed and issue.closed_by is not None and issue.closed_at is not None:
        rows.append(
            (
                "Closed By:",
                f"{issue.closed_by.username} ({issue.closed_by.name}) {time_since(issue.closed_at, now)}",
            )
        )

    rows.append(("Reference:", issue.reference))
    rows.append(("Web URL:", issue.web_url))

    for label, value in rows:
        table.add_row(label, format_cell(value))
    return table


def render_summary(issue: Issue, console: Console, now: datetime | None = None) -> None:
    """Print the header, byline, description, engagement line and attribute table."""
    console.print()
    console.print(build_header(issue))
    console.print(build_byline(issue, now))

    if issue.description:
        console.print(Markdown(issue.description))

    console.print()
    console.print(
        Text(
            f"{issue.upvotes} upvotes • {issue.downvotes} downvotes • {issue.user_notes_count} comments",
            style="dim",
        )
    )
    console.print()
    console.print(build_attribute_table(issue, now))
    console.print()


# =============================================================================
# Comments
# =============================================================================


def filter_user_notes(notes: Iterable[Note]) -> list[Note]:
    """Drop system-generated notes (field change audit entries)."""
    return [note for note in notes if not note.system]


def build_comment_table(notes: Iterable[Note], now: datetime | None = None) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Author", no_wrap=True)
    table.add_column("Comment", max_width=COMMENT_COL_WIDTH, overflow="fold")

    for note in notes:
        body = Text(note.body)
        body.append("\n")
        body.append(time_since(note.created_at, now), style="dim")
        table.add_row(Text(f"{note.author.username}:"), body)
        table.add_row("")
    return table


def render_comments(notes: Iterable[Note], console: Console, now: datetime | None = None) -> int:
    """Print the comment listing for a page of notes.

    Args:
        notes: Notes as returned by the API, system notes included.
        console: Console to print to.
        now: Reference time for note ages. Defaults to the current time.

    Returns:
        Number of notes rendered after filtering.
    """
    user_notes = filter_user_notes(notes)

    console.print(Text(COMMENTS_BANNER))
    if user_notes:
        console.print(build_comment_table(user_notes, now))
    else:
        console.print(NO_COMMENTS_MESSAGE)
    return len(user_notes)
