"""Data models for GitLab issue representation.

These models represent the structure of issues and notes as returned
by the GitLab v4 REST API.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any

ISSUE_STATE_OPENED = "opened"
ISSUE_STATE_CLOSED = "closed"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp from the API into an aware datetime."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    with contextlib.suppress(ValueError):
        return date.fromisoformat(value)
    return None


@dataclass
class User:
    """A GitLab user as embedded in issue and note payloads."""

    username: str
    name: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> User | None:
        if not data:
            return None
        return cls(username=data.get("username", ""), name=data.get("name", "") or "")


@dataclass
class Issue:
    """A GitLab issue with its metadata.

    Represents an issue as returned by ``GET /projects/:id/issues/:iid``.
    ``closed_at`` and ``closed_by`` are only populated for closed issues.
    """

    iid: int
    title: str
    state: str
    author: User
    created_at: datetime
    web_url: str
    project_id: int
    description: str = ""
    closed_at: datetime | None = None
    closed_by: User | None = None
    upvotes: int = 0
    downvotes: int = 0
    user_notes_count: int = 0
    labels: list[str] = field(default_factory=list)
    assignees: list[User] = field(default_factory=list)
    milestone: str | None = None
    due_date: date | None = None
    weight: int | None = None
    confidential: bool = False
    discussion_locked: bool | None = None
    subscribed: bool | None = None
    reference: str = ""

    @property
    def is_open(self) -> bool:
        """Check if the issue is open."""
        return self.state == ISSUE_STATE_OPENED

    @property
    def is_closed(self) -> bool:
        """Check if the issue is closed."""
        return self.state == ISSUE_STATE_CLOSED

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Issue:
        """Build an Issue from a GitLab API payload.

        Args:
            data: Decoded JSON object for a single issue.

        Returns:
            Issue with closing details kept only when the state is closed.
        """
        state = data.get("state", ISSUE_STATE_OPENED)
        created_at = parse_timestamp(data.get("created_at"))
        if created_at is None:
            raise ValueError(f"Issue payload is missing created_at: {data.get('iid')}")

        closed_at = None
        closed_by = None
        if state == ISSUE_STATE_CLOSED:
            closed_at = parse_timestamp(data.get("closed_at"))
            closed_by = User.from_api(data.get("closed_by"))
            if closed_at is None or closed_by is None:
                closed_at, closed_by = None, None

        milestone_data = data.get("milestone")
        references = data.get("references") or {}

        return cls(
            iid=data.get("iid", 0),
            title=data.get("title", ""),
            state=state,
            author=User.from_api(data.get("author")) or User(username=""),
            created_at=created_at,
            web_url=data.get("web_url", ""),
            project_id=data.get("project_id", 0),
            description=data.get("description") or "",
            closed_at=closed_at,
            closed_by=closed_by,
            upvotes=data.get("upvotes", 0),
            downvotes=data.get("downvotes", 0),
            user_notes_count=data.get("user_notes_count", 0),
            labels=list(data.get("labels") or []),
            assignees=[u for u in (User.from_api(a) for a in data.get("assignees") or []) if u],
            milestone=milestone_data.get("title") if milestone_data else None,
            due_date=_parse_date(data.get("due_date")),
            weight=data.get("weight"),
            confidential=bool(data.get("confidential", False)),
            discussion_locked=data.get("discussion_locked"),
            subscribed=data.get("subscribed"),
            reference=references.get("full", ""),
        )


@dataclass
class Note:
    """A discussion note attached to an issue.

    System notes are audit entries generated by GitLab itself
    (e.g. "changed milestone to %v1.0").
    """

    author: User
    body: str
    created_at: datetime
    system: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Note:
        created_at = parse_timestamp(data.get("created_at"))
        if created_at is None:
            raise ValueError(f"Note payload is missing created_at: {data.get('id')}")
        return cls(
            author=User.from_api(data.get("author")) or User(username=""),
            body=data.get("body", "") or "",
            created_at=created_at,
            system=bool(data.get("system", False)),
        )
