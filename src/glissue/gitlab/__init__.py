"""GitLab REST API access."""

from glissue.gitlab.client import GitLabAuthError, GitLabClient, GitLabClientError, GitLabNotFoundError
from glissue.gitlab.models import Issue, Note, User

__all__ = [
    "GitLabAuthError",
    "GitLabClient",
    "GitLabClientError",
    "GitLabNotFoundError",
    "Issue",
    "Note",
    "User",
]
