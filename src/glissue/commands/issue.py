"""Command handler for ``glissue issue view``.

The view pipeline:
1. RESOLVE - Turn the argument and --repo into (repository, issue number)
2. FETCH - Retrieve the issue from GitLab
3. WEB - Hand off to the browser when --web is given, and stop
4. SUMMARY - Render header, description and attribute table
5. COMMENTS - Fetch and render one page of notes when --comments is given
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from glissue.config import Config
from glissue.gitlab.client import GitLabClient, GitLabClientError
from glissue.utils.browser import BrowserLaunchError, open_in_browser
from glissue.utils.git import get_current_repo
from glissue.views.issue import render_comments, render_summary

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20


class ResolutionError(Exception):
    """The issue number or repository could not be resolved."""


@dataclass
class ViewRequest:
    """Everything the view pipeline needs for one invocation."""

    repo: str
    issue_id: int
    web: bool = False
    comments: bool = False
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE


def parse_issue_id(token: str) -> int:
    """Parse an issue number such as ``42`` or ``#42``.

    Raises:
        ResolutionError: If the token is not a positive integer.
    """
    text = token.strip().removeprefix("#")
    try:
        issue_id = int(text)
    except ValueError as e:
        raise ResolutionError(f"Invalid issue number: {token!r}") from e
    if issue_id <= 0:
        raise ResolutionError(f"Invalid issue number: {token!r}")
    return issue_id


def resolve_target(
    issue_arg: str,
    repo: str | None = None,
    detect_repo: Callable[[], str | None] | None = None,
) -> tuple[str, int]:
    """Resolve the command arguments to a concrete issue.

    Args:
        issue_arg: Positional issue number.
        repo: Value of --repo, if given. Takes precedence over git context.
        detect_repo: Fallback used to read the project from the git remote.
            Defaults to ``get_current_repo``.

    Returns:
        Tuple of (repository path, issue number).

    Raises:
        ResolutionError: On a malformed issue number or undetectable repository.
    """
    issue_id = parse_issue_id(issue_arg)

    if repo:
        repo = repo.strip("/")
    else:
        detect = detect_repo or get_current_repo
        repo = detect()
        if not repo:
            raise ResolutionError("Could not detect repository. Use --repo flag.")

    logger.debug(f"Resolved issue {repo}#{issue_id}")
    return repo, issue_id


async def view_issue(
    request: ViewRequest,
    client: GitLabClient,
    console: Console,
    open_browser: Callable[[str], None] = open_in_browser,
    now: datetime | None = None,
) -> None:
    """Run the fetch-and-render pipeline for a single issue.

    Args:
        request: Resolved target and flags.
        client: An entered GitLab client.
        console: Rich console for output.
        open_browser: Launcher invoked with the issue URL when ``request.web`` is set.
        now: Reference time for relative timestamps. Defaults to the current time.

    Raises:
        GitLabClientError: If the issue or notes cannot be fetched.
        BrowserLaunchError: If the browser cannot be launched.
    """
    issue = await client.get_issue(request.repo, request.issue_id)

    if request.web:
        open_browser(issue.web_url)
        return

    render_summary(issue, console, now)

    if not request.comments:
        return

    # Zero means "not set": let the server apply its own default
    notes = await client.list_issue_notes(
        request.repo,
        request.issue_id,
        page=request.page or None,
        per_page=request.per_page or None,
    )
    shown = render_comments(notes, console, now)
    if shown < len(notes):
        logger.debug(f"Hid {len(notes) - shown} system note(s)")


def build_issue_app(console: Console | None = None) -> typer.Typer:
    """Build the ``issue`` command group.

    Args:
        console: Console used for command output.

    Returns:
        Typer app with ``view`` and its ``show`` alias registered.
    """
    if console is None:
        console = Console()

    issue_app = typer.Typer(help="Work with GitLab issues.", no_args_is_help=True)

    def view(
        ctx: typer.Context,
        issue: Annotated[str, typer.Argument(help="Issue number (e.g. 42 or #42)")],
        repo: Annotated[
            str | None,
            typer.Option(
                "--repo",
                "-r",
                help="Select another repository using the OWNER/REPO format. Supports group namespaces",
            ),
        ] = None,
        web: Annotated[
            bool,
            typer.Option(
                "--web",
                "-w",
                help="Open issue in a browser. Uses default browser or browser specified in BROWSER variable",
            ),
        ] = False,
        comments: Annotated[
            bool,
            typer.Option("--comments", "-c", help="Show issue comments and activities"),
        ] = False,
        page: Annotated[
            int,
            typer.Option("--page", "-p", help="Page number"),
        ] = DEFAULT_PAGE,
        per_page: Annotated[
            int,
            typer.Option("--per-page", "-P", help="Number of items to list per page"),
        ] = DEFAULT_PER_PAGE,
    ) -> None:
        """Display the title, body, and other information about an issue.

        Examples:
            glissue issue view 42
            glissue issue view 42 --comments --page 2
            glissue issue view 42 --repo group/project --web
        """
        config = ctx.obj if isinstance(ctx.obj, Config) else Config.load()

        async def run() -> None:
            async with GitLabClient(host=config.host, token=config.token, timeout=config.timeout) as client:
                await view_issue(
                    request,
                    client,
                    console,
                    open_browser=lambda url: open_in_browser(url, config.browser),
                )

        try:
            target_repo, issue_id = resolve_target(issue, repo)
            request = ViewRequest(
                repo=target_repo,
                issue_id=issue_id,
                web=web,
                comments=comments,
                page=page,
                per_page=per_page,
            )
            asyncio.run(run())
        except (ResolutionError, GitLabClientError, BrowserLaunchError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1) from e

    issue_app.command("view")(view)
    issue_app.command("show", hidden=True)(view)
    return issue_app
