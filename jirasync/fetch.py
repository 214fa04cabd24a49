"""Retrieve every issue matching a query, one page at a time.

Pages are appended in the order they arrive, which is the backend's own
order. Any failed request aborts the whole fetch; nothing partial is
returned.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from typing import Any, Optional

from jirasync.clients import GithubClient, JiraClient
from jirasync.config import GITHUB_PAGE_SIZE, JIRA_PAGE_SIZE
from jirasync.errors import FetchError
from jirasync.models import GithubIssue, JiraIssue

OffsetSearch = Callable[[int, int], tuple[list[dict], int]]
CursorSearch = Callable[[Optional[str], int], tuple[list[dict], Optional[str], bool]]


def paginate_offset(search: OffsetSearch, page_size: int, label: str = "JIRA") -> list[dict]:
    """Collect pages addressed by a numeric offset until the total is reached."""
    results: list[dict] = []
    start = 0
    while True:
        page, total = search(start, page_size)
        results.extend(page)
        print(f"  {label}: {len(page)} issues at {start} (total {total})", file=sys.stderr)
        start += len(page)
        if start >= total:
            break
        if not page:
            raise FetchError(f"{label}: empty page at offset {start}, expected {total} issues")
    return results


def paginate_cursor(search: CursorSearch, page_size: int, label: str = "GitHub") -> list[dict]:
    """Collect pages chained by an opaque cursor until no more are reported."""
    results: list[dict] = []
    cursor: Optional[str] = None
    while True:
        page, cursor, has_next = search(cursor, page_size)
        results.extend(page)
        print(f"  {label}: {len(page)} issues (more: {'yes' if has_next else 'no'})", file=sys.stderr)
        if not has_next:
            break
        if not cursor:
            raise FetchError(f"{label}: more pages reported but no cursor returned")
    return results


def _normalize(raw: list[dict], factory: Callable[[dict], Any], label: str) -> list:
    try:
        return [factory(item) for item in raw]
    except (KeyError, TypeError, ValueError) as exc:
        raise FetchError(f"{label}: malformed issue record: {exc!r}") from exc


def fetch_jira_issues(client: JiraClient, jql: str, page_size: int = JIRA_PAGE_SIZE) -> list[JiraIssue]:
    def search(start_at: int, max_results: int) -> tuple[list[dict], int]:
        return client.search(jql, start_at=start_at, max_results=max_results)

    return _normalize(paginate_offset(search, page_size, "JIRA"), JiraIssue.from_api, "JIRA")


def fetch_github_issues(
    client: GithubClient, query: str, page_size: int = GITHUB_PAGE_SIZE
) -> list[GithubIssue]:
    def search(cursor: Optional[str], first: int) -> tuple[list[dict], Optional[str], bool]:
        return client.search(query, first=first, after=cursor)

    return _normalize(paginate_cursor(search, page_size, "GitHub"), GithubIssue.from_api, "GitHub")
