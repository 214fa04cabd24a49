"""Thin clients for the two issue backends.

Each client issues a single search request per call and hands back the raw
page; pagination and normalization live in jirasync.fetch.
"""

from __future__ import annotations

from typing import Any, Optional

import requests
from github import Auth, Github, GithubException

from jirasync.errors import FetchError

JIRA_FIELDS = ("summary", "assignee", "status", "fixVersions")

GITHUB_SEARCH = """
query($query: String!, $first: Int!, $cursor: String) {
  search(query: $query, type: ISSUE, first: $first, after: $cursor) {
    edges {
      node {
        ... on Issue {
          title
          url
          state
          number
        }
      }
    }
    pageInfo {
      endCursor
      hasNextPage
    }
  }
}
"""


# ---------------------------------------------------------------------------
# JIRA
# ---------------------------------------------------------------------------

class JiraClient:
    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.host = host
        self.session = session or requests.Session()
        self.session.auth = (user, password)
        self.session.headers.update({"Accept": "application/json"})
        # None leaves the transport default in place (no timeout).
        self.timeout = timeout

    @property
    def search_url(self) -> str:
        return f"https://{self.host}/rest/api/2/search"

    def search(self, jql: str, start_at: int = 0, max_results: int = 50) -> tuple[list[dict], int]:
        """Run one page of a JQL search. Returns (raw issues, total matches)."""
        params = {
            "jql": jql,
            "startAt": start_at,
            "maxResults": max_results,
            "fields": ",".join(JIRA_FIELDS),
        }
        try:
            resp = self.session.get(self.search_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as exc:
            raise FetchError(f"JIRA search on {self.host} failed: {exc}") from exc

        try:
            return list(data["issues"]), int(data["total"])
        except (KeyError, TypeError, ValueError) as exc:
            raise FetchError(f"JIRA search on {self.host} returned an unexpected payload") from exc


# ---------------------------------------------------------------------------
# GitHub
# ---------------------------------------------------------------------------

class GithubClient:
    def __init__(
        self,
        token: str,
        github: Optional[Github] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if github is None:
            kwargs: dict[str, Any] = {"auth": Auth.Token(token)}
            if timeout is not None:
                kwargs["timeout"] = timeout
            github = Github(**kwargs)
        self.github = github

    def search(
        self, query: str, first: int = 100, after: Optional[str] = None
    ) -> tuple[list[dict], Optional[str], bool]:
        """Run one page of an issue search.

        Returns (issue nodes, end cursor, has next page). Pull requests match
        the search too but come back as empty nodes, and are dropped here.
        """
        variables = {"query": query, "first": first, "cursor": after}
        try:
            _, data = self.github.requester.graphql_query(GITHUB_SEARCH, variables)
        except (GithubException, requests.RequestException) as exc:
            raise FetchError(f"GitHub search {query!r} failed: {exc}") from exc

        try:
            search = data["data"]["search"]
            nodes = [edge["node"] for edge in search["edges"] if edge.get("node")]
            page_info = search["pageInfo"]
            return nodes, page_info.get("endCursor"), bool(page_info.get("hasNextPage"))
        except (KeyError, TypeError) as exc:
            raise FetchError(f"GitHub search {query!r} returned an unexpected payload") from exc
