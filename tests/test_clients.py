from __future__ import annotations

from typing import Any

import pytest
import requests
from github import GithubException

from jirasync.clients import GithubClient, JiraClient
from jirasync.errors import FetchError


class FakeResponse:
    def __init__(self, payload: Any, status: int = 200) -> None:
        self.payload = payload
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Client Error")

    def json(self) -> Any:
        return self.payload


def test_jira_search_request(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []
    session = requests.Session()

    def fake_get(url: str, params: dict, timeout: Any = None) -> FakeResponse:
        calls.append({"url": url, "params": params, "timeout": timeout})
        return FakeResponse({"issues": [{"key": "MCUB-1"}], "total": 7})

    monkeypatch.setattr(session, "get", fake_get)
    client = JiraClient("jira.example", "me", "secret", session=session)

    issues, total = client.search("assignee = currentUser()", start_at=6, max_results=6)

    assert issues == [{"key": "MCUB-1"}]
    assert total == 7
    assert session.auth == ("me", "secret")
    assert calls[0]["url"] == "https://jira.example/rest/api/2/search"
    assert calls[0]["params"]["startAt"] == 6
    assert calls[0]["params"]["maxResults"] == 6
    assert calls[0]["params"]["fields"] == "summary,assignee,status,fixVersions"
    assert calls[0]["timeout"] is None


def test_jira_http_error_is_fetch_error(monkeypatch: pytest.MonkeyPatch) -> None:
    session = requests.Session()
    monkeypatch.setattr(session, "get", lambda url, params, timeout=None: FakeResponse({}, 401))
    client = JiraClient("jira.example", "me", "secret", session=session)
    with pytest.raises(FetchError, match="401"):
        client.search("q")


def test_jira_unexpected_payload(monkeypatch: pytest.MonkeyPatch) -> None:
    session = requests.Session()
    monkeypatch.setattr(session, "get", lambda url, params, timeout=None: FakeResponse({"errors": []}))
    client = JiraClient("jira.example", "me", "secret", session=session)
    with pytest.raises(FetchError, match="unexpected payload"):
        client.search("q")


class FakeRequester:
    def __init__(self, result: Any) -> None:
        self.result = result
        self.calls: list[tuple[str, dict]] = []

    def graphql_query(self, query: str, variables: dict) -> tuple[dict, Any]:
        self.calls.append((query, variables))
        if isinstance(self.result, Exception):
            raise self.result
        return {}, self.result


class FakeGithub:
    def __init__(self, requester: FakeRequester) -> None:
        self.requester = requester


def test_github_search_skips_non_issue_nodes() -> None:
    requester = FakeRequester(
        {
            "data": {
                "search": {
                    "edges": [
                        {"node": {"number": 3, "title": "t", "url": "u", "state": "OPEN"}},
                        {"node": {}},
                    ],
                    "pageInfo": {"endCursor": "Y3Vyc29yOjI=", "hasNextPage": True},
                }
            }
        }
    )
    client = GithubClient("token", github=FakeGithub(requester))  # type: ignore[arg-type]

    nodes, cursor, has_next = client.search("repo:o/r", first=2, after="abc")

    assert nodes == [{"number": 3, "title": "t", "url": "u", "state": "OPEN"}]
    assert cursor == "Y3Vyc29yOjI="
    assert has_next is True
    assert requester.calls[0][1] == {"query": "repo:o/r", "first": 2, "cursor": "abc"}


def test_github_error_is_fetch_error() -> None:
    requester = FakeRequester(GithubException(401, {"message": "Bad credentials"}, None))
    client = GithubClient("token", github=FakeGithub(requester))  # type: ignore[arg-type]
    with pytest.raises(FetchError, match="GitHub search"):
        client.search("repo:o/r")
