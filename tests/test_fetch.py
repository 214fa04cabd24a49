from __future__ import annotations

from typing import Optional

import pytest

from jirasync.errors import FetchError
from jirasync.fetch import fetch_github_issues, fetch_jira_issues, paginate_offset


def _raw_jira(num: int) -> dict:
    return {
        "key": f"MCUB-{num}",
        "self": f"https://jira.example/rest/api/2/issue/{num}",
        "fields": {
            "summary": f"issue {num}",
            "status": {"name": "Open"},
            "fixVersions": [{"name": "1.1"}],
        },
    }


class FakeJira:
    def __init__(self, corpus: list[dict], fail_at: Optional[int] = None) -> None:
        self.corpus = corpus
        self.fail_at = fail_at
        self.calls: list[tuple[int, int]] = []

    def search(self, jql: str, start_at: int = 0, max_results: int = 50) -> tuple[list[dict], int]:
        self.calls.append((start_at, max_results))
        if self.fail_at is not None and len(self.calls) == self.fail_at:
            raise FetchError("boom")
        return self.corpus[start_at : start_at + max_results], len(self.corpus)


class FakeGithub:
    def __init__(self, pages: list[list[dict]]) -> None:
        self.pages = pages
        self.calls: list[Optional[str]] = []

    def search(
        self, query: str, first: int = 100, after: Optional[str] = None
    ) -> tuple[list[dict], Optional[str], bool]:
        self.calls.append(after)
        index = 0 if after is None else int(after)
        has_next = index + 1 < len(self.pages)
        return self.pages[index], str(index + 1) if has_next else None, has_next


def test_jira_pages_are_concatenated_in_arrival_order() -> None:
    client = FakeJira([_raw_jira(n) for n in range(201, 0, -1)])
    issues = fetch_jira_issues(client, "assignee = currentUser()", page_size=100)  # type: ignore[arg-type]
    assert len(issues) == 201
    assert issues[0].key == "MCUB-201"
    assert issues[-1].key == "MCUB-1"
    assert client.calls == [(0, 100), (100, 100), (200, 100)]
    assert issues[0].fix_versions == ("1.1",)
    assert issues[0].status == "Open"


def test_jira_exact_multiple_stops_without_probe() -> None:
    client = FakeJira([_raw_jira(n) for n in range(1, 201)])
    assert len(fetch_jira_issues(client, "q", page_size=100)) == 200  # type: ignore[arg-type]
    assert len(client.calls) == 2


def test_jira_empty_result() -> None:
    client = FakeJira([])
    assert fetch_jira_issues(client, "q") == []  # type: ignore[arg-type]
    assert len(client.calls) == 1


def test_jira_error_discards_partial_results() -> None:
    client = FakeJira([_raw_jira(n) for n in range(1, 11)], fail_at=2)
    with pytest.raises(FetchError):
        fetch_jira_issues(client, "q", page_size=5)  # type: ignore[arg-type]


def test_short_page_before_total_is_an_error() -> None:
    def search(start: int, size: int) -> tuple[list[dict], int]:
        return [], 10

    with pytest.raises(FetchError, match="empty page"):
        paginate_offset(search, 5)


def test_malformed_record_is_fetch_error() -> None:
    client = FakeJira([{"fields": {}}])
    with pytest.raises(FetchError, match="malformed"):
        fetch_jira_issues(client, "q")  # type: ignore[arg-type]


def test_github_cursor_pages_one_request_per_page() -> None:
    pages = [
        [{"number": n, "title": f"t{n}", "url": f"u{n}", "state": "OPEN"} for n in range(start, start + size)]
        for start, size in ((1, 100), (101, 100), (201, 1))
    ]
    client = FakeGithub(pages)
    issues = fetch_github_issues(client, "assignee:me is:issue repo:o/r")  # type: ignore[arg-type]
    assert [i.number for i in issues] == list(range(1, 202))
    assert client.calls == [None, "1", "2"]


def test_github_more_pages_without_cursor_is_an_error() -> None:
    class Broken:
        def search(self, query: str, first: int = 100, after: Optional[str] = None):
            return [], None, True

    with pytest.raises(FetchError, match="no cursor"):
        fetch_github_issues(Broken(), "q")  # type: ignore[arg-type]
