"""Deterministic ordering of issues for the report.

JIRA issues are sorted by their smallest fix version and then by issue
number. This is done as two stable sorts, number first and version second,
so issues that share a version keep their number order.
"""

from __future__ import annotations

from collections.abc import Iterable

from jirasync.models import GithubIssue, JiraIssue, key_number
from jirasync.versions import resolve_version


def sort_by_number(issues: Iterable[JiraIssue]) -> list[JiraIssue]:
    issues = list(issues)
    numbers = [key_number(issue.key) for issue in issues]
    order = sorted(range(len(issues)), key=lambda i: numbers[i])
    return [issues[i] for i in order]


def sort_by_version(issues: Iterable[JiraIssue]) -> list[JiraIssue]:
    issues = list(issues)
    versions = [resolve_version(issue.fix_versions) for issue in issues]
    order = sorted(range(len(issues)), key=lambda i: versions[i])
    return [issues[i] for i in order]


def sort_jira_issues(issues: Iterable[JiraIssue]) -> list[JiraIssue]:
    """Return issues ordered by fix version, then by issue number."""
    return sort_by_version(sort_by_number(issues))


def sort_github_issues(issues: Iterable[GithubIssue]) -> list[GithubIssue]:
    return sorted(issues, key=lambda issue: issue.number)
