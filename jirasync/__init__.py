"""Collect issues from JIRA and GitHub into a single JIRA markup report."""

from jirasync.errors import (
    ConfigError,
    CredentialError,
    FetchError,
    IssueKeyError,
    JiraSyncError,
    UnknownProjectError,
    VersionError,
)
from jirasync.markup import escape
from jirasync.models import GithubIssue, JiraIssue, key_number
from jirasync.sorting import sort_github_issues, sort_jira_issues
from jirasync.versions import resolve_version

__version__ = "0.2.0"

__all__ = [
    "ConfigError",
    "CredentialError",
    "FetchError",
    "GithubIssue",
    "IssueKeyError",
    "JiraIssue",
    "JiraSyncError",
    "UnknownProjectError",
    "VersionError",
    "escape",
    "key_number",
    "resolve_version",
    "sort_github_issues",
    "sort_jira_issues",
]
