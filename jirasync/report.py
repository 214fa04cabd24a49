"""Render sorted issues as a JIRA markup table."""

from __future__ import annotations

from collections.abc import Iterable

from jirasync import markup
from jirasync.config import GithubProject, JiraProject
from jirasync.models import GithubIssue, JiraIssue
from jirasync.versions import nice_versions


def _versions_cell(issue: JiraIssue) -> str:
    # An empty cell would read as "||", which JIRA takes for a header cell.
    return nice_versions(issue.fix_versions) or " "


def render_jira_report(project: JiraProject, issues: Iterable[JiraIssue]) -> str:
    lines = [
        f"Issues at [{project.url}]",
        "",
        markup.header_row("Issue", "Description", "Vers", "Status"),
    ]
    for issue in issues:
        lines.append(
            markup.row(
                markup.link(issue.key, issue.url),
                markup.escape(issue.summary),
                _versions_cell(issue),
                markup.decode_status(issue.status),
            )
        )
    lines.append("")
    lines.append(f"Query: {markup.panel(project.query)}")
    return "\n".join(lines) + "\n"


def render_github_report(project: GithubProject, issues: Iterable[GithubIssue]) -> str:
    lines = [
        f"Issues at [{project.url}]",
        "",
        markup.header_row("Issue", "Description", "Status"),
    ]
    for issue in issues:
        lines.append(
            markup.row(
                markup.link(str(issue.number), issue.url),
                markup.escape(issue.title),
                markup.decode_status(issue.state),
            )
        )
    return "\n".join(lines) + "\n"
