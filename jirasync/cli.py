"""Command-line entry point.

Usage:
    jirasync PROJECT

Prints a JIRA markup table of the issues assigned to you in PROJECT, ready
to paste into a ticket description. Run without arguments to list the known
projects. See jirasync.config.load_settings for the environment variables.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Mapping
from typing import NoReturn, Optional

from jirasync.clients import GithubClient, JiraClient
from jirasync.config import (
    JiraProject,
    Project,
    Settings,
    default_projects,
    find_login,
    get_project,
    load_projects,
    load_settings,
    project_listing,
)
from jirasync.errors import ConfigError, JiraSyncError, UnknownProjectError
from jirasync.fetch import fetch_github_issues, fetch_jira_issues
from jirasync.report import render_github_report, render_jira_report
from jirasync.sorting import sort_github_issues, sort_jira_issues


def show_names(projects: Mapping[str, Project]) -> None:
    print("Possible projects:", file=sys.stderr)
    for line in project_listing(projects):
        print(line, file=sys.stderr)


def build_report(project: Project, settings: Settings) -> str:
    """Fetch, sort and render the issues for one project."""
    if isinstance(project, JiraProject):
        login = find_login(project.host, settings.netrc_path)
        client = JiraClient(project.host, login.user, login.password, timeout=settings.http_timeout)
        print(f"Querying {project.host} as {login.user}...", file=sys.stderr)
        issues = fetch_jira_issues(client, project.query, settings.jira_page_size)
        return render_jira_report(project, sort_jira_issues(issues))

    if not settings.github_token:
        raise ConfigError("GITHUB_TOKEN is not set")
    gh = GithubClient(settings.github_token, timeout=settings.http_timeout)
    print(f"Querying GitHub: {project.query}", file=sys.stderr)
    issues = fetch_github_issues(gh, project.query, settings.github_page_size)
    return render_github_report(project, sort_github_issues(issues))


class ProjectArgumentParser(argparse.ArgumentParser):
    """Argument parser whose usage errors end in the project listing."""

    def error(self, message: str) -> NoReturn:
        raise UnknownProjectError(message)


def main(argv: Optional[list[str]] = None) -> None:
    parser = ProjectArgumentParser(
        prog="jirasync",
        description="Summarize your issues from another tracker as a JIRA markup table.",
    )
    parser.add_argument(
        "project",
        nargs="*",
        metavar="PROJECT",
        help="Name of the project to report on. Omit to list the known projects.",
    )

    try:
        settings = load_settings()
        projects = default_projects()
        if settings.projects_path:
            projects = load_projects(settings.projects_path, projects)

        try:
            args = parser.parse_args(argv)
            if len(args.project) != 1:
                raise UnknownProjectError("must specify project as sole argument")
            project = get_project(projects, args.project[0])
        except UnknownProjectError:
            show_names(projects)
            raise

        report = build_report(project, settings)
    except JiraSyncError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        sys.exit(1)

    # Only written once everything succeeded, so a failed run prints nothing.
    sys.stdout.write(report)


if __name__ == "__main__":
    main()
