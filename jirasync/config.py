"""Settings, project definitions and credential lookup."""

from __future__ import annotations

import json
import math
import netrc
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from jirasync.errors import ConfigError, CredentialError, UnknownProjectError

JIRA_PAGE_SIZE = 50
GITHUB_PAGE_SIZE = 100

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Settings:
    github_token: str = ""
    netrc_path: Path = Path("~/.netrc").expanduser()
    projects_path: Optional[Path] = None
    jira_page_size: int = JIRA_PAGE_SIZE
    github_page_size: int = GITHUB_PAGE_SIZE
    http_timeout: Optional[float] = None


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    value = env.get(name, "").strip()
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    if number <= 0:
        raise ConfigError(f"{name} must be positive, got {number}")
    return number


def _env_float(env: Mapping[str, str], name: str) -> Optional[float]:
    value = env.get(name, "").strip()
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {value!r}")
    if not math.isfinite(number) or number <= 0:
        raise ConfigError(f"{name} must be a positive number of seconds, got {value!r}")
    return number


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Read settings from the environment.

    When no mapping is given, a local .env file is loaded into os.environ
    first.

    GITHUB_TOKEN              - token for GitHub projects
    NETRC                     - credentials file for JIRA hosts (default ~/.netrc)
    JIRASYNC_PROJECTS         - JSON file with extra project definitions
    JIRASYNC_JIRA_PAGE_SIZE   - issues per JIRA search request (default 50)
    JIRASYNC_GITHUB_PAGE_SIZE - issues per GitHub search request (default 100)
    JIRASYNC_HTTP_TIMEOUT     - request timeout in seconds (default: none)
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    projects = environ.get("JIRASYNC_PROJECTS", "").strip()
    return Settings(
        github_token=environ.get("GITHUB_TOKEN", ""),
        netrc_path=Path(environ.get("NETRC") or "~/.netrc").expanduser(),
        projects_path=Path(projects).expanduser() if projects else None,
        jira_page_size=_env_int(environ, "JIRASYNC_JIRA_PAGE_SIZE", JIRA_PAGE_SIZE),
        github_page_size=_env_int(environ, "JIRASYNC_GITHUB_PAGE_SIZE", GITHUB_PAGE_SIZE),
        http_timeout=_env_float(environ, "JIRASYNC_HTTP_TIMEOUT"),
    )


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class JiraProject:
    name: str
    host: str
    key: str
    query: str
    desc: str = ""

    @property
    def url(self) -> str:
        return f"https://{self.host}/projects/{self.key}"


@dataclass(frozen=True)
class GithubProject:
    name: str
    user: str
    repo: str
    desc: str = ""

    @property
    def query(self) -> str:
        return f"assignee:{self.user} is:issue repo:{self.repo}"

    @property
    def url(self) -> str:
        return f"https://github.com/{self.repo}/"


Project = Union[JiraProject, GithubProject]


def default_projects() -> dict[str, Project]:
    """Return the built-in projects, keyed by name."""
    projects: list[Project] = [
        JiraProject(
            name="mcuboot",
            host="runtimeco.atlassian.net",
            key="MCUB",
            query=(
                "(fixVersion = 1.1 OR fixVersion = 1.2) AND "
                "assignee = currentUser() "
                "ORDER BY priority DESC, updated DESC"
            ),
            desc="The MCUboot project JIRA",
        ),
        GithubProject(
            name="zephyr",
            user="d3zd3z",
            repo="zephyrproject-rtos/zephyr",
            desc="Zephyr issues on GitHub",
        ),
    ]
    return {p.name: p for p in projects}


def _project_from_dict(name: str, entry: object) -> Project:
    if not isinstance(entry, dict):
        raise ConfigError(f"Project {name!r} must be an object")
    kind = entry.get("type", "jira")
    fields = {k: v for k, v in entry.items() if k != "type"}
    if not all(isinstance(v, str) for v in fields.values()):
        raise ConfigError(f"Project {name!r} fields must all be strings")
    try:
        if kind == "jira":
            return JiraProject(name=name, **fields)
        if kind == "github":
            return GithubProject(name=name, **fields)
    except TypeError as exc:
        raise ConfigError(f"Project {name!r}: {exc}") from exc
    raise ConfigError(f"Project {name!r} has unknown type {kind!r}")


def load_projects(path: Path, base: Optional[Mapping[str, Project]] = None) -> dict[str, Project]:
    """Read project definitions from a JSON file, on top of base.

    The file maps project names to objects with a "type" of "jira" (host,
    key, query, desc) or "github" (user, repo, desc). Entries replace base
    projects of the same name.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Unable to read projects file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in projects file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Projects file {path} must contain an object")

    projects = dict(base or {})
    for name, entry in data.items():
        projects[name] = _project_from_dict(name, entry)
    return projects


def get_project(projects: Mapping[str, Project], name: Optional[str]) -> Project:
    if not name:
        raise UnknownProjectError("must specify project as sole argument")
    try:
        return projects[name]
    except KeyError:
        raise UnknownProjectError(f"Unknown project {name!r}") from None


def project_listing(projects: Mapping[str, Project]) -> list[str]:
    """Return "name: description" lines, sorted and aligned on the colon."""
    if not projects:
        return []
    width = max(len(name) for name in projects)
    return [f"    {name:<{width}}: {projects[name].desc}" for name in sorted(projects)]


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Login:
    user: str
    password: str


def find_login(host: str, path: Path) -> Login:
    """Look up the login for host in a netrc file."""
    try:
        auth = netrc.netrc(str(path)).authenticators(host)
    except netrc.NetrcParseError as exc:
        raise CredentialError(f"Unable to parse {path}: {exc}") from exc
    except OSError as exc:
        raise CredentialError(f"Unable to read {path}: {exc}") from exc
    if auth is None:
        raise CredentialError(f"Unable to find host {host} in {path}")
    user, _account, password = auth
    if not password:
        raise CredentialError(f"No password for host {host} in {path}")
    return Login(user=user, password=password)
