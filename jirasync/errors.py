"""Exceptions raised by the jirasync pipeline.

Every failure is fatal to a run. Components raise, and only the command-line
entry point turns an error into a diagnostic line and an exit status.
"""


class JiraSyncError(Exception):
    """Base class for all errors reported by jirasync."""


class ConfigError(JiraSyncError):
    pass


class CredentialError(JiraSyncError):
    pass


class UnknownProjectError(JiraSyncError):
    pass


class FetchError(JiraSyncError):
    """A backend request failed or returned something unusable."""


class IssueKeyError(JiraSyncError):
    """An issue identifier has no numeric suffix."""


class VersionError(JiraSyncError):
    """A fix version label is not a semantic version, even after padding."""
