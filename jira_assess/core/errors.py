"""Exception hierarchy for the assessment package."""

from __future__ import annotations


class AssessmentError(Exception):
    """Base class for errors raised by jira_assess."""


class InvalidInputError(AssessmentError, ValueError):
    """Raised when the issue or comments payload is missing entirely."""


class SettingsError(AssessmentError):
    """Raised when a settings file cannot be read or contains unknown keys."""


class JiraFetchError(AssessmentError, RuntimeError):
    """Raised when the Jira REST API returns an error response."""
