"""
Exceptions raised by the validator and the process exit codes.

Components raise the exceptions below; only ``cli.check`` turns them
into exit codes.
"""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    HELP_MESSAGE = 1
    GENERIC_FAILURE = 2
    INTERRUPTED = 130
    MISSING_LIBRARY = 241
    LOGGER_UTILITY = 242


class SurveyPointsError(Exception):
    """Base class for every error raised by this package."""


class PrerequisiteMissing(SurveyPointsError):
    """A required external tool or setting is not available."""


class FetchError(SurveyPointsError):
    """The Overpass request failed or returned a non-success status."""


class MalformedRowError(SurveyPointsError):
    """A CSV row could not be parsed into a survey point."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        super().__init__(f"Line {line_number}: {reason} ({line!r})")
        self.line_number = line_number
        self.line = line
        self.reason = reason


class DeliveryError(SurveyPointsError):
    """The report could not be handed to the mail transport."""
