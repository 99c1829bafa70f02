"""
Domain-specific exception hierarchy for hearing scheduling.
"""

from typing import List, Sequence


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class InvalidRequestError(SchedulingError):
    """Raised when a search or conflict query is rejected by validation."""


class HearingSourceError(SchedulingError):
    """Raised when existing hearings cannot be fetched or parsed."""


class ConfigError(SchedulingError):
    """Raised when the configuration file is missing or invalid."""


class HearingNotFoundError(SchedulingError):
    """Raised when a hearing id does not exist in the store."""


class HearingConflictError(SchedulingError):
    """
    Raised when a booking collides with hearings of the same court.

    The conflicting hearings are kept on ``conflicts`` so callers can report
    them back to the user.
    """

    def __init__(self, conflicts: Sequence, message: str | None = None):
        self.conflicts: List = list(conflicts)
        if message is None:
            described = ", ".join(
                f"{hearing.label()} ({hearing.format_times()})" for hearing in self.conflicts
            )
            message = f"Schedule conflict with {len(self.conflicts)} hearing(s): {described}"
        super().__init__(message)
