"""
Exception definitions.

Business failures never surface as exceptions; they are returned as
unsuccessful ServiceResult values. These types mark programming errors and
lookups the caller should have validated.
"""


class PlatformError(Exception):
    """Base class for platform errors."""
    pass


class InvalidTransition(PlatformError):
    """Raised when a payment status change is not allowed."""

    def __init__(self, old: str, new: str) -> None:
        super().__init__(f"Illegal payment transition: {old} -> {new}")
        self.old = old
        self.new = new


class UnknownParticipantError(PlatformError):
    """Raised when an account is required but not registered."""

    def __init__(self, participant_id: str) -> None:
        super().__init__(f"Unknown participant: {participant_id}")
        self.participant_id = participant_id
