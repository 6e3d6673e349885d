"""
Custom exceptions for participants services.
"""


class ParticipantsServiceError(Exception):
    """Base exception for participants services."""
    status_code = 400


class ParticipantValidationError(ParticipantsServiceError):
    """Raised when participant data is incomplete or invalid."""
    pass


class DuplicateParticipantError(ParticipantsServiceError):
    """Raised when a participant with the same name and contact exists."""
    pass


class ParticipantNotFoundError(ParticipantsServiceError):
    """Raised when participant doesn't exist."""
    status_code = 404
