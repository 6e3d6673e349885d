"""
Domain-specific exceptions for programs, memberships and registrations.

These exceptions represent business rule violations and persistence
failures. They carry the HTTP status the request boundary should answer
with; views convert them to ``{"error": <message>}`` responses.

Exception Hierarchy:
    ProgramsServiceError (base)
    ├── ValidationError            400
    │   └── InvalidStatusError
    ├── NotFoundError              404
    │   ├── ProgramNotFoundError
    │   ├── ParticipantProfileNotFoundError
    │   └── RegistrationNotFoundError
    ├── ConflictError              400
    │   ├── AlreadyParticipantError
    │   └── AlreadyRegisteredError
    └── PersistenceError           500
"""


class ProgramsServiceError(Exception):
    """Base exception for all programs service errors."""

    status_code = 500


class ValidationError(ProgramsServiceError):
    """Raised when input is missing or invalid (user-correctable)."""

    status_code = 400


class InvalidStatusError(ValidationError):
    """Raised when a registration status is not one of the allowed values."""
    pass


class NotFoundError(ProgramsServiceError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class ProgramNotFoundError(NotFoundError):
    """Raised when a program does not exist."""
    pass


class ParticipantProfileNotFoundError(NotFoundError):
    """Raised when a user has no participant profile."""
    pass


class RegistrationNotFoundError(NotFoundError):
    """Raised when no registration exists for a program/participant pair."""
    pass


class ConflictError(ProgramsServiceError):
    """Raised when duplicate prevention is triggered."""

    status_code = 400


class AlreadyParticipantError(ConflictError):
    """Raised when a participant is already enrolled in a program."""
    pass


class AlreadyRegisteredError(ConflictError):
    """Raised when a participant is already registered in a program."""
    pass


class PersistenceError(ProgramsServiceError):
    """
    Raised when a database call fails.

    The message includes the underlying cause; the original exception is
    chained as ``__cause__``.
    """

    status_code = 500
