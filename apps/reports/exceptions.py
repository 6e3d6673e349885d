"""
Domain exceptions for reports app.

Raised by ReportQueries for requests that cannot produce a report.
Views turn them into ``{'error': message}`` with status 400, or 404 for
unknown programs.

Exception Hierarchy:
    ReportsServiceError (base)
    ├── InvalidDateRangeError
    └── ProgramNotFoundError
"""


class ReportsServiceError(Exception):
    """Base exception for all report errors."""

    status_code = 400


class InvalidDateRangeError(ReportsServiceError):
    """
    Raised when start_date is after end_date.

    Example:
        raise InvalidDateRangeError("Start date must be before end date")
    """

    pass


class ProgramNotFoundError(ReportsServiceError):
    """Raised when a report is requested for a program that doesn't exist."""

    status_code = 404
