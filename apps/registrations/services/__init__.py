"""
Registrations app services layer.

Errors are the shared program taxonomy in apps.programs.services.exceptions.
"""

from .registration_status import (
    StatusUpdateResult,
    set_registration_status,
    validate_status,
)

from .registration_management import (
    register_participant,
    request_registration,
    list_registrations,
    status_counts,
    get_user_registrations,
    remove_registration,
)


__all__ = [
    # Status reconciliation
    'StatusUpdateResult',
    'set_registration_status',
    'validate_status',

    # Registration Management
    'register_participant',
    'request_registration',
    'list_registrations',
    'status_counts',
    'get_user_registrations',
    'remove_registration',
]
