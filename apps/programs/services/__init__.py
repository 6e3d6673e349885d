"""
Programs app services layer.

Services contain business logic and orchestrate operations across models.
State-changing operations run in transactions; database failures surface
as PersistenceError.
"""

from .exceptions import (
    ProgramsServiceError,
    ValidationError,
    InvalidStatusError,
    NotFoundError,
    ProgramNotFoundError,
    ParticipantProfileNotFoundError,
    RegistrationNotFoundError,
    ConflictError,
    AlreadyParticipantError,
    AlreadyRegisteredError,
    PersistenceError,
)
from .persistence import persistence_guard

from .program_management import (
    create_program,
    update_program,
    delete_program,
    get_program_by_id,
    search_programs,
    get_program_calendar,
)

from .membership_management import (
    join_program,
    get_program_members,
)


__all__ = [
    # Exceptions
    'ProgramsServiceError',
    'ValidationError',
    'InvalidStatusError',
    'NotFoundError',
    'ProgramNotFoundError',
    'ParticipantProfileNotFoundError',
    'RegistrationNotFoundError',
    'ConflictError',
    'AlreadyParticipantError',
    'AlreadyRegisteredError',
    'PersistenceError',
    'persistence_guard',

    # Program Management
    'create_program',
    'update_program',
    'delete_program',
    'get_program_by_id',
    'search_programs',
    'get_program_calendar',

    # Membership Management
    'join_program',
    'get_program_members',
]
