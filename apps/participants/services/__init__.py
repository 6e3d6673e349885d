"""
Participants app services layer.
"""

from .exceptions import (
    ParticipantsServiceError,
    ParticipantValidationError,
    DuplicateParticipantError,
    ParticipantNotFoundError,
)

from .participant_management import (
    create_participant,
    get_participant_by_id,
    update_participant,
    delete_participant,
    get_participant_for_user,
    create_participant_from_user,
    search_participants,
    get_participant_programs,
)

from .participant_deduplication import (
    find_potential_duplicates,
)


__all__ = [
    # Exceptions
    'ParticipantsServiceError',
    'ParticipantValidationError',
    'DuplicateParticipantError',
    'ParticipantNotFoundError',

    # Participant Management
    'create_participant',
    'get_participant_by_id',
    'update_participant',
    'delete_participant',
    'get_participant_for_user',
    'create_participant_from_user',
    'search_participants',
    'get_participant_programs',

    # Deduplication
    'find_potential_duplicates',
]
