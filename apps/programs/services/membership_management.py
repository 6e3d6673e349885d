"""
Membership management service.

Guards program enrollment against duplicates. The storage layer holds a
unique constraint on (program, participant); the program row is locked
while checking so concurrent joins for the same program are serialized.
"""

from django.db import transaction
from django.db.models import QuerySet

from apps.participants.models import Participant
from apps.programs.models import Program, ProgramMembership
from config.logging_setup import get_logger

from .exceptions import (
    ValidationError,
    ProgramNotFoundError,
    ParticipantProfileNotFoundError,
    AlreadyParticipantError,
)
from .persistence import persistence_guard

logger = get_logger(__name__)


@transaction.atomic
def join_program(*, user_id, program_id) -> ProgramMembership:
    """
    Enroll the participant profile of a user in a program.

    Args:
        user_id: ID of the user joining
        program_id: ID of the program

    Returns:
        Created ProgramMembership instance

    Raises:
        ValidationError: If either identifier is missing
        ParticipantProfileNotFoundError: If the user has no participant profile
        ProgramNotFoundError: If the program doesn't exist
        AlreadyParticipantError: If the participant is already enrolled
            (detected by the check or by the unique constraint)
        PersistenceError: If any database call fails
    """
    if not user_id or not program_id:
        raise ValidationError("User ID and Program ID are required")

    with persistence_guard("look up participant profile", user_id=user_id):
        participant = Participant.objects.filter(user_id=user_id).first()
    if participant is None:
        raise ParticipantProfileNotFoundError("Participant profile not found")

    with persistence_guard("look up program", program_id=program_id):
        program = Program.objects.select_for_update().filter(id=program_id).first()
    if program is None:
        raise ProgramNotFoundError(f"Program with ID {program_id} not found")

    already = AlreadyParticipantError("You are already a participant in this program")

    with persistence_guard("check program participation", program_id=program_id):
        exists = ProgramMembership.objects.filter(
            program=program,
            participant=participant
        ).exists()
    if exists:
        raise already

    with persistence_guard("join program", on_conflict=already, program_id=program_id):
        with transaction.atomic():
            membership = ProgramMembership.objects.create(
                program=program,
                participant=participant
            )

    logger.info(
        "program_joined",
        program_id=program.id,
        participant_id=participant.id,
        user_id=user_id,
    )
    return membership


def get_program_members(*, program_id) -> QuerySet[ProgramMembership]:
    """
    Get all members of a program.

    Raises:
        ProgramNotFoundError: If program doesn't exist
    """
    if not Program.objects.filter(id=program_id).exists():
        raise ProgramNotFoundError(f"Program with ID {program_id} not found")

    return (
        ProgramMembership.objects
        .filter(program_id=program_id)
        .select_related('participant')
        .order_by('joined_at')
    )
