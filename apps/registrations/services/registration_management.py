"""
Registration management service.

Officials add participants directly (Approved); users request a spot for
their own profile (Pending) and wait for review.
"""

from typing import Dict, Optional

from django.db import transaction
from django.db.models import Count, Q, QuerySet

from apps.accounts.models import User
from apps.participants.models import Participant
from apps.programs.models import Program
from apps.registrations.models import Registration, RegistrationStatus
from config.logging_setup import get_logger

from apps.programs.services.exceptions import (
    ValidationError,
    NotFoundError,
    ProgramNotFoundError,
    ParticipantProfileNotFoundError,
    RegistrationNotFoundError,
    AlreadyRegisteredError,
)
from apps.programs.services.persistence import persistence_guard
from .registration_status import validate_status

logger = get_logger(__name__)


def _get_program(program_id) -> Program:
    try:
        return Program.objects.select_for_update().get(id=program_id)
    except (Program.DoesNotExist, ValueError, TypeError):
        raise ProgramNotFoundError(f"Program with ID {program_id} not found")


def _create_registration(*, program, participant, status, duplicate_message) -> Registration:
    already = AlreadyRegisteredError(duplicate_message)

    with persistence_guard("check existing registration", program_id=program.id):
        exists = Registration.objects.filter(
            program=program,
            participant=participant
        ).exists()
    if exists:
        raise already

    with persistence_guard("create registration", on_conflict=already, program_id=program.id):
        with transaction.atomic():
            registration = Registration.objects.create(
                program=program,
                participant=participant,
                status=status,
            )

    logger.info(
        "registration_created",
        program_id=program.id,
        participant_id=participant.id,
        status=status,
    )
    return registration


@transaction.atomic
def register_participant(*, program_id, participant_id) -> Registration:
    """
    Add a participant to a program on an official's authority.

    Raises:
        ValidationError: If either identifier is missing
        ProgramNotFoundError: If program doesn't exist
        NotFoundError: If participant doesn't exist
        AlreadyRegisteredError: If participant already has a registration
        PersistenceError: If a database call fails
    """
    if not program_id or not participant_id:
        raise ValidationError("Program ID and Participant ID are required")

    program = _get_program(program_id)

    try:
        participant = Participant.objects.get(id=participant_id)
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Participant with ID {participant_id} not found")

    return _create_registration(
        program=program,
        participant=participant,
        status=RegistrationStatus.APPROVED,
        duplicate_message="Participant is already registered in this program",
    )


@transaction.atomic
def request_registration(*, user: User, program_id) -> Registration:
    """
    Request a place in a program for the user's own participant profile.

    Raises:
        ParticipantProfileNotFoundError: If the user has no participant profile
        ProgramNotFoundError: If program doesn't exist
        AlreadyRegisteredError: If a registration already exists
    """
    if not program_id:
        raise ValidationError("Program ID is required")

    participant = Participant.objects.filter(user=user).first()
    if participant is None:
        raise ParticipantProfileNotFoundError("Participant profile not found")

    program = _get_program(program_id)

    return _create_registration(
        program=program,
        participant=participant,
        status=RegistrationStatus.PENDING,
        duplicate_message="You have already requested to join this program",
    )


def list_registrations(
    *,
    program_id: Optional[int] = None,
    status: Optional[str] = None,
    search: Optional[str] = None
) -> QuerySet[Registration]:
    """
    Registrations for the officials' review queue.

    Args:
        program_id: Only registrations for this program
        status: Only registrations with this status
        search: Matches participant name or program name

    Raises:
        InvalidStatusError: If status is unknown
    """
    queryset = Registration.objects.select_related('program', 'participant')

    if program_id:
        queryset = queryset.filter(program_id=program_id)

    if status:
        queryset = queryset.filter(status=validate_status(status))

    if search:
        queryset = queryset.filter(
            Q(participant__first_name__icontains=search) |
            Q(participant__last_name__icontains=search) |
            Q(program__name__icontains=search)
        )

    return queryset


def status_counts(*, program_id: Optional[int] = None) -> Dict[str, int]:
    """
    Number of registrations per status, every status present.

    Returns:
        Dict of status -> count plus 'total'
    """
    queryset = Registration.objects.all()
    if program_id:
        queryset = queryset.filter(program_id=program_id)

    counts = {value: 0 for value in RegistrationStatus.values}
    for row in queryset.values('status').annotate(count=Count('id')):
        counts[row['status']] = row['count']
    counts['total'] = sum(counts.values())
    return counts


def get_user_registrations(*, user: User) -> QuerySet[Registration]:
    """Registrations belonging to the user's participant profile."""
    return (
        Registration.objects
        .filter(participant__user=user)
        .select_related('program', 'participant')
    )


@transaction.atomic
def remove_registration(*, program_id, participant_id) -> None:
    """
    Remove a participant's registration from a program.

    Raises:
        RegistrationNotFoundError: If no registration exists for the pair
    """
    deleted, _ = Registration.objects.filter(
        program_id=program_id,
        participant_id=participant_id
    ).delete()

    if not deleted:
        raise RegistrationNotFoundError("Registration not found")

    logger.info(
        "registration_removed",
        program_id=program_id,
        participant_id=participant_id,
    )
