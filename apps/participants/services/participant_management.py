"""
Participant management service.

Creating a participant and registering it for programs happens in one
transaction: either the profile and every registration exist, or none do.
"""

from typing import Iterable, Optional, Tuple

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.participants.models import Participant
from apps.participants.normalization import normalize_text, normalize_contact
from apps.programs.models import Program
from apps.registrations.models import Registration, RegistrationStatus
from config.logging_setup import get_logger

from .exceptions import (
    ParticipantValidationError,
    DuplicateParticipantError,
    ParticipantNotFoundError,
)

logger = get_logger(__name__)

REQUIRED_FIELDS = ('first_name', 'last_name', 'contact', 'address')
UPDATABLE_FIELDS = ('first_name', 'last_name', 'age', 'contact', 'email', 'address')


def _validate_age(age) -> None:
    try:
        if int(age) < 0:
            raise ValueError
    except (TypeError, ValueError):
        raise ParticipantValidationError("Age must be a positive number")


def _resolve_program_ids(program_ids: Iterable) -> set:
    """Return the set of requested program IDs, all of which must exist."""
    requested = {int(pid) for pid in program_ids}
    if not requested:
        return requested

    found = set(Program.objects.filter(id__in=requested).values_list('id', flat=True))
    missing = sorted(requested - found)
    if missing:
        raise ParticipantValidationError(
            f"Unknown program IDs: {', '.join(str(pid) for pid in missing)}"
        )
    return requested


def _find_same_person(first_name, last_name, contact, exclude_id=None) -> Optional[Participant]:
    name_norm = normalize_text(f"{first_name} {last_name}")
    contact_norm = normalize_contact(contact)

    candidates = Participant.objects.filter(name_normalized=name_norm)
    if exclude_id is not None:
        candidates = candidates.exclude(id=exclude_id)

    for candidate in candidates:
        if normalize_contact(candidate.contact) == contact_norm:
            return candidate
    return None


@transaction.atomic
def create_participant(
    *,
    first_name: str,
    last_name: str,
    age: int,
    contact: str,
    address: str,
    email: Optional[str] = None,
    user: Optional[User] = None,
    program_ids: Optional[Iterable[int]] = None
) -> Participant:
    """
    Create a participant and register them for the given programs.

    Registrations created here are Approved: an official entering a
    participant is also vouching for their enrollment.

    Raises:
        ParticipantValidationError: Missing fields, negative age or unknown program
        DuplicateParticipantError: Same name and contact already on file
    """
    values = {
        'first_name': first_name,
        'last_name': last_name,
        'contact': contact,
        'address': address,
    }
    missing = [field for field in REQUIRED_FIELDS if not str(values[field] or '').strip()]
    if age is None or age == '':
        missing.append('age')
    if missing:
        raise ParticipantValidationError(f"Missing required fields: {', '.join(missing)}")

    _validate_age(age)

    if _find_same_person(first_name, last_name, contact):
        raise DuplicateParticipantError(
            "A participant with the same name and contact already exists"
        )

    program_set = _resolve_program_ids(program_ids or [])

    participant = Participant.objects.create(
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        age=int(age),
        contact=contact.strip(),
        email=email or None,
        address=address.strip(),
        user=user,
    )

    Registration.objects.bulk_create([
        Registration(
            program_id=program_id,
            participant=participant,
            status=RegistrationStatus.APPROVED,
        )
        for program_id in sorted(program_set)
    ])

    logger.info(
        "participant_created",
        participant_id=participant.id,
        program_ids=sorted(program_set),
    )
    return participant


def get_participant_by_id(*, participant_id: int) -> Participant:
    """
    Get a participant by ID.

    Raises:
        ParticipantNotFoundError: If participant doesn't exist
    """
    try:
        return Participant.objects.select_related('user').get(id=participant_id)
    except (Participant.DoesNotExist, ValueError, TypeError):
        raise ParticipantNotFoundError(f"Participant with ID {participant_id} not found")


@transaction.atomic
def update_participant(
    *,
    participant_id: int,
    program_ids: Optional[Iterable[int]] = None,
    **fields
) -> Participant:
    """
    Update a participant's profile and optionally synchronize registrations.

    When ``program_ids`` is given, programs not yet registered are added as
    Pending and registrations for programs not listed are removed. Existing
    registrations keep their status.

    Raises:
        ParticipantNotFoundError: If participant doesn't exist
        ParticipantValidationError: Negative age, blank required field or unknown program
        DuplicateParticipantError: Change would collide with another participant
    """
    try:
        participant = Participant.objects.select_for_update().get(id=participant_id)
    except Participant.DoesNotExist:
        raise ParticipantNotFoundError(f"Participant with ID {participant_id} not found")

    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS and v is not None}

    if 'age' in changes:
        _validate_age(changes['age'])
        changes['age'] = int(changes['age'])

    blank = [f for f in REQUIRED_FIELDS if f in changes and not str(changes[f]).strip()]
    if blank:
        raise ParticipantValidationError(f"Missing required fields: {', '.join(blank)}")

    for field, value in changes.items():
        setattr(participant, field, value)

    if changes.keys() & {'first_name', 'last_name', 'contact'}:
        if _find_same_person(participant.first_name, participant.last_name,
                             participant.contact, exclude_id=participant.id):
            raise DuplicateParticipantError(
                "A participant with the same name and contact already exists"
            )

    if changes:
        participant.save(update_fields=[*changes.keys(), 'updated_at'])

    if program_ids is not None:
        wanted = _resolve_program_ids(program_ids)
        current = set(
            Registration.objects
            .filter(participant=participant)
            .values_list('program_id', flat=True)
        )
        to_add = sorted(wanted - current)
        to_remove = sorted(current - wanted)

        if to_remove:
            Registration.objects.filter(
                participant=participant,
                program_id__in=to_remove
            ).delete()

        Registration.objects.bulk_create([
            Registration(
                program_id=program_id,
                participant=participant,
                status=RegistrationStatus.PENDING,
            )
            for program_id in to_add
        ])

        logger.info(
            "participant_registrations_synced",
            participant_id=participant.id,
            added=to_add,
            removed=to_remove,
        )

    return participant


@transaction.atomic
def delete_participant(*, participant_id: int) -> None:
    """
    Delete a participant and their registrations and memberships.

    Raises:
        ParticipantNotFoundError: If participant doesn't exist
    """
    deleted, _ = Participant.objects.filter(id=participant_id).delete()
    if not deleted:
        raise ParticipantNotFoundError(f"Participant with ID {participant_id} not found")

    logger.info("participant_deleted", participant_id=participant_id)


def get_participant_for_user(*, user: User) -> Participant:
    """
    Get the participant profile linked to a user account.

    Raises:
        ParticipantNotFoundError: If the user has no profile
    """
    try:
        return Participant.objects.get(user=user)
    except Participant.DoesNotExist:
        raise ParticipantNotFoundError("Participant profile not found")


@transaction.atomic
def create_participant_from_user(*, user: User) -> Tuple[Participant, bool]:
    """
    Bootstrap a participant profile for a self-service account.

    Returns:
        Tuple of (participant, created). An existing profile is returned
        unchanged with created=False.
    """
    existing = Participant.objects.select_for_update().filter(user=user).first()
    if existing is not None:
        return existing, False

    name = (user.display_name or user.username or user.email.split('@')[0]).split()
    first_name = name[0] if name else ''
    last_name = ' '.join(name[1:])

    participant = Participant.objects.create(
        user=user,
        first_name=first_name,
        last_name=last_name,
        email=user.email,
        age=0,
        contact='',
        address='',
    )

    logger.info("participant_bootstrapped", participant_id=participant.id, user_id=user.id)
    return participant, True


def search_participants(
    *,
    search: Optional[str] = None,
    program_id: Optional[int] = None
) -> QuerySet[Participant]:
    """
    Search and filter participants.

    Args:
        search: Search term for name, contact, email
        program_id: Only participants registered for this program
    """
    queryset = Participant.objects.select_related('user')

    if search:
        queryset = queryset.filter(
            Q(first_name__icontains=search) |
            Q(last_name__icontains=search) |
            Q(name_normalized__icontains=normalize_text(search)) |
            Q(contact__icontains=search) |
            Q(email__icontains=search)
        )

    if program_id:
        queryset = queryset.filter(registrations__program_id=program_id).distinct()

    return queryset


def get_participant_programs(*, participant_id: int) -> QuerySet[Registration]:
    """
    Registrations of a participant with their programs.

    Raises:
        ParticipantNotFoundError: If participant doesn't exist
    """
    if not Participant.objects.filter(id=participant_id).exists():
        raise ParticipantNotFoundError(f"Participant with ID {participant_id} not found")

    return (
        Registration.objects
        .filter(participant_id=participant_id)
        .select_related('program')
        .order_by('program__date')
    )
