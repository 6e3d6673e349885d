"""
Registration status reconciliation.

Ensures exactly one registration row exists for a (program, participant)
pair and that it carries the requested status. The write is a single
``update_or_create`` keyed by the pair; the unique constraint on the table
guarantees it touches one row. A verification read follows the write and
its result is reported separately, so callers can tell when a concurrent
writer got in between.
"""

from dataclasses import dataclass
from datetime import datetime

from django.db import transaction
from django.utils import timezone

from apps.participants.models import Participant
from apps.programs.models import Program
from apps.programs.services.exceptions import (
    ValidationError,
    InvalidStatusError,
    NotFoundError,
    ProgramNotFoundError,
)
from apps.programs.services.persistence import persistence_guard
from apps.registrations.models import Registration, RegistrationStatus
from config.logging_setup import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StatusUpdateResult:
    """Outcome of a status change."""

    status: str
    record: Registration
    current_status: str
    created: bool
    timestamp: datetime

    @property
    def verified(self) -> bool:
        return self.current_status == self.status

    @property
    def message(self) -> str:
        return f"Registration status updated to {self.status}"


def validate_status(status) -> str:
    """
    Raises:
        InvalidStatusError: If status is not one of the registration statuses
    """
    if status not in RegistrationStatus.values:
        raise InvalidStatusError(
            f"Invalid status: {status}. "
            f"Must be one of: {', '.join(RegistrationStatus.values)}"
        )
    return status


def set_registration_status(*, program_id, participant_id, status) -> StatusUpdateResult:
    """
    Set the status of a participant's registration, creating it if needed.

    Args:
        program_id: ID of the program
        participant_id: ID of the participant
        status: One of Approved, Pending, Rejected, Waitlisted

    Returns:
        StatusUpdateResult with the requested status, the written record and
        the status read back afterwards

    Raises:
        ValidationError: If any argument is missing
        InvalidStatusError: If status is unknown (nothing is written)
        ProgramNotFoundError: If program doesn't exist
        NotFoundError: If participant doesn't exist
        PersistenceError: If the write or the verification read fails
    """
    if not program_id or not participant_id or not status:
        raise ValidationError("Missing required fields: program_id, participant_id, status")

    validate_status(status)

    context = {'program_id': program_id, 'participant_id': participant_id}

    with persistence_guard("check registration", **context):
        program_exists = Program.objects.filter(id=program_id).exists()
        participant_exists = Participant.objects.filter(id=participant_id).exists()
    if not program_exists:
        raise ProgramNotFoundError(f"Program with ID {program_id} not found")
    if not participant_exists:
        raise NotFoundError(f"Participant with ID {participant_id} not found")

    with persistence_guard("update registration", **context):
        with transaction.atomic():
            record, created = Registration.objects.update_or_create(
                program_id=program_id,
                participant_id=participant_id,
                defaults={'status': status},
            )

    with persistence_guard("verify registration", **context):
        current_status = (
            Registration.objects
            .filter(program_id=program_id, participant_id=participant_id)
            .values_list('status', flat=True)
            .first()
        )

    result = StatusUpdateResult(
        status=status,
        record=record,
        current_status=current_status,
        created=created,
        timestamp=timezone.now(),
    )

    if result.verified:
        logger.info(
            "registration_status_set",
            status=status,
            created=created,
            registration_id=record.id,
            **context,
        )
    else:
        logger.warning(
            "registration_status_mismatch",
            requested=status,
            current_status=current_status,
            registration_id=record.id,
            **context,
        )

    return result
