"""
Service layer unit tests for registrations app.

Tests cover:
- Status reconciliation (create, update, idempotence, verification read)
- Validation before any write
- Persistence failures surfacing as PersistenceError
- Official and self-service registration
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import patch
from django.db import DatabaseError

from apps.participants.models import Participant
from apps.programs.models import Program
from apps.programs.services.exceptions import (
    ValidationError,
    InvalidStatusError,
    NotFoundError,
    ProgramNotFoundError,
    ParticipantProfileNotFoundError,
    RegistrationNotFoundError,
    AlreadyRegisteredError,
    PersistenceError,
)
from apps.registrations.models import Registration, RegistrationStatus
from apps.registrations.services import (
    set_registration_status,
    register_participant,
    request_registration,
    list_registrations,
    status_counts,
    get_user_registrations,
    remove_registration,
)


@pytest.fixture
def program_7(db):
    return Program.objects.create(
        id=7,
        name='Youth Summit',
        description='Leadership summit',
        date=date(2026, 11, 20),
        time='9:00 AM',
        location='Municipal Gym',
        budget=Decimal('10000.00'),
    )


@pytest.fixture
def participant_42(db):
    return Participant.objects.create(
        id=42,
        first_name='Carlo',
        last_name='Mendoza',
        age=22,
        contact='09223334444',
        address='Purok 4',
    )


# =============================================================================
# Status Reconciliation
# =============================================================================

@pytest.mark.django_db
class TestSetRegistrationStatus:

    def test_scenario_create_then_update_same_row(self, program_7, participant_42):
        first = set_registration_status(program_id=7, participant_id=42, status='Approved')

        assert first.created is True
        assert first.current_status == 'Approved'
        assert first.verified
        row = Registration.objects.get(program_id=7, participant_id=42)
        assert row.status == 'Approved'

        second = set_registration_status(program_id=7, participant_id=42, status='Rejected')

        assert second.created is False
        assert second.current_status == 'Rejected'
        assert second.record.id == row.id
        assert Registration.objects.filter(program_id=7, participant_id=42).count() == 1
        assert Registration.objects.get(program_id=7, participant_id=42).status == 'Rejected'

    @pytest.mark.parametrize('value', RegistrationStatus.values)
    def test_idempotent(self, program, walk_in_participant, value):
        for _ in range(2):
            result = set_registration_status(
                program_id=program.id,
                participant_id=walk_in_participant.id,
                status=value,
            )
            assert result.current_status == value
            assert result.status == value

        assert Registration.objects.filter(program=program, participant=walk_in_participant).count() == 1
        assert Registration.objects.get(program=program).status == value

    def test_update_refreshes_updated_at(self, program, walk_in_participant):
        first = set_registration_status(
            program_id=program.id, participant_id=walk_in_participant.id, status='Pending'
        )
        second = set_registration_status(
            program_id=program.id, participant_id=walk_in_participant.id, status='Approved'
        )

        assert second.record.updated_at >= first.record.updated_at
        assert second.timestamp >= first.timestamp

    def test_invalid_status_writes_nothing(self, program, walk_in_participant):
        with pytest.raises(InvalidStatusError) as exc_info:
            set_registration_status(
                program_id=program.id,
                participant_id=walk_in_participant.id,
                status='Denied',
            )

        assert str(exc_info.value) == (
            'Invalid status: Denied. Must be one of: Approved, Pending, Rejected, Waitlisted'
        )
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.status_code == 400
        assert Registration.objects.count() == 0

    def test_invalid_status_does_not_touch_existing(self, program, walk_in_participant):
        Registration.objects.create(
            program=program, participant=walk_in_participant, status=RegistrationStatus.APPROVED
        )

        with pytest.raises(InvalidStatusError):
            set_registration_status(
                program_id=program.id, participant_id=walk_in_participant.id, status='approved'
            )

        assert Registration.objects.get(program=program).status == RegistrationStatus.APPROVED

    @pytest.mark.parametrize('kwargs', [
        {'program_id': None, 'participant_id': 1, 'status': 'Approved'},
        {'program_id': 1, 'participant_id': None, 'status': 'Approved'},
        {'program_id': 1, 'participant_id': 1, 'status': ''},
    ])
    def test_missing_fields(self, db, kwargs):
        with pytest.raises(ValidationError, match='Missing required fields: program_id, participant_id, status'):
            set_registration_status(**kwargs)

    def test_unknown_program(self, walk_in_participant):
        with pytest.raises(ProgramNotFoundError):
            set_registration_status(program_id=9999, participant_id=walk_in_participant.id, status='Pending')

    def test_unknown_participant(self, program):
        with pytest.raises(NotFoundError):
            set_registration_status(program_id=program.id, participant_id=9999, status='Pending')

    def test_write_failure(self, program, walk_in_participant):
        with patch.object(
            Registration.objects, 'update_or_create', side_effect=DatabaseError('server closed the connection')
        ):
            with pytest.raises(PersistenceError) as exc_info:
                set_registration_status(
                    program_id=program.id,
                    participant_id=walk_in_participant.id,
                    status='Approved',
                )

        assert str(exc_info.value) == 'Failed to update registration: server closed the connection'
        assert exc_info.value.status_code == 500

    def test_check_failure(self, program, walk_in_participant):
        with patch.object(Program.objects, 'filter', side_effect=DatabaseError('timeout expired')):
            with pytest.raises(PersistenceError, match='Failed to check registration: timeout expired'):
                set_registration_status(
                    program_id=program.id,
                    participant_id=walk_in_participant.id,
                    status='Approved',
                )

        assert Registration.objects.count() == 0

    def test_reports_concurrent_overwrite(self, program, walk_in_participant):
        """The verification read reports what is stored, not what was asked for."""
        Registration.objects.create(
            program=program, participant=walk_in_participant, status=RegistrationStatus.PENDING
        )
        real_update_or_create = Registration.objects.update_or_create

        def racing_update_or_create(**kwargs):
            result = real_update_or_create(**kwargs)
            Registration.objects.filter(program=program).update(status=RegistrationStatus.WAITLISTED)
            return result

        with patch.object(Registration.objects, 'update_or_create', side_effect=racing_update_or_create):
            result = set_registration_status(
                program_id=program.id,
                participant_id=walk_in_participant.id,
                status='Approved',
            )

        assert result.status == 'Approved'
        assert result.current_status == 'Waitlisted'
        assert not result.verified
        assert result.message == 'Registration status updated to Approved'


# =============================================================================
# Registration Management
# =============================================================================

@pytest.mark.django_db
class TestRegisterParticipant:

    def test_register_is_approved(self, program, walk_in_participant):
        registration = register_participant(program_id=program.id, participant_id=walk_in_participant.id)

        assert registration.status == RegistrationStatus.APPROVED

    def test_register_twice(self, program, walk_in_participant):
        register_participant(program_id=program.id, participant_id=walk_in_participant.id)

        with pytest.raises(AlreadyRegisteredError, match='already registered in this program'):
            register_participant(program_id=program.id, participant_id=walk_in_participant.id)

        assert Registration.objects.count() == 1

    def test_register_unknown_participant(self, program):
        with pytest.raises(NotFoundError):
            register_participant(program_id=program.id, participant_id=9999)

    def test_register_unknown_program(self, walk_in_participant):
        with pytest.raises(ProgramNotFoundError):
            register_participant(program_id=9999, participant_id=walk_in_participant.id)


@pytest.mark.django_db
class TestRequestRegistration:

    def test_request_is_pending(self, youth_user, youth_participant, program):
        registration = request_registration(user=youth_user, program_id=program.id)

        assert registration.status == RegistrationStatus.PENDING
        assert registration.participant == youth_participant

    def test_request_without_profile(self, other_user, program):
        with pytest.raises(ParticipantProfileNotFoundError):
            request_registration(user=other_user, program_id=program.id)

    def test_request_twice(self, youth_user, youth_participant, program):
        request_registration(user=youth_user, program_id=program.id)

        with pytest.raises(AlreadyRegisteredError):
            request_registration(user=youth_user, program_id=program.id)

    def test_user_registrations(self, youth_user, youth_participant, walk_in_participant, program):
        Registration.objects.create(program=program, participant=youth_participant)
        Registration.objects.create(program=program, participant=walk_in_participant)

        assert [r.participant for r in get_user_registrations(user=youth_user)] == [youth_participant]


@pytest.mark.django_db
class TestQueue:

    def test_list_and_counts(self, program, other_program, youth_participant, walk_in_participant):
        Registration.objects.create(program=program, participant=youth_participant,
                                    status=RegistrationStatus.PENDING)
        Registration.objects.create(program=program, participant=walk_in_participant,
                                    status=RegistrationStatus.WAITLISTED)
        Registration.objects.create(program=other_program, participant=walk_in_participant,
                                    status=RegistrationStatus.PENDING)

        assert list_registrations(status='Pending').count() == 2
        assert list_registrations(program_id=program.id).count() == 2
        assert list_registrations(search='ana').count() == 2
        assert status_counts() == {
            'Approved': 0, 'Pending': 2, 'Rejected': 0, 'Waitlisted': 1, 'total': 3,
        }
        assert status_counts(program_id=other_program.id)['total'] == 1

    def test_list_invalid_status(self, db):
        with pytest.raises(InvalidStatusError):
            list_registrations(status='Denied')

    def test_remove(self, program, walk_in_participant):
        Registration.objects.create(program=program, participant=walk_in_participant)

        remove_registration(program_id=program.id, participant_id=walk_in_participant.id)
        assert Registration.objects.count() == 0

        with pytest.raises(RegistrationNotFoundError):
            remove_registration(program_id=program.id, participant_id=walk_in_participant.id)
