"""
Service layer unit tests for participants app.
"""

import pytest
from unittest.mock import patch

from apps.participants.models import Participant
from apps.participants.services import (
    create_participant,
    update_participant,
    delete_participant,
    get_participant_for_user,
    create_participant_from_user,
    search_participants,
    get_participant_programs,
    find_potential_duplicates,
    ParticipantValidationError,
    DuplicateParticipantError,
    ParticipantNotFoundError,
)
from apps.registrations.models import Registration, RegistrationStatus


def _participant_data(**overrides):
    data = {
        'first_name': 'Pedro',
        'last_name': 'Penduko',
        'age': 21,
        'contact': '0917 555 0000',
        'address': 'Purok 5',
    }
    data.update(overrides)
    return data


@pytest.mark.django_db
class TestCreateParticipant:

    def test_create_with_programs_registers_approved(self, program, other_program):
        participant = create_participant(
            **_participant_data(program_ids=[program.id, other_program.id])
        )

        statuses = set(
            Registration.objects.filter(participant=participant).values_list('program_id', 'status')
        )
        assert statuses == {
            (program.id, RegistrationStatus.APPROVED),
            (other_program.id, RegistrationStatus.APPROVED),
        }
        assert participant.name_normalized == 'pedro penduko'

    def test_missing_fields(self, db):
        with pytest.raises(ParticipantValidationError) as exc_info:
            create_participant(**_participant_data(contact='', address=' '))

        assert str(exc_info.value) == 'Missing required fields: contact, address'

    def test_missing_age(self, db):
        with pytest.raises(ParticipantValidationError, match='age'):
            create_participant(**_participant_data(age=None))

    def test_negative_age(self, db):
        with pytest.raises(ParticipantValidationError, match='Age must be a positive number'):
            create_participant(**_participant_data(age=-1))

    def test_zero_age_allowed(self, db):
        assert create_participant(**_participant_data(age=0)).age == 0

    def test_duplicate_name_and_contact(self, db):
        create_participant(**_participant_data())

        with pytest.raises(DuplicateParticipantError):
            create_participant(**_participant_data(first_name=' PEDRO ', contact='09175550000'))

        assert Participant.objects.count() == 1

    def test_same_name_different_contact_allowed(self, db):
        create_participant(**_participant_data())
        create_participant(**_participant_data(contact='09990001111'))

        assert Participant.objects.count() == 2

    def test_unknown_program_creates_nothing(self, program):
        with pytest.raises(ParticipantValidationError, match='Unknown program IDs: 9999'):
            create_participant(**_participant_data(program_ids=[program.id, 9999]))

        assert Participant.objects.count() == 0
        assert Registration.objects.count() == 0

    def test_registration_failure_rolls_back_participant(self, program):
        with patch.object(Registration.objects, 'bulk_create', side_effect=RuntimeError('boom')):
            with pytest.raises(RuntimeError):
                create_participant(**_participant_data(program_ids=[program.id]))

        assert Participant.objects.count() == 0


@pytest.mark.django_db
class TestUpdateParticipant:

    def test_update_fields(self, walk_in_participant):
        updated = update_participant(participant_id=walk_in_participant.id, age=18, address='Purok 2')

        assert updated.age == 18
        assert updated.address == 'Purok 2'

    def test_sync_programs(self, walk_in_participant, program, other_program):
        Registration.objects.create(
            program=program,
            participant=walk_in_participant,
            status=RegistrationStatus.APPROVED,
        )

        update_participant(participant_id=walk_in_participant.id, program_ids=[other_program.id])

        rows = list(
            Registration.objects.filter(participant=walk_in_participant).values_list('program_id', 'status')
        )
        assert rows == [(other_program.id, RegistrationStatus.PENDING)]

    def test_sync_keeps_existing_status(self, walk_in_participant, program, other_program):
        Registration.objects.create(
            program=program,
            participant=walk_in_participant,
            status=RegistrationStatus.WAITLISTED,
        )

        update_participant(
            participant_id=walk_in_participant.id,
            program_ids=[program.id, other_program.id],
        )

        assert Registration.objects.get(
            participant=walk_in_participant, program=program
        ).status == RegistrationStatus.WAITLISTED
        assert Registration.objects.get(
            participant=walk_in_participant, program=other_program
        ).status == RegistrationStatus.PENDING

    def test_without_program_ids_leaves_registrations(self, walk_in_participant, program):
        Registration.objects.create(program=program, participant=walk_in_participant)

        update_participant(participant_id=walk_in_participant.id, contact='0900')

        assert Registration.objects.filter(participant=walk_in_participant).count() == 1

    def test_negative_age(self, walk_in_participant):
        with pytest.raises(ParticipantValidationError):
            update_participant(participant_id=walk_in_participant.id, age=-3)

    def test_rename_into_duplicate(self, walk_in_participant, youth_participant):
        with pytest.raises(DuplicateParticipantError):
            update_participant(
                participant_id=walk_in_participant.id,
                first_name=youth_participant.first_name,
                last_name=youth_participant.last_name,
                contact=youth_participant.contact,
            )

    def test_missing(self, db):
        with pytest.raises(ParticipantNotFoundError):
            update_participant(participant_id=9999, age=3)


@pytest.mark.django_db
class TestParticipantLookup:

    def test_delete(self, walk_in_participant, program):
        Registration.objects.create(program=program, participant=walk_in_participant)

        delete_participant(participant_id=walk_in_participant.id)

        assert not Participant.objects.filter(id=walk_in_participant.id).exists()
        assert Registration.objects.count() == 0

    def test_delete_missing(self, db):
        with pytest.raises(ParticipantNotFoundError):
            delete_participant(participant_id=9999)

    def test_get_for_user(self, youth_user, youth_participant):
        assert get_participant_for_user(user=youth_user) == youth_participant

    def test_get_for_user_without_profile(self, other_user):
        with pytest.raises(ParticipantNotFoundError, match='Participant profile not found'):
            get_participant_for_user(user=other_user)

    def test_create_from_user(self, other_user):
        participant, created = create_participant_from_user(user=other_user)

        assert created is True
        assert participant.user == other_user
        assert participant.first_name == 'Maria'
        assert participant.last_name == 'Santos'
        assert participant.email == other_user.email
        assert participant.age == 0

    def test_create_from_user_returns_existing(self, youth_user, youth_participant):
        participant, created = create_participant_from_user(user=youth_user)

        assert created is False
        assert participant == youth_participant
        assert Participant.objects.filter(user=youth_user).count() == 1

    def test_search(self, youth_participant, walk_in_participant, program):
        Registration.objects.create(program=program, participant=walk_in_participant)

        assert list(search_participants(search='dela')) == [youth_participant]
        assert list(search_participants(program_id=program.id)) == [walk_in_participant]

    def test_programs(self, walk_in_participant, program):
        Registration.objects.create(program=program, participant=walk_in_participant)

        regs = list(get_participant_programs(participant_id=walk_in_participant.id))

        assert [r.program for r in regs] == [program]


@pytest.mark.django_db
class TestFindPotentialDuplicates:

    def test_exact_match(self, youth_participant):
        matches = find_potential_duplicates(first_name='juan', last_name='DELA CRUZ')

        assert matches == [(youth_participant, 100, 'exact')]

    def test_fuzzy_name(self, youth_participant):
        matches = find_potential_duplicates(first_name='Juan', last_name='Dela Cruzz')

        assert len(matches) == 1
        participant, score, match_type = matches[0]
        assert participant == youth_participant
        assert match_type == 'fuzzy_name'
        assert 80 <= score < 100

    def test_same_contact_boosts_score(self, youth_participant):
        # Name alone scores below the threshold
        assert find_potential_duplicates(first_name='Juan', last_name='Cruz') == []

        matches = find_potential_duplicates(
            first_name='Juan', last_name='Cruz', contact='0917-123-4567'
        )

        assert len(matches) == 1
        assert matches[0][0] == youth_participant
        assert matches[0][2] == 'fuzzy_both'

    def test_unrelated_name(self, youth_participant):
        assert find_potential_duplicates(first_name='Zed', last_name='Quinto') == []
