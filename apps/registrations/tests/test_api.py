import pytest
from unittest.mock import patch
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status

from apps.registrations.models import Registration, RegistrationStatus


@pytest.mark.django_db
class TestUpdateStatus:
    """Tests for POST /api/registrations/update-status/"""

    @pytest.fixture(autouse=True)
    def _url(self):
        self.url = reverse('registrations:update-status')

    def test_creates_registration(self, official_api_client, program, walk_in_participant):
        response = official_api_client.post(self.url, {
            'program_id': program.id,
            'participant_id': walk_in_participant.id,
            'status': 'Approved',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['message'] == 'Registration status updated to Approved'
        assert response.data['current_status'] == 'Approved'
        assert response.data['data']['program_id'] == program.id
        assert response.data['data']['participant_id'] == walk_in_participant.id
        assert 'timestamp' in response.data

    def test_updates_existing_row(self, official_api_client, program, walk_in_participant):
        Registration.objects.create(program=program, participant=walk_in_participant)

        response = official_api_client.post(self.url, {
            'program_id': program.id,
            'participant_id': walk_in_participant.id,
            'status': 'Waitlisted',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert Registration.objects.get().status == RegistrationStatus.WAITLISTED

    def test_missing_fields(self, official_api_client):
        response = official_api_client.post(self.url, {'program_id': 1}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'Missing required fields: program_id, participant_id, status'}

    def test_invalid_status(self, official_api_client, program, walk_in_participant):
        response = official_api_client.post(self.url, {
            'program_id': program.id,
            'participant_id': walk_in_participant.id,
            'status': 'Denied',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {
            'error': 'Invalid status: Denied. Must be one of: Approved, Pending, Rejected, Waitlisted'
        }
        assert Registration.objects.count() == 0

    @pytest.mark.parametrize('bad_status', [' Approved ', 'approved', ['Approved'], 1])
    def test_status_outside_exact_set(self, official_api_client, program, walk_in_participant, bad_status):
        response = official_api_client.post(self.url, {
            'program_id': program.id,
            'participant_id': walk_in_participant.id,
            'status': bad_status,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'].endswith(
            'Must be one of: Approved, Pending, Rejected, Waitlisted'
        )
        assert Registration.objects.count() == 0

    def test_non_integer_ids(self, official_api_client):
        response = official_api_client.post(self.url, {
            'program_id': 'abc', 'participant_id': 1, 'status': 'Approved'
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_persistence_failure_is_500(self, official_api_client, program, walk_in_participant):
        with patch.object(Registration.objects, 'update_or_create', side_effect=DatabaseError('disk I/O error')):
            response = official_api_client.post(self.url, {
                'program_id': program.id,
                'participant_id': walk_in_participant.id,
                'status': 'Approved',
            }, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {'error': 'Failed to update registration: disk I/O error'}

    def test_youth_forbidden(self, youth_client, program, walk_in_participant):
        response = youth_client.post(self.url, {
            'program_id': program.id,
            'participant_id': walk_in_participant.id,
            'status': 'Approved',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert Registration.objects.count() == 0


@pytest.mark.django_db
class TestRegistrationQueue:
    """Tests for /api/registrations/"""

    def test_queue_with_counts(self, official_api_client, program, youth_participant, walk_in_participant):
        Registration.objects.create(program=program, participant=youth_participant)
        Registration.objects.create(program=program, participant=walk_in_participant,
                                    status=RegistrationStatus.APPROVED)

        response = official_api_client.get(reverse('registrations:registrations'), {'status': 'Pending'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['counts']['total'] == 2
        assert len(response.data['results']) == 1
        assert response.data['results'][0]['participant']['id'] == youth_participant.id

    def test_queue_invalid_status(self, official_api_client):
        response = official_api_client.get(reverse('registrations:registrations'), {'status': 'Denied'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_official_registers_participant(self, official_api_client, program, walk_in_participant):
        body = {'program_id': program.id, 'participant_id': walk_in_participant.id}

        response = official_api_client.post(reverse('registrations:registrations'), body, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == RegistrationStatus.APPROVED

        again = official_api_client.post(reverse('registrations:registrations'), body, format='json')
        assert again.status_code == status.HTTP_400_BAD_REQUEST
        assert again.data == {'error': 'Participant is already registered in this program'}

    def test_remove(self, official_api_client, program, walk_in_participant):
        Registration.objects.create(program=program, participant=walk_in_participant)
        url = reverse('registrations:remove', kwargs={
            'program_id': program.id,
            'participant_id': walk_in_participant.id,
        })

        assert official_api_client.delete(url).status_code == status.HTTP_204_NO_CONTENT
        assert official_api_client.delete(url).status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestSelfService:

    def test_request_and_list_mine(self, youth_client, youth_participant, program):
        response = youth_client.post(reverse('registrations:request'), {'program_id': program.id}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == RegistrationStatus.PENDING

        mine = youth_client.get(reverse('registrations:mine'))
        assert [r['program']['id'] for r in mine.data] == [program.id]

    def test_request_without_profile(self, youth_client, program):
        response = youth_client.post(reverse('registrations:request'), {'program_id': program.id}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Participant profile not found'}
