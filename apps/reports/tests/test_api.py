import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestExpenseReportApi:
    """Tests for GET /api/reports/expenses/"""

    def test_report(self, official_api_client, expenses, program):
        response = official_api_client.get(reverse('reports:expense-report'), {'program': program.id})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_expenses'] == '4200.50'
        assert response.data['remaining_budget'] == '20799.50'
        assert response.data['by_program'][0]['program_name'] == program.name

    def test_inverted_range(self, official_api_client, expenses):
        response = official_api_client.get(reverse('reports:expense-report'), {
            'start_date': '2026-05-01',
            'end_date': '2026-04-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'error': 'Start date must be before end date'}

    def test_unknown_program(self, official_api_client):
        response = official_api_client.get(reverse('reports:expense-report'), {'program': 9999})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {'error': 'Program with ID 9999 not found'}

    def test_youth_forbidden(self, youth_client):
        response = youth_client.get(reverse('reports:expense-report'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_unauthorized(self, api_client):
        response = api_client.get(reverse('reports:expense-report'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMonthlyAndDashboardApi:

    def test_monthly_requires_year(self, official_api_client):
        response = official_api_client.get(reverse('reports:monthly-expenses'))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_monthly(self, official_api_client, expenses):
        response = official_api_client.get(reverse('reports:monthly-expenses'), {'year': 2026})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 12
        assert response.data[3]['total'] == '1650.50'

    def test_dashboard(self, official_api_client, expenses, program):
        response = official_api_client.get(reverse('reports:dashboard'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_spent'] == '4650.50'
        assert response.data['upcoming_programs'][0]['id'] == program.id
