"""
Fixtures shared by the programs, participants, registrations, expenses
and reports test suites. App conftests add their own on top.
"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.models import User, UserRole
from apps.expenses.models import Expense, ExpenseCategory
from apps.participants.models import Participant
from apps.programs.models import Program, ProgramStatus


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def youth_user(db):
    """Create and return a regular (youth) user."""
    return User.objects.create_user(
        email='youth@example.com',
        username='youth',
        password='TestPass123!',
        display_name='Juan Dela Cruz',
    )


@pytest.fixture
def other_user(db):
    """Create and return a second regular user."""
    return User.objects.create_user(
        email='other@example.com',
        username='other',
        password='TestPass123!',
        display_name='Maria Santos',
    )


@pytest.fixture
def sk_official(db):
    """Create and return an SK official."""
    return User.objects.create_user(
        email='official@example.com',
        username='official',
        password='TestPass123!',
        display_name='SK Chair',
        role=UserRole.SK_OFFICIAL,
    )


@pytest.fixture
def youth_client(youth_user):
    """Return API client authenticated as a youth user."""
    return _client_for(youth_user)


@pytest.fixture
def official_api_client(sk_official):
    """Return API client authenticated as an SK official."""
    return _client_for(sk_official)


@pytest.fixture
def program(db, sk_official):
    """Create and return an active program."""
    return Program.objects.create(
        name='Basketball League',
        description='Inter-purok basketball tournament',
        date=date.today() + timedelta(days=14),
        time='8:00 AM',
        location='Barangay Covered Court',
        budget=Decimal('25000.00'),
        status=ProgramStatus.ACTIVE,
        created_by=sk_official,
    )


@pytest.fixture
def other_program(db):
    """Create and return a program in planning."""
    return Program.objects.create(
        name='Coastal Cleanup',
        description='Beach cleanup drive',
        date=date.today() + timedelta(days=30),
        time='6:00 AM',
        location='Municipal Beach',
        budget=Decimal('5000.00'),
        status=ProgramStatus.PLANNING,
    )


@pytest.fixture
def youth_participant(db, youth_user):
    """Participant profile linked to youth_user."""
    return Participant.objects.create(
        user=youth_user,
        first_name='Juan',
        last_name='Dela Cruz',
        age=19,
        contact='09171234567',
        email=youth_user.email,
        address='Purok 3',
    )


@pytest.fixture
def walk_in_participant(db):
    """Participant without a login."""
    return Participant.objects.create(
        first_name='Ana',
        last_name='Reyes',
        age=17,
        contact='09181112222',
        address='Purok 1',
    )


@pytest.fixture
def expenses(db, program, other_program, sk_official):
    """Three expenses across two programs."""
    return [
        Expense.objects.create(
            program=program,
            description='Basketballs',
            amount=Decimal('3000.00'),
            date=date(2026, 3, 10),
            category=ExpenseCategory.EQUIPMENT,
            recorded_by=sk_official,
        ),
        Expense.objects.create(
            program=program,
            description='Snacks',
            amount=Decimal('1200.50'),
            date=date(2026, 4, 2),
            category=ExpenseCategory.FOOD,
        ),
        Expense.objects.create(
            program=other_program,
            description='Trash bags',
            amount=Decimal('450.00'),
            date=date(2026, 4, 20),
            category=ExpenseCategory.SUPPLIES,
        ),
    ]
