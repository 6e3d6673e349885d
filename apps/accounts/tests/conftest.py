import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Create and return a regular (youth) user."""
    return User.objects.create_user(
        email='testuser@example.com',
        username='testuser',
        password='TestPass123!',
        display_name='Test User',
    )


@pytest.fixture
def official(db):
    """Create and return an SK official."""
    return User.objects.create_user(
        email='official@example.com',
        username='skofficial',
        password='TestPass123!',
        display_name='SK Official',
        role=UserRole.SK_OFFICIAL,
    )


@pytest.fixture
def user_inactive(db):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        username='inactive',
        password='TestPass123!',
        display_name='Inactive User',
        is_active=False,
    )


@pytest.fixture
def authenticated_client(api_client, user):
    """Return an authenticated API client using JWT."""
    refresh = RefreshToken.for_user(user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def official_client(api_client, official):
    """Return an API client authenticated as an SK official."""
    refresh = RefreshToken.for_user(official)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def user_with_reset_token(db):
    """Create a user with a password reset token."""
    user = User.objects.create_user(
        email='resetuser@example.com',
        username='resetuser',
        password='OldPass123!',
        display_name='Reset User',
    )
    user.verification_token = 'valid-reset-token-12345'
    user.save()
    return user
