"""User registration service."""

from typing import Optional

from django.conf import settings
from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model
from django.utils.crypto import constant_time_compare

from apps.accounts.models import UserRole
from apps.participants.services import create_participant_from_user
from config.logging_setup import get_logger

from .exceptions import UserRegistrationError

User = get_user_model()
logger = get_logger(__name__)

SELF_SERVICE_ROLES = (UserRole.USER, UserRole.SK_OFFICIAL)


def check_approval_code(role: str, approval_code: Optional[str]) -> None:
    """
    SK officials sign up with the council's approval code.

    Raises:
        UserRegistrationError: Role not open to sign-up, code missing or wrong
    """
    if role not in SELF_SERVICE_ROLES:
        raise UserRegistrationError(f"Role {role} cannot be chosen at registration")

    if role != UserRole.SK_OFFICIAL:
        return

    expected = settings.SK_APPROVAL_CODE
    if not expected:
        raise UserRegistrationError("SK Official registration is not enabled")
    if not approval_code:
        raise UserRegistrationError("Approval code is required for SK Officials")
    if not constant_time_compare(approval_code, expected):
        raise UserRegistrationError("Invalid approval code for SK Officials")


@transaction.atomic
def register_user(
    *,
    email: str,
    username: str,
    password: str,
    display_name: str = "",
    first_name: str = "",
    last_name: str = "",
    role: str = UserRole.USER,
    approval_code: Optional[str] = None
) -> User:
    """
    Register a new self-service account.

    Youth accounts get a participant profile in the same transaction so they
    can join programs right away. Officials need the approval code.

    Args:
        email: User's email address
        username: Unique username
        password: User's password (will be hashed)
        display_name: Optional display name; defaults to first and last name
        first_name: Optional, used for the display name and participant profile
        last_name: Optional, used for the display name and participant profile
        role: ``user`` or ``skofficial``
        approval_code: Required when role is ``skofficial``

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If email or username is taken, or the role
            cannot be granted
    """
    check_approval_code(role, approval_code)

    email = User.objects.normalize_email(email)

    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("Email is already registered")

    if User.objects.filter(username__iexact=username).exists():
        raise UserRegistrationError("Username is already taken")

    if not display_name:
        display_name = f"{first_name} {last_name}".strip()

    try:
        user = User.objects.create_user(
            email=email,
            username=username,
            password=password,
            display_name=display_name,
            role=role,
        )
    except IntegrityError:
        # Concurrent registration with the same email/username
        raise UserRegistrationError("Email or username is already registered")

    if role == UserRole.USER:
        create_participant_from_user(user=user)

    logger.info("user_registered", user_id=user.id, role=user.role)
    return user
