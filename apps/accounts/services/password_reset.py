"""Password reset service."""

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction
from django.contrib.auth import get_user_model
import secrets

from config.logging_setup import get_logger

from .exceptions import UserNotFoundError, InvalidTokenError

User = get_user_model()
logger = get_logger(__name__)


def send_password_reset_email(user, reset_token: str) -> None:
    """Dispatch the reset link to the user's inbox."""
    reset_link = f"{settings.PASSWORD_RESET_URL}?token={reset_token}"
    send_mail(
        subject="Reset your SK Program Monitoring password",
        message=(
            f"Hello {user.get_display_name()},\n\n"
            f"Use the link below to choose a new password:\n{reset_link}\n\n"
            "If you did not request this, you can ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )


@transaction.atomic
def request_password_reset(*, email: str) -> str:
    """
    Generate password reset token for user and email the reset link.

    The email is sent after the transaction commits.

    Args:
        email: User's email address

    Returns:
        Reset token

    Raises:
        UserNotFoundError: If user does not exist
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email, is_active=True)
        )
    except User.DoesNotExist:
        raise UserNotFoundError(f"No active user with email: {email}")

    reset_token = secrets.token_urlsafe(32)
    user.verification_token = reset_token
    user.save(update_fields=['verification_token'])

    transaction.on_commit(
        lambda: send_password_reset_email(user, reset_token)
    )

    logger.info("password_reset_requested", user_id=user.id)
    return reset_token


@transaction.atomic
def confirm_password_reset(*, token: str, new_password: str) -> User:
    """
    Reset user password with token.

    Args:
        token: Reset token
        new_password: New password

    Returns:
        User instance

    Raises:
        InvalidTokenError: If token is invalid or expired
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(verification_token=token, is_active=True)
        )
    except User.DoesNotExist:
        raise InvalidTokenError("Invalid or expired reset token")

    # Set new password and clear token
    user.set_password(new_password)
    user.verification_token = None
    user.save(update_fields=['password', 'verification_token'])

    logger.info("password_reset_completed", user_id=user.id)
    return user
