"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidTokenError,
    UserNotFoundError,
)
from .user_registration import register_user, check_approval_code
from .user_authentication import authenticate_user
from .password_reset import request_password_reset, confirm_password_reset

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidTokenError',
    'UserNotFoundError',
    # Services
    'register_user',
    'check_approval_code',
    'authenticate_user',
    'request_password_reset',
    'confirm_password_reset',
]
