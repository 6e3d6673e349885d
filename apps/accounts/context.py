"""
Per-request authentication context.

An ``AuthContext`` carries who is calling and with which role. It is built
for each request from the authenticated principal and handed to the code
that needs identity or role information, so no identity state outlives the
request that produced it.

Lifecycle::

    ctx = AuthContext.from_request(request)   # initialize
    ctx.refresh()                             # re-read role/active flag
    ctx.teardown()                            # forget everything (logout)
"""

from dataclasses import dataclass
from typing import Optional

from django.contrib.auth import get_user_model

from .models import OFFICIAL_ROLES

OFFICIAL_HOME = '/dashboard'
USER_HOME = '/user-dashboard'


@dataclass
class AuthContext:
    user_id: Optional[int] = None
    email: Optional[str] = None
    role: Optional[str] = None
    is_staff: bool = False
    is_logged_in: bool = False

    @classmethod
    def from_request(cls, request) -> 'AuthContext':
        ctx = cls()
        ctx.initialize(getattr(request, 'user', None))
        return ctx

    def initialize(self, user) -> None:
        """Populate the context from an authenticated user (or clear it)."""
        if user is None or not user.is_authenticated or not user.is_active:
            self.teardown()
            return

        self.user_id = user.pk
        self.email = user.email
        self.role = user.role
        self.is_staff = user.is_staff
        self.is_logged_in = True

    def refresh(self) -> None:
        """
        Re-read the user row.

        A user that was deleted or deactivated since the context was built
        is logged out; a changed role is picked up.
        """
        if self.user_id is None:
            self.teardown()
            return

        User = get_user_model()
        user = User.objects.filter(pk=self.user_id).first()
        self.initialize(user)

    def teardown(self) -> None:
        self.user_id = None
        self.email = None
        self.role = None
        self.is_staff = False
        self.is_logged_in = False

    @property
    def is_official(self) -> bool:
        return self.is_logged_in and (self.is_staff or self.role in OFFICIAL_ROLES)

    @property
    def home_path(self) -> Optional[str]:
        """Landing page chosen at login based on role."""
        if not self.is_logged_in:
            return None
        return OFFICIAL_HOME if self.is_official else USER_HOME

    def as_dict(self) -> dict:
        return {
            'user_id': self.user_id,
            'email': self.email,
            'role': self.role,
            'is_logged_in': self.is_logged_in,
            'is_official': self.is_official,
            'home_path': self.home_path,
        }
