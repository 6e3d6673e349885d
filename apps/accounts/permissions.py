from rest_framework import permissions

from .context import AuthContext


class IsOfficial(permissions.BasePermission):
    """
    Permission: User must be an SK official or an administrator.
    """

    message = 'Only SK officials can perform this action.'

    def has_permission(self, request, view):
        return AuthContext.from_request(request).is_official


class IsOfficialOrReadOnly(IsOfficial):
    """
    Permission: Any authenticated user may read, officials may write.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
