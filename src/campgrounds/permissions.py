from rest_framework import permissions


def is_admin(user):
    return bool(user and user.is_authenticated and getattr(user, "is_admin", False))


class IsAdminRole(permissions.BasePermission):
    """Admin role only."""
    def has_permission(self, request, view):
        return is_admin(request.user)
