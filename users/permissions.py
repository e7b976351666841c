from rest_framework import permissions


def _is_staff_account(user):
    # Player principals (token-authenticated athletes) carry no role helpers
    return bool(user and user.is_authenticated and hasattr(user, 'is_admin'))


class IsAdmin(permissions.BasePermission):
    """
    Allows access only to 'ADMIN' or superuser accounts.
    """
    def has_permission(self, request, view):
        return _is_staff_account(request.user) and request.user.is_admin()

class IsCoachOrAdmin(permissions.BasePermission):
    """
    Allows access only to 'COACH' or 'ADMIN' users.
    """
    def has_permission(self, request, view):
        user = request.user
        return _is_staff_account(user) and (user.is_coach() or user.is_admin())
