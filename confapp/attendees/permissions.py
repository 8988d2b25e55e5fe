"""Permission classes for attendee and operator endpoints.

Both classes answer 401 rather than 403 on failure: the mobile client treats
any rejected credential as "register again".
"""

from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import BasePermission


class IsRegisteredAttendee(BasePermission):
    def has_permission(self, request, view) -> bool:
        principal = getattr(request, "user", None)
        if getattr(principal, "attendee", None) is None:
            raise NotAuthenticated
        return True


class HasAdminSecret(BasePermission):
    def has_permission(self, request, view) -> bool:
        principal = getattr(request, "user", None)
        if not getattr(principal, "is_admin", False):
            raise NotAuthenticated
        return True
