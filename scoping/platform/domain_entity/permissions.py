"""DRF permission classes for the domain entity configuration screens."""

from rest_framework import permissions

from .constants import ADMINISTER_PERMISSION


class CanAdministerDomains(permissions.BasePermission):
    """Check if user holds the "administer domains" permission."""

    message = "You do not have permission to administer domains."

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        return request.user.is_superuser or request.user.has_perm(ADMINISTER_PERMISSION)
