from rest_framework.permissions import BasePermission, SAFE_METHODS

from .session import is_mess_admin


class IsMessAdmin(BasePermission):
    def has_permission(self, request, view):
        return is_mess_admin(request.user)


class IsMessAdminOrReadOnly(BasePermission):
    """
    Allow unrestricted access for safe methods (GET, HEAD, OPTIONS).
    Allow POST, PUT, PATCH, DELETE only for staff or the Mess Admin group.
    """
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_mess_admin(request.user)


class IsOwnerOrMessAdmin(BasePermission):
    def has_object_permission(self, request, view, obj):
        if is_mess_admin(request.user):
            return True
        return getattr(obj, "user_id", None) == request.user.id
