# authentication/permissions.py
from rest_framework.permissions import BasePermission
from users.models import Role


class HasRole(BasePermission):
    """
    Allow the request when the caller's role is in ``allowed_roles``.

    Anonymous callers are rejected as unauthenticated (401), known callers with
    another role as forbidden (403).
    """

    allowed_roles = frozenset()
    message = "Insufficient permissions."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return Role(user.role) in self.allowed_roles


def role_required(*roles):
    """Build a ``HasRole`` permission class for the given roles."""
    allowed = frozenset(Role(role) for role in roles)
    name = "Requires" + "Or".join(sorted(role.capitalize() for role in allowed))
    return type(name, (HasRole,), {"allowed_roles": allowed})


IsAdmin = role_required(Role.ADMIN)
IsCounsellorOrAdmin = role_required(Role.COUNSELLOR, Role.ADMIN)

