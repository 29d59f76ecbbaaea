# authentication/mixins.py
from rest_framework.permissions import AllowAny

from authentication.authentication import OptionalJWTAuthentication


class OptionalAuthMixin:
    """
    Serve the actions named in ``public_actions`` to anonymous callers.

    For those actions a bearer token is still honoured when valid, but a bad
    or missing token never fails the request. Every other action keeps the
    view's normal authentication and permissions.
    """

    public_actions = ()

    def _current_action(self):
        action = getattr(self, "action", None)
        if action:
            return action
        action_map = getattr(self, "action_map", None) or {}
        request = getattr(self, "request", None)
        if request is None:
            return None
        return action_map.get(request.method.lower())

    def get_authenticators(self):
        if self._current_action() in self.public_actions:
            return [OptionalJWTAuthentication()]
        return super().get_authenticators()

    def get_permissions(self):
        if self._current_action() in self.public_actions:
            return [AllowAny()]
        return super().get_permissions()
