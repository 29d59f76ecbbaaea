# authentication/authentication.py
import logging

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

logger = logging.getLogger(__name__)


def issue_token(user):
    """Sign a fresh bearer token for ``user``."""
    return str(AccessToken.for_user(user))


class ActiveUserJWTAuthentication(JWTAuthentication):
    """
    Bearer-token authentication that only resolves active accounts.

    Malformed, expired or forged tokens and tokens for unknown users all fail
    with "Invalid token."; a deactivated account fails with its own message.
    On success DRF exposes the account as ``request.user`` and the token as
    ``request.auth``.
    """

    def get_validated_token(self, raw_token):
        try:
            return super().get_validated_token(raw_token)
        except InvalidToken:
            raise AuthenticationFailed("Invalid token.", code="token_not_valid")

    def get_user(self, validated_token):
        try:
            user_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise AuthenticationFailed("Invalid token.", code="token_not_valid")

        try:
            user = self.user_model.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except self.user_model.DoesNotExist:
            raise AuthenticationFailed("Invalid token.", code="user_not_found")

        if not user.is_active:
            logger.info(f"Rejected token for deactivated user {user.id}")
            raise AuthenticationFailed("Account is deactivated.", code="user_inactive")

        return user


class OptionalJWTAuthentication(ActiveUserJWTAuthentication):
    """Attach the caller when a valid token is sent; stay anonymous otherwise."""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except AuthenticationFailed:
            return None
