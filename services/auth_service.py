"""
Authentication service for Tubely
Resolves bearer tokens to user identities
"""

from django.contrib.auth import get_user_model
from rest_framework.authentication import BaseAuthentication
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from core.exceptions import AuthError


def get_bearer_token(headers):
    """Extract the token from an ``Authorization: Bearer <token>`` header"""
    header = headers.get('Authorization', '')
    parts = header.split()
    if len(parts) != 2 or parts[0] not in api_settings.AUTH_HEADER_TYPES:
        raise AuthError('Missing or malformed Authorization header.')
    return parts[1]


class AuthenticationService:
    """Validates access tokens signed with the configured JWT secret"""

    def resolve_identity(self, token):
        """Return the user id carried by a valid access token"""
        if not token:
            raise AuthError('Missing auth token.')

        try:
            access = AccessToken(token)
        except TokenError as exc:
            raise AuthError('Invalid auth token.') from exc

        user_id = access.get(api_settings.USER_ID_CLAIM)
        if user_id is None:
            raise AuthError('Invalid auth token.')
        return user_id

    def get_user(self, user_id):
        User = get_user_model()
        try:
            user = User.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except User.DoesNotExist:
            raise AuthError('Invalid auth token.')

        if not user.is_active:
            raise AuthError('Invalid auth token.')
        return user

    def issue_access_token(self, user):
        return str(AccessToken.for_user(user))


class BearerTokenAuthentication(BaseAuthentication):
    """
    DRF authenticator backed by ``AuthenticationService``.

    A request without a usable bearer token is rejected outright rather than
    treated as anonymous.
    """

    service_class = AuthenticationService

    def authenticate(self, request):
        service = self.service_class()
        token = get_bearer_token(request.headers)
        user = service.get_user(service.resolve_identity(token))
        return user, token

    def authenticate_header(self, request):
        return f'{api_settings.AUTH_HEADER_TYPES[0]} realm="api"'
