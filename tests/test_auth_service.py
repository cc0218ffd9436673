"""Tests for bearer-token identity resolution."""

from datetime import timedelta

from django.test import TestCase
from rest_framework.test import APIRequestFactory
from rest_framework_simplejwt.tokens import AccessToken

from core.exceptions import AuthError
from services.auth_service import (
    AuthenticationService,
    BearerTokenAuthentication,
    get_bearer_token,
)
from tests.factories import UserFactory


class AuthenticationServiceTests(TestCase):

    def setUp(self):
        self.service = AuthenticationService()
        self.user = UserFactory()

    def test_resolves_user_id(self):
        token = self.service.issue_access_token(self.user)
        self.assertEqual(str(self.service.resolve_identity(token)), str(self.user.pk))

    def test_missing_token(self):
        with self.assertRaises(AuthError):
            self.service.resolve_identity("")

    def test_garbage_token(self):
        with self.assertRaises(AuthError):
            self.service.resolve_identity("definitely.not.valid")

    def test_expired_token(self):
        token = AccessToken.for_user(self.user)
        token.set_exp(lifetime=-timedelta(minutes=1))
        with self.assertRaises(AuthError):
            self.service.resolve_identity(str(token))

    def test_bearer_header_parsing(self):
        self.assertEqual(get_bearer_token({"Authorization": "Bearer abc.def.ghi"}), "abc.def.ghi")
        for header in ({}, {"Authorization": "abc"}, {"Authorization": "Basic abc"}, {"Authorization": "Bearer"}):
            with self.subTest(header=header):
                with self.assertRaises(AuthError):
                    get_bearer_token(header)


class BearerTokenAuthenticationTests(TestCase):

    def setUp(self):
        self.authenticator = BearerTokenAuthentication()
        self.factory = APIRequestFactory()
        self.user = UserFactory()

    def request_with(self, header=None):
        extra = {} if header is None else {"HTTP_AUTHORIZATION": header}
        return self.factory.post("/api/video_upload/x", **extra)

    def test_authenticates_token_owner(self):
        token = str(AccessToken.for_user(self.user))
        user, raw = self.authenticator.authenticate(self.request_with(f"Bearer {token}"))

        self.assertEqual(user, self.user)
        self.assertEqual(raw, token)

    def test_missing_header_is_rejected(self):
        with self.assertRaises(AuthError):
            self.authenticator.authenticate(self.request_with())

    def test_token_for_deleted_user_is_rejected(self):
        token = str(AccessToken.for_user(self.user))
        self.user.delete()

        with self.assertRaises(AuthError):
            self.authenticator.authenticate(self.request_with(f"Bearer {token}"))

    def test_inactive_user_is_rejected(self):
        token = str(AccessToken.for_user(self.user))
        self.user.is_active = False
        self.user.save()

        with self.assertRaises(AuthError):
            self.authenticator.authenticate(self.request_with(f"Bearer {token}"))

    def test_challenge_header(self):
        self.assertEqual(self.authenticator.authenticate_header(self.request_with()), 'Bearer realm="api"')
