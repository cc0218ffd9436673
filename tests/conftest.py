"""Shared pytest fixtures for Tubely tests."""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from apps.videos.config import get_ingestion_config


@pytest.fixture(autouse=True)
def reset_ingestion_config():
    """Rebuild the cached ingestion config from the active settings."""
    get_ingestion_config.cache_clear()
    yield
    get_ingestion_config.cache_clear()


@pytest.fixture
def api_client() -> APIClient:
    """Return a DRF API client instance."""
    return APIClient()


@pytest.fixture
def user_factory():
    """Factory wrapper to create users with sensible defaults."""

    def _create_user(**kwargs):
        from tests.factories import UserFactory

        return UserFactory(**kwargs)

    return _create_user


@pytest.fixture
def video_factory():
    """Factory wrapper to create videos for tests."""

    def _create_video(**kwargs):
        from tests.factories import VideoFactory

        return VideoFactory(**kwargs)

    return _create_video


@pytest.fixture
def authenticated_client(api_client, user_factory):
    """Return an API client carrying a bearer token, and its user."""
    user = user_factory()
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
    return api_client, user
