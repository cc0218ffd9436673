"""Metadata store adapter used by the upload pipeline."""

import logging

from django.db import DatabaseError
from django.utils import timezone

from core.exceptions import NotFoundError, PersistenceError

from .models import Video

logger = logging.getLogger(__name__)


class VideoRepository:
    """Fetches video records and sets their published URL"""

    def get(self, video_id):
        try:
            return Video.objects.get(pk=video_id)
        except Video.DoesNotExist as exc:
            raise NotFoundError() from exc

    def set_published_url(self, video_id, url):
        try:
            updated = Video.objects.filter(pk=video_id).update(video_url=url, updated_at=timezone.now())
        except DatabaseError as exc:
            raise PersistenceError(f"Could not update video {video_id}: {exc}") from exc

        if updated != 1:
            raise PersistenceError(f"Video {video_id} disappeared before its URL was saved")
        logger.debug("Video %s published at %s", video_id, url)
