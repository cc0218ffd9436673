"""
Video ingestion pipeline

Takes one uploaded file from an authorized owner through staging, fast-start
remux, aspect classification, key derivation and upload, then records the
public URL on the video. Every temporary file created along the way is
removed before ``publish`` returns or raises.
"""

import logging
import uuid
from contextlib import ExitStack

from django.utils.http import parse_header_parameters

from core.exceptions import NotOwnerError, PersistenceError, ValidationError
from services.process_runner import ProcessRunner
from services.storage_service import S3VideoUploader

from .keys import build_storage_key
from .processing import AspectClassifier, FastStartRemuxer
from .repository import VideoRepository
from .staging import StagingManager

logger = logging.getLogger(__name__)

ACCEPTED_MEDIA_TYPE = 'video/mp4'


def parse_video_id(value):
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise ValidationError('Invalid video id.') from exc


def validate_content_type(content_type):
    """Accept ``video/mp4`` regardless of any ``;``-parameters"""
    media_type, _ = parse_header_parameters(content_type or '')
    if media_type != ACCEPTED_MEDIA_TYPE:
        raise ValidationError('Only video/mp4 is supported.')
    return media_type


class VideoIngestionPipeline:
    """Request-scoped controller for publishing an uploaded video"""

    def __init__(self, config, repository, staging, remuxer, classifier, uploader,
                 key_builder=build_storage_key):
        self.config = config
        self.repository = repository
        self.staging = staging
        self.remuxer = remuxer
        self.classifier = classifier
        self.uploader = uploader
        self.key_builder = key_builder

    @classmethod
    def from_config(cls, config, runner=None, s3_client=None):
        runner = runner or ProcessRunner()
        return cls(
            config=config,
            repository=VideoRepository(),
            staging=StagingManager(config.staging_dir),
            remuxer=FastStartRemuxer(runner, config.ffmpeg_binary),
            classifier=AspectClassifier(runner, config.ffprobe_binary),
            uploader=S3VideoUploader(config, client=s3_client),
        )

    def authorize(self, identity, video_id):
        """Return the video if ``identity`` owns it"""
        video = self.repository.get(parse_video_id(video_id))
        if str(video.user_id) != str(identity):
            logger.warning("User %s attempted to upload to video %s owned by %s",
                           identity, video.pk, video.user_id)
            raise NotOwnerError()
        return video

    def publish(self, video, upload, content_type, deadline=None):
        """Process ``upload`` and point ``video`` at the published copy"""
        validate_content_type(content_type)

        with ExitStack() as stack:
            raw = stack.enter_context(self.staging.staged(upload))
            logger.info("Video %s: staged upload at %s", video.pk, raw.path)

            # Registered before ffmpeg runs so a partial output is cleaned up too
            processed = stack.enter_context(
                self.staging.adopted(self.remuxer.output_path_for(raw.path))
            )
            self.remuxer.remux(raw.path, deadline=deadline)
            logger.info("Video %s: remuxed for fast start", video.pk)

            label = self.classifier.classify(processed.path, deadline=deadline)
            key = self.key_builder(label)
            logger.info("Video %s: classified as %s, uploading to %s", video.pk, label, key)

            self.uploader.upload(key, ACCEPTED_MEDIA_TYPE, processed.path, deadline=deadline)

        url = self.config.public_url(key)
        try:
            self.repository.set_published_url(video.pk, url)
        except PersistenceError:
            logger.error("Video %s: object %s uploaded but not recorded; it is now orphaned",
                         video.pk, key)
            raise

        logger.info("Video %s: published at %s", video.pk, url)
        return url
