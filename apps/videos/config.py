"""Immutable ingestion configuration, built once from Django settings."""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from django.conf import settings

DEFAULT_MAX_UPLOAD_BYTES = 1 << 30


@dataclass(frozen=True)
class IngestionConfig:
    """Everything the upload pipeline needs to know about its environment."""

    bucket: str
    region: str
    public_origin: str
    endpoint_url: Optional[str] = None
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    staging_dir: str = tempfile.gettempdir()
    ffmpeg_binary: str = 'ffmpeg'
    ffprobe_binary: str = 'ffprobe'
    processing_timeout: float = 600.0

    @classmethod
    def from_settings(cls) -> "IngestionConfig":
        return cls(
            bucket=settings.AWS_S3_BUCKET_NAME,
            region=settings.AWS_S3_REGION_NAME,
            public_origin=settings.S3_CF_DISTRIBUTION.rstrip('/'),
            endpoint_url=settings.AWS_S3_ENDPOINT_URL or None,
            max_upload_bytes=settings.VIDEO_MAX_UPLOAD_BYTES,
            staging_dir=settings.VIDEO_STAGING_DIR or tempfile.gettempdir(),
            ffmpeg_binary=settings.FFMPEG_BINARY,
            ffprobe_binary=settings.FFPROBE_BINARY,
            processing_timeout=settings.VIDEO_PROCESSING_TIMEOUT,
        )

    def public_url(self, key: str) -> str:
        return f"{self.public_origin}/{key}"


@lru_cache(maxsize=1)
def get_ingestion_config() -> IngestionConfig:
    """Return the process-wide ingestion config."""

    return IngestionConfig.from_settings()
