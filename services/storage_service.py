"""
Object storage service for Tubely
Publishes finished video artifacts to S3
"""

import logging

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import StorageError

logger = logging.getLogger(__name__)


class UploadCancelled(Exception):
    """Raised from the transfer callback to abort an in-flight upload"""


def create_s3_client(config):
    """Build an S3 client with retries disabled"""
    return boto3.client(
        's3',
        region_name=config.region,
        endpoint_url=config.endpoint_url,
        config=Config(retries={'total_max_attempts': 1, 'mode': 'standard'}),
    )


class S3VideoUploader:
    """Streams files to S3 under a caller-supplied key"""

    def __init__(self, config, client=None):
        self.bucket = config.bucket
        self.client = client if client is not None else create_s3_client(config)

    def upload(self, key, content_type, artifact_path, deadline=None):
        """
        Upload ``artifact_path`` to ``key``.

        The file is streamed from disk by boto3's managed transfer, so large
        videos are never held in memory. The object may only be considered
        durable once this returns.
        """
        if not self.bucket:
            raise StorageError("S3 bucket is not configured")

        def check_deadline(_bytes_transferred):
            if deadline is not None and deadline.expired:
                raise UploadCancelled()

        try:
            check_deadline(0)
            with open(artifact_path, 'rb') as body:
                self.client.upload_fileobj(
                    body,
                    self.bucket,
                    key,
                    ExtraArgs={'ContentType': content_type},
                    Callback=check_deadline,
                )
        except UploadCancelled as exc:
            logger.warning("Upload of %s aborted: request deadline reached", key)
            raise StorageError(f"Upload of {key} aborted: request deadline reached") from exc
        except (BotoCoreError, ClientError, S3UploadFailedError) as exc:
            raise StorageError(f"Failed to upload {key}: {exc}") from exc
        except OSError as exc:
            raise StorageError(f"Could not read {artifact_path}: {exc}") from exc

        logger.info("Uploaded s3://%s/%s", self.bucket, key)
        return {'bucket': self.bucket, 'key': key}
