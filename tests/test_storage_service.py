"""Tests for the S3 uploader."""

import os
import shutil
import tempfile
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError, EndpointConnectionError
from django.test import SimpleTestCase

from apps.videos.config import IngestionConfig
from core.deadline import Deadline
from core.exceptions import StorageError
from services.storage_service import S3VideoUploader, create_s3_client


def make_config(**overrides):
    values = {
        "bucket": "tubely-bucket",
        "region": "us-east-1",
        "public_origin": "https://cdn.example.com",
    }
    values.update(overrides)
    return IngestionConfig(**values)


class S3VideoUploaderTests(SimpleTestCase):

    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmp, ignore_errors=True)
        self.artifact = os.path.join(self.tmp, "clip.mp4.faststart.mp4")
        with open(self.artifact, "wb") as handle:
            handle.write(b"fast start bytes")
        self.client = MagicMock()
        self.uploader = S3VideoUploader(make_config(), client=self.client)

    def test_streams_file_with_content_type(self):
        seen = {}

        def capture(body, bucket, key, ExtraArgs=None, Callback=None):
            seen["is_file"] = hasattr(body, "read") and not isinstance(body, (bytes, bytearray))
            seen["data"] = body.read()

        self.client.upload_fileobj.side_effect = capture

        ack = self.uploader.upload("landscape/abc.mp4", "video/mp4", self.artifact)

        self.assertEqual(ack, {"bucket": "tubely-bucket", "key": "landscape/abc.mp4"})
        args, kwargs = self.client.upload_fileobj.call_args
        self.assertEqual(args[1:], ("tubely-bucket", "landscape/abc.mp4"))
        self.assertEqual(kwargs["ExtraArgs"], {"ContentType": "video/mp4"})
        self.assertTrue(seen["is_file"])
        self.assertEqual(seen["data"], b"fast start bytes")

    def test_client_error_becomes_storage_error(self):
        self.client.upload_fileobj.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}}, "PutObject"
        )
        with self.assertRaises(StorageError):
            self.uploader.upload("other/abc.mp4", "video/mp4", self.artifact)

    def test_transport_error_becomes_storage_error(self):
        self.client.upload_fileobj.side_effect = EndpointConnectionError(endpoint_url="https://s3.amazonaws.com")
        with self.assertRaises(StorageError):
            self.uploader.upload("other/abc.mp4", "video/mp4", self.artifact)

    def test_no_retry_on_failure(self):
        self.client.upload_fileobj.side_effect = ClientError(
            {"Error": {"Code": "SlowDown", "Message": "Slow Down"}}, "PutObject"
        )
        with self.assertRaises(StorageError):
            self.uploader.upload("other/abc.mp4", "video/mp4", self.artifact)
        self.assertEqual(self.client.upload_fileobj.call_count, 1)

    def test_missing_artifact_becomes_storage_error(self):
        with self.assertRaises(StorageError):
            self.uploader.upload("other/abc.mp4", "video/mp4", os.path.join(self.tmp, "gone.mp4"))
        self.client.upload_fileobj.assert_not_called()

    def test_expired_deadline_skips_transfer(self):
        deadline = Deadline()
        deadline.cancel()

        with self.assertRaises(StorageError):
            self.uploader.upload("other/abc.mp4", "video/mp4", self.artifact, deadline=deadline)
        self.client.upload_fileobj.assert_not_called()

    def test_cancellation_aborts_in_flight_transfer(self):
        deadline = Deadline()

        def transfer(body, bucket, key, ExtraArgs=None, Callback=None):
            Callback(8)
            deadline.cancel()
            Callback(8)

        self.client.upload_fileobj.side_effect = transfer

        with self.assertRaises(StorageError) as ctx:
            self.uploader.upload("other/abc.mp4", "video/mp4", self.artifact, deadline=deadline)
        self.assertIn("deadline", str(ctx.exception.detail))

    def test_unconfigured_bucket(self):
        uploader = S3VideoUploader(make_config(bucket=""), client=self.client)
        with self.assertRaises(StorageError):
            uploader.upload("other/abc.mp4", "video/mp4", self.artifact)


class CreateS3ClientTests(SimpleTestCase):

    def test_client_disables_retries(self):
        config = make_config(region="eu-west-3", endpoint_url="http://localhost:9000")
        with patch("services.storage_service.boto3.client") as client_factory:
            create_s3_client(config)

        args, kwargs = client_factory.call_args
        self.assertEqual(args, ("s3",))
        self.assertEqual(kwargs["region_name"], "eu-west-3")
        self.assertEqual(kwargs["endpoint_url"], "http://localhost:9000")
        self.assertEqual(kwargs["config"].retries["total_max_attempts"], 1)
