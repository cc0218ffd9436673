"""
Video views for Tubely
"""

import logging

from rest_framework import generics, permissions, status
from rest_framework.parsers import MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from core.deadline import Deadline
from core.exceptions import PayloadTooLargeError, ValidationError
from services.auth_service import BearerTokenAuthentication

from .config import get_ingestion_config
from .models import Video
from .pipeline import VideoIngestionPipeline
from .serializers import (
    VideoSerializer, VideoUploadRequestSerializer, VideoUploadResponseSerializer
)
from .upload_handlers import MaxBytesUploadHandler

logger = logging.getLogger(__name__)

UPLOAD_FIELD = 'video'


def build_pipeline(config):
    return VideoIngestionPipeline.from_config(config)


class VideoListCreateView(generics.ListCreateAPIView):
    """List the caller's videos or create a new draft record"""

    serializer_class = VideoSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        return Video.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)


class VideoDetailView(generics.RetrieveAPIView):
    """Fetch one of the caller's videos"""

    serializer_class = VideoSerializer
    permission_classes = [permissions.IsAuthenticated]
    lookup_field = 'id'
    lookup_url_kwarg = 'video_id'

    def get_queryset(self):
        return Video.objects.filter(user=self.request.user)


class VideoUploadView(APIView):
    """Publish an mp4 file for one of the caller's videos"""

    authentication_classes = [BearerTokenAuthentication]
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser]

    @extend_schema(
        summary="Upload and publish a video",
        request={'multipart/form-data': VideoUploadRequestSerializer},
        responses={200: VideoUploadResponseSerializer},
    )
    def post(self, request, video_id):
        config = get_ingestion_config()
        pipeline = build_pipeline(config)

        video = pipeline.authorize(request.user.pk, video_id)

        # Must run before request.FILES is touched
        self.limit_body_size(request, config.max_upload_bytes)

        upload = request.FILES.get(UPLOAD_FIELD)
        if upload is None:
            raise ValidationError(f'Missing "{UPLOAD_FIELD}" file field.')

        deadline = Deadline(config.processing_timeout)
        video_url = pipeline.publish(video, upload, upload.content_type, deadline=deadline)

        return Response({'video_url': video_url}, status=status.HTTP_200_OK)

    def limit_body_size(self, request, max_bytes):
        try:
            declared = int(request.META.get('CONTENT_LENGTH') or 0)
        except ValueError:
            raise ValidationError('Invalid Content-Length header.')

        if declared > max_bytes:
            logger.info("Rejected %d byte upload (limit %d)", declared, max_bytes)
            raise PayloadTooLargeError()

        request.upload_handlers.insert(0, MaxBytesUploadHandler(request, max_bytes=max_bytes))
