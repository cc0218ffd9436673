"""
Video serializers for Tubely
"""

from rest_framework import serializers

from .models import Video


class VideoSerializer(serializers.ModelSerializer):
    """Video metadata as exposed to its owner"""

    user_id = serializers.PrimaryKeyRelatedField(source='user', read_only=True)

    class Meta:
        model = Video
        fields = [
            'id', 'user_id', 'title', 'description', 'thumbnail_url', 'video_url',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'thumbnail_url', 'video_url', 'created_at', 'updated_at']


class VideoUploadRequestSerializer(serializers.Serializer):
    """Multipart body accepted by the upload endpoint (schema only)"""

    video = serializers.FileField()


class VideoUploadResponseSerializer(serializers.Serializer):
    video_url = serializers.URLField()
