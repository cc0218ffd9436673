"""
Video models for Tubely
"""

import uuid
from django.conf import settings
from django.db import models


class Video(models.Model):
    """Video metadata record; the file itself lives in object storage"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='videos')
    title = models.CharField(max_length=200, verbose_name='Title')
    description = models.TextField(blank=True, verbose_name='Description')

    thumbnail_url = models.URLField(max_length=500, null=True, blank=True, verbose_name='Thumbnail URL')
    video_url = models.URLField(max_length=500, null=True, blank=True, verbose_name='Published URL')

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'videos'
        ordering = ['-created_at']
        verbose_name = 'Video'
        verbose_name_plural = 'Videos'
        indexes = [
            models.Index(fields=['user', 'created_at'], name='videos_user_created_idx'),
        ]

    def __str__(self):
        return self.title
