"""
Django admin configuration for videos
"""

from django.contrib import admin
from .models import Video


@admin.register(Video)
class VideoAdmin(admin.ModelAdmin):
    """Admin interface for video records"""

    list_display = ['id', 'title', 'user', 'video_url', 'created_at']
    search_fields = ['title', 'user__username', 'user__email']
    readonly_fields = ['id', 'created_at', 'updated_at']

    fieldsets = (
        ('Video Information', {
            'fields': ('id', 'user', 'title', 'description')
        }),
        ('Published Assets', {
            'fields': ('thumbnail_url', 'video_url')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
