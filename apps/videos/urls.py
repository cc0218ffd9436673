"""
Video URLs for Tubely
"""

from django.urls import path

from .views import VideoDetailView, VideoListCreateView, VideoUploadView

app_name = 'videos'

urlpatterns = [
    path('videos', VideoListCreateView.as_view(), name='video-list'),
    path('videos/<uuid:video_id>', VideoDetailView.as_view(), name='video-detail'),
    path('video_upload/<str:video_id>', VideoUploadView.as_view(), name='video-upload'),
]
