"""
URL configuration for makunu_platform project.

The JSON API lives under ``/api/`` and is provided by the leaderboard app.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('leaderboard.urls')),
]
