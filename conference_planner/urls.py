"""URL configuration for conference_planner project."""

from django.conf import settings
from django.contrib import admin
from django.urls import include, path


urlpatterns = [
    path(settings.ADMIN_URL, admin.site.urls),
    path("accounts/", include("allauth.urls")),
    path("api/", include("agenda.urls")),
    path("health/", include("health_check.urls")),
]
