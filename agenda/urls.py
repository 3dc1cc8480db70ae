"""URL configuration for the agenda API."""

from django.urls import path

from . import views


urlpatterns = [
    path("speakers/", views.speaker_list, name="speaker_list"),
    path("speakers/<int:speaker_id>/", views.speaker_detail, name="speaker_detail"),
    path("sessions/", views.session_list, name="session_list"),
    path("sessions/<int:session_id>/", views.session_detail, name="session_detail"),
    path("attendees/", views.attendee_create, name="attendee_create"),
    path("attendees/<str:username>/", views.attendee_detail, name="attendee_detail"),
    path(
        "attendees/<str:username>/sessions/",
        views.attendee_sessions,
        name="attendee_sessions",
    ),
    path(
        "attendees/<str:username>/session/<int:session_id>/",
        views.attendee_session,
        name="attendee_session",
    ),
    path("search/", views.search, name="search"),
    path("me/", views.me, name="me"),
]
