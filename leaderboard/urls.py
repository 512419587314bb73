from django.urls import path

from . import views

urlpatterns = [
    path("leaderboard", views.LeaderboardView.as_view(), name="leaderboard"),
    path("session-score", views.SessionScoreView.as_view(), name="session_score"),
    path("config", views.ConfigView.as_view(), name="typing_config"),
]
