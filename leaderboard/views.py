"""JSON API for the shared leaderboard."""

from __future__ import annotations

from django.conf import settings
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from trainer.controller import allowed_configs

from . import services
from .exceptions import LeaderboardError
from .serializers import (
    ClaimSerializer,
    LeaderboardQuerySerializer,
    PendingScoreSerializer,
    ScoreRecordSerializer,
)


def error_response(exc: LeaderboardError) -> Response:
    return Response({"error": exc.message}, status=exc.status_code)


def validation_response(errors) -> Response:
    return Response(
        {"error": "Invalid request", "fields": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class PublicAPIView(APIView):
    """Anonymous endpoints; the Django session is the caller's identity."""

    authentication_classes: list = []
    permission_classes = [permissions.AllowAny]


class LeaderboardView(PublicAPIView):
    def get(self, request):
        query = LeaderboardQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return validation_response(query.errors)

        try:
            records = services.list_top(**query.validated_data)
        except LeaderboardError as exc:
            return error_response(exc)
        return Response(ScoreRecordSerializer(records, many=True).data)

    def post(self, request):
        serializer = ClaimSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        data = serializer.validated_data

        try:
            record = services.claim_score(
                request.session,
                data["name"],
                data.get("recaptcha_token"),
                remote_ip=request.META.get("REMOTE_ADDR"),
            )
        except LeaderboardError as exc:
            return error_response(exc)
        return Response({"id": record.id}, status=status.HTTP_201_CREATED)


class SessionScoreView(PublicAPIView):
    def post(self, request):
        serializer = PendingScoreSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)

        services.cache_score(
            request.session,
            services.PendingScore(**serializer.validated_data),
        )
        return Response({"success": True})


class ConfigView(PublicAPIView):
    def get(self, request):
        return Response(
            {
                "modes": allowed_configs(),
                "recaptchaSiteKey": getattr(settings, "RECAPTCHA_SITE_KEY", "") or None,
            }
        )
