"""Request and response serializers for the leaderboard API."""

from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from trainer.controller import allowed_configs
from trainer.session import MODES

from .models import ScoreRecord


def validate_mode_config(attrs: Dict[str, Any]) -> Dict[str, Any]:
    allowed = allowed_configs().get(attrs["mode"], [])
    if attrs["config"] not in allowed:
        raise serializers.ValidationError(
            {"config": f"Must be one of {', '.join(str(value) for value in allowed)}."}
        )
    return attrs


class LeaderboardQuerySerializer(serializers.Serializer):
    mode = serializers.ChoiceField(choices=MODES)
    config = serializers.IntegerField(min_value=1)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        return validate_mode_config(attrs)


class PendingScoreSerializer(serializers.Serializer):
    wpm = serializers.IntegerField(min_value=0)
    raw_wpm = serializers.IntegerField(min_value=0)
    accuracy = serializers.IntegerField(min_value=0, max_value=100)
    mode = serializers.ChoiceField(choices=MODES)
    config = serializers.IntegerField(min_value=1)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:
        return validate_mode_config(attrs)


class ClaimSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    recaptchaToken = serializers.CharField(
        source="recaptcha_token",
        required=False,
        allow_blank=True,
        allow_null=True,
    )


class ScoreRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = ScoreRecord
        fields = [
            "id",
            "name",
            "wpm",
            "raw_wpm",
            "accuracy",
            "mode",
            "config",
            "created_at",
        ]
        read_only_fields = fields
