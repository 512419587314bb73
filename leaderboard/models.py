"""Persisted typing test scores."""

from django.core.validators import MaxValueValidator
from django.db import models
from django.utils import timezone

from trainer.session import MODE_TIME, MODE_WORDS


class ScoreRecord(models.Model):
    """One named score on the shared leaderboard. Rows are never edited."""

    MODE_CHOICES = [
        (MODE_TIME, "Time"),
        (MODE_WORDS, "Words"),
    ]

    name = models.CharField(max_length=255)
    wpm = models.PositiveIntegerField()
    raw_wpm = models.PositiveIntegerField()
    accuracy = models.PositiveSmallIntegerField(validators=[MaxValueValidator(100)])
    mode = models.CharField(max_length=5, choices=MODE_CHOICES)
    config = models.PositiveIntegerField(help_text="Seconds in time mode, word count in words mode")
    created_at = models.DateTimeField(default=timezone.now)
    claim_token = models.CharField(
        max_length=32,
        unique=True,
        null=True,
        blank=True,
        editable=False,
        help_text="Token of the cached score this row was claimed from",
    )

    class Meta:
        db_table = "leaderboard"
        ordering = ("-wpm", "created_at")
        indexes = [
            models.Index(fields=["mode", "config", "-wpm"], name="leaderboard_mode_cfg_wpm"),
        ]

    def __str__(self) -> str:  # pragma: no cover - for admin/debugging
        return f"{self.name}: {self.wpm} wpm ({self.mode} {self.config})"
