"""Leaderboard reads and the two-step score submission.

A finished test is first cached against the caller's session with
:func:`cache_score`. Only a cached score can later be turned into a
leaderboard row by :func:`claim_score`, which also demands a captcha when
one is configured. Clients therefore never send the numbers they want
recorded at claim time.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Mapping, MutableMapping, Optional
from uuid import uuid4

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from .captcha import get_verifier
from .exceptions import CaptchaFailed, CaptchaRequired, NoPendingScore, UpstreamUnavailable
from .models import ScoreRecord


logger = logging.getLogger(__name__)

PENDING_SCORE_KEY = "pending_score"

__all__ = [
    "PendingScore",
    "list_top",
    "cache_score",
    "get_pending_score",
    "claim_score",
    "reset_leaderboard",
]


@dataclass(frozen=True)
class PendingScore:
    wpm: int
    raw_wpm: int
    accuracy: int
    mode: str
    config: int
    # One-time claim token, filled in by cache_score.
    token: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PendingScore":
        token = str(data["token"])
        if not token:
            raise ValueError("pending score has no claim token")
        return cls(
            wpm=int(data["wpm"]),
            raw_wpm=int(data["raw_wpm"]),
            accuracy=int(data["accuracy"]),
            mode=str(data["mode"]),
            config=int(data["config"]),
            token=token,
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def record_fields(self) -> Dict[str, Any]:
        return {
            "wpm": self.wpm,
            "raw_wpm": self.raw_wpm,
            "accuracy": self.accuracy,
            "mode": self.mode,
            "config": self.config,
            "claim_token": self.token,
        }


def list_top(mode: str, config: int, *, limit: Optional[int] = None) -> List[ScoreRecord]:
    """Best scores for one mode/config, highest WPM first."""

    limit = limit or getattr(settings, "LEADERBOARD_SIZE", 10)
    try:
        return list(
            ScoreRecord.objects.filter(mode=mode, config=config)
            .order_by("-wpm", "created_at", "id")[:limit]
        )
    except DatabaseError as exc:
        logger.exception("Error fetching leaderboard for %s/%s", mode, config)
        raise UpstreamUnavailable() from exc


def cache_score(session: MutableMapping[str, Any], score: PendingScore) -> None:
    """Remember ``score`` for this session, replacing any earlier one.

    Each cached score gets a fresh claim token; the leaderboard accepts a
    token once, so copies of the same session cannot claim it twice.
    """

    session[PENDING_SCORE_KEY] = replace(score, token=uuid4().hex).as_dict()


def get_pending_score(session: Mapping[str, Any]) -> Optional[PendingScore]:
    data = session.get(PENDING_SCORE_KEY)
    if not data:
        return None
    try:
        return PendingScore.from_dict(data)
    except (KeyError, TypeError, ValueError):
        logger.warning("Discarding malformed pending score: %r", data)
        return None


def claim_score(
    session: MutableMapping[str, Any],
    name: str,
    captcha_token: Optional[str],
    *,
    remote_ip: Optional[str] = None,
) -> ScoreRecord:
    """Save the session's cached score under ``name``.

    The cached score is removed only once the row is written, so any
    failure leaves it in place for another attempt. A claim whose token is
    already on the board, e.g. from a parallel request carrying the same
    session, fails with :class:`NoPendingScore`.
    """

    pending = get_pending_score(session)
    if pending is None:
        raise NoPendingScore()

    verifier = get_verifier()
    if verifier is not None:
        if not captcha_token:
            raise CaptchaRequired()
        if not verifier.verify(captcha_token, remote_ip=remote_ip):
            raise CaptchaFailed()

    try:
        with transaction.atomic():
            record = ScoreRecord.objects.create(name=name, **pending.record_fields())
    except IntegrityError as exc:
        if not ScoreRecord.objects.filter(claim_token=pending.token).exists():
            logger.exception("Error saving score for %r", name)
            raise UpstreamUnavailable() from exc
        logger.warning("Cached score %s was already claimed", pending.token)
        session.pop(PENDING_SCORE_KEY, None)
        raise NoPendingScore() from exc
    except DatabaseError as exc:
        logger.exception("Error saving score for %r", name)
        raise UpstreamUnavailable() from exc

    session.pop(PENDING_SCORE_KEY, None)
    logger.info(
        "Saved score #%s: %s, %s wpm (%s %s)",
        record.id,
        record.name,
        record.wpm,
        record.mode,
        record.config,
    )
    return record


def reset_leaderboard() -> int:
    """Delete every score. Returns how many rows were removed."""

    with transaction.atomic():
        deleted, _ = ScoreRecord.objects.all().delete()
    logger.info("Leaderboard reset, %d scores removed", deleted)
    return deleted
