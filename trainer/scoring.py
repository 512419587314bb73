"""Scoring helpers for finished typing tests."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .session import CORRECT, EXTRA, INCORRECT, MODE_TIME, NONE, Session


CHARS_PER_WORD = 5


@dataclass(frozen=True)
class Stats:
    wpm: int
    raw_wpm: int
    accuracy: int
    correct: int = 0
    incorrect: int = 0
    extra: int = 0
    missed: int = 0
    spaces: int = 0

    def as_payload(self, mode: str, config: int) -> Dict[str, Any]:
        """Body for the session-score endpoint."""
        return {
            "wpm": self.wpm,
            "raw_wpm": self.raw_wpm,
            "accuracy": self.accuracy,
            "mode": mode,
            "config": config,
        }

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def duration_minutes(session: Session) -> float:
    """Minutes the test lasted.

    Time mode uses the configured duration since the countdown is what
    ended the test; words mode uses the measured wall time.
    """

    if session.mode == MODE_TIME:
        return session.target / 60
    if session.start_time is None or session.end_time is None:
        return 0.0
    return max(0.0, session.end_time - session.start_time) / 60


def compute_stats(session: Session) -> Stats:
    """Calculate WPM, raw WPM and accuracy for ``session``."""

    if session.start_time is None:
        return Stats(wpm=0, raw_wpm=0, accuracy=0)

    correct = incorrect = extra = missed = 0
    for index, word in enumerate(session.words[: session.word_cursor + 1]):
        for letter in word.letters:
            if letter.status == CORRECT:
                correct += 1
            elif letter.status == INCORRECT:
                incorrect += 1
            elif letter.status == EXTRA:
                extra += 1
            elif letter.status == NONE and index < session.word_cursor:
                missed += 1
    spaces = session.word_cursor

    minutes = duration_minutes(session)
    if minutes > 0:
        wpm = round_half_up((correct + spaces) / CHARS_PER_WORD / minutes)
        raw_wpm = round_half_up(
            (correct + incorrect + extra + spaces) / CHARS_PER_WORD / minutes
        )
    else:
        wpm = raw_wpm = 0

    total = correct + incorrect + extra + missed + spaces
    accuracy = round_half_up((correct + spaces) / total * 100) if total else 0

    return Stats(
        wpm=wpm,
        raw_wpm=raw_wpm,
        accuracy=accuracy,
        correct=correct,
        incorrect=incorrect,
        extra=extra,
        missed=missed,
        spaces=spaces,
    )
