"""Drives a typing test from raw key events."""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence

from django.conf import settings

from .keymap import KeyMapper, default_mapper
from .scoring import Stats, compute_stats
from .session import (
    DEFAULT_WORD_COUNT,
    MODE_TIME,
    MODES,
    TAB,
    WORD_HEADROOM,
    KeyPress,
    Session,
    Tick,
    apply,
    start_session,
)
from .words import WordPool


logger = logging.getLogger(__name__)

FinishListener = Callable[[Session, Stats], None]


def allowed_configs() -> Dict[str, List[int]]:
    return {
        mode: list(values)
        for mode, values in getattr(settings, "TYPING_ALLOWED_CONFIGS", {}).items()
    }


def check_config(
    mode: str,
    target: int,
    allowed: Optional[Dict[str, Sequence[int]]] = None,
) -> None:
    """Raise ``ValueError`` unless ``target`` is offered for ``mode``."""

    allowed = allowed_configs() if allowed is None else allowed
    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}.")
    if target not in allowed.get(mode, ()):
        choices = ", ".join(str(value) for value in allowed.get(mode, ()))
        raise ValueError(f"{target} is not an allowed {mode} setting (choose {choices}).")


class TypingController:
    """Owns the active :class:`Session` and feeds it events.

    Tab restarts the test from any state. Keys that arrive while the
    controller is blurred, Tab included, are dropped without touching the
    session; :meth:`restart` is the way to start over from outside.
    Listeners registered with :meth:`on_finish` run once per session,
    after the state machine has reached ``finished``.
    """

    def __init__(
        self,
        *,
        mode: str = MODE_TIME,
        target: int = 30,
        pool: Optional[WordPool] = None,
        mapper: Optional[KeyMapper] = None,
        clock: Callable[[], float] = time.monotonic,
        allowed: Optional[Dict[str, Sequence[int]]] = None,
        word_count: Optional[int] = None,
        headroom: Optional[int] = None,
    ) -> None:
        self.allowed = allowed_configs() if allowed is None else dict(allowed)
        check_config(mode, target, self.allowed)
        self.mode = mode
        self.target = target
        self.pool = pool or WordPool()
        self.mapper = mapper or default_mapper
        self.clock = clock
        if word_count is None:
            word_count = getattr(settings, "TYPING_WORD_COUNT", DEFAULT_WORD_COUNT)
        if headroom is None:
            headroom = getattr(settings, "TYPING_WORD_HEADROOM", WORD_HEADROOM)
        self.word_count = word_count
        self.headroom = headroom
        self.focused = True
        self.stats: Optional[Stats] = None
        self._listeners: List[FinishListener] = []
        self._generation = 0
        self.session = self._fresh_session()

    def _fresh_session(self) -> Session:
        return start_session(
            self.pool,
            self.mode,
            self.target,
            generation=self._generation,
            word_count=self.word_count,
        )

    def on_finish(self, listener: FinishListener) -> None:
        self._listeners.append(listener)

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def restart(self) -> Session:
        """Throw the current test away and start a new idle one."""
        self._generation += 1
        self.stats = None
        self.session = self._fresh_session()
        return self.session

    def set_mode(self, mode: str, target: int) -> Session:
        check_config(mode, target, self.allowed)
        self.mode = mode
        self.target = target
        return self.restart()

    def handle_key(self, key: str) -> Session:
        if not self.focused:
            return self.session
        if key == TAB:
            return self.restart()
        return self._advance(KeyPress(key, self.clock()))

    def tick(self, generation: Optional[int] = None) -> Session:
        """Deliver one countdown second.

        ``generation`` identifies the session the timer was started for;
        ticks meant for an earlier session are ignored.
        """
        if generation is None:
            generation = self.session.generation
        return self._advance(Tick(generation, self.clock()))

    def _advance(self, event) -> Session:
        before = self.session
        self.session = apply(
            before,
            event,
            mapper=self.mapper,
            pool=self.pool,
            headroom=self.headroom,
            batch_size=self.word_count,
        )
        if self.session.finished and not before.finished:
            self.stats = compute_stats(self.session)
            logger.debug(
                "Typing test finished (%s %s): %s wpm, %s%% accuracy",
                self.mode,
                self.target,
                self.stats.wpm,
                self.stats.accuracy,
            )
            for listener in list(self._listeners):
                listener(self.session, self.stats)
        return self.session
