"""Typing test state machine.

A :class:`Session` is an immutable snapshot of one test. :func:`apply`
takes a snapshot and an event (a keystroke or a countdown tick) and
returns the next snapshot; the input is never modified. Anything that
drives a test, a terminal loop or a web socket, only has to feed events
in and render whatever comes back.

States::

    idle --first printable key--> running --end trigger--> finished

``finished`` is terminal. Restarting means building a new session with
:func:`start_session`.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple, Union

from .keymap import KeyMapper, default_mapper
from .words import WordPool


MODE_TIME = "time"
MODE_WORDS = "words"
MODES = (MODE_TIME, MODE_WORDS)

NONE = "none"
CORRECT = "correct"
INCORRECT = "incorrect"
EXTRA = "extra"

STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_FINISHED = "finished"

SPACE = " "
BACKSPACE = "Backspace"
TAB = "Tab"

DEFAULT_WORD_COUNT = 50
WORD_HEADROOM = 20


@dataclass(frozen=True)
class Letter:
    char: str
    status: str = NONE


@dataclass(frozen=True)
class Word:
    original: str
    letters: Tuple[Letter, ...]

    @classmethod
    def from_text(cls, text: str) -> "Word":
        return cls(original=text, letters=tuple(Letter(char) for char in text))

    def with_letters(self, letters: Sequence[Letter]) -> "Word":
        return replace(self, letters=tuple(letters))


@dataclass(frozen=True)
class KeyPress:
    key: str
    at: float


@dataclass(frozen=True)
class Tick:
    generation: int
    at: float


Event = Union[KeyPress, Tick]


@dataclass(frozen=True)
class Session:
    words: Tuple[Word, ...]
    mode: str
    target: int
    word_cursor: int = 0
    letter_cursor: int = 0
    typed: Tuple[str, ...] = field(default_factory=tuple)
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    finished: bool = False
    time_left: Optional[int] = None
    timer_running: bool = False
    generation: int = 0

    @property
    def state(self) -> str:
        if self.finished:
            return STATE_FINISHED
        if self.start_time is None:
            return STATE_IDLE
        return STATE_RUNNING

    @property
    def current_word(self) -> Word:
        return self.words[self.word_cursor]

    @property
    def typed_text(self) -> str:
        return "".join(self.typed)

    @property
    def is_last_word(self) -> bool:
        return self.word_cursor == len(self.words) - 1


def new_session(
    words: Sequence[str],
    mode: str,
    target: int,
    *,
    generation: int = 0,
) -> Session:
    """Build an idle session over ``words``."""

    if mode not in MODES:
        raise ValueError(f"Unknown mode {mode!r}.")
    if target < 1:
        raise ValueError("target must be positive.")
    if not words:
        raise ValueError("A session needs at least one word.")
    if mode == MODE_WORDS and len(words) != target:
        raise ValueError("Words mode needs exactly `target` words.")

    return Session(
        words=tuple(Word.from_text(word) for word in words),
        mode=mode,
        target=target,
        time_left=target if mode == MODE_TIME else None,
        generation=generation,
    )


def start_session(
    pool: WordPool,
    mode: str,
    target: int,
    *,
    generation: int = 0,
    word_count: int = DEFAULT_WORD_COUNT,
) -> Session:
    """Sample words from ``pool`` and build an idle session."""

    count = target if mode == MODE_WORDS else word_count
    return new_session(pool.sample(count), mode, target, generation=generation)


def apply(
    session: Session,
    event: Event,
    *,
    mapper: KeyMapper = default_mapper,
    pool: Optional[WordPool] = None,
    headroom: int = WORD_HEADROOM,
    batch_size: int = DEFAULT_WORD_COUNT,
) -> Session:
    """Return the session that results from ``event``.

    ``pool`` is only consulted in time mode, to top the word list up once
    fewer than ``headroom`` words are left ahead of the cursor.
    """

    if isinstance(event, Tick):
        return _tick(session, event)

    if session.finished:
        return session

    key = event.key
    if key == BACKSPACE:
        return _backspace(session)
    if key == SPACE:
        return _space(session, event.at, pool, headroom, batch_size)
    if len(key) == 1 and key.isprintable():
        return _type_char(session, mapper.map(key), event.at)
    return session


def finish(session: Session, at: float) -> Session:
    return replace(session, finished=True, end_time=at, timer_running=False)


def _type_char(session: Session, char: str, at: float) -> Session:
    if session.start_time is None:
        session = replace(
            session,
            start_time=at,
            timer_running=session.mode == MODE_TIME,
            time_left=session.target if session.mode == MODE_TIME else None,
        )

    word = session.current_word
    index = session.letter_cursor
    letters = list(word.letters)
    if index < len(word.original):
        status = CORRECT if char == word.original[index] else INCORRECT
        letters[index] = Letter(letters[index].char, status)
    else:
        letters.append(Letter(char, EXTRA))

    session = _replace_current_word(
        session,
        word.with_letters(letters),
        letter_cursor=index + 1,
        typed=session.typed + (char,),
    )

    if (
        session.mode == MODE_WORDS
        and session.is_last_word
        and session.typed_text == word.original
    ):
        return finish(session, at)
    return session


def _backspace(session: Session) -> Session:
    if not session.typed:
        return session

    word = session.current_word
    typed_length = len(session.typed)
    letters = list(word.letters)
    if typed_length > len(word.original):
        letters.pop()
    else:
        letters[typed_length - 1] = Letter(letters[typed_length - 1].char, NONE)

    return _replace_current_word(
        session,
        word.with_letters(letters),
        letter_cursor=session.letter_cursor - 1,
        typed=session.typed[:-1],
    )


def _space(
    session: Session,
    at: float,
    pool: Optional[WordPool],
    headroom: int,
    batch_size: int,
) -> Session:
    if not session.typed:
        return session

    if session.is_last_word:
        if session.mode == MODE_WORDS:
            return finish(session, at)
        session = _top_up(session, pool, headroom, batch_size)
        if session.is_last_word:
            # Nothing left to advance to.
            return session

    session = replace(
        session,
        word_cursor=session.word_cursor + 1,
        letter_cursor=0,
        typed=(),
    )
    if session.mode == MODE_TIME:
        session = _top_up(session, pool, headroom, batch_size)
    return session


def _top_up(
    session: Session,
    pool: Optional[WordPool],
    headroom: int,
    batch_size: int,
) -> Session:
    remaining = len(session.words) - session.word_cursor - 1
    if pool is None or remaining >= headroom:
        return session
    fresh = tuple(Word.from_text(word) for word in pool.sample(batch_size))
    return replace(session, words=session.words + fresh)


def _tick(session: Session, tick: Tick) -> Session:
    if (
        tick.generation != session.generation
        or not session.timer_running
        or session.finished
    ):
        return session

    time_left = (session.time_left or 0) - 1
    if time_left <= 0:
        return finish(replace(session, time_left=0), tick.at)
    return replace(session, time_left=time_left)


def _replace_current_word(session: Session, word: Word, **changes) -> Session:
    words = list(session.words)
    words[session.word_cursor] = word
    return replace(session, words=tuple(words), **changes)
