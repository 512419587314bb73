"""Word sampling for typing tests."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional

from .corpus import DHIVEHI_WORDS


class WordPool:
    """Draws shuffled samples from a fixed corpus.

    ``sample`` never returns the same word twice within one pass over the
    corpus. Requests larger than the corpus are served by chaining fresh
    shuffles, so the caller always gets exactly ``count`` words.
    """

    def __init__(
        self,
        corpus: Iterable[str] = DHIVEHI_WORDS,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        words: List[str] = []
        seen = set()
        for word in corpus:
            if word and word not in seen:
                seen.add(word)
                words.append(word)
        if not words:
            raise ValueError("Word corpus must contain at least one word.")
        self.words = tuple(words)
        self.rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self.words)

    def sample(self, count: int) -> List[str]:
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ValueError("count must be a positive integer.")

        selected: List[str] = []
        while len(selected) < count:
            batch = list(self.words)
            self.rng.shuffle(batch)
            # Avoid the same word twice in a row where two passes meet.
            if selected and len(batch) > 1 and batch[0] == selected[-1]:
                batch[0], batch[-1] = batch[-1], batch[0]
            selected.extend(batch[: count - len(selected)])
        return selected
