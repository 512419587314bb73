"""Dhivehi phonetic keyboard mapping."""

from __future__ import annotations

from typing import Dict, Mapping, Optional


PHONETIC_LAYOUT: Dict[str, str] = {
    # consonants
    "h": "ހ",
    "S": "ށ",
    "n": "ނ",
    "r": "ރ",
    "b": "ބ",
    "L": "ޅ",
    "k": "ކ",
    "w": "އ",
    "v": "ވ",
    "m": "މ",
    "f": "ފ",
    "d": "ދ",
    "t": "ތ",
    "l": "ލ",
    "g": "ގ",
    "N": "ޏ",
    "s": "ސ",
    "D": "ޑ",
    "z": "ޒ",
    "T": "ޓ",
    "y": "ޔ",
    "p": "ޕ",
    "j": "ޖ",
    "c": "ޗ",
    "X": "ޘ",
    "H": "ޙ",
    "K": "ޚ",
    "J": "ޛ",
    "R": "ޜ",
    "C": "ޝ",
    "B": "ޞ",
    "M": "ޟ",
    "Y": "ޠ",
    "Z": "ޡ",
    "W": "ޢ",
    "G": "ޣ",
    "Q": "ޤ",
    "V": "ޥ",
    # fili and sukun
    "a": "ަ",
    "A": "ާ",
    "i": "ި",
    "I": "ީ",
    "u": "ު",
    "U": "ޫ",
    "e": "ެ",
    "E": "ޭ",
    "o": "ޮ",
    "O": "ޯ",
    "q": "ް",
    # punctuation
    ",": "،",
    ";": "؛",
    "?": "؟",
}


class KeyMapper:
    """Maps raw keystrokes to Thaana characters.

    Keys missing from the layout are returned unchanged, so digits, Latin
    punctuation and anything else the layout does not cover are typed
    verbatim.
    """

    def __init__(self, layout: Optional[Mapping[str, str]] = None) -> None:
        self.layout = dict(PHONETIC_LAYOUT if layout is None else layout)

    def map(self, raw_key: str) -> str:
        return self.layout.get(raw_key, raw_key)

    def transliterate(self, keys: str) -> str:
        """Map every character of ``keys``; handy for building fixtures."""
        return "".join(self.map(key) for key in keys)

    def __call__(self, raw_key: str) -> str:
        return self.map(raw_key)


default_mapper = KeyMapper()


def map_key(raw_key: str) -> str:
    return default_mapper.map(raw_key)
