"""Pinyin readings and stroke lookup for characters, and the duyin quick phrase."""

from __future__ import annotations

from typing import Optional, Union

from hanzitools.pinyinlookup import PinyinLookup
from hanzitools.stroke import Stroke

_DUYIN_KEYWORD = "duyin"
_DUYIN_LIMIT = 20
_STROKE_DIGITS = frozenset("12345")
_STROKE_LETTERS = {"h": "1", "s": "2", "p": "3", "n": "4", "z": "5"}


def _is_valid_text(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class PinyinHelper:
    """Combines pinyin reading lookup and stroke lookup."""

    def __init__(
        self, lookup: Optional[PinyinLookup] = None, stroke: Optional[Stroke] = None
    ) -> None:
        self._lookup = lookup if lookup is not None else PinyinLookup()
        self._stroke = stroke if stroke is not None else Stroke()

    def lookup(self, chr: Union[int, str]) -> list[str]:
        """Return the toned pinyin readings of a character."""
        if self._lookup.load():
            return self._lookup.lookup(chr)
        return []

    def full_lookup(self, chr: Union[int, str]) -> list[tuple[str, str, int]]:
        """Return (toned reading, reading without tone, tone) of a character."""
        if self._lookup.load():
            return self._lookup.full_lookup(chr)
        return []

    def load_stroke(self) -> None:
        """Start loading the stroke table in the background."""
        self._stroke.load_async()

    def lookup_stroke(self, text: str, limit: int) -> list[tuple[str, str]]:
        """Look characters up by strokes given as digits 1-5 or letters hspnz."""
        if not text:
            return []
        if not self._stroke.load():
            return []
        if text[0] in _STROKE_DIGITS:
            if not set(text) <= _STROKE_DIGITS:
                return []
            return self._stroke.lookup(text, limit)
        if text[0] in _STROKE_LETTERS:
            if not set(text) <= _STROKE_LETTERS.keys():
                return []
            converted = "".join(_STROKE_LETTERS[char] for char in text)
            return self._stroke.lookup(converted, limit)
        return []

    def reverse_lookup_stroke(self, text: str) -> str:
        if not self._stroke.load():
            return ""
        return self._stroke.reverse_lookup(text)

    def pretty_stroke_string(self, text: str) -> str:
        if not self._stroke.load():
            return ""
        return self._stroke.pretty_string(text)

    def duyin_candidates(
        self,
        text: str,
        selected: Optional[str] = None,
        primary: Optional[str] = None,
        clipboard: Optional[str] = None,
    ) -> Optional[list[str]]:
        """Quick phrase candidates showing the readings of selected characters.

        Only the input ``duyin`` is handled. The sources are the selected
        text, otherwise the primary selection, and the clipboard; ``primary``
        and ``clipboard`` both None means no clipboard is available. Returns
        None when the input is not handled, else the candidate texts.
        """
        if text != _DUYIN_KEYWORD:
            return None
        sources: list[str] = []
        if selected:
            sources.append(selected)
        if primary is not None or clipboard is not None:
            if not sources:
                sources.append(primary or "")
            clip = clipboard or ""
            if clip not in sources:
                sources.append(clip)
        if not sources:
            return None

        candidates = []
        for source in sources:
            if not _is_valid_text(source):
                continue
            for counter, char in enumerate(source):
                readings = self.lookup(char)
                if readings:
                    candidates.append(f"{char} ({', '.join(readings)})")
                if counter >= _DUYIN_LIMIT:
                    break
        return candidates