"""Pinyin readings of single Chinese characters from a binary table."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Union

_UTF8_MAX_LENGTH = 6

_VOKALS = (
    ("", "", "", "", ""),
    ("a", "ā", "á", "ǎ", "à"),
    ("ai", "āi", "ái", "ǎi", "ài"),
    ("an", "ān", "án", "ǎn", "àn"),
    ("ang", "āng", "áng", "ǎng", "àng"),
    ("ao", "āo", "áo", "ǎo", "ào"),
    ("e", "ē", "é", "ě", "è"),
    ("ei", "ēi", "éi", "ěi", "èi"),
    ("en", "ēn", "én", "ěn", "èn"),
    ("eng", "ēng", "éng", "ěng", "èng"),
    ("er", "ēr", "ér", "ěr", "èr"),
    ("i", "ī", "í", "ǐ", "ì"),
    ("ia", "iā", "iá", "iǎ", "ià"),
    ("ian", "iān", "ián", "iǎn", "iàn"),
    ("iang", "iāng", "iáng", "iǎng", "iàng"),
    ("iao", "iāo", "iáo", "iǎo", "iào"),
    ("ie", "iē", "ié", "iě", "iè"),
    ("in", "īn", "ín", "ǐn", "ìn"),
    ("ing", "īng", "íng", "ǐng", "ìng"),
    ("iong", "iōng", "ióng", "iǒng", "iòng"),
    ("iu", "iū", "iú", "iǔ", "iù"),
    ("m", "m", "m", "m", "m"),
    ("n", "n", "ń", "ň", "ǹ"),
    ("ng", "ng", "ńg", "ňg", "ǹg"),
    ("o", "ō", "ó", "ǒ", "ò"),
    ("ong", "ōng", "óng", "ǒng", "òng"),
    ("ou", "ōu", "óu", "ǒu", "òu"),
    ("u", "ū", "ú", "ǔ", "ù"),
    ("ua", "uā", "uá", "uǎ", "uà"),
    ("uai", "uāi", "uái", "uǎi", "uài"),
    ("uan", "uān", "uán", "uǎn", "uàn"),
    ("uang", "uāng", "uáng", "uǎng", "uàng"),
    ("ue", "uē", "ué", "uě", "uè"),
    ("ueng", "uēng", "uéng", "uěng", "uèng"),
    ("ui", "uī", "uí", "uǐ", "uì"),
    ("un", "ūn", "ún", "ǔn", "ùn"),
    ("uo", "uō", "uó", "uǒ", "uò"),
    ("ü", "ǖ", "ǘ", "ǚ", "ǜ"),
    ("üan", "üān", "üán", "üǎn", "üàn"),
    ("üe", "üē", "üé", "üě", "üè"),
    ("ün", "ǖn", "ǘn", "ǚn", "ǜn"),
)

_KONSONANTS = (
    "", "b", "c", "ch", "d", "f", "g", "h", "j", "k", "l", "m", "n",
    "ng", "p", "q", "r", "s", "sh", "t", "w", "x", "y", "z", "zh",
)


def get_vokal(index: int, tone: int) -> str:
    """Return the final at ``index`` marked with ``tone``; unknown tones mean none."""
    if not 0 <= index < len(_VOKALS):
        return ""
    if not 0 <= tone <= 4:
        tone = 0
    return _VOKALS[index][tone]


def get_konsonant(index: int) -> str:
    """Return the initial at ``index``, or "" when out of range."""
    if not 0 <= index < len(_KONSONANTS):
        return ""
    return _KONSONANTS[index]


@dataclass(frozen=True)
class PinyinLookupData:
    """One reading: indices of initial and final, and the tone."""

    consonant: int
    vocal: int
    tone: int


def parse_py_table(data: bytes) -> dict[str, list[PinyinLookupData]]:
    """Parse the binary reading table.

    Each record is a length byte, that many bytes of one UTF-8 character, a
    count byte and ``count`` triples of (initial, final, tone) bytes.
    Raises ValueError on malformed input.
    """
    table: dict[str, list[PinyinLookupData]] = {}
    pos = 0
    end = len(data)
    while pos < end:
        word_len = data[pos]
        pos += 1
        if word_len > _UTF8_MAX_LENGTH:
            raise ValueError(f"character length {word_len} too long")
        if pos + word_len > end:
            raise ValueError("truncated character")
        raw = data[pos : pos + word_len].split(b"\0", 1)[0]
        pos += word_len
        try:
            word = raw.decode("utf-8")
        except UnicodeDecodeError as error:
            raise ValueError("invalid UTF-8 character") from error
        if len(word) != 1:
            raise ValueError("record does not hold exactly one character")
        if pos >= end:
            raise ValueError("missing reading count")
        count = data[pos]
        pos += 1
        if count == 0:
            continue
        if pos + 3 * count > end:
            raise ValueError("truncated readings")
        readings = table.setdefault(word, [])
        for offset in range(pos, pos + 3 * count, 3):
            consonant, vocal, tone = data[offset : offset + 3]
            readings.append(PinyinLookupData(consonant, vocal, tone))
        pos += 3 * count
    return table


def _as_char(hz: Union[int, str]) -> str:
    return chr(hz) if isinstance(hz, int) else hz


class PinyinLookup:
    """Looks up pinyin readings of characters, loading the table on demand."""

    def __init__(self, path: Optional[Union[str, os.PathLike]] = None) -> None:
        self._path = path
        self._data: dict[str, list[PinyinLookupData]] = {}
        self._loaded = False
        self._load_result = False

    def load(self) -> bool:
        """Load the table once; return whether it loaded successfully."""
        if self._loaded:
            return self._load_result
        self._loaded = True
        if self._path is None:
            return False
        try:
            with open(self._path, "rb") as table:
                self._data = parse_py_table(table.read())
        except (OSError, ValueError):
            return False
        self._load_result = True
        return True

    def lookup(self, hz: Union[int, str]) -> list[str]:
        """Return the toned readings of a character (code point or string)."""
        result = []
        for data in self._data.get(_as_char(hz), ()):
            consonant = get_konsonant(data.consonant)
            vokal = get_vokal(data.vocal, data.tone)
            if consonant or vokal:
                result.append(consonant + vokal)
        return result

    def full_lookup(self, hz: Union[int, str]) -> list[tuple[str, str, int]]:
        """Return (toned reading, reading without tone, tone) for a character."""
        result = []
        for data in self._data.get(_as_char(hz), ()):
            consonant = get_konsonant(data.consonant)
            vokal = get_vokal(data.vocal, data.tone)
            if not consonant and not vokal:
                continue
            plain = get_vokal(data.vocal, 0)
            result.append((consonant + vokal, consonant + plain, data.tone))
        return result