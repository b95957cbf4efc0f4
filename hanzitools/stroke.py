"""Looking characters up by the sequence of strokes they are written with."""

from __future__ import annotations

import heapq
import itertools
import os
from bisect import bisect_left
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, Iterator, Optional, Union

_WHITESPACE = " \t\n\v\f\r"
_STROKE_DIGITS = frozenset("12345")
_STROKE_NAMES = ("一", "丨", "丿", "㇏", "𠃍")
_SEPARATOR = "|"

DELETION_WEIGHT = 5
INSERTION_WEIGHT = 5
SUBSTITUTION_WEIGHT = 5
TRANSPOSITION_WEIGHT = 5
_MAX_WEIGHT = 10

PathLike = Union[str, os.PathLike]


def _is_valid_text(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def parse_stroke_table(lines: Iterable[str]) -> list[tuple[str, str]]:
    """Parse stroke table lines into ``(strokes, hanzi)`` pairs.

    A line holds a stroke sequence of digits 1 to 5, whitespace and a single
    character. Blank lines, lines starting with ``#`` and malformed lines are
    skipped.
    """
    entries = []
    for raw in lines:
        if not _is_valid_text(raw):
            continue
        line = raw.strip(_WHITESPACE)
        if not line or line[0] == "#":
            continue
        pos = next(
            (index for index, char in enumerate(line) if char in _WHITESPACE), -1
        )
        if pos < 0:
            continue
        key = line[:pos]
        value = line[pos + 1 :].strip(_WHITESPACE)
        if len(value) != 1 or not set(key) <= _STROKE_DIGITS:
            continue
        entries.append((key, value))
    return entries


def pretty_stroke_string(text: str) -> str:
    """Render a stroke digit sequence as stroke glyphs; "" if a digit is invalid."""
    parts = []
    for char in text:
        if char not in _STROKE_DIGITS:
            return ""
        parts.append(_STROKE_NAMES[ord(char) - ord("1")])
    return "".join(parts)


class _PrefixIndex:
    """Sorted set of keys that can be walked by prefix."""

    def __init__(self, keys: Iterable[str]) -> None:
        self._keys = sorted(set(keys))

    def __len__(self) -> int:
        return len(self._keys)

    def has_prefix(self, prefix: str) -> bool:
        index = bisect_left(self._keys, prefix)
        return index < len(self._keys) and self._keys[index].startswith(prefix)

    def iter_prefix(self, prefix: str) -> Iterator[str]:
        for key in itertools.islice(self._keys, bisect_left(self._keys, prefix), None):
            if not key.startswith(prefix):
                break
            yield key


def _build(path: Optional[PathLike]) -> tuple[_PrefixIndex, _PrefixIndex]:
    if path is None:
        raise FileNotFoundError("no stroke table configured")
    with open(path, encoding="utf-8", errors="surrogateescape", newline="\n") as table:
        entries = parse_stroke_table(table)
    forward = _PrefixIndex(f"{key}{_SEPARATOR}{value}" for key, value in entries)
    reverse = _PrefixIndex(f"{value}{_SEPARATOR}{key}" for key, value in entries)
    return forward, reverse


class Stroke:
    """Stroke table with fuzzy lookup, loaded in the background on request."""

    def __init__(self, path: Optional[PathLike] = None) -> None:
        self._path = path
        self._dict = _PrefixIndex(())
        self._reverse = _PrefixIndex(())
        self._loaded = False
        self._load_result = False
        self._future: Optional[Future] = None

    def load_async(self) -> None:
        """Start loading the table in the background, once."""
        if self._future is not None:
            return
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="stroke")
        self._future = executor.submit(_build, self._path)
        executor.shutdown(wait=False)

    def load(self) -> bool:
        """Wait for the table to load.

        The first call always returns True; later calls report whether the
        table actually loaded.
        """
        if self._loaded:
            return self._load_result
        if self._future is None:
            self.load_async()
        assert self._future is not None
        try:
            self._dict, self._reverse = self._future.result()
            self._load_result = True
        except Exception:
            self._load_result = False
        self._loaded = True
        return True

    def lookup(self, text: str, limit: int) -> list[tuple[str, str]]:
        """Return ``(hanzi, strokes)`` pairs matching ``text``.

        A stroke sequence that is the prefix of a single entry yields that
        entry first. Then entries within one edit (deletion, insertion,
        substitution or transposition) are searched, cheapest first. Results
        are unique by stroke sequence; a ``limit`` of zero or less stops after
        the prefix match.
        """
        result: list[tuple[str, str]] = []
        seen: set[str] = set()

        def add(hanzi: str, strokes: str) -> None:
            if strokes not in seen:
                seen.add(strokes)
                result.append((hanzi, strokes))

        matches = list(itertools.islice(self._dict.iter_prefix(text), 2))
        if len(matches) == 1:
            key = matches[0]
            index = key.rfind(_SEPARATOR)
            if index >= 0:
                add(key[index + 1 :], key[:index])
        if len(result) >= limit:
            return result

        queue: list[tuple[int, int, str, str]] = []
        counter = itertools.count()

        def push(weight: int, prefix: str, remain: str) -> None:
            if weight >= _MAX_WEIGHT:
                return
            heapq.heappush(queue, (weight, next(counter), prefix, remain))

        push(0, "", text)
        while queue:
            weight, _, prefix, remain = heapq.heappop(queue)
            if not remain:
                full = False
                for key in self._dict.iter_prefix(prefix + _SEPARATOR):
                    add(key[len(prefix) + 1 :], key[: len(prefix)])
                    if len(result) >= limit:
                        full = True
                        break
                if full:
                    break
            else:
                push(weight + DELETION_WEIGHT, prefix, remain[1:])

            for digit in "12345":
                next_prefix = prefix + digit
                if not self._dict.has_prefix(next_prefix):
                    continue
                if remain and remain[0] == digit:
                    push(weight, next_prefix, remain[1:])
                else:
                    push(weight + INSERTION_WEIGHT, next_prefix, remain)
                    if remain:
                        push(weight + SUBSTITUTION_WEIGHT, next_prefix, remain[1:])
                if len(remain) >= 2 and remain[1] == digit:
                    swapped = next_prefix + remain[0]
                    if self._dict.has_prefix(swapped):
                        push(weight + TRANSPOSITION_WEIGHT, swapped, remain[2:])
        return result

    def reverse_lookup(self, hanzi: str) -> str:
        """Return the stroke sequence of a character if it has exactly one, else ""."""
        prefix = hanzi + _SEPARATOR
        matches = list(itertools.islice(self._reverse.iter_prefix(prefix), 2))
        if len(matches) != 1:
            return ""
        return matches[0][len(prefix) :]

    def pretty_string(self, text: str) -> str:
        return pretty_stroke_string(text)