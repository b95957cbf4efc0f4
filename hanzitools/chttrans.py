"""Toggleable Simplified/Traditional Chinese conversion of committed text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from hanzitools.chttrans_native import (
    ChttransBackend,
    ChttransConfig,
    ChttransEngine,
    ChttransIMType,
    NativeBackend,
)


@dataclass(frozen=True)
class InputMethodEntry:
    """The parts of an input method description that conversion depends on."""

    unique_name: str
    language_code: str = ""


def input_method_entry_type(entry: InputMethodEntry) -> ChttransIMType:
    """Return the script an input method produces, judged by its language."""
    if entry.language_code == "zh_CN":
        return ChttransIMType.SIMP
    if entry.language_code in ("zh_HK", "zh_TW"):
        return ChttransIMType.TRAD
    return ChttransIMType.OTHER


def _is_valid_text(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class Chttrans:
    """Converts text of Chinese input methods for which conversion is enabled.

    An input method producing Simplified Chinese gets its output converted to
    Traditional Chinese once toggled, and the other way round.
    """

    def __init__(
        self,
        config: Optional[ChttransConfig] = None,
        backends: Optional[Mapping[ChttransEngine, ChttransBackend]] = None,
    ) -> None:
        self.config = config if config is not None else ChttransConfig()
        if backends is None:
            backends = {ChttransEngine.NATIVE: NativeBackend()}
        self._backends: dict[ChttransEngine, ChttransBackend] = dict(backends)
        self._current_backend: Optional[ChttransBackend] = None
        self._enabled_im: set[str] = set()
        self.populate_config()

    @property
    def current_backend(self) -> Optional[ChttransBackend]:
        return self._current_backend

    def populate_config(self) -> None:
        """Apply the configuration: enabled input methods and the engine."""
        self._enabled_im = set(self.config.enabled_im)
        for backend in self._backends.values():
            if backend.loaded():
                backend.update_config(self.config)
        engine = self.config.engine
        backend = self._backends.get(engine)
        if backend is None and engine != ChttransEngine.NATIVE:
            backend = self._backends.get(ChttransEngine.NATIVE)
        self._current_backend = backend

    def _sync_to_config(self) -> None:
        self.config.enabled_im = sorted(self._enabled_im)

    def convert(self, im_type: ChttransIMType, text: str) -> str:
        """Convert ``text`` towards ``im_type``; return it unchanged on failure."""
        backend = self._current_backend
        if backend is None or not backend.load(self.config):
            return text
        if im_type == ChttransIMType.TRAD:
            return backend.convert_simp_to_trad(text)
        return backend.convert_trad_to_simp(text)

    def input_method_type(self, entry: Optional[InputMethodEntry]) -> ChttransIMType:
        """Script the input method produces by itself."""
        if entry is None:
            return ChttransIMType.OTHER
        return input_method_entry_type(entry)

    def convert_type(self, entry: Optional[InputMethodEntry]) -> ChttransIMType:
        """Direction to convert to, or OTHER when no conversion applies."""
        im_type = self.input_method_type(entry)
        if im_type == ChttransIMType.OTHER:
            return ChttransIMType.OTHER
        assert entry is not None
        if entry.unique_name not in self._enabled_im:
            return ChttransIMType.OTHER
        return _flip(im_type)

    def current_type(self, entry: Optional[InputMethodEntry]) -> ChttransIMType:
        """Script the user actually gets, taking conversion into account."""
        im_type = self.input_method_type(entry)
        if im_type == ChttransIMType.OTHER:
            return ChttransIMType.OTHER
        assert entry is not None
        if entry.unique_name not in self._enabled_im:
            return im_type
        return _flip(im_type)

    def toggle(self, entry: Optional[InputMethodEntry]) -> None:
        """Switch conversion on or off for a Chinese input method."""
        if self.input_method_type(entry) == ChttransIMType.OTHER:
            return
        assert entry is not None
        if entry.unique_name in self._enabled_im:
            self._enabled_im.discard(entry.unique_name)
        else:
            self._enabled_im.add(entry.unique_name)
        self._sync_to_config()

    def filter_commit(self, entry: Optional[InputMethodEntry], text: str) -> str:
        """Return the text to commit, converted if conversion is enabled."""
        im_type = self.convert_type(entry)
        if im_type == ChttransIMType.OTHER:
            return text
        return self.convert(im_type, text)

    def filter_output(
        self,
        entry: Optional[InputMethodEntry],
        segments: Sequence[tuple[str, Any]],
        cursor: int,
    ) -> tuple[list[tuple[str, Any]], int]:
        """Convert formatted text shown to the user.

        ``segments`` are ``(text, format)`` pairs and ``cursor`` a character
        offset, negative when there is none. The converted text is split
        again so that each segment keeps its length and format.
        """
        original = list(segments)
        old_string = "".join(text for text, _ in original)
        if not old_string:
            return original, cursor
        im_type = self.convert_type(entry)
        if im_type == ChttransIMType.OTHER:
            return original, cursor
        if not _is_valid_text(old_string):
            return original, cursor
        new_string = self.convert(im_type, old_string)
        if not _is_valid_text(new_string):
            return original, cursor
        new_length = len(new_string)

        if len(original) == 1:
            new_segments = [(new_string, original[0][1])]
        else:
            new_segments = []
            offset = 0
            remain = new_length
            for text, fmt in original:
                segment_length = min(len(text), remain)
                remain -= segment_length
                new_segments.append(
                    (new_string[offset : offset + segment_length], fmt)
                )
                offset += segment_length

        if cursor > 0:
            new_cursor = min(len(old_string[:cursor]), new_length)
        else:
            new_cursor = cursor
        return new_segments, new_cursor

    def short_text(self, entry: Optional[InputMethodEntry]) -> str:
        if self.current_type(entry) == ChttransIMType.TRAD:
            return "Traditional Chinese"
        return "Simplified Chinese"

    def icon(self, entry: Optional[InputMethodEntry]) -> str:
        if self.current_type(entry) == ChttransIMType.TRAD:
            return "fcitx-chttrans-active"
        return "fcitx-chttrans-inactive"


def _flip(im_type: ChttransIMType) -> ChttransIMType:
    if im_type == ChttransIMType.SIMP:
        return ChttransIMType.TRAD
    return ChttransIMType.SIMP