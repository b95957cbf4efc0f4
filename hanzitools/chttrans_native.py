"""Simplified/Traditional Chinese conversion backends driven by a character table."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union


class ChttransIMType(Enum):
    """Script an input method produces, or the direction to convert to."""

    SIMP = "Simp"
    TRAD = "Trad"
    OTHER = "Other"


class ChttransEngine(Enum):
    """Available conversion engines."""

    NATIVE = "Native"
    OPENCC = "OpenCC"


@dataclass
class ChttransConfig:
    """Settings of the Simplified/Traditional conversion module."""

    engine: ChttransEngine = ChttransEngine.OPENCC
    hotkey: list[str] = field(default_factory=lambda: ["Control+Shift+F"])
    enabled_im: list[str] = field(default_factory=list)
    opencc_s2t_profile: str = "default"
    opencc_t2s_profile: str = "default"


class ChttransBackend(ABC):
    """A conversion backend that loads its data once, on first use."""

    def __init__(self) -> None:
        self._loaded = False
        self._load_result = False

    def load(self, config: ChttransConfig) -> bool:
        """Load the backend if not tried yet; return whether loading succeeded."""
        if not self._loaded:
            self._load_result = self._load_once(config)
            self._loaded = True
        return self._load_result

    def loaded(self) -> bool:
        """True once loading has been attempted and succeeded."""
        return self._loaded and self._load_result

    @abstractmethod
    def convert_simp_to_trad(self, text: str) -> str:
        """Convert Simplified Chinese text to Traditional Chinese."""

    @abstractmethod
    def convert_trad_to_simp(self, text: str) -> str:
        """Convert Traditional Chinese text to Simplified Chinese."""

    def update_config(self, config: ChttransConfig) -> None:
        """React to a configuration change; nothing to do by default."""

    @abstractmethod
    def _load_once(self, config: ChttransConfig) -> bool:
        """Do the actual loading work."""


def _is_valid_char(char: str) -> bool:
    code = ord(char)
    return code <= 0x10FFFF and not 0xD800 <= code <= 0xDFFF


class NativeBackend(ChttransBackend):
    """Character-by-character conversion using a two-column table file.

    Each line of the table starts with a simplified character followed by its
    traditional counterpart. The first mapping seen for a character wins.
    """

    def __init__(self, table_path: Optional[Union[str, os.PathLike]] = None) -> None:
        super().__init__()
        self._table_path = table_path
        self._s2t: dict[str, str] = {}
        self._t2s: dict[str, str] = {}

    def load_table(self, lines: Iterable[str]) -> None:
        """Add the mappings found in ``lines`` to the conversion maps."""
        for line in lines:
            line = line.rstrip("\n")
            if len(line) < 2:
                continue
            simp, trad = line[0], line[1]
            if not _is_valid_char(simp) or not _is_valid_char(trad):
                continue
            self._s2t.setdefault(simp, trad)
            self._t2s.setdefault(trad, simp)

    def convert_simp_to_trad(self, text: str) -> str:
        return _convert(self._s2t, text)

    def convert_trad_to_simp(self, text: str) -> str:
        return _convert(self._t2s, text)

    def _load_once(self, config: ChttransConfig) -> bool:
        if self._table_path is None:
            return False
        try:
            with open(
                self._table_path,
                encoding="utf-8",
                errors="surrogateescape",
                newline="\n",
            ) as table:
                self.load_table(table)
        except OSError:
            return False
        return True


def _convert(trans_map: dict[str, str], text: str) -> str:
    return "".join(trans_map.get(char, char) for char in text)