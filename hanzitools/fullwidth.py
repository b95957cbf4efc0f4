"""Full width character input for printable ASCII."""

from __future__ import annotations

from typing import Iterable, Optional

_CORNER_TRANS = (
    "　", "！", "＂", "＃", "￥", "％", "＆", "＇", "（", "）", "＊", "＋",
    "，", "－", "．", "／", "０", "１", "２", "３", "４", "５", "６", "７",
    "８", "９", "：", "；", "＜", "＝", "＞", "？", "＠", "Ａ", "Ｂ", "Ｃ",
    "Ｄ", "Ｅ", "Ｆ", "Ｇ", "Ｈ", "Ｉ", "Ｊ", "Ｋ", "Ｌ", "Ｍ", "Ｎ", "Ｏ",
    "Ｐ", "Ｑ", "Ｒ", "Ｓ", "Ｔ", "Ｕ", "Ｖ", "Ｗ", "Ｘ", "Ｙ", "Ｚ", "［",
    "＼", "］", "＾", "＿", "｀", "ａ", "ｂ", "ｃ", "ｄ", "ｅ", "ｆ", "ｇ",
    "ｈ", "ｉ", "ｊ", "ｋ", "ｌ", "ｍ", "ｎ", "ｏ", "ｐ", "ｑ", "ｒ", "ｓ",
    "ｔ", "ｕ", "ｖ", "ｗ", "ｘ", "ｙ", "ｚ", "｛", "｜", "｝", "～",
)


def to_fullwidth(text: str) -> str:
    """Replace printable ASCII other than space with full width forms."""
    return "".join(
        _CORNER_TRANS[ord(char) - 32] if 32 < ord(char) < 32 + len(_CORNER_TRANS)
        else char
        for char in text
    )


def fullwidth_for_key(sym: int) -> Optional[str]:
    """Return the full width text for a key symbol, space included, or None."""
    if 32 <= sym < 32 + len(_CORNER_TRANS):
        return _CORNER_TRANS[sym - 32]
    return None


class Fullwidth:
    """Toggleable full width mode.

    ``hotkeys`` are ``(sym, states)`` pairs that switch the mode.
    """

    def __init__(self, hotkeys: Optional[Iterable[tuple[int, int]]] = None) -> None:
        self.hotkeys: list[tuple[int, int]] = list(hotkeys or [])
        self.enabled = False

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def toggle(self) -> None:
        self.set_enabled(not self.enabled)

    def process_key(self, sym: int, states: int, release: bool) -> tuple[bool, str]:
        """Handle a key; return whether it was consumed and the text to commit."""
        if release:
            return False, ""
        if (sym, states) in self.hotkeys:
            self.toggle()
            return True, ""
        if not self.enabled or states:
            return False, ""
        text = fullwidth_for_key(sym)
        if text is None:
            return False, ""
        return True, text

    def filter_commit(self, text: str) -> str:
        """Return committed text, made full width when the mode is on."""
        if not self.enabled:
            return text
        return to_fullwidth(text)

    def short_text(self) -> str:
        return "Full width Character" if self.enabled else "Half width Character"

    def icon(self) -> str:
        return "fcitx-fullwidth-active" if self.enabled else "fcitx-fullwidth-inactive"