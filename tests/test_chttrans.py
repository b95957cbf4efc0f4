import pytest

from hanzitools.chttrans import Chttrans, InputMethodEntry, input_method_entry_type
from hanzitools.chttrans_native import (
    ChttransConfig,
    ChttransEngine,
    ChttransIMType,
    NativeBackend,
)

SIMP_IM = InputMethodEntry("pinyin", "zh_CN")
TRAD_IM = InputMethodEntry("cangjie", "zh_TW")
OTHER_IM = InputMethodEntry("keyboard-us", "en")


@pytest.fixture
def chttrans(tmp_path):
    table = tmp_path / "gbks2t.tab"
    table.write_text("简簡\n体體\n", encoding="utf-8")
    backend = NativeBackend(table)
    return Chttrans(ChttransConfig(), {ChttransEngine.NATIVE: backend})


@pytest.mark.parametrize(
    "code, expected",
    [
        ("zh_CN", ChttransIMType.SIMP),
        ("zh_TW", ChttransIMType.TRAD),
        ("zh_HK", ChttransIMType.TRAD),
        ("en", ChttransIMType.OTHER),
        ("", ChttransIMType.OTHER),
    ],
)
def test_input_method_entry_type(code, expected):
    assert input_method_entry_type(InputMethodEntry("x", code)) == expected


def test_engine_falls_back_to_native(chttrans):
    assert chttrans.config.engine == ChttransEngine.OPENCC
    assert isinstance(chttrans.current_backend, NativeBackend)


def test_no_entry_is_other(chttrans):
    assert chttrans.input_method_type(None) == ChttransIMType.OTHER
    assert chttrans.convert_type(None) == ChttransIMType.OTHER


def test_types_before_and_after_toggle(chttrans):
    assert chttrans.convert_type(SIMP_IM) == ChttransIMType.OTHER
    assert chttrans.current_type(SIMP_IM) == ChttransIMType.SIMP
    chttrans.toggle(SIMP_IM)
    assert chttrans.convert_type(SIMP_IM) == ChttransIMType.TRAD
    assert chttrans.current_type(SIMP_IM) == ChttransIMType.TRAD
    assert chttrans.config.enabled_im == ["pinyin"]
    chttrans.toggle(SIMP_IM)
    assert chttrans.current_type(SIMP_IM) == ChttransIMType.SIMP
    assert chttrans.config.enabled_im == []


def test_toggle_other_does_nothing(chttrans):
    chttrans.toggle(OTHER_IM)
    assert chttrans.config.enabled_im == []
    assert chttrans.current_type(OTHER_IM) == ChttransIMType.OTHER


def test_filter_commit(chttrans):
    assert chttrans.filter_commit(SIMP_IM, "简体") == "简体"
    chttrans.toggle(SIMP_IM)
    assert chttrans.filter_commit(SIMP_IM, "简体") == "簡體"


def test_filter_commit_trad_im(chttrans):
    chttrans.toggle(TRAD_IM)
    assert chttrans.filter_commit(TRAD_IM, "簡體字") == "简体字"


def test_populate_config_reads_enabled(chttrans):
    chttrans.config.enabled_im = ["pinyin"]
    chttrans.populate_config()
    assert chttrans.convert_type(SIMP_IM) == ChttransIMType.TRAD


def test_convert_without_backend():
    chttrans = Chttrans(ChttransConfig(), {})
    assert chttrans.current_backend is None
    assert chttrans.convert(ChttransIMType.TRAD, "简体") == "简体"


def test_convert_missing_table(tmp_path):
    backend = NativeBackend(tmp_path / "missing.tab")
    chttrans = Chttrans(ChttransConfig(), {ChttransEngine.NATIVE: backend})
    assert chttrans.convert(ChttransIMType.TRAD, "简体") == "简体"


def test_filter_output_segments(chttrans):
    chttrans.toggle(SIMP_IM)
    segments = [("简a", "bold"), ("体", "plain")]
    new_segments, cursor = chttrans.filter_output(SIMP_IM, segments, 2)
    assert new_segments == [("簡a", "bold"), ("體", "plain")]
    assert cursor == 2


def test_filter_output_single_and_negative_cursor(chttrans):
    chttrans.toggle(SIMP_IM)
    new_segments, cursor = chttrans.filter_output(SIMP_IM, [("简体", 0)], -1)
    assert new_segments == [("簡體", 0)]
    assert cursor == -1


def test_filter_output_unchanged_when_disabled(chttrans):
    segments = [("简", 1), ("体", 2)]
    assert chttrans.filter_output(SIMP_IM, segments, 1) == (segments, 1)


def test_filter_output_empty(chttrans):
    chttrans.toggle(SIMP_IM)
    assert chttrans.filter_output(SIMP_IM, [], 0) == ([], 0)


def test_short_text_and_icon(chttrans):
    assert chttrans.short_text(SIMP_IM) == "Simplified Chinese"
    assert chttrans.icon(SIMP_IM) == "fcitx-chttrans-inactive"
    chttrans.toggle(SIMP_IM)
    assert chttrans.short_text(SIMP_IM) == "Traditional Chinese"
    assert chttrans.icon(SIMP_IM) == "fcitx-chttrans-active"