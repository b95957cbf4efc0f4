import pytest

from hanzitools.chttrans_native import (
    ChttransBackend,
    ChttransConfig,
    ChttransEngine,
    ChttransIMType,
    NativeBackend,
)

TABLE = ["简簡\n", "体體\n", "发發\n", "发髮\n", "x\n", "\n", "汉漢"]


@pytest.fixture
def backend():
    b = NativeBackend()
    b.load_table(TABLE)
    return b


def test_simp_to_trad(backend):
    assert backend.convert_simp_to_trad("简体x") == "簡體x"


def test_trad_to_simp(backend):
    assert backend.convert_trad_to_simp("簡體") == "简体"


def test_first_mapping_wins_for_simp(backend):
    assert backend.convert_simp_to_trad("发") == "發"


def test_second_traditional_still_maps_back(backend):
    assert backend.convert_trad_to_simp("髮發") == "发发"


def test_line_without_newline_is_used(backend):
    assert backend.convert_simp_to_trad("汉") == "漢"


def test_unknown_chars_pass_through(backend):
    text = "abc，。"
    assert backend.convert_simp_to_trad(text) == text
    assert backend.convert_trad_to_simp(text) == text


def test_short_lines_are_skipped():
    b = NativeBackend()
    b.load_table(["x\n", "\n", ""])
    assert b.convert_simp_to_trad("x") == "x"


def test_surrogate_lines_are_skipped():
    b = NativeBackend()
    b.load_table(["\udcff簡\n"])
    assert b.convert_trad_to_simp("簡") == "簡"


def test_load_from_file(tmp_path):
    path = tmp_path / "gbks2t.tab"
    path.write_text("简簡\n体體\n", encoding="utf-8")
    b = NativeBackend(path)
    assert b.loaded() is False
    assert b.load(ChttransConfig()) is True
    assert b.loaded() is True
    assert b.convert_simp_to_trad("简体") == "簡體"


def test_load_missing_file_fails_and_is_cached(tmp_path):
    path = tmp_path / "missing.tab"
    b = NativeBackend(path)
    assert b.load(ChttransConfig()) is False
    assert b.loaded() is False
    path.write_text("简簡\n", encoding="utf-8")
    assert b.load(ChttransConfig()) is False
    assert b.convert_simp_to_trad("简") == "简"


def test_load_without_path_fails():
    b = NativeBackend()
    assert b.load(ChttransConfig()) is False


def test_config_defaults():
    config = ChttransConfig()
    assert config.engine is ChttransEngine.OPENCC
    assert config.hotkey == ["Control+Shift+F"]
    assert config.enabled_im == []
    assert config.opencc_s2t_profile == "default"


def test_enum_values():
    assert ChttransEngine("Native") is ChttransEngine.NATIVE
    assert ChttransIMType("Trad") is ChttransIMType.TRAD


def test_backend_is_abstract():
    with pytest.raises(TypeError):
        ChttransBackend()