import pytest

from hanzitools.pinyinlookup import (
    PinyinLookup,
    PinyinLookupData,
    get_konsonant,
    get_vokal,
    parse_py_table,
)


def _record(char, readings):
    word = char.encode("utf-8")
    body = bytes([len(word)]) + word + bytes([len(readings)])
    for reading in readings:
        body += bytes(reading)
    return body


ZHONG = _record("中", [(24, 25, 1)])
HAO = _record("好", [(7, 5, 3), (7, 5, 4)])


def test_table_values():
    assert get_konsonant(3) == "ch"
    assert get_konsonant(0) == ""
    assert get_vokal(1, 3) == "ǎ"
    assert get_vokal(37, 0) == "ü"


def test_out_of_range_indices():
    assert get_konsonant(25) == ""
    assert get_konsonant(-1) == ""
    assert get_vokal(41, 1) == ""
    assert get_vokal(1, 7) == get_vokal(1, 0)


def test_parse_table():
    table = parse_py_table(ZHONG + HAO)
    assert table["中"] == [PinyinLookupData(24, 25, 1)]
    assert table["好"] == [PinyinLookupData(7, 5, 3), PinyinLookupData(7, 5, 4)]


def test_parse_skips_zero_count_and_merges_duplicates():
    data = _record("中", []) + _record("好", [(7, 5, 3)]) + _record("好", [(7, 5, 4)])
    table = parse_py_table(data)
    assert "中" not in table
    assert len(table["好"]) == 2


@pytest.mark.parametrize(
    "data",
    [
        bytes([7]) + b"a" * 7 + b"\x00",
        bytes([3]) + "中".encode()[:2],
        bytes([2]) + b"ab" + b"\x00",
        bytes([0, 0]),
        ZHONG[:-1],
        bytes([1]) + b"a",
    ],
)
def test_parse_rejects_malformed(data):
    with pytest.raises(ValueError):
        parse_py_table(data)


def test_lookup_from_file(tmp_path):
    path = tmp_path / "py_table.mb"
    path.write_bytes(ZHONG + HAO)
    lookup = PinyinLookup(path)
    assert lookup.load() is True
    assert lookup.lookup("中") == ["zhōng"]
    assert lookup.lookup(ord("中")) == lookup.lookup("中")
    assert lookup.lookup("好")[0] == "hǎo"
    assert lookup.lookup("x") == []


def test_full_lookup(tmp_path):
    path = tmp_path / "py_table.mb"
    path.write_bytes(ZHONG)
    lookup = PinyinLookup(path)
    assert lookup.load()
    assert lookup.full_lookup("中") == [("zhōng", "zhong", 1)]


def test_empty_reading_is_skipped(tmp_path):
    path = tmp_path / "py_table.mb"
    path.write_bytes(_record("中", [(0, 0, 1), (24, 25, 1)]))
    lookup = PinyinLookup(path)
    assert lookup.load()
    assert len(lookup.lookup("中")) == 1
    assert len(lookup.full_lookup("中")) == 1


def test_missing_file_fails_and_is_remembered(tmp_path):
    path = tmp_path / "missing.mb"
    lookup = PinyinLookup(path)
    assert lookup.load() is False
    path.write_bytes(ZHONG)
    assert lookup.load() is False
    assert lookup.lookup("中") == []


def test_malformed_file_fails(tmp_path):
    path = tmp_path / "bad.mb"
    path.write_bytes(ZHONG[:-2])
    lookup = PinyinLookup(path)
    assert lookup.load() is False
    assert lookup.lookup("中") == []


def test_no_path_fails():
    assert PinyinLookup().load() is False