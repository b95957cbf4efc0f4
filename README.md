# hanzitools

Helpers for typing and converting Chinese text. This is a library only. It has no command-line program.

## What it provides

- `hanzitools.chttrans_native` holds the conversion settings (`ChttransConfig`) and the backend interface (`ChttransBackend`). It also provides `NativeBackend`, which converts one character at a time using a table. The table file holds one line per mapping: a simplified character followed by its traditional character. You can read it from a path or feed lines to `load_table`.
- `hanzitools.chttrans` provides `Chttrans`, which handles conversion per input method. Conversion applies to an `InputMethodEntry` whose language is `zh_CN`, `zh_HK` or `zh_TW`.
  - `toggle` switches conversion on or off for that input method.
  - `filter_commit` converts text that is about to be committed.
  - `filter_output` converts formatted preedit segments and keeps each segment's length, format and cursor position.
- `hanzitools.fullwidth` maps printable ASCII to full-width forms:
  - `to_fullwidth` converts every printable character except space.
  - `fullwidth_for_key` returns the full-width text for a single key symbol, space included.
  - `Fullwidth` is a mode that can be toggled and processes keys and committed text.
- `hanzitools.pinyinlookup` reads a binary reading table. `PinyinLookup.lookup` returns the toned readings of a character. `full_lookup` returns tuples of toned reading, reading without tone, and tone number.
- `hanzitools.stroke` looks characters up by stroke sequence, using digits `1`–`5`.
  - `Stroke.lookup` returns `(hanzi, strokes)` pairs. It also finds sequences one edit away: a deletion, insertion, substitution or transposition.
  - `reverse_lookup` gives the stroke sequence of a character.
  - `pretty_stroke_string` renders a sequence as stroke glyphs.
  - The table is loaded on a background thread.
- `hanzitools.pinyinhelper` combines reading and stroke lookup in `PinyinHelper`.
  - Strokes may be given as digits or as the letters `h s p n z`.
  - `duyin_candidates` builds candidates of the form `字 (zì)` for selected or clipboard text.
- `hanzitools.cloudpinyin` sends pinyin to Google or Baidu and keeps answers in an LRU cache.
  - Requests run in the background through `hanzitools.fetch.FetchThread`.
  - Results reach your callbacks when you call `CloudPinyin.process_finished`. `finished_event` is set whenever results are waiting.
  - After 10 failed requests, no more requests are made until `reset_error` is called or five minutes have passed.
- `hanzitools.lrucache.LRUCache` is the bounded least-recently-used cache used for those answers.

## What it does not do

The package does not map half-width punctuation to full-width punctuation. It ships no data tables. The character table, reading table and stroke table must be supplied by the caller.

## Installing

```
pip install .
```

## Examples

Convert text to full-width characters:

```python
from hanzitools.fullwidth import to_fullwidth

to_fullwidth("abc 123")  # "ａｂｃ １２３"
```

Convert simplified to traditional text with your own table:

```python
from hanzitools.chttrans_native import NativeBackend

backend = NativeBackend()
backend.load_table(["发發", "这這"])
backend.convert_simp_to_trad("这发")  # "這發"
```

Look up a character by its strokes:

```python
from hanzitools.stroke import Stroke, pretty_stroke_string

stroke = Stroke("py_stroke.mb")
stroke.load()
stroke.lookup("12", 5)
pretty_stroke_string("12345")  # "一丨丿㇏𠃍"
```

Keep recent results in a small cache:

```python
from hanzitools.lrucache import LRUCache

cache = LRUCache(2)
cache.insert("ni", "你")
cache.find("ni")  # "你"
```

## Running the tests

```
pip install .[test]
pytest
```