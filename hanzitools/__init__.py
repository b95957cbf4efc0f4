"""Chinese text helpers: script conversion, full-width characters, pinyin and stroke lookup, cloud pinyin."""

__version__ = "5.1.8"