"""Cloud pinyin: ask an online service for the best sentence for a pinyin string."""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional
from urllib.parse import quote

from hanzitools.fetch import Fetcher, FetchRequest, FetchThread
from hanzitools.lrucache import LRUCache

_log = logging.getLogger(__name__)

MAX_ERROR = 10
RETRY_DELAY = 5 * 60.0
CACHE_SIZE = 2048

GOOGLE_URL = "https://www.google.com/inputtools/request?ime=pinyin&text="
GOOGLE_CN_URL = "https://www.google.cn/inputtools/request?ime=pinyin&text="
BAIDU_URL = "https://olime.baidu.com/py?rn=0&pn=1&ol=1&py="

CloudPinyinCallback = Callable[[str, str], None]


class CloudPinyinBackend(Enum):
    """Online services that can be queried."""

    GOOGLE = "Google"
    GOOGLE_CN = "GoogleCN"
    BAIDU = "Baidu"


@dataclass
class CloudPinyinConfig:
    """Settings of the cloud pinyin module."""

    toggle_key: list[str] = field(default_factory=lambda: ["Control+Alt+Shift+C"])
    minimum_length: int = 4
    backend: CloudPinyinBackend = CloudPinyinBackend.GOOGLE_CN
    proxy: str = ""


def _escape(text: str) -> str:
    return quote(text, safe="")


def _extract(text: str, start_marker: str, end_marker: str) -> str:
    start = text.find(start_marker)
    if start < 0:
        return ""
    start += len(start_marker)
    end = text.find(end_marker, start)
    if end < 0 or end <= start:
        return ""
    return text[start:end]


class Backend(ABC):
    """Builds the request URL for a service and parses its answer."""

    @abstractmethod
    def prepare_request(self, pinyin: str) -> Optional[str]:
        """Return the URL to fetch for ``pinyin``, or None if it cannot be built."""

    @abstractmethod
    def parse_result(self, data: bytes) -> str:
        """Return the sentence found in the response, or ""."""


class GoogleBackend(Backend):
    """Google input tools service."""

    def __init__(self, url: str) -> None:
        self.url = url

    def prepare_request(self, pinyin: str) -> Optional[str]:
        url = self.url + _escape(pinyin)
        _log.debug("Request URL: %s", url)
        return url

    def parse_result(self, data: bytes) -> str:
        text = data.decode("utf-8", errors="replace")
        _log.debug("Request result: %s", text)
        return _extract(text, '",["', '"')


class BaiduBackend(Backend):
    """Baidu online input service."""

    def prepare_request(self, pinyin: str) -> Optional[str]:
        url = BAIDU_URL + _escape(pinyin)
        _log.debug("Request URL: %s", url)
        return url

    def parse_result(self, data: bytes) -> str:
        text = data.decode("utf-8", errors="replace")
        _log.debug("Request result: %s", text)
        return _extract(text, '[["', '",')


class CloudPinyin:
    """Queries cloud services in the background and caches their answers.

    Callbacks of fetched requests run when :meth:`process_finished` is called,
    normally from the thread that issued the requests; :attr:`finished_event`
    is set whenever a request has finished and is waiting to be processed.
    After :data:`MAX_ERROR` failed requests no more requests are made until
    :meth:`reset_error` is called or five minutes have passed.
    """

    def __init__(
        self,
        config: Optional[CloudPinyinConfig] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.config = config if config is not None else CloudPinyinConfig()
        self._backends: dict[CloudPinyinBackend, Backend] = {
            CloudPinyinBackend.GOOGLE: GoogleBackend(GOOGLE_URL),
            CloudPinyinBackend.GOOGLE_CN: GoogleBackend(GOOGLE_CN_URL),
            CloudPinyinBackend.BAIDU: BaiduBackend(),
        }
        self._cache: LRUCache[str, str] = LRUCache(CACHE_SIZE)
        self._error_count = 0
        self._retry_at: Optional[float] = None
        self.finished_event = threading.Event()
        self._thread = FetchThread(on_finished=self.finished_event.set, fetcher=fetcher)

    def __enter__(self) -> "CloudPinyin":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def toggle_key(self) -> list[str]:
        return self.config.toggle_key

    def request(self, pinyin: str, callback: CloudPinyinCallback) -> None:
        """Look ``pinyin`` up; ``callback(pinyin, hanzi)`` gets "" on failure."""
        if len(pinyin.encode("utf-8")) < self.config.minimum_length:
            callback(pinyin, "")
            return
        cached = self._cache.find(pinyin)
        if cached is not None:
            callback(pinyin, cached)
            return
        if self._retry_at is not None and time.monotonic() >= self._retry_at:
            self.reset_error()
        backend = self._backends.get(self.config.backend)
        if backend is None or self._error_count >= MAX_ERROR:
            callback(pinyin, "")
            return
        proxy = self.config.proxy or None

        def setup(slot: FetchRequest) -> bool:
            url = backend.prepare_request(pinyin)
            if url is None:
                return False
            slot.url = url
            slot.proxy = proxy
            slot.pinyin = pinyin
            slot.callback = callback
            return True

        if not self._thread.add_request(setup):
            callback(pinyin, "")

    def process_finished(self) -> int:
        """Deliver the results of finished requests; return how many were handled."""
        self.finished_event.clear()
        backend = self._backends.get(self.config.backend)
        handled = 0
        while (item := self._thread.pop_finished()) is not None:
            if item.http_code != 200:
                self._error_count += 1
                if self._error_count == MAX_ERROR:
                    _log.error("Cloud pinyin reaches max error. Retry in 5 minutes.")
                    self._retry_at = time.monotonic() + RETRY_DELAY
            hanzi = backend.parse_result(item.result) if backend is not None else ""
            pinyin, callback = item.pinyin, item.callback
            item.release()
            if callback is not None:
                callback(pinyin, hanzi)
            if hanzi:
                self._cache.insert(pinyin, hanzi)
            handled += 1
        return handled

    def reset_error(self) -> None:
        """Forget past failures so requests are made again."""
        self._error_count = 0
        self._retry_at = None

    def close(self) -> None:
        """Stop the background fetching."""
        self._thread.close()