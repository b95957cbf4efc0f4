"""Background fetching of cloud pinyin requests."""

from __future__ import annotations

import threading
import urllib.error
import urllib.request
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Deque, Optional

MAX_HANDLE = 100
MAX_BUFFER_SIZE = 2048
REQUEST_TIMEOUT = 10.0
_WORKERS = 8

Fetcher = Callable[[str, Optional[str], float], "tuple[int, bytes]"]
ResultCallback = Callable[[str, str], None]


def urllib_fetch(url: str, proxy: Optional[str], timeout: float) -> tuple[int, bytes]:
    """Fetch ``url`` and return the HTTP status and at most one byte past the limit."""
    handlers = []
    if proxy:
        handlers.append(urllib.request.ProxyHandler({"http": proxy, "https": proxy}))
    opener = urllib.request.build_opener(*handlers)
    try:
        with opener.open(url, timeout=timeout) as response:
            return response.status, response.read(MAX_BUFFER_SIZE + 1)
    except urllib.error.HTTPError as error:
        return error.code, error.read(MAX_BUFFER_SIZE + 1)


@dataclass(eq=False)
class FetchRequest:
    """One reusable request slot and the response it received."""

    url: str = ""
    proxy: Optional[str] = None
    pinyin: str = ""
    callback: Optional[ResultCallback] = None
    busy: bool = False
    http_code: int = 0
    error: Optional[BaseException] = None
    data: bytearray = field(default_factory=bytearray)

    @property
    def result(self) -> bytes:
        return bytes(self.data)

    def append(self, data: bytes) -> int:
        """Add response bytes; return how many were taken, 0 past the size limit."""
        if len(self.data) + len(data) > MAX_BUFFER_SIZE:
            return 0
        self.data.extend(data)
        return len(data)

    def release(self) -> None:
        """Make the slot free for another request."""
        self.url = ""
        self.proxy = None
        self.pinyin = ""
        self.callback = None
        self.busy = False
        self.http_code = 0
        self.error = None
        self.data.clear()


class FetchThread:
    """Runs requests in the background and queues them once they finish.

    At most :data:`MAX_HANDLE` requests are in flight or waiting to be
    collected; a finished request stays busy until it is released.
    ``on_finished`` is called from a worker thread after each request ends.
    """

    def __init__(
        self,
        on_finished: Optional[Callable[[], None]] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self._on_finished = on_finished
        self._fetcher = fetcher if fetcher is not None else urllib_fetch
        self._handles = [FetchRequest() for _ in range(MAX_HANDLE)]
        self._finished: Deque[FetchRequest] = deque()
        self._finished_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=_WORKERS, thread_name_prefix="fetch"
        )
        self._closed = False

    def __enter__(self) -> "FetchThread":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def add_request(self, setup: Callable[[FetchRequest], bool]) -> bool:
        """Fill a free slot with ``setup`` and start it; False if none is free."""
        if self._closed:
            return False
        request = next((handle for handle in self._handles if not handle.busy), None)
        if request is None:
            return False
        if not setup(request):
            request.release()
            return False
        request.busy = True
        self._executor.submit(self._perform, request)
        return True

    def pop_finished(self) -> Optional[FetchRequest]:
        """Return the oldest finished request, or None."""
        with self._finished_lock:
            return self._finished.popleft() if self._finished else None

    def close(self) -> None:
        """Stop accepting requests, wait for running ones and free every slot."""
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=True, cancel_futures=True)
        with self._finished_lock:
            self._finished.clear()
        for handle in self._handles:
            handle.release()

    def _perform(self, request: FetchRequest) -> None:
        try:
            code, body = self._fetcher(request.url, request.proxy, REQUEST_TIMEOUT)
            request.http_code = code
            if body and request.append(body) == 0:
                request.error = ValueError("response exceeds buffer size")
        except Exception as error:  # any failure ends the request
            request.http_code = 0
            request.error = error
        with self._finished_lock:
            self._finished.append(request)
        if self._on_finished is not None:
            self._on_finished()