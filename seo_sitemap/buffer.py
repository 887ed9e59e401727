"""
In-progress chunk of accepted entries with a running size estimate.
"""

from __future__ import annotations

import logging

from .errors import IllegalStateError, InvalidArgumentError, OutOfRangeError
from .models import MAX_FILE_SIZE, MAX_URLS_PER_SITEMAP, Chunk, UrlEntry
from .renderer import ChunkRenderer

logger = logging.getLogger(__name__)


def check_max_urls(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"max URLs per sitemap must be an integer, got {value!r}")
    if value < 1 or value > MAX_URLS_PER_SITEMAP:
        raise OutOfRangeError(f"max URLs per sitemap must be between 1 and {MAX_URLS_PER_SITEMAP}, got {value}")
    return value


def check_max_file_size(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"max file size must be an integer, got {value!r}")
    if value < 1 or value > MAX_FILE_SIZE:
        raise OutOfRangeError(f"max file size must be between 1 and {MAX_FILE_SIZE} bytes, got {value}")
    return value


class EntryBuffer:
    """Collects entries until either the URL count or the byte ceiling would be exceeded.

    The byte ceiling applies to the uncompressed markup. An entry that is larger
    than the ceiling on its own still gets a chunk of its own.
    """

    def __init__(
        self,
        renderer: ChunkRenderer,
        max_urls: int = MAX_URLS_PER_SITEMAP,
        max_file_size: int = MAX_FILE_SIZE,
    ) -> None:
        self._renderer = renderer
        self._max_urls = check_max_urls(max_urls)
        self._max_file_size = check_max_file_size(max_file_size)
        self._entries: list[UrlEntry] = []
        self._size = renderer.envelope_size
        self._flushed = 0
        self._accepted = 0

    @property
    def max_urls(self) -> int:
        return self._max_urls

    @max_urls.setter
    def max_urls(self, value: int) -> None:
        check_max_urls(value)
        if self._flushed:
            raise IllegalStateError("max URLs per sitemap cannot change after a sitemap has been flushed")
        self._max_urls = value

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    @max_file_size.setter
    def max_file_size(self, value: int) -> None:
        check_max_file_size(value)
        if self._flushed:
            raise IllegalStateError("max file size cannot change after a sitemap has been flushed")
        self._max_file_size = value

    @property
    def pending(self) -> int:
        return len(self._entries)

    @property
    def estimated_size(self) -> int:
        return self._size

    @property
    def flushed_count(self) -> int:
        return self._flushed

    @property
    def accepted_count(self) -> int:
        return self._accepted

    def overflow_reason(self, entry_size: int) -> str | None:
        if not self._entries:
            return None
        if len(self._entries) + 1 > self._max_urls:
            return "count"
        if self._size + entry_size > self._max_file_size:
            return "size"
        return None

    def accept(self, entry: UrlEntry) -> Chunk | None:
        """Place ``entry`` and return the chunk closed to make room for it, if any."""
        entry_size = self._renderer.entry_size(entry)
        closed = None
        reason = self.overflow_reason(entry_size)
        if reason is not None:
            logger.debug("Closing chunk of %d URLs (%s limit reached)", len(self._entries), reason)
            closed = self._close()
        self._entries.append(entry)
        self._size += entry_size
        self._accepted += 1
        return closed

    def flush_remainder(self) -> Chunk | None:
        if not self._entries:
            return None
        return self._close()

    def _close(self) -> Chunk:
        chunk = Chunk(entries=tuple(self._entries), estimated_size=self._size)
        self._entries = []
        self._size = self._renderer.envelope_size
        self._flushed += 1
        return chunk
