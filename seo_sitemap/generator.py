"""
Sitemap generation session.

A ``SitemapGenerator`` collects URLs, writes bounded sitemap chunks as they
fill up, and on ``finalize`` writes the last chunk and the sitemap index.
Only a finalized session may patch robots.txt or ping search engines.

Usage:
    generator = SitemapGenerator("https://example.com", "public")
    generator.add_url("/products/", change_frequency="daily", priority=0.8)
    generator.finalize()
    generator.update_robots()
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime
from typing import Any
from urllib.parse import quote

from .buffer import EntryBuffer
from .errors import IllegalStateError, InvalidArgumentError, NoChunksError
from .index import IndexBuilder
from .models import (
    DEFAULT_INDEX_FILENAME,
    DEFAULT_ROBOTS_FILENAME,
    DEFAULT_SITEMAP_FILENAME,
    Chunk,
    PingResult,
    SessionState,
    SitemapIndexEntry,
    UrlEntry,
)
from .renderer import ChunkRenderer, chunk_filename
from .runtime import HttpRuntime, Runtime
from .storage import FileSystem, LocalFileSystem
from .validators import (
    is_valid_changefreq_value,
    is_valid_priority_value,
    normalize_base_url,
    validate_change_frequency,
    validate_filename,
    validate_priority,
    validate_url,
)

logger = logging.getLogger(__name__)

SEARCH_ENGINE_PING_URLS = (
    "http://www.google.com/ping?sitemap=",
    "http://www.bing.com/ping?sitemap=",
)
SITEMAP_EXTENSIONS = (".xml",)
DEFAULT_ROBOTS_CONTENT = "User-agent: *\nAllow: /\n"
AFTER_FINALIZE = (SessionState.FINALIZED, SessionState.ROBOTS_UPDATED, SessionState.SUBMITTED)


class SitemapGenerator:
    def __init__(
        self,
        base_url: str,
        base_path: str = "",
        fs: FileSystem | None = None,
        runtime: Runtime | None = None,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.fs = fs if fs is not None else LocalFileSystem(base_path)
        self.runtime = runtime if runtime is not None else HttpRuntime()
        self._renderer = ChunkRenderer()
        self._buffer = EntryBuffer(self._renderer)
        self._index = IndexBuilder(self.base_url)
        self._state = SessionState.COLLECTING
        self._compress = False
        self._sitemap_filename = DEFAULT_SITEMAP_FILENAME
        self._index_filename = DEFAULT_INDEX_FILENAME
        self._robots_filename = DEFAULT_ROBOTS_FILENAME
        self._written: list[str] = []

    # -- state ---------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def index_entries(self) -> tuple[SitemapIndexEntry, ...]:
        return self._index.entries

    @property
    def written_files(self) -> list[str]:
        return list(self._written)

    @property
    def index_url(self) -> str:
        return self._index.location_for(self._index_filename)

    def _require_state(self, *allowed: SessionState) -> None:
        if self._state not in allowed:
            raise IllegalStateError(f"method called out of sequence (session is {self._state.value})")

    def _require_no_flush(self, setting: str) -> None:
        if self._buffer.flushed_count:
            raise IllegalStateError(f"{setting} cannot change after a sitemap has been written")

    def _now(self) -> datetime:
        return datetime.now(UTC)

    # -- configuration -------------------------------------------------------

    def set_sitemap_filename(self, filename: str = "") -> SitemapGenerator:
        validate_filename(filename, SITEMAP_EXTENSIONS)
        self._require_state(SessionState.COLLECTING)
        self._require_no_flush("sitemap filename")
        self._sitemap_filename = filename
        return self

    def set_sitemap_index_filename(self, filename: str = "") -> SitemapGenerator:
        validate_filename(filename, SITEMAP_EXTENSIONS)
        self._require_state(SessionState.COLLECTING)
        self._require_no_flush("sitemap index filename")
        self._index_filename = filename
        return self

    def set_robots_filename(self, filename: str = "") -> SitemapGenerator:
        validate_filename(filename)
        self._require_state(SessionState.COLLECTING)
        self._robots_filename = filename
        return self

    def set_max_urls_per_sitemap(self, value: int) -> SitemapGenerator:
        self._require_state(SessionState.COLLECTING)
        self._buffer.max_urls = value
        return self

    def set_max_file_size(self, value: int) -> SitemapGenerator:
        self._require_state(SessionState.COLLECTING)
        self._buffer.max_file_size = value
        return self

    def enable_compression(self) -> SitemapGenerator:
        self._require_state(SessionState.COLLECTING)
        self._compress = True
        return self

    def disable_compression(self) -> SitemapGenerator:
        self._require_state(SessionState.COLLECTING)
        self._compress = False
        return self

    def is_compression_enabled(self) -> bool:
        return self._compress

    @staticmethod
    def is_valid_changefreq_value(value: Any) -> bool:
        return is_valid_changefreq_value(value)

    @staticmethod
    def is_valid_priority_value(value: Any) -> bool:
        return is_valid_priority_value(value)

    # -- collecting ----------------------------------------------------------

    def add_url(
        self,
        path: str,
        last_modified: datetime | date | None = None,
        change_frequency: str | None = None,
        priority: float | str | None = None,
    ) -> SitemapGenerator:
        self._require_state(SessionState.COLLECTING)
        location = validate_url(path, self.base_url)
        if last_modified is not None and not isinstance(last_modified, date):
            raise InvalidArgumentError(f"last_modified must be a date or datetime, got {type(last_modified).__name__}")
        entry = UrlEntry(
            location=location,
            last_modified=last_modified,
            change_frequency=validate_change_frequency(change_frequency) if change_frequency is not None else None,
            priority=validate_priority(priority) if priority is not None else None,
        )
        closed = self._buffer.accept(entry)
        if closed is not None:
            self._write_chunk(closed, len(self._index) + 1)
        return self

    def _write_chunk(self, chunk: Chunk, number: int | None) -> str:
        filename = chunk_filename(self._sitemap_filename, number, self._compress)
        payload = self._renderer.render(chunk, compress=self._compress)
        self._persist(filename, payload)
        self._index.record_chunk(filename, self._now())
        self._written.append(filename)
        logger.info("Wrote %s with %d URLs (%d bytes)", filename, len(chunk), len(payload))
        return filename

    def _persist(self, filename: str, payload: bytes) -> None:
        """Write one artifact; a failed write ends the session so no index can omit the lost URLs."""
        try:
            self.fs.write(filename, payload)
        except Exception:
            self._state = SessionState.FAILED
            logger.error("Writing %s failed; sitemap session can no longer be finalized", filename)
            raise

    def finalize(self) -> SitemapGenerator:
        self._require_state(SessionState.COLLECTING)
        if not self._buffer.accepted_count:
            raise IllegalStateError("cannot finalize a sitemap without URLs; call add_url first")
        remainder = self._buffer.flush_remainder()
        if remainder is not None:
            number = len(self._index) + 1 if len(self._index) else None
            self._write_chunk(remainder, number)
        self._persist(self._index_filename, self._index.render_index())
        self._written.append(self._index_filename)
        self._state = SessionState.FINALIZED
        logger.info("Wrote sitemap index %s referencing %d sitemaps", self._index_filename, len(self._index))
        return self

    # -- after finalize ------------------------------------------------------

    def robots_content(self) -> str:
        if self.fs.exists(self._robots_filename):
            current = self.fs.read(self._robots_filename).decode("utf-8", errors="replace")
        else:
            current = DEFAULT_ROBOTS_CONTENT
        kept = [line for line in current.splitlines() if not line.strip().lower().startswith("sitemap:")]
        while kept and not kept[-1].strip():
            kept.pop()
        kept.append(f"Sitemap: {self.index_url}")
        return "\n".join(kept) + "\n"

    def update_robots(self) -> str:
        self._require_state(*AFTER_FINALIZE)
        content = self.robots_content()
        self.fs.write(self._robots_filename, content.encode("utf-8"))
        self._state = SessionState.ROBOTS_UPDATED
        logger.info("Updated %s with sitemap index %s", self._robots_filename, self.index_url)
        return content

    def submit_sitemap(self) -> list[PingResult]:
        self._require_state(*AFTER_FINALIZE)
        if not len(self._index):
            raise NoChunksError("no sitemaps were written; nothing to submit")
        encoded = quote(self.index_url, safe="")
        results: list[PingResult] = []
        for endpoint in SEARCH_ENGINE_PING_URLS:
            ping_url = f"{endpoint}{encoded}"
            status, body = self.runtime.http_get(ping_url)
            result = PingResult(endpoint=endpoint, url=ping_url, status_code=status, body=body)
            if result.ok:
                logger.info("Submitted sitemap index to %s (%d)", endpoint, status)
            else:
                logger.warning("Sitemap submission to %s returned HTTP %d", endpoint, status)
            results.append(result)
        self._state = SessionState.SUBMITTED
        return results
