"""
Records and limits shared by the sitemap generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

MAX_URLS_PER_SITEMAP = 50000
MAX_FILE_SIZE = 52_428_800
MAX_URL_LENGTH = 2048

DEFAULT_SITEMAP_FILENAME = "sitemap.xml"
DEFAULT_INDEX_FILENAME = "sitemap-index.xml"
DEFAULT_ROBOTS_FILENAME = "robots.txt"
GZIP_SUFFIX = ".gz"

CHANGE_FREQUENCIES = ("always", "hourly", "daily", "weekly", "monthly", "yearly", "never")


class SessionState(Enum):
    COLLECTING = "collecting"
    FINALIZED = "finalized"
    ROBOTS_UPDATED = "robots_updated"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass(frozen=True)
class UrlEntry:
    location: str
    last_modified: datetime | date | None = None
    change_frequency: str | None = None
    priority: Decimal | None = None


@dataclass(frozen=True)
class Chunk:
    entries: tuple[UrlEntry, ...]
    estimated_size: int

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class SitemapIndexEntry:
    filename: str
    location: str
    last_modified: datetime


@dataclass(frozen=True)
class PingResult:
    endpoint: str
    url: str
    status_code: int
    body: str = field(default="", repr=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300
