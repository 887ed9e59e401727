"""
XML sitemap and sitemap index generation for the seo-sitemap skill.
"""

from .errors import (
    IllegalStateError,
    InvalidArgumentError,
    NoChunksError,
    OutOfRangeError,
    SitemapError,
)
from .generator import SEARCH_ENGINE_PING_URLS, SitemapGenerator
from .models import PingResult, SessionState, SitemapIndexEntry, UrlEntry
from .storage import FileSystem, LocalFileSystem
from .runtime import HttpRuntime, Runtime
from .validators import (
    is_valid_changefreq_value,
    is_valid_priority_value,
    size_diff_percent,
    validate_change_frequency,
    validate_priority,
    validate_url,
)

__all__ = [
    "SEARCH_ENGINE_PING_URLS",
    "FileSystem",
    "HttpRuntime",
    "IllegalStateError",
    "InvalidArgumentError",
    "LocalFileSystem",
    "NoChunksError",
    "OutOfRangeError",
    "PingResult",
    "Runtime",
    "SessionState",
    "SitemapError",
    "SitemapGenerator",
    "SitemapIndexEntry",
    "UrlEntry",
    "is_valid_changefreq_value",
    "is_valid_priority_value",
    "size_diff_percent",
    "validate_change_frequency",
    "validate_priority",
    "validate_url",
]
