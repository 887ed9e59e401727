"""
Error taxonomy for sitemap generation.
"""

from __future__ import annotations


class SitemapError(Exception):
    pass


class InvalidArgumentError(SitemapError, ValueError):
    """Malformed or out-of-policy input. Raised before any state changes."""


class OutOfRangeError(InvalidArgumentError):
    pass


class IllegalStateError(SitemapError, RuntimeError):
    """Operation called outside the lifecycle state that permits it."""


class NoChunksError(IllegalStateError):
    pass
