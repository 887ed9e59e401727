"""
Sitemap index accumulation and rendering.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import datetime

from .errors import NoChunksError
from .models import SITEMAP_NS, SitemapIndexEntry
from .renderer import format_lastmod, serialize


class IndexBuilder:
    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")
        self._entries: list[SitemapIndexEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[SitemapIndexEntry, ...]:
        return tuple(self._entries)

    def location_for(self, filename: str) -> str:
        return f"{self._base_url}/{filename}"

    def record_chunk(self, filename: str, last_modified: datetime) -> SitemapIndexEntry:
        entry = SitemapIndexEntry(
            filename=filename,
            location=self.location_for(filename),
            last_modified=last_modified,
        )
        self._entries.append(entry)
        return entry

    def render_index(self) -> bytes:
        if not self._entries:
            raise NoChunksError("sitemap index has no sitemaps to reference")
        root = ET.Element("sitemapindex", xmlns=SITEMAP_NS)
        for entry in self._entries:
            sitemap_node = ET.SubElement(root, "sitemap")
            ET.SubElement(sitemap_node, "loc").text = entry.location
            ET.SubElement(sitemap_node, "lastmod").text = format_lastmod(entry.last_modified)
        return serialize(root)
