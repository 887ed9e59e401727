"""
Render closed chunks to sitemaps.org urlset markup.
"""

from __future__ import annotations

import gzip
import logging
import xml.etree.ElementTree as ET
from datetime import UTC, date, datetime
from typing import Callable

from .models import GZIP_SUFFIX, SITEMAP_NS, Chunk, UrlEntry
from .validators import size_diff_percent

logger = logging.getLogger(__name__)

INDENT = "  "
XML_DECLARATION = "<?xml version='1.0' encoding='utf-8'?>\n"
# "\n  " written before every <url> element at the first indentation level.
URL_NODE_LEAD = 1 + len(INDENT)


def format_lastmod(value: datetime | date) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.isoformat(timespec="seconds")
    return value.isoformat()


def serialize(root: ET.Element) -> bytes:
    ET.indent(root, space=INDENT)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True)


def chunk_filename(base_filename: str, number: int | None, compress: bool) -> str:
    """``sitemap.xml`` -> ``sitemap.xml``, ``sitemap3.xml`` or ``sitemap3.xml.gz``."""
    stem, _, ext = base_filename.rpartition(".")
    name = base_filename if number is None else f"{stem}{number}.{ext}"
    return f"{name}{GZIP_SUFFIX}" if compress else name


class ChunkRenderer:
    def __init__(self, compressor: Callable[[bytes], bytes] = gzip.compress) -> None:
        self._compressor = compressor

    @property
    def envelope_size(self) -> int:
        opening = f'<urlset xmlns="{SITEMAP_NS}">'
        closing = "\n</urlset>"
        return len((XML_DECLARATION + opening + closing).encode("utf-8"))

    def build_url_node(self, entry: UrlEntry) -> ET.Element:
        url_node = ET.Element("url")
        ET.SubElement(url_node, "loc").text = entry.location
        if entry.last_modified is not None:
            ET.SubElement(url_node, "lastmod").text = format_lastmod(entry.last_modified)
        if entry.change_frequency is not None:
            ET.SubElement(url_node, "changefreq").text = entry.change_frequency
        if entry.priority is not None:
            ET.SubElement(url_node, "priority").text = f"{entry.priority:.1f}"
        return url_node

    def entry_size(self, entry: UrlEntry) -> int:
        """Bytes one entry adds to an uncompressed urlset document."""
        url_node = self.build_url_node(entry)
        ET.indent(url_node, space=INDENT, level=1)
        return URL_NODE_LEAD + len(ET.tostring(url_node, encoding="utf-8"))

    def render(self, chunk: Chunk, compress: bool = False) -> bytes:
        root = ET.Element("urlset", xmlns=SITEMAP_NS)
        for entry in chunk.entries:
            root.append(self.build_url_node(entry))
        payload = serialize(root)
        if not compress:
            return payload
        compressed = self._compressor(payload)
        logger.debug(
            "Compressed chunk of %d URLs: %d -> %d bytes (%.1f%%)",
            len(chunk),
            len(payload),
            len(compressed),
            size_diff_percent(len(payload), len(compressed)),
        )
        return compressed
