#!/usr/bin/env python3
"""
Sitemap generator command line for the seo-sitemap skill.

Usage:
    python -m seo_sitemap.run_sitemap generate --base-url https://example.com --urls-file urls.txt
    python -m seo_sitemap.run_sitemap generate --base-url https://example.com --urls-file urls.txt --compress --update-robots

Each non-comment line of the URL file is a path or absolute URL, optionally
followed by tab-separated lastmod (YYYY-MM-DD or ISO datetime), changefreq
and priority columns.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import requests

from .errors import SitemapError
from .generator import SitemapGenerator
from .models import (
    DEFAULT_INDEX_FILENAME,
    DEFAULT_ROBOTS_FILENAME,
    DEFAULT_SITEMAP_FILENAME,
    MAX_URLS_PER_SITEMAP,
)
from .runtime import DEFAULT_TIMEOUT, HttpRuntime
from .storage import LocalFileSystem


@dataclass
class UrlLine:
    line_no: int
    path: str
    last_modified: str | None = None
    change_frequency: str | None = None
    priority: str | None = None


def parse_lastmod(value: str) -> date:
    try:
        if "T" in value:
            return datetime.fromisoformat(value)
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"lastmod must be YYYY-MM-DD or an ISO datetime: {value}") from exc


def load_url_lines(path: str) -> list[UrlLine]:
    file_path = Path(path).resolve()
    if not file_path.exists():
        raise ValueError(f"urls file not found: {file_path}")
    rows: list[UrlLine] = []
    for line_no, raw in enumerate(file_path.read_text(encoding="utf-8").splitlines(), start=1):
        value = raw.strip()
        if not value or value.startswith("#"):
            continue
        columns = [col.strip() or None for col in raw.split("\t")]
        rows.append(
            UrlLine(
                line_no=line_no,
                path=columns[0] or "",
                last_modified=columns[1] if len(columns) > 1 else None,
                change_frequency=columns[2] if len(columns) > 2 else None,
                priority=columns[3] if len(columns) > 3 else None,
            )
        )
    return rows


def run_generate(args: argparse.Namespace) -> int:
    try:
        rows = load_url_lines(args.urls_file)
    except ValueError as exc:
        print(f"Error: {exc}")
        return 2
    if not rows:
        print("Error: urls-file is empty")
        return 2

    out_dir = Path(args.output_dir).resolve()
    try:
        generator = SitemapGenerator(
            args.base_url,
            fs=LocalFileSystem(out_dir),
            runtime=HttpRuntime(timeout=args.timeout),
        )
        generator.set_sitemap_filename(args.sitemap_filename)
        generator.set_sitemap_index_filename(args.index_filename)
        generator.set_robots_filename(args.robots_filename)
        generator.set_max_urls_per_sitemap(args.max_urls)
        if args.compress:
            generator.enable_compression()
    except SitemapError as exc:
        print(f"Error: {exc}")
        return 2

    skipped: list[str] = []
    for row in rows:
        try:
            lastmod = parse_lastmod(row.last_modified) if row.last_modified else None
            generator.add_url(row.path, lastmod, row.change_frequency, row.priority)
        except ValueError as exc:
            skipped.append(f"line {row.line_no}: {exc}")
        except OSError as exc:
            print(f"Error: {exc}")
            return 1

    accepted = len(rows) - len(skipped)
    if not accepted:
        print("Error: no valid URLs to include in sitemap")
        return 2

    pings: list[dict[str, Any]] = []
    robots_path = None
    try:
        generator.finalize()
        if args.update_robots:
            generator.update_robots()
            robots_path = str(out_dir / args.robots_filename)
        if args.submit:
            for result in generator.submit_sitemap():
                pings.append({"endpoint": result.endpoint, "status_code": result.status_code, "ok": result.ok})
    except (SitemapError, OSError, requests.exceptions.RequestException) as exc:
        print(f"Error: {exc}")
        return 1

    summary = {
        "base_url": generator.base_url,
        "index_url": generator.index_url,
        "total_urls": accepted,
        "skipped_count": len(skipped),
        "skipped": skipped[:200],
        "max_urls_per_sitemap": args.max_urls,
        "compressed": generator.is_compression_enabled(),
        "sitemap_files": len(generator.index_entries),
        "output_files": [str(out_dir / name) for name in generator.written_files],
        "robots_file": robots_path,
        "pings": pings,
    }
    summary_path = out_dir / "SUMMARY.json"
    summary_path.write_text(json.dumps(summary, indent=2), encoding="utf-8")

    print(f"Base URL: {generator.base_url}")
    print(f"Total URLs included: {accepted}")
    print(f"Skipped lines: {len(skipped)}")
    print(f"Sitemap files: {len(generator.index_entries)}")
    print(f"Sitemap index: {out_dir / args.index_filename}")
    if robots_path:
        print(f"Robots file: {robots_path}")
    for ping in pings:
        print(f"Ping {ping['endpoint']}: {ping['status_code']}")
    print(f"Summary: {summary_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate XML sitemaps and a sitemap index.")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    p_generate = sub.add_parser("generate", help="Generate sitemap XML from a URL list")
    p_generate.add_argument("--base-url", required=True, help="Canonical base URL")
    p_generate.add_argument("--urls-file", required=True, help="Newline-delimited paths or URLs to include")
    p_generate.add_argument("--output-dir", default="seo-sitemap-output")
    p_generate.add_argument("--sitemap-filename", default=DEFAULT_SITEMAP_FILENAME)
    p_generate.add_argument("--index-filename", default=DEFAULT_INDEX_FILENAME)
    p_generate.add_argument("--robots-filename", default=DEFAULT_ROBOTS_FILENAME)
    p_generate.add_argument(
        "--max-urls", type=int, default=MAX_URLS_PER_SITEMAP, help="URLs per sitemap file (max 50000)"
    )
    p_generate.add_argument("--compress", action="store_true", help="Write gzip-compressed sitemap files")
    p_generate.add_argument("--update-robots", action="store_true", help="Add the index to robots.txt")
    p_generate.add_argument("--submit", action="store_true", help="Ping search engines with the index URL")
    p_generate.add_argument("--timeout", type=int, default=DEFAULT_TIMEOUT)
    p_generate.set_defaults(func=run_generate)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
