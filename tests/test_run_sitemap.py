"""Tests for the generate command line."""

import json
import xml.etree.ElementTree as ET

import pytest

from seo_sitemap.models import SITEMAP_NS
from seo_sitemap.run_sitemap import load_url_lines, main, parse_lastmod
from seo_sitemap.runtime import HttpRuntime

NS = {"sm": SITEMAP_NS}


@pytest.fixture
def urls_file(tmp_path):
    path = tmp_path / "urls.txt"
    path.write_text(
        "# site pages\n"
        "/\t2024-01-01\tdaily\t1.0\n"
        "/about/\n"
        "https://example.com/blog/\t2024-02-03T10:00:00+00:00\tweekly\t0.5\n"
        "\n"
        "/bad/\t\tsometimes\n"
        "https://elsewhere.org/\n",
        encoding="utf-8",
    )
    return path


def run(tmp_path, urls_file, *extra: str) -> int:
    return main(
        [
            "generate",
            "--base-url",
            "https://example.com",
            "--urls-file",
            str(urls_file),
            "--output-dir",
            str(tmp_path / "out"),
            *extra,
        ]
    )


def test_load_url_lines(urls_file) -> None:
    rows = load_url_lines(str(urls_file))

    assert [row.path for row in rows] == ["/", "/about/", "https://example.com/blog/", "/bad/", "https://elsewhere.org/"]
    assert rows[0].last_modified == "2024-01-01"
    assert rows[0].priority == "1.0"
    assert rows[3].last_modified is None
    assert rows[3].change_frequency == "sometimes"


def test_parse_lastmod() -> None:
    assert parse_lastmod("2024-01-01").isoformat() == "2024-01-01"
    assert parse_lastmod("2024-01-01T10:00:00+00:00").hour == 10
    with pytest.raises(ValueError):
        parse_lastmod("yesterday")


def test_generate(tmp_path, urls_file, capsys) -> None:
    assert run(tmp_path, urls_file, "--max-urls", "2") == 0

    out = tmp_path / "out"
    summary = json.loads((out / "SUMMARY.json").read_text(encoding="utf-8"))
    assert summary["total_urls"] == 3
    assert summary["skipped_count"] == 2
    assert summary["sitemap_files"] == 2
    assert (out / "sitemap1.xml").exists()
    assert (out / "sitemap2.xml").exists()
    index = ET.fromstring((out / "sitemap-index.xml").read_bytes())
    assert [n.text for n in index.findall("sm:sitemap/sm:loc", NS)] == [
        "https://example.com/sitemap1.xml",
        "https://example.com/sitemap2.xml",
    ]
    assert "Total URLs included: 3" in capsys.readouterr().out


def test_generate_compressed_with_robots(tmp_path, urls_file) -> None:
    assert run(tmp_path, urls_file, "--compress", "--update-robots") == 0

    out = tmp_path / "out"
    assert (out / "sitemap.xml.gz").exists()
    assert "Sitemap: https://example.com/sitemap-index.xml" in (out / "robots.txt").read_text()


def test_generate_with_submit(tmp_path, urls_file, monkeypatch) -> None:
    pinged: list[str] = []

    def fake_get(self, url):
        pinged.append(url)
        return 200, ""

    monkeypatch.setattr(HttpRuntime, "http_get", fake_get)
    assert run(tmp_path, urls_file, "--submit") == 0

    summary = json.loads((tmp_path / "out" / "SUMMARY.json").read_text(encoding="utf-8"))
    assert len(summary["pings"]) == len(pinged) == 2
    assert all(ping["ok"] for ping in summary["pings"])


def test_missing_urls_file(tmp_path, capsys) -> None:
    assert run(tmp_path, tmp_path / "nope.txt") == 2
    assert "urls file not found" in capsys.readouterr().out


def test_invalid_max_urls(tmp_path, urls_file) -> None:
    assert run(tmp_path, urls_file, "--max-urls", "50001") == 2


def test_no_valid_urls(tmp_path) -> None:
    path = tmp_path / "urls.txt"
    path.write_text("https://elsewhere.org/\n", encoding="utf-8")

    assert run(tmp_path, path) == 2
