"""
Network collaborator used to ping search engines.
"""

from __future__ import annotations

from typing import Protocol

import requests

HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; CodexSEO/1.0; +https://github.com/avalonreset/codex-seo)",
    "Accept": "text/html,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.8",
}
DEFAULT_TIMEOUT = 20


class Runtime(Protocol):
    def http_get(self, url: str) -> tuple[int, str]: ...


class HttpRuntime:
    def __init__(self, timeout: int = DEFAULT_TIMEOUT, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def http_get(self, url: str) -> tuple[int, str]:
        response = self.session.get(url, headers=HEADERS, timeout=self.timeout, allow_redirects=True)
        try:
            return response.status_code, response.text
        finally:
            response.close()
