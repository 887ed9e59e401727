"""
Input checks for sitemap entries and generator settings.

Every function here is side-effect free so it can be used without a
generator session.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any
from urllib.parse import urlparse, urlunparse

from .errors import InvalidArgumentError
from .models import CHANGE_FREQUENCIES, MAX_URL_LENGTH

PRIORITY_STEP = Decimal("0.1")
PRIORITY_TEXT_RE = re.compile(r"^\d\.\d$")


def canonical_host(host: str | None) -> str:
    value = (host or "").strip().lower().rstrip(".")
    if value.startswith("www."):
        return value[4:]
    return value


def normalize_base_url(raw: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidArgumentError("base URL must be a non-empty string")
    value = raw.strip()
    try:
        parsed = urlparse(value)
        if not parsed.scheme:
            value = f"https://{value}"
            parsed = urlparse(value)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid base URL: {raw}") from exc
    if parsed.scheme not in ("http", "https"):
        raise InvalidArgumentError(f"Unsupported URL scheme: {parsed.scheme}")
    if not hostname:
        raise InvalidArgumentError(f"Base URL has no host: {raw}")
    return urlunparse((parsed.scheme, parsed.netloc, parsed.path.rstrip("/"), "", "", ""))


def is_under_base(url: str, base_url: str) -> bool:
    target = urlparse(url)
    base = urlparse(base_url)
    if target.scheme != base.scheme:
        return False
    if canonical_host(target.hostname) != canonical_host(base.hostname) or target.port != base.port:
        return False
    base_path = base.path.rstrip("/")
    return not base_path or target.path == base_path or target.path.startswith(base_path + "/")


def validate_url(path: str, base_url: str) -> str:
    """Resolve ``path`` against ``base_url`` and return the absolute location.

    Absolute http(s) addresses are accepted only when they live under the
    base URL. Anything else is treated as a site path.
    """
    if not isinstance(path, str) or not path.strip():
        raise InvalidArgumentError("URL path must be a non-empty string")
    value = path.strip()
    try:
        scheme = urlparse(value).scheme
    except ValueError as exc:
        raise InvalidArgumentError(f"Malformed URL: {value[:80]}") from exc
    if scheme in ("http", "https"):
        location = value
    else:
        location = f"{base_url.rstrip('/')}/{value.lstrip('/')}"

    try:
        encoded_length = len(location.encode("utf-8"))
    except UnicodeEncodeError as exc:
        raise InvalidArgumentError(f"URL is not valid text: {location[:80]!r}") from exc
    if encoded_length > MAX_URL_LENGTH:
        raise InvalidArgumentError(f"URL exceeds {MAX_URL_LENGTH} bytes: {location[:80]}...")
    if any(ch.isspace() or ord(ch) < 0x20 or ch == "\x7f" for ch in location):
        raise InvalidArgumentError(f"URL contains whitespace or control characters: {location!r}")
    try:
        parsed = urlparse(location)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidArgumentError(f"Malformed URL: {location}") from exc
    if parsed.scheme not in ("http", "https") or not hostname:
        raise InvalidArgumentError(f"Malformed URL: {location}")
    if scheme and not is_under_base(location, base_url):
        raise InvalidArgumentError(f"URL is outside of base URL {base_url}: {location}")
    return location


def validate_change_frequency(token: str) -> str:
    if token not in CHANGE_FREQUENCIES:
        raise InvalidArgumentError(
            f"Invalid change frequency {token!r}; expected one of {', '.join(CHANGE_FREQUENCIES)}"
        )
    return token


def validate_priority(value: Any) -> Decimal:
    """Return ``value`` as a one-decimal ``Decimal`` between 0.0 and 1.0."""
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Invalid priority: {value!r}")
    if isinstance(value, str):
        text = value.strip()
        if not PRIORITY_TEXT_RE.match(text):
            raise InvalidArgumentError(f"Priority string must look like '0.5': {value!r}")
        number = Decimal(text)
    elif isinstance(value, (int, float, Decimal)):
        try:
            number = Decimal(str(value))
        except InvalidOperation as exc:
            raise InvalidArgumentError(f"Invalid priority: {value!r}") from exc
        if not number.is_finite():
            raise InvalidArgumentError(f"Invalid priority: {value!r}")
    else:
        raise InvalidArgumentError(f"Priority must be a number or string, got {type(value).__name__}")

    if number < 0 or number > 1 or number != number.quantize(PRIORITY_STEP):
        raise InvalidArgumentError(f"Priority must be one of 0.0, 0.1, ..., 1.0: {value!r}")
    return number.quantize(PRIORITY_STEP)


def is_valid_changefreq_value(token: Any) -> bool:
    try:
        validate_change_frequency(token)
    except InvalidArgumentError:
        return False
    return True


def is_valid_priority_value(value: Any) -> bool:
    try:
        validate_priority(value)
    except InvalidArgumentError:
        return False
    return True


def validate_filename(name: Any, extensions: tuple[str, ...] = ()) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError("Filename must be a non-empty string")
    if extensions:
        lowered = name.lower()
        matched = next((ext for ext in extensions if lowered.endswith(ext)), None)
        if matched is None:
            raise InvalidArgumentError(f"Filename {name!r} must end with {' or '.join(extensions)}")
        if len(name) == len(matched):
            raise InvalidArgumentError(f"Filename {name!r} has no name before the extension")
    return name


def size_diff_percent(before: int, after: int) -> float:
    """Relative size change from ``before`` to ``after`` in percent (100 -> 90 is -10)."""
    if before <= 0:
        raise InvalidArgumentError("Original size must be positive")
    return (after - before) / before * 100
