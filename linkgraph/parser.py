"""Fetching pages and extracting the links they contain."""

from __future__ import annotations

import logging
import re
from html.parser import HTMLParser
from urllib.parse import SplitResult, urljoin, urlsplit

import requests

logger = logging.getLogger(__name__)

ANCHOR_PATTERN = r'<a[^>]*href="([^"]+)"'
GET_LINKS_TIMEOUT = 5.0
GET_LINKS_V2_TIMEOUT = 4.0


class FetchError(Exception):
    """Raised when a page cannot be fetched or is not usable HTML."""


def _parse_url(link: str) -> SplitResult:
    """Split a URL, raising ValueError for text that is not a valid URL."""
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in link):
        raise ValueError(f"invalid control character in URL: {link!r}")
    return urlsplit(link)


def _fetch(link: str, timeout: float) -> requests.Response:
    try:
        return requests.get(link, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(str(exc)) from exc


def check_response(response: requests.Response) -> None:
    """Raise FetchError unless the response is a 200 with an HTML body."""
    if response.status_code != 200:
        status = f"{response.status_code} {response.reason or ''}".rstrip()
        raise FetchError(f"failed to fetch page: {status}")
    content_type = response.headers.get("Content-Type", "")
    if not content_type.startswith("text/html"):
        raise FetchError(f"invalid content type: {content_type}")


def find_all_matches(body: str, pattern: str) -> list[list[str]]:
    """Return every match of pattern as [whole match, group 1, group 2, ...]."""
    return [
        [match.group(0), *match.groups(default="")]
        for match in re.finditer(pattern, body)
    ]


def extract_domain(link: str) -> str:
    """Return the host name of a URL, without port, or "" if there is none."""
    try:
        parts = _parse_url(link)
    except ValueError:
        return ""
    host = parts.netloc.rpartition("@")[2]
    if host.startswith("["):
        end = host.find("]")
        return host[1:end] if end != -1 else host[1:]
    return host.partition(":")[0]


def preprocess_links(links: list[str], base: str) -> list[str]:
    """Resolve every link against base, keeping the input order."""
    try:
        _parse_url(base)
    except ValueError as exc:
        raise ValueError(f"invalid URL: {base}") from exc
    resolved = []
    for link in links:
        try:
            _parse_url(link)
            resolved.append(urljoin(base, link))
        except ValueError as exc:
            raise ValueError(f"invalid URL: {link}") from exc
    return resolved


def get_links(link: str) -> list[str]:
    """Fetch a page and return the distinct anchor targets, resolved against it."""
    response = _fetch(link, GET_LINKS_TIMEOUT)
    with response:
        check_response(response)
        body = response.text
    unique = dict.fromkeys(match[1] for match in find_all_matches(body, ANCHOR_PATTERN))
    processed = preprocess_links(list(unique), link)
    logger.info("Found %d valid links for %s", len(processed), link)
    return processed


class _AnchorCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: list[str] = []

    def handle_starttag(self, tag, attrs):
        # Self-closing tags are not treated as anchors.
        text = (self.get_starttag_text() or "").rstrip()
        if tag != "a" or text.endswith("/>"):
            return
        self.hrefs.extend(value for key, value in attrs if key == "href" and value)


def extract_anchor_links(body: str, base: str) -> list[str]:
    """Return the distinct absolute URLs of <a href> tags in an HTML body."""
    collector = _AnchorCollector()
    collector.feed(body)
    collector.close()

    links: dict[str, None] = {}
    for raw in collector.hrefs:
        href = raw.strip()
        if not href or href.startswith("#") or href.startswith("javascript:"):
            continue
        try:
            _parse_url(href)
            absolute = urljoin(base, href)
            parts = _parse_url(absolute)
        except ValueError:
            continue
        if not parts.scheme or not parts.netloc:
            continue
        links[absolute] = None
    return list(links)


def get_links_v2(link: str) -> list[str]:
    """Fetch a page and return the absolute links of its anchor tags."""
    response = _fetch(link, GET_LINKS_V2_TIMEOUT)
    with response:
        body = response.text
    return extract_anchor_links(body, link)