"""Link collector: finds the reachable same-origin pages linked from a base URL."""

import logging
from typing import List, NamedTuple, Optional, Tuple
from urllib.parse import urljoin, urlsplit

import httpx
from bs4 import BeautifulSoup

from pagecheck.models.link_response import LinkResult
from pagecheck.services.relay import FetchRelay

logger = logging.getLogger(__name__)

# Binary / document targets that are never treated as pages
EXCLUDED_EXTENSIONS = (".webp", ".jpg", ".png", ".pdf", ".zip", ".docx", ".jpeg")

_DEFAULT_PORTS = {"http": 80, "https": 443}


class Origin(NamedTuple):
    scheme: str
    host: str
    port: Optional[int]


def _origin(url: str) -> Origin:
    """Return the (scheme, host, port) origin of *url*, with default ports filled in.

    Raises ValueError for URLs whose netloc cannot be parsed (bad port, broken
    IPv6 literal, …).
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    port = parts.port or _DEFAULT_PORTS.get(scheme)
    return Origin(scheme, parts.hostname or "", port)


def _resolve(base_url: str, href: str) -> Optional[str]:
    """Return *href* resolved against *base_url*, or None if it cannot be parsed."""
    try:
        url = urljoin(base_url, href)
        _origin(url)
    except ValueError:
        return None
    return url


def _is_excluded(url: str) -> bool:
    return url.lower().endswith(EXCLUDED_EXTENSIONS)


def extract_hrefs(html: str) -> List[str]:
    """Return every non-empty ``<a href>`` value of *html* in document order."""
    soup = BeautifulSoup(html, "lxml")
    hrefs: List[str] = []
    for a in soup.find_all("a", href=True):
        href = str(a["href"]).strip()
        if href:
            hrefs.append(href)
    return hrefs


def filter_links(base_url: str, hrefs: List[str]) -> Tuple[List[str], List[str]]:
    """Resolve and filter *hrefs* found on *base_url*.

    Keeps absolute URLs with exactly the base URL's origin, skipping binary
    file extensions (case-insensitive) and anything carrying a ``#``
    fragment.  Duplicates collapse onto their first occurrence.

    Returns:
        ``(candidates, malformed)`` – the surviving URLs in first-discovery
        order, and the raw hrefs that could not be resolved.
    """
    base_origin = _origin(base_url)
    seen: set = set()
    candidates: List[str] = []
    malformed: List[str] = []

    for href in hrefs:
        url = _resolve(base_url, href)
        if url is None:
            malformed.append(href)
            continue
        if _origin(url) != base_origin:
            continue
        if _is_excluded(url):
            continue
        if "#" in href or "#" in url:
            continue
        if url not in seen:
            seen.add(url)
            candidates.append(url)

    return candidates, malformed


async def discover_links(base_url: str, relay: FetchRelay) -> List[LinkResult]:
    """Fetch *base_url* and report the outcome of every candidate link.

    Candidates are checked one at a time through *relay*; a link whose fetch
    fails is reported as ``unreachable`` rather than raised.  Failure to fetch
    *base_url* itself propagates to the caller.
    """
    html = await relay.fetch(base_url)
    candidates, malformed = filter_links(base_url, extract_hrefs(html))
    logger.info(
        "Links: %d candidate(s), %d malformed on %s", len(candidates), len(malformed), base_url
    )

    results: List[LinkResult] = [
        LinkResult(url=href, status="malformed", error="URL could not be resolved.")
        for href in malformed
    ]
    for url in candidates:
        try:
            await relay.fetch(url)
        except (ValueError, httpx.HTTPError, RuntimeError) as exc:
            logger.warning("Links: dropping unreachable %s – %s", url, exc)
            results.append(LinkResult(url=url, status="unreachable", error=str(exc)))
            continue
        results.append(LinkResult(url=url, status="reachable"))

    return results


async def collect_links(base_url: str, relay: FetchRelay) -> List[str]:
    """Return the reachable same-origin pages linked from *base_url*, in discovery order."""
    results = await discover_links(base_url, relay)
    return [r.url for r in results if r.status == "reachable"]
