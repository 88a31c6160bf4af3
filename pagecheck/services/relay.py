"""Fetch relay: retrieves a page through an ordered list of CORS proxy endpoints.

Each endpoint is tried in turn until one answers with a success status.  The
first successful body is returned; if every endpoint fails the relay raises
:class:`TransportExhausted` and the caller decides whether to skip or abort.
"""

import json
import logging
from typing import NamedTuple, Optional, Sequence
from urllib.parse import quote, urlparse

import httpx

logger = logging.getLogger(__name__)

MAX_CONTENT_SIZE = 10 * 1024 * 1024  # 10 MB
TIMEOUT = 10  # seconds
ALLOWED_SCHEMES = {"http", "https"}

# Characters JavaScript's encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


class ProxyEndpoint(NamedTuple):
    base: str
    # JSON field holding the page body, for proxies that wrap their response
    envelope_field: Optional[str] = None


DEFAULT_PROXIES: tuple[ProxyEndpoint, ...] = (
    ProxyEndpoint("https://api.allorigins.win/get?url=", envelope_field="contents"),
    ProxyEndpoint("https://cors-anywhere.herokuapp.com/"),
    ProxyEndpoint("https://thingproxy.freeboard.io/fetch/"),
    ProxyEndpoint("https://cors.bridged.cc/"),
    ProxyEndpoint("https://api.codetabs.com/v1/proxy?quest="),
)


class TransportExhausted(RuntimeError):
    """Raised when every configured proxy failed for a URL."""

    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(f"All {attempts} proxies failed for {url}.")
        self.url = url
        self.attempts = attempts


def _validate_url(url: str) -> None:
    """Raise ValueError if *url* is not an absolute http(s) URL."""
    parsed = urlparse(url)

    if parsed.scheme not in ALLOWED_SCHEMES:
        raise ValueError(f"Scheme '{parsed.scheme}' is not allowed. Use http or https.")

    if not parsed.hostname:
        raise ValueError("URL must have a valid hostname.")


def proxied_url(proxy: ProxyEndpoint, url: str) -> str:
    """Return the request URL that asks *proxy* for *url*."""
    return proxy.base + quote(url, safe=_URI_COMPONENT_SAFE)


async def _read_body(response: httpx.Response) -> bytes:
    content_length = response.headers.get("content-length")
    if content_length and int(content_length) > MAX_CONTENT_SIZE:
        raise RuntimeError("Response body exceeds the maximum allowed size.")

    chunks = []
    total = 0
    async for chunk in response.aiter_bytes():
        total += len(chunk)
        if total > MAX_CONTENT_SIZE:
            raise RuntimeError("Response body exceeds the maximum allowed size.")
        chunks.append(chunk)
    return b"".join(chunks)


def _unwrap(proxy: ProxyEndpoint, body: bytes) -> str:
    if proxy.envelope_field is None:
        return body.decode(errors="replace")

    payload = json.loads(body)
    contents = payload.get(proxy.envelope_field) if isinstance(payload, dict) else None
    if not isinstance(contents, str):
        raise ValueError(f"Envelope field '{proxy.envelope_field}' missing from proxy response.")
    return contents


class FetchRelay:
    """Fetches page bodies through a fixed, ordered list of proxy endpoints.

    The endpoint list is injected so tests (or deployments behind a different
    set of relays) can substitute their own.  *transport* is handed to
    :class:`httpx.AsyncClient` unchanged; tests pass an
    :class:`httpx.MockTransport`.
    """

    def __init__(
        self,
        proxies: Sequence[ProxyEndpoint] = DEFAULT_PROXIES,
        timeout: float = TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not proxies:
            raise ValueError("At least one proxy endpoint is required.")
        self.proxies = tuple(proxies)
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """Return the body of *url* as served by the first working proxy.

        Raises:
            ValueError: if *url* is not an absolute http(s) URL.
            TransportExhausted: if every proxy failed.
        """
        _validate_url(url)

        async with httpx.AsyncClient(
            follow_redirects=True, timeout=self.timeout, transport=self._transport
        ) as client:
            for proxy in self.proxies:
                try:
                    async with client.stream("GET", proxied_url(proxy, url)) as response:
                        if not response.is_success:
                            logger.warning(
                                "Relay: %s returned HTTP %s for %s",
                                proxy.base, response.status_code, url,
                            )
                            continue
                        body = await _read_body(response)
                    return _unwrap(proxy, body)
                except (httpx.HTTPError, RuntimeError, ValueError) as exc:
                    logger.warning("Relay: %s failed for %s – %s", proxy.base, url, exc)
                    continue

        logger.error("Relay: all %d proxies failed for %s", len(self.proxies), url)
        raise TransportExhausted(url, len(self.proxies))
