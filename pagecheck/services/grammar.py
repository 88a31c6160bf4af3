"""Grammar and spelling checks through the public LanguageTool API.

Page text is cut into fixed-size chunks to stay below the service's request
size limit.  Chunks are cut at a fixed character boundary, so a word straddling
two chunks may be reported in truncated form; no overlap is added to avoid it.
"""

import logging
from typing import Any, Iterable, List, Optional

import httpx

from pagecheck.models.content import TypoMatch
from pagecheck.models.report import GrammarReport
from pagecheck.services.extractor import extract_text
from pagecheck.services.relay import FetchRelay

logger = logging.getLogger(__name__)

LANGUAGETOOL_URL = "https://api.languagetool.org/v2/check"
CHUNK_SIZE = 2000  # characters per request
DEFAULT_LANGUAGE = "en-US"
TIMEOUT = 30  # seconds


class GrammarServiceError(RuntimeError):
    """Raised when the grammar service fails or answers with an unusable body."""


def split_chunks(text: str, size: int = CHUNK_SIZE) -> List[str]:
    """Split *text* into consecutive pieces of at most *size* characters.

    Joining the result reproduces *text* exactly; only the last piece may be
    shorter than *size*.
    """
    if size < 1:
        raise ValueError("Chunk size must be a positive integer.")
    return [text[i:i + size] for i in range(0, len(text), size)]


def _utf16_slice(text: str, offset: int, length: int) -> str:
    """Slice *text* by UTF-16 code units, the unit LanguageTool reports offsets in."""
    encoded = text.encode("utf-16-le")
    return encoded[2 * offset:2 * (offset + length)].decode("utf-16-le", errors="replace")


def _to_typo_match(match: dict) -> TypoMatch:
    context = match["context"]
    offset = int(context["offset"])
    length = int(context["length"])
    suggestions = [str(r["value"]) for r in match.get("replacements", [])]
    return TypoMatch(
        word=_utf16_slice(context["text"], offset, length),
        suggestions=suggestions,
        suggestion=", ".join(suggestions),
        message=match.get("message", ""),
    )


def parse_matches(payload: Any) -> List[TypoMatch]:
    """Convert a LanguageTool JSON payload into :class:`TypoMatch` objects."""
    try:
        return [_to_typo_match(m) for m in payload["matches"]]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise GrammarServiceError(f"Unexpected grammar service response: {exc!r}") from exc


class GrammarClient:
    """Minimal async client for LanguageTool's ``/v2/check`` endpoint."""

    def __init__(
        self,
        api_url: str = LANGUAGETOOL_URL,
        timeout: float = TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def _check_chunk(
        self, client: httpx.AsyncClient, chunk: str, language: str
    ) -> List[TypoMatch]:
        try:
            response = await client.post(
                self.api_url, data={"text": chunk, "language": language}
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise GrammarServiceError(
                f"Grammar service returned HTTP {exc.response.status_code}."
            ) from exc
        except httpx.HTTPError as exc:
            raise GrammarServiceError(f"Grammar service request failed: {exc}") from exc
        except ValueError as exc:
            raise GrammarServiceError("Grammar service returned invalid JSON.") from exc
        return parse_matches(payload)

    async def check(self, chunks: Iterable[str], language: str = DEFAULT_LANGUAGE) -> List[TypoMatch]:
        """Check each chunk in turn and return all matches in chunk order."""
        matches: List[TypoMatch] = []
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for chunk in chunks:
                matches.extend(await self._check_chunk(client, chunk, language))
        return matches


async def check_page_grammar(
    url: str,
    relay: FetchRelay,
    client: GrammarClient,
    language: str = DEFAULT_LANGUAGE,
) -> GrammarReport:
    """Fetch *url*, extract its main-content text and collect grammar suggestions."""
    html = await relay.fetch(url)
    text = extract_text(html)
    if not text:
        logger.info("Grammar: no text found on %s", url)
        return GrammarReport(url=url, status="no_text", language=language, chunk_count=0, matches=[])

    chunks = split_chunks(text)
    logger.info("Grammar: checking %d chunk(s) from %s", len(chunks), url)
    matches = await client.check(chunks, language)
    return GrammarReport(
        url=url, status="ok", language=language, chunk_count=len(chunks), matches=matches
    )
