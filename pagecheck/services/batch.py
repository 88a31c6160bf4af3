"""Sequential multi-URL runner: one URL's failure never stops the rest of the batch."""

import logging
from typing import Any, Awaitable, Callable, List, NamedTuple, Optional

import httpx

logger = logging.getLogger(__name__)


class BatchOutcome(NamedTuple):
    url: str
    result: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_url_list(text: str) -> List[str]:
    """Split newline-separated *text* into URLs, skipping blank lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


async def run_batch(
    urls: List[str],
    pipeline: Callable[[str], Awaitable[Any]],
) -> List[BatchOutcome]:
    """Run *pipeline* for every URL in order, recording failures per URL.

    Each URL's pipeline finishes before the next one starts.  Invalid URLs,
    transport failures and service errors are logged and stored on the
    corresponding :class:`BatchOutcome`; anything else propagates.
    """
    outcomes: List[BatchOutcome] = []
    for url in urls:
        try:
            result = await pipeline(url)
        except (ValueError, httpx.HTTPError, RuntimeError) as exc:
            logger.warning("Batch: %s failed – %s", url, exc)
            outcomes.append(BatchOutcome(url=url, error=str(exc) or exc.__class__.__name__))
            continue
        outcomes.append(BatchOutcome(url=url, result=result))
    return outcomes
