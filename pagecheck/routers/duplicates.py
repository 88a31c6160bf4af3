import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from pagecheck.dependencies import get_relay
from pagecheck.models.batch_response import DuplicateBatchItem, DuplicateBatchResponse
from pagecheck.models.report import DuplicateReport
from pagecheck.models.request import BatchRequest, PageRequest
from pagecheck.ratelimit import limiter
from pagecheck.services.batch import run_batch
from pagecheck.services.duplicates import check_page_duplicates
from pagecheck.services.relay import FetchRelay, TransportExhausted

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/duplicates", tags=["Duplicates"])


@router.post(
    "",
    response_model=DuplicateReport,
    summary="Find repeated headings and paragraphs on a page",
)
@limiter.limit("10/minute")
async def duplicates_endpoint(
    request: Request,
    body: PageRequest,
    relay: FetchRelay = Depends(get_relay),
) -> DuplicateReport:
    """Report every heading or paragraph of the main content that occurs more than once.

    Positions are 1-based and count every non-empty ``h1``–``h6`` and ``p``
    element of the main content in document order.
    """
    url = str(body.url)
    logger.info("Duplicate check request received", extra={"url": url})

    try:
        return await check_page_duplicates(url, relay)
    except ValueError as exc:
        logger.warning("Invalid URL: %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except TransportExhausted as exc:
        logger.error("Could not fetch %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc))


@router.post(
    "/batch",
    response_model=DuplicateBatchResponse,
    summary="Find repeated headings and paragraphs on several pages",
    description=(
        "Checks each URL in turn.  A URL that cannot be fetched is reported with "
        "`ok: false` and its error; the remaining URLs are still checked."
    ),
)
@limiter.limit("3/minute")
async def duplicates_batch_endpoint(
    request: Request,
    body: BatchRequest,
    relay: FetchRelay = Depends(get_relay),
) -> DuplicateBatchResponse:
    logger.info("Duplicate batch request received", extra={"url_count": len(body.urls)})

    outcomes = await run_batch(body.urls, lambda url: check_page_duplicates(url, relay))
    return DuplicateBatchResponse(
        items=[
            DuplicateBatchItem(url=o.url, ok=o.ok, report=o.result, error=o.error)
            for o in outcomes
        ]
    )
