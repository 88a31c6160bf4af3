import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from pagecheck.dependencies import get_grammar_client, get_relay
from pagecheck.models.batch_response import GrammarBatchItem, GrammarBatchResponse
from pagecheck.models.report import GrammarReport
from pagecheck.models.request import GrammarBatchRequest, GrammarRequest
from pagecheck.ratelimit import limiter
from pagecheck.services.batch import run_batch
from pagecheck.services.grammar import GrammarClient, GrammarServiceError, check_page_grammar
from pagecheck.services.relay import FetchRelay, TransportExhausted

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/grammar", tags=["Grammar"])


@router.post(
    "",
    response_model=GrammarReport,
    summary="Check a page's text for typos and grammar issues",
    description=(
        "Extracts the headings and paragraphs of the page's main content, sends "
        "them to LanguageTool in chunks of at most 2000 characters and returns "
        "every flagged word with its suggested replacements.  A page without "
        "text yields `status: \"no_text\"`."
    ),
)
@limiter.limit("10/minute")
async def grammar_endpoint(
    request: Request,
    body: GrammarRequest,
    relay: FetchRelay = Depends(get_relay),
    client: GrammarClient = Depends(get_grammar_client),
) -> GrammarReport:
    url = str(body.url)
    logger.info("Grammar request received", extra={"url": url, "language": body.language})

    try:
        return await check_page_grammar(url, relay, client, body.language)
    except ValueError as exc:
        logger.warning("Invalid URL: %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except TransportExhausted as exc:
        logger.error("Could not fetch %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc))
    except GrammarServiceError as exc:
        logger.error("Grammar service error for %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc))


@router.post(
    "/batch",
    response_model=GrammarBatchResponse,
    summary="Check several pages for typos and grammar issues",
)
@limiter.limit("3/minute")
async def grammar_batch_endpoint(
    request: Request,
    body: GrammarBatchRequest,
    relay: FetchRelay = Depends(get_relay),
    client: GrammarClient = Depends(get_grammar_client),
) -> GrammarBatchResponse:
    """Check each URL in turn; a failing URL is reported and the batch carries on."""
    logger.info(
        "Grammar batch request received",
        extra={"url_count": len(body.urls), "language": body.language},
    )

    outcomes = await run_batch(
        body.urls, lambda url: check_page_grammar(url, relay, client, body.language)
    )
    return GrammarBatchResponse(
        items=[
            GrammarBatchItem(url=o.url, ok=o.ok, report=o.result, error=o.error)
            for o in outcomes
        ]
    )
