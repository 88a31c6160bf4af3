import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from pagecheck.dependencies import get_relay
from pagecheck.models.link_response import LinksResponse
from pagecheck.models.request import PageRequest
from pagecheck.ratelimit import limiter
from pagecheck.services.links import discover_links
from pagecheck.services.relay import FetchRelay, TransportExhausted

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Links"])


@router.post(
    "/links",
    response_model=LinksResponse,
    summary="Collect reachable same-origin pages linked from a URL",
    description=(
        "Fetches *url*, resolves every `<a href>` against it and keeps links on the "
        "same origin that are not fragments or binary files (images, PDF, ZIP, DOCX).  "
        "Each surviving link is fetched once; `pages` lists those that answered, "
        "`results` explains what happened to every link."
    ),
)
@limiter.limit("5/minute")
async def links_endpoint(
    request: Request,
    body: PageRequest,
    relay: FetchRelay = Depends(get_relay),
) -> LinksResponse:
    url = str(body.url)
    logger.info("Links request received", extra={"url": url})

    try:
        results = await discover_links(url, relay)
    except ValueError as exc:
        logger.warning("Invalid URL: %s – %s", url, exc)
        raise HTTPException(status_code=400, detail=str(exc))
    except TransportExhausted as exc:
        logger.error("Could not fetch base URL %s: %s", url, exc)
        raise HTTPException(status_code=502, detail=str(exc))

    pages = [r.url for r in results if r.status == "reachable"]
    return LinksResponse(base_url=url, pages=pages, results=results)
