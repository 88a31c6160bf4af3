import logging
import logging.config

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from pagecheck.ratelimit import limiter
from pagecheck.routers.duplicates import router as duplicates_router
from pagecheck.routers.grammar import router as grammar_router
from pagecheck.routers.links import router as links_router

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PageCheck – Site QA API",
    description=(
        "Collects same-origin pages linked from a URL, finds duplicated headings "
        "and paragraphs, and checks page text for typos via LanguageTool."
    ),
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})


app.include_router(links_router)
app.include_router(duplicates_router)
app.include_router(grammar_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from PageCheck"}
