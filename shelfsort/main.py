import logging
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shelfsort.api import collection_router, filters_router, health_router
from shelfsort.config import settings
from shelfsort.models.failure import ErrorEnvelope, KnownError

logging.basicConfig(level=settings.log_level.upper())

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("shelfsort"),
    debug=settings.debug,
)

app.include_router(collection_router)
app.include_router(filters_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Render known failures through the response envelope."""
    logger.warning("known_error", extra={"kind": exc.kind.value, "detail": exc.detail})
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_envelope().model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """No raw 500s: anything unexpected still gets a classified response."""
    logger.exception("unknown_error")
    return JSONResponse(
        status_code=500,
        content=ErrorEnvelope.unknown_failure(detail=type(exc).__name__).model_dump(mode="json"),
    )
