"""
FastAPI application.

Run with:
    uvicorn whofunds.api.app:app --reload
or:
    whofunds serve
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from whofunds.api.routes import donors_router, politicians_router
from whofunds.config.settings import Settings, get_settings
from whofunds.errors import DonorLookupError
from whofunds.ingestion.client import FECClient
from whofunds.services.roster import RosterService

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the API.

    Args:
        app_settings: Settings to use (defaults to the environment)
        transport: httpx transport for the FEC client (tests pass a MockTransport)
    """
    app_settings = app_settings or get_settings()

    logging.basicConfig(level=app_settings.LOG_LEVEL, format=app_settings.LOG_FORMAT)

    fec_client = FECClient(
        api_key=app_settings.FEC_API_KEY or "",
        base_url=app_settings.FEC_BASE_URL,
        timeout=app_settings.HTTP_TIMEOUT,
        transport=transport,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not fec_client.has_credentials:
            logger.warning("FEC_API_KEY is not set - donor lookups will use mock data")
        yield
        await fec_client.aclose()

    app = FastAPI(
        title=app_settings.APP_NAME,
        version=app_settings.APP_VERSION,
        debug=app_settings.DEBUG,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.fec_client = fec_client
    app.state.roster_service = RosterService(
        fec_client,
        per_page=app_settings.PAGE_SIZE,
        max_pages=app_settings.MAX_PAGES,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(DonorLookupError)
    async def donor_lookup_error_handler(request: Request, exc: DonorLookupError) -> JSONResponse:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"donors": [], **exc.to_dict()},
        )

    @app.get("/health", tags=["health"])
    async def health():
        return {
            "status": "ok",
            "app": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION,
            "environment": app_settings.ENVIRONMENT,
            "credentialConfigured": app_settings.has_fec_credentials,
        }

    app.include_router(donors_router)
    app.include_router(politicians_router)

    return app


app = create_app()
