"""
FastAPI application factory.

The app owns no module-level state: the comparison service is built
(or injected) per app instance and its HTTP client lives for the app's
lifespan. Run with:

    uvicorn budget_comparator.api.app:create_app --factory
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from budget_comparator import __version__
from budget_comparator.config.loader import Settings
from budget_comparator.orchestrator import ComparisonService

from .router import router

logger = structlog.get_logger(__name__)

INVALID_BODY_MESSAGE = "Cuerpo de la solicitud inválido. Se espera un JSON con el campo 'url'."


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are caller errors, reported like a missing url."""
    logger.info("invalid_request_body", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})


def create_app(
    service: Optional[ComparisonService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        service: Pre-built comparison service (tests inject one with a
                 mock transport); built from settings if not provided
        settings: Settings used when no service is given

    Returns:
        FastAPI app with routes under /api
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with app.state.service:
            logger.info("api_started", version=__version__)
            yield
        logger.info("api_stopped")

    app = FastAPI(title="Budget Comparator API", version=__version__, lifespan=lifespan)
    app.state.service = service or ComparisonService.from_settings(settings)

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router, prefix="/api")

    return app
