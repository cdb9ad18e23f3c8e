from typing import Optional

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from budget_comparator import __version__
from budget_comparator.core.errors import ComparatorError, ValidationError
from budget_comparator.orchestrator import ComparisonService

from .schemas import (
    CompareRequest,
    ComparisonResponse,
    ErrorResponse,
    HealthResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter()

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


def get_service(request: Request) -> ComparisonService:
    return request.app.state.service


@router.post(
    "/comparar",
    response_model=ComparisonResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def comparar(request: Request, body: Optional[CompareRequest] = None):
    """
    Compara el reporte de Consulta Amigable indicado contra el año anterior.

    - 400 si falta `url` o no contiene el parámetro `y=`.
    - 500 ante cualquier error de red o de lectura de la tabla, con el año afectado.
    """
    url = body.url if body else None

    try:
        result = await get_service(request).compare(url)
    except ValidationError as e:
        logger.info("comparison_rejected", error=e.message)
        return JSONResponse(status_code=400, content={"error": e.message})
    except ComparatorError as e:
        logger.error("comparison_failed", error=e.message)
        return JSONResponse(status_code=500, content={"error": e.message or INTERNAL_ERROR_MESSAGE})
    except Exception as e:
        logger.exception("comparison_crashed", error=str(e))
        return JSONResponse(status_code=500, content={"error": str(e) or INTERNAL_ERROR_MESSAGE})

    return result.to_dict()


@router.get("/health", response_model=HealthResponse)
async def health():
    return {"status": "ok", "version": __version__}
