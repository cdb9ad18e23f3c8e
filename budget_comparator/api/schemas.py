from typing import List, Optional

from pydantic import BaseModel


class CompareRequest(BaseModel):
    url: Optional[str] = None


class ComparisonRowSchema(BaseModel):
    concepto: str
    montoAnterior: int
    montoActual: int
    variacionS: int
    variacionPorcentaje: float


class ComparisonResponse(BaseModel):
    yearActual: int
    yearAnterior: int
    data: List[ComparisonRowSchema]


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    version: str
