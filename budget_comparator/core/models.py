"""
Data models for the budget comparison pipeline.

All entities are request-scoped and live only in memory.
"""

from dataclasses import dataclass, field, asdict

# Normalized concepto label -> raw devengado amount (source currency units)
YearlyDataset = dict[str, float]


@dataclass(frozen=True)
class YearContext:
    """Fiscal years and URLs resolved from the incoming report URL."""
    year_actual: int
    year_anterior: int
    url_actual: str
    url_anterior: str


@dataclass
class ComparisonRow:
    """One concepto compared across both years, amounts in millions."""

    concepto: str
    monto_anterior: int
    monto_actual: int
    variacion_s: int
    variacion_porcentaje: float

    def to_dict(self) -> dict:
        """Convert to the camelCase wire format."""
        return {
            "concepto": self.concepto,
            "montoAnterior": self.monto_anterior,
            "montoActual": self.monto_actual,
            "variacionS": self.variacion_s,
            "variacionPorcentaje": self.variacion_porcentaje,
        }


@dataclass
class ComparisonTotals:
    """Aggregate of a list of comparison rows."""
    total_anterior: int = 0
    total_actual: int = 0
    variacion_s: int = 0
    variacion_porcentaje: float = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ComparisonResult:
    """
    Year-over-year comparison returned to the caller.

    Rows are ordered by variacion_s descending.
    """

    year_actual: int
    year_anterior: int
    data: list[ComparisonRow] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "yearActual": self.year_actual,
            "yearAnterior": self.year_anterior,
            "data": [row.to_dict() for row in self.data],
        }
