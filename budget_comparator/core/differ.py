"""
Year-over-year differ.

Merges two YearlyDatasets into ComparisonRows ranked by absolute
variation, plus helpers to aggregate and filter the rows.
"""

from typing import Iterable

import structlog

from .models import ComparisonRow, ComparisonTotals, YearlyDataset
from .normalizer import percentage_change, scale_to_millions

logger = structlog.get_logger(__name__)


def union_labels(current: YearlyDataset, prior: YearlyDataset) -> list[str]:
    """Labels of current in insertion order, then labels only found in prior."""
    labels = list(current)
    labels.extend(label for label in prior if label not in current)
    return labels


def build_row(concepto: str, monto_actual_raw: float, monto_anterior_raw: float) -> ComparisonRow:
    monto_anterior = scale_to_millions(monto_anterior_raw)
    monto_actual = scale_to_millions(monto_actual_raw)

    return ComparisonRow(
        concepto=concepto,
        monto_anterior=monto_anterior,
        monto_actual=monto_actual,
        variacion_s=monto_actual - monto_anterior,
        variacion_porcentaje=percentage_change(monto_actual, monto_anterior),
    )


class Differ:
    """
    Compares a current-year dataset against the prior year.

    Rows are sorted by variacion_s descending with a stable sort, so
    ties keep the union order (current labels first, then prior-only).
    """

    def compare(self, current: YearlyDataset, prior: YearlyDataset) -> list[ComparisonRow]:
        """
        Build ranked comparison rows.

        Args:
            current: Dataset of the requested year
            prior: Dataset of the year before

        Returns:
            One row per label in either dataset, highest variacion_s first
        """
        rows = [
            build_row(
                concepto,
                current.get(concepto, 0),
                prior.get(concepto, 0),
            )
            for concepto in union_labels(current, prior)
        ]
        rows.sort(key=lambda row: row.variacion_s, reverse=True)

        logger.debug(
            "datasets_compared",
            current=len(current),
            prior=len(prior),
            rows=len(rows),
        )
        return rows


def summarize_totals(rows: Iterable[ComparisonRow]) -> ComparisonTotals:
    """
    Aggregate scaled amounts across rows.

    The percentage follows the per-row rule: 0 when the prior total is 0.
    """
    total_anterior = 0
    total_actual = 0
    for row in rows:
        total_anterior += row.monto_anterior
        total_actual += row.monto_actual

    return ComparisonTotals(
        total_anterior=total_anterior,
        total_actual=total_actual,
        variacion_s=total_actual - total_anterior,
        variacion_porcentaje=percentage_change(total_actual, total_anterior),
    )


def filter_rows(rows: Iterable[ComparisonRow], term: str) -> list[ComparisonRow]:
    """Rows whose concepto contains term, case-insensitive, order preserved."""
    rows = list(rows)
    if not term:
        return rows

    needle = term.lower()
    return [row for row in rows if needle in row.concepto.lower()]
