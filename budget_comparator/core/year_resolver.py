"""
Fiscal year resolution for Consulta Amigable report URLs.

The portal encodes the requested year as a `y=<4 digits>` query
parameter; the prior-year report lives at the same URL with the year
decremented.
"""

import re

import structlog

from .errors import ValidationError
from .models import YearContext

logger = structlog.get_logger(__name__)


YEAR_PATTERN = re.compile(r"y=(\d{4})")

MISSING_YEAR_MESSAGE = (
    "La URL no contiene el parámetro de año 'y='. "
    "Asegúrese de copiar el enlace correcto."
)


def resolve_years(url: str) -> YearContext:
    """
    Resolve current and prior fiscal years from a report URL.

    Only the first `y=` token is considered; the rest of the URL is
    passed through untouched.

    Args:
        url: Report URL (e.g., "https://apps5.mineco.gob.pe/...?y=2024&ap=ActProy")

    Returns:
        YearContext with both years and both URLs

    Raises:
        ValidationError: If the URL has no `y=` year token
    """
    match = YEAR_PATTERN.search(url or "")
    if not match:
        raise ValidationError(MISSING_YEAR_MESSAGE)

    year_actual = int(match.group(1))
    year_anterior = year_actual - 1
    url_anterior = YEAR_PATTERN.sub(f"y={year_anterior}", url, count=1)

    logger.debug(
        "years_resolved",
        year_actual=year_actual,
        year_anterior=year_anterior,
    )

    return YearContext(
        year_actual=year_actual,
        year_anterior=year_anterior,
        url_actual=url,
        url_anterior=url_anterior,
    )
