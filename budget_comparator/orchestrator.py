"""
Comparison orchestrator.

Coordinates, per request:
- Year resolution from the report URL
- Concurrent fetch + parse of the current and prior year pages
- Year-tagged error wrapping
- Differ execution
"""

import asyncio
from typing import Optional

import structlog

from .config.loader import PortalSettings, Settings, load_settings
from .core.differ import Differ
from .core.errors import ValidationError, YearDataError
from .core.http_client import HttpClient
from .core.models import ComparisonResult, YearlyDataset
from .core.year_resolver import resolve_years
from .parsers.base import ParserStrategy
from .parsers.data_table import DataTableParser

logger = structlog.get_logger(__name__)


MISSING_URL_MESSAGE = "La URL es requerida."


class ComparisonService:
    """
    Year-over-year comparison service.

    Holds no per-request state; every call re-fetches and re-parses both
    pages. The HTTP client is opened and closed with the service:

        async with ComparisonService.from_settings(settings) as service:
            result = await service.compare(url)
    """

    def __init__(
        self,
        http_client: Optional[HttpClient] = None,
        parser: Optional[ParserStrategy] = None,
        differ: Optional[Differ] = None,
    ):
        """
        Initialize service.

        Args:
            http_client: HTTP client (a default verifying client if not provided)
            parser: Page parser (DataTableParser if not provided)
            differ: Dataset differ
        """
        self.http_client = http_client or HttpClient()
        self.parser = parser or DataTableParser()
        self.differ = differ or Differ()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ComparisonService":
        """Build a service wired to the portal described by settings."""
        portal: PortalSettings = (settings or load_settings()).portal

        return cls(
            http_client=HttpClient(
                timeout=portal.timeout,
                verify_tls=portal.verify_tls,
                accept_language=portal.accept_language,
            ),
            parser=DataTableParser(
                table_selector=portal.table_selector,
                label_column=portal.label_column,
                amount_column=portal.amount_column,
                min_columns=portal.min_columns,
            ),
        )

    async def __aenter__(self) -> "ComparisonService":
        """Enter async context."""
        await self.http_client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        await self.http_client.__aexit__(exc_type, exc_val, exc_tb)

    async def fetch_dataset(self, url: str) -> YearlyDataset:
        """
        Fetch one report page and parse its data table.

        Args:
            url: Report URL

        Returns:
            YearlyDataset for that page
        """
        logger.info("fetching_page", url=url)
        html = await self.http_client.get_text(url)
        logger.debug("page_fetched", url=url, chars=len(html))

        return self.parser.parse(html)

    async def _year_pipeline(self, year: int, url: str) -> YearlyDataset:
        """Run fetch + parse for one year, tagging failures with the year."""
        try:
            return await self.fetch_dataset(url)
        except Exception as e:
            logger.warning(
                "year_pipeline_failed",
                year=year,
                url=url,
                error=str(e),
                error_type=e.__class__.__name__,
            )
            raise YearDataError(year, str(e)) from e

    async def compare(self, url: Optional[str]) -> ComparisonResult:
        """
        Compare the report at url against the previous fiscal year.

        Both pages are fetched concurrently. The first failing pipeline
        aborts the comparison; the other one is left to finish and its
        outcome is discarded.

        Args:
            url: Report URL carrying a `y=<year>` parameter

        Returns:
            ComparisonResult with rows ranked by variacion_s

        Raises:
            ValidationError: Missing URL or missing year token
            YearDataError: Fetch or parse failure for one of the years
        """
        if not url:
            raise ValidationError(MISSING_URL_MESSAGE)

        years = resolve_years(url)

        logger.info(
            "comparison_requested",
            year_actual=years.year_actual,
            year_anterior=years.year_anterior,
        )

        current, prior = await asyncio.gather(
            self._year_pipeline(years.year_actual, years.url_actual),
            self._year_pipeline(years.year_anterior, years.url_anterior),
        )

        rows = self.differ.compare(current, prior)

        logger.info(
            "comparison_complete",
            year_actual=years.year_actual,
            year_anterior=years.year_anterior,
            rows=len(rows),
        )

        return ComparisonResult(
            year_actual=years.year_actual,
            year_anterior=years.year_anterior,
            data=rows,
        )


async def run_comparison(
    url: str,
    settings: Optional[Settings] = None,
) -> ComparisonResult:
    """
    Convenience function to run a single comparison.

    Args:
        url: Report URL
        settings: Optional settings (packaged settings.yml if not provided)

    Returns:
        ComparisonResult
    """
    async with ComparisonService.from_settings(settings) as service:
        return await service.compare(url)
