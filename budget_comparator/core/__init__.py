"""
Core layer - stable foundation for the comparison pipeline.

Components:
- models: YearlyDataset, ComparisonRow, ComparisonResult dataclasses
- errors: ValidationError, FetchConnectionError, HttpStatusError, ParseError
- http_client: Single-attempt async HTTP client with explicit TLS switch
- year_resolver: y=<year> extraction and prior-year URL
- normalizer: accent stripping, amount parsing, scaling and rounding
- differ: year-over-year merge and ranking
"""

from .models import (
    YearlyDataset,
    YearContext,
    ComparisonRow,
    ComparisonTotals,
    ComparisonResult,
)
from .errors import (
    ComparatorError,
    ValidationError,
    FetchConnectionError,
    HttpStatusError,
    ParseError,
    YearDataError,
)
from .normalizer import (
    strip_accents,
    parse_amount,
    scale_to_millions,
    percentage_change,
)
from .year_resolver import resolve_years
from .differ import Differ, summarize_totals, filter_rows

__all__ = [
    "YearlyDataset",
    "YearContext",
    "ComparisonRow",
    "ComparisonTotals",
    "ComparisonResult",
    "ComparatorError",
    "ValidationError",
    "FetchConnectionError",
    "HttpStatusError",
    "ParseError",
    "YearDataError",
    "strip_accents",
    "parse_amount",
    "scale_to_millions",
    "percentage_change",
    "resolve_years",
    "Differ",
    "summarize_totals",
    "filter_rows",
]
