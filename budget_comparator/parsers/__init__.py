"""
Parser strategies for report page extraction.

Parsers handle the extraction phase - converting decoded report pages
into concepto -> amount datasets.

Strategies:
- DataTableParser: Consulta Amigable `table.Data` pages
"""

from .base import ParserStrategy
from .data_table import DataTableParser, collapse_rows

__all__ = [
    "ParserStrategy",
    "DataTableParser",
    "collapse_rows",
]
