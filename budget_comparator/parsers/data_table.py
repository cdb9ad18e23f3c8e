"""
Consulta Amigable data table parser.

Extracts concepto -> devengado pairs from the `table.Data` element of
a report page.
"""

from typing import Iterable, Iterator, Optional

from bs4 import BeautifulSoup, Tag

from budget_comparator.core.errors import ParseError
from budget_comparator.core.models import YearlyDataset
from budget_comparator.core.normalizer import parse_amount, strip_accents

from .base import ParserStrategy


NO_TABLE_MESSAGE = (
    "No se encontró la tabla de datos en la URL proporcionada. "
    "Verifique que el enlace sea de Consulta Amigable."
)

NO_NUMERIC_DATA_MESSAGE = (
    "La tabla se encontró pero no contiene datos numéricos válidos "
    "en las columnas esperadas."
)


def collapse_rows(rows: Iterable[tuple[str, float]]) -> YearlyDataset:
    """
    Fold parsed rows into an ordered mapping.

    Later rows overwrite earlier rows with the same label; a label keeps
    the position of its first occurrence.
    """
    dataset: YearlyDataset = {}
    for concepto, monto in rows:
        dataset[concepto] = monto
    return dataset


class DataTableParser(ParserStrategy):
    """
    Parser for Consulta Amigable report pages.

    A row qualifies when it has at least `min_columns` cells and its
    amount cell starts with a number; other rows are skipped silently.
    """

    def __init__(
        self,
        table_selector: str = "table.Data",
        label_column: int = 1,
        amount_column: int = 7,
        min_columns: int = 8,
    ):
        """
        Initialize parser.

        Args:
            table_selector: CSS selector of the data table (first match wins)
            label_column: Zero-based index of the concepto cell
            amount_column: Zero-based index of the devengado cell
            min_columns: Minimum number of cells for a row to qualify
        """
        super().__init__()
        self.table_selector = table_selector
        self.label_column = label_column
        self.amount_column = amount_column
        self.min_columns = max(min_columns, label_column + 1, amount_column + 1)

    def parse(self, html: str) -> YearlyDataset:
        soup = BeautifulSoup(html, "lxml")

        table = soup.select_one(self.table_selector)
        if table is None:
            self.logger.warning("data_table_missing", selector=self.table_selector)
            raise ParseError(NO_TABLE_MESSAGE)

        dataset = collapse_rows(self.iter_rows(table))
        if not dataset:
            self.logger.warning("data_table_empty", selector=self.table_selector)
            raise ParseError(NO_NUMERIC_DATA_MESSAGE)

        self.logger.info("data_table_parsed", conceptos=len(dataset))
        return dataset

    def iter_rows(self, table: Tag) -> Iterator[tuple[str, float]]:
        """Yield (concepto, monto) for every qualifying row, in document order."""
        for row in table.find_all("tr"):
            parsed = self._parse_row(row)
            if parsed is not None:
                yield parsed

    def _parse_row(self, row: Tag) -> Optional[tuple[str, float]]:
        cells = row.find_all("td")
        if len(cells) < self.min_columns:
            return None

        monto = parse_amount(cells[self.amount_column].get_text())
        if monto is None:
            return None

        concepto = strip_accents(cells[self.label_column].get_text().strip())
        return concepto, monto
