"""
Base class for parser strategies.

Parsers implement the extraction phase - converting a decoded report
page into a YearlyDataset.
"""

from abc import ABC, abstractmethod

import structlog

from budget_comparator.core.models import YearlyDataset

logger = structlog.get_logger(__name__)


class ParserStrategy(ABC):
    """
    Abstract base class for parser strategies.

    A parser is pure: it receives page text and returns the
    concepto -> amount mapping, or raises ParseError.
    """

    def __init__(self):
        self.logger = logger.bind(parser=self.__class__.__name__)

    @abstractmethod
    def parse(self, html: str) -> YearlyDataset:
        """
        Extract the dataset from a report page.

        Args:
            html: Decoded page text

        Returns:
            Non-empty YearlyDataset

        Raises:
            ParseError: If the page holds no usable data
        """
        pass
