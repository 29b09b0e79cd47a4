"""Base row decoder for source table layouts."""

import logging
from abc import ABC, abstractmethod

from bs4 import Tag

from hamvaxmap.core.models import AddressRecord

logger = logging.getLogger(__name__)


class BaseRowDecoder(ABC):
    """
    Abstract base class for table row decoders.

    Each source layout gets one subclass that implements:
    - row_selector: CSS selector matching the data rows
    - decode_row(): How a row's cells map onto an AddressRecord

    The base class provides cell helpers shared by all layouts, so a change
    in the source page only touches its decoder.
    """

    row_selector: str = "table tr"

    @abstractmethod
    def decode_row(self, row: Tag) -> AddressRecord | None:
        """
        Turn one table row into a record.

        Args:
            row: A row element matched by row_selector

        Returns:
            The decoded record, or None if the row carries no data
        """

    def select_rows(self, soup: Tag) -> list[Tag]:
        """Return all data rows in document order."""
        return soup.select(self.row_selector)

    @staticmethod
    def cells(row: Tag) -> list[Tag]:
        """Data cells of a row, by position."""
        return row.find_all("td")

    @staticmethod
    def cell_text(cells: list[Tag], index: int) -> str:
        """Trimmed text of a cell; an absent cell reads as empty."""
        if index >= len(cells):
            return ""
        return cells[index].get_text().strip()

    @staticmethod
    def cell_html(cells: list[Tag], index: int) -> str:
        """Serialized inner markup of a cell; an absent cell reads as empty."""
        if index >= len(cells):
            return ""
        return cells[index].decode_contents()
