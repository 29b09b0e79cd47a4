"""Row decoder for the KVHH vaccination practice list."""

import logging

from bs4 import Tag

from hamvaxmap.core.models import AddressRecord
from hamvaxmap.decoders.base import BaseRowDecoder

logger = logging.getLogger(__name__)


class KvhhRowDecoder(BaseRowDecoder):
    """
    Decoder for the table on kvhh.net.

    Layout per row:
    - cell 0: unused
    - cell 1: practice name
    - cell 2: address as two paragraphs (street, postcode + city)
    - cell 3: hint text (opening times, restrictions)
    """

    # lxml keeps <tbody> only where the markup has one
    row_selector = "figure.table table > tbody > tr, figure.table table > tr"

    NAME_CELL = 1
    ADDRESS_CELL = 2
    HINT_CELL = 3

    def decode_row(self, row: Tag) -> AddressRecord | None:
        cells = self.cells(row)
        if not cells:
            # Header rows use <th> only
            logger.debug("Skipping row without data cells")
            return None

        return AddressRecord(
            name=self.cell_text(cells, self.NAME_CELL),
            raw_address=self._address_line(cells),
            rich_address=self.cell_html(cells, self.ADDRESS_CELL),
            hint=self.cell_text(cells, self.HINT_CELL),
        )

    def _address_line(self, cells: list[Tag]) -> str:
        """Join the first two paragraphs of the address cell with one space."""
        paragraphs: list[Tag] = []
        if self.ADDRESS_CELL < len(cells):
            paragraphs = cells[self.ADDRESS_CELL].find_all("p", limit=2)

        lines = [p.get_text().strip() for p in paragraphs]
        lines += [""] * (2 - len(lines))

        return f"{lines[0]} {lines[1]}"
