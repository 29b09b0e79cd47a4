"""Extraction of address records from the source document's table."""

import logging

from bs4 import BeautifulSoup

from hamvaxmap.core.errors import ExtractionError
from hamvaxmap.core.models import AddressRecord
from hamvaxmap.decoders.base import BaseRowDecoder

logger = logging.getLogger(__name__)


class Extractor:
    """
    Extractor that turns an HTML document into ordered address records.

    The row-to-field mapping lives in the decoder; the extractor only finds
    rows, keeps document order and enforces that something was found.
    """

    def __init__(self, decoder: BaseRowDecoder):
        """
        Initialize extractor.

        Args:
            decoder: Row decoder for the document's table layout
        """
        self.decoder = decoder

    def extract(self, document: str) -> list[AddressRecord]:
        """
        Extract one record per data row, in document order.

        Args:
            document: Raw HTML of the source page

        Returns:
            Non-empty list of records without coordinates

        Raises:
            ExtractionError: If no row yields a record
        """
        soup = BeautifulSoup(document, "lxml")
        rows = self.decoder.select_rows(soup)

        records = []
        for row in rows:
            record = self.decoder.decode_row(row)
            if record is not None:
                records.append(record)

        if not records:
            raise ExtractionError(
                f"no records found (selector {self.decoder.row_selector!r} "
                f"matched {len(rows)} rows)"
            )

        logger.info(f"Extracted {len(records)} records from {len(rows)} rows")
        return records
