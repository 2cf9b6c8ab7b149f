"""
Abstract base classes for row extractors.

One subclass per hearing list layout. BaseExtractor owns cell handling
and the record builder; RowExtractor adds the common row walk (header
detection, data-row rules) for layouts where one data row is one record.
"""

from abc import ABC, abstractmethod

from bs4 import Tag

from config.settings import settings
from config.sources import SUMMARY_ROW_CLAIM_NUMBERS
from processors.column_mapper import ColumnMap, ColumnMapper, logical_row, own_rows
from processors.text_cleaner import clean_text, strip_pipes
from storage.schemas import CaseRecord, LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)


class BaseExtractor(ABC):
    """Abstract base class for hearing list extractors."""

    layout: LayoutKind  # Must be set by subclasses

    def __init__(self, title: str = "", court_name: str = "", court_date: str = ""):
        """Initialize extractor.

        Args:
            title: Document title, copied to every record.
            court_name: Court location for the document.
            court_date: Court date, already formatted as DD/MM/YYYY (or "").
        """
        self.title = title
        self.court_name = court_name
        self.court_date = court_date
        self.mapper = ColumnMapper(self.layout)

    def data_cells(self, row: Tag) -> list[Tag]:
        """Cells of a row, without layout spacer cells."""
        return [
            cell
            for cell in row.find_all(["th", "td"], recursive=False)
            if settings.EMPTY_CELL_CLASS not in (cell.get("class") or [])
        ]

    def cell_text(self, cell: Tag) -> str:
        """Whitespace-collapsed text of a cell."""
        return clean_text(cell.get_text(" "))

    @abstractmethod
    def extract(self, table: Tag) -> list[CaseRecord]:
        """Extract records from one table.

        Args:
            table: Candidate table element.

        Returns:
            Records in row order (not deduplicated).
        """
        pass

    def make_record(
        self,
        claim_number: str,
        claimant: str | None = None,
        defendant: str | None = None,
        duration: str | None = None,
        hearing_type: str | None = None,
        hearing_channel: str | None = None,
    ) -> CaseRecord | None:
        """Build a CaseRecord with the document-level fields filled in.

        Rows without a claim number and summary rows (e.g. "PCOL") yield None.
        """
        claim_number = clean_text(claim_number)
        if not claim_number:
            logger.debug(f"{self.layout.value}: row without claim number skipped")
            return None
        if claim_number.upper() in SUMMARY_ROW_CLAIM_NUMBERS:
            logger.debug(f"{self.layout.value}: summary row {claim_number} skipped")
            return None

        record = CaseRecord(
            court_name=self.court_name,
            court_date=self.court_date,
            claim_number=claim_number,
            claimant=strip_pipes(claimant),
            defendant=strip_pipes(defendant),
            duration=clean_text(duration),
            hearing_type=clean_text(hearing_type),
            hearing_channel=clean_text(hearing_channel),
            title=self.title,
        )
        logger.debug(
            f"{self.layout.value}: {record.claim_number} | {record.claimant} | {record.defendant}"
        )
        return record


class RowExtractor(BaseExtractor):
    """Extractor for layouts where every data row is one hearing."""

    def skip_row(self, texts: list[str]) -> bool:
        """Hook for layouts that discard rows before header detection."""
        return False

    def extract(self, table: Tag) -> list[CaseRecord]:
        records: list[CaseRecord] = []
        column_map: ColumnMap = {}
        header_texts: list[str] | None = None

        for row in own_rows(table):
            cells = self.data_cells(row)
            texts = [self.cell_text(cell) for cell in cells]

            if not any(texts) or self.skip_row(texts):
                continue

            if header_texts is None:
                if self.mapper.is_header_row(texts):
                    column_map = self.mapper.map_header(cells)
                    header_texts = texts
                continue

            # Header repeated after a page break, not a hearing
            if texts == header_texts:
                continue

            if not column_map or len(cells) < 2:
                continue

            record = self.extract_row(logical_row(cells, texts), column_map)
            if record is not None:
                records.append(record)

        logger.debug(f"{self.layout.value}: {len(records)} record(s) from table")
        return records

    @abstractmethod
    def extract_row(self, row: list[str], column_map: ColumnMap) -> CaseRecord | None:
        """Build a record from one data row.

        Args:
            row: Cell texts expanded to logical columns.
            column_map: Header mapping of the table.

        Returns:
            CaseRecord, or None if the row is not a hearing to keep.
        """
        pass
