"""
Document pipeline: one hearing list page in, an ExtractionResult out.

classify -> locate tables -> court header -> per-table extractor -> dedupe
"""

from pathlib import Path

from extractors.base_extractor import BaseExtractor
from extractors.case_ref import CaseRefExtractor
from extractors.combined_claim import CombinedClaimExtractor
from extractors.possession_schedule import PossessionScheduleExtractor
from extractors.simple_claim import SimpleClaimExtractor
from processors.classifier import classify
from processors.deduplicator import ClaimDeduplicator
from processors.document import HearingDocument
from processors.field_normalizers import (
    extract_court_location,
    find_date_in_text,
    format_court_date,
    scan_court_header,
)
from processors.table_locator import locate_tables
from storage.schemas import CaseRecord, ExtractionResult, LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)

EXTRACTORS: dict[LayoutKind, type[BaseExtractor]] = {
    LayoutKind.CASE_REF: CaseRefExtractor,
    LayoutKind.POSSESSION_SCHEDULE: PossessionScheduleExtractor,
    LayoutKind.SIMPLE_CLAIM: SimpleClaimExtractor,
    LayoutKind.COMBINED_CLAIM_HEADER: CombinedClaimExtractor,
}


class HearingListParser:
    """Extract case records from hearing list documents."""

    def court_details(self, document: HearingDocument) -> tuple[str, str]:
        """Resolve the court name and formatted court date of a document.

        The title wins for the name; the paragraphs supply it otherwise.
        The date comes from a dated paragraph, else from the title.

        Returns:
            (court_name, court_date as DD/MM/YYYY or "")
        """
        header = scan_court_header(document.paragraphs)
        court_name = extract_court_location(document.title) or header.name
        raw_date = header.raw_date or find_date_in_text(document.title)
        return court_name, format_court_date(raw_date)

    def parse(
        self,
        document: HearingDocument,
        deduplicator: ClaimDeduplicator | None = None,
    ) -> ExtractionResult:
        """Extract every case record from a document.

        Never raises for content problems: unknown layouts and missing
        tables give an empty result, and a table whose extraction fails
        is logged and skipped.

        Args:
            document: Parsed document.
            deduplicator: Shared deduplicator for batch scope. A fresh one
                is used when omitted.

        Returns:
            ExtractionResult for the document.
        """
        deduplicator = deduplicator if deduplicator is not None else ClaimDeduplicator()
        layout = classify(document)
        result = ExtractionResult(source=document.source, title=document.title, layout=layout)

        if layout is LayoutKind.UNRECOGNIZED:
            result.skip_reason = "unrecognized layout"
            return result

        tables = locate_tables(document, layout)
        result.tables_found = len(tables)
        if not tables:
            result.skip_reason = f"no {layout.value} table"
            return result

        court_name, court_date = self.court_details(document)
        logger.info(f"{document.source}: court {court_name!r}, date {court_date!r}")

        records: list[CaseRecord] = []
        for index, table in enumerate(tables):
            extractor = EXTRACTORS[layout](document.title, court_name, court_date)
            try:
                records.extend(extractor.extract(table))
            except Exception as e:
                logger.error(f"{document.source}: table {index} skipped: {e}")
                continue

        result.records = deduplicator.filter(records)
        logger.info(
            f"{document.source}: {len(result.records)} record(s) "
            f"({len(records) - len(result.records)} duplicate(s) dropped)"
        )
        return result

    def parse_html(self, html: str, source: str = "<memory>") -> ExtractionResult:
        """Parse raw HTML markup."""
        return self.parse(HearingDocument.from_html(html, source=source))

    def parse_file(
        self,
        path: Path,
        deduplicator: ClaimDeduplicator | None = None,
    ) -> ExtractionResult:
        """Read and parse one HTML file.

        Raises:
            DocumentReadError: If the file cannot be read.
        """
        return self.parse(HearingDocument.from_file(path), deduplicator=deduplicator)
