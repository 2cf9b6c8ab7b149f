"""
Find the tables that hold hearing data for a classified document.

Published lists embed layout and banner tables alongside the real
hearing tables; each layout has its own test over a table's flattened,
normalized text.
"""

import re
from typing import Callable

from bs4 import Tag

from processors.column_mapper import ColumnMapper, bilingual_header, own_rows, own_text
from processors.document import HearingDocument
from processors.text_cleaner import normalize
from storage.schemas import LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)

POSSESSION_HEADER_TOKENS = (
    bilingual_header("start time", r"start\s*time"),
    bilingual_header("duration", r"duration"),
    bilingual_header("case details", r"case\s*details?"),
    bilingual_header("hearing type", r"hearing\s*type"),
    bilingual_header("hearing channel", r"hearing\s*channel"),
)
COMBINED_HEADER_SEQUENCE = re.compile(r"time\s+claim\s*number\s+claimant\s+defendant")
# Loose detector for "<claim no> <name> <name>" rows when the header is irregular
CLAIM_ROW_PATTERN = re.compile(r"\b[a-z0-9]{4,}\b\s+[a-z]+\s+[a-z]+")
CLAIMANT_TOKEN = re.compile(r"claimant|applicant|petitioner")


def _case_ref_table(text: str) -> bool:
    return bool(re.search(r"case\s*ref", text) and re.search(r"case\s*name", text))


def _possession_table(text: str) -> bool:
    return all(token.search(text) for token in POSSESSION_HEADER_TOKENS)


def _simple_claim_table(text: str) -> bool:
    return bool(re.search(r"claim\s*number", text) and CLAIMANT_TOKEN.search(text))


def _combined_claim_table(text: str) -> bool:
    return bool(COMBINED_HEADER_SEQUENCE.search(text) or CLAIM_ROW_PATTERN.search(text))


TABLE_FILTERS: dict[LayoutKind, Callable[[str], bool]] = {
    LayoutKind.CASE_REF: _case_ref_table,
    LayoutKind.POSSESSION_SCHEDULE: _possession_table,
    LayoutKind.SIMPLE_CLAIM: _simple_claim_table,
    LayoutKind.COMBINED_CLAIM_HEADER: _combined_claim_table,
}


def table_text(table: Tag) -> str:
    """Flattened, normalized text of a table."""
    return normalize(table.get_text(" "))


def has_own_header(table: Tag, mapper: ColumnMapper) -> bool:
    """Check whether a table's own rows (not nested ones) include a header row."""
    for row in own_rows(table):
        cells = row.find_all(["th", "td"], recursive=False)
        if mapper.is_header_row([own_text(cell) for cell in cells]):
            return True
    return False


def locate_tables(document: HearingDocument, layout: LayoutKind) -> list[Tag]:
    """Select candidate data tables for a layout.

    A matching table that only wraps other matching tables (a page layout
    table without a header row of its own) is left out in favour of the
    tables it contains.

    Args:
        document: Parsed document.
        layout: Layout returned by the classifier.

    Returns:
        Candidate tables in document order (possibly empty).
    """
    table_filter = TABLE_FILTERS.get(layout)
    if table_filter is None:
        return []

    mapper = ColumnMapper(layout)
    matched = [table for table in document.tables if table_filter(table_text(table))]

    tables = []
    for table in matched:
        wraps_candidate = any(
            parent is table for other in matched for parent in other.parents
        )
        if wraps_candidate and not has_own_header(table, mapper):
            logger.debug(f"{document.source}: layout wrapper table skipped")
            continue
        tables.append(table)

    if not tables:
        logger.warning(f"{document.source}: no {layout.value} table found")
    else:
        logger.info(f"{document.source}: {len(tables)} candidate table(s) of {len(document.tables)}")

    return tables
