"""
Extractor for plain "Claim Number / Claimant / Defendant" tables.
"""

from extractors.base_extractor import RowExtractor
from processors.column_mapper import CLAIM_NUMBER, CLAIMANT, DEFENDANT, ColumnMap, lookup
from storage.schemas import CaseRecord, LayoutKind


class SimpleClaimExtractor(RowExtractor):
    """Direct column lookups; hearing metadata is never published."""

    layout = LayoutKind.SIMPLE_CLAIM

    def extract_row(self, row: list[str], column_map: ColumnMap) -> CaseRecord | None:
        return self.make_record(
            claim_number=lookup(row, column_map, CLAIM_NUMBER),
            claimant=lookup(row, column_map, CLAIMANT),
            defendant=lookup(row, column_map, DEFENDANT),
        )
