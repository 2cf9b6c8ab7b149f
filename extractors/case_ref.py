"""
Extractor for "Case Ref / Case Name / Case Type" lists.

Only possession cases are kept. The case name holds both parties
("Acme Homes Ltd v John Smith").
"""

from extractors.base_extractor import RowExtractor
from processors.column_mapper import (
    CASE_NAME,
    CASE_REF,
    CASE_TYPE,
    DURATION,
    HEARING_CHANNEL,
    HEARING_TYPE,
    ColumnMap,
    lookup,
)
from processors.field_normalizers import CASE_NAME_SEPARATOR, has_party_separator, split_parties
from storage.schemas import NOT_PROVIDED, CaseRecord, LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)


class CaseRefExtractor(RowExtractor):
    """Case reference lists filtered to possession claims."""

    layout = LayoutKind.CASE_REF

    def extract_row(self, row: list[str], column_map: ColumnMap) -> CaseRecord | None:
        case_type = lookup(row, column_map, CASE_TYPE)
        if "poss" not in case_type.lower():
            logger.debug(f"Case type {case_type!r} is not a possession claim, skipped")
            return None

        case_name = lookup(row, column_map, CASE_NAME)
        if has_party_separator(case_name, CASE_NAME_SEPARATOR):
            claimant, defendant = split_parties(case_name, CASE_NAME_SEPARATOR)
        else:
            claimant, defendant = NOT_PROVIDED, NOT_PROVIDED

        return self.make_record(
            claim_number=lookup(row, column_map, CASE_REF),
            claimant=claimant,
            defendant=defendant,
            duration=lookup(row, column_map, DURATION),
            hearing_type=lookup(row, column_map, HEARING_TYPE),
            hearing_channel=lookup(row, column_map, HEARING_CHANNEL),
        )
