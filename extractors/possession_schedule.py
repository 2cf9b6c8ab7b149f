"""
Extractor for possession hearing schedules.

Columns: Start Time, Duration, Case Details, Hearing Type, Hearing Channel,
optionally with Welsh headers. Case Details reads
"<claim no> <claimant> v <defendant>".
"""

import re

from extractors.base_extractor import RowExtractor
from processors.column_mapper import (
    CASE_DETAILS,
    DURATION,
    HEARING_CHANNEL,
    HEARING_TYPE,
    ColumnMap,
    lookup,
)
from processors.field_normalizers import PARTY_SEPARATOR, has_party_separator, split_parties
from storage.schemas import NOT_PROVIDED, CaseRecord, LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)

SUPPRESSED_PARTIES = re.compile(r"party\s*name|parties\s*suppressed", re.IGNORECASE)
POSSESSION_HEARING = re.compile(r"possessions?", re.IGNORECASE)
LEADING_CLAIM_TOKEN = re.compile(r"^[A-Z0-9]+\s+")


class PossessionScheduleExtractor(RowExtractor):
    """Possession schedules; other hearing types are dropped."""

    layout = LayoutKind.POSSESSION_SCHEDULE

    def skip_row(self, texts: list[str]) -> bool:
        return any(SUPPRESSED_PARTIES.search(text) for text in texts)

    def extract_row(self, row: list[str], column_map: ColumnMap) -> CaseRecord | None:
        hearing_type = lookup(row, column_map, HEARING_TYPE)
        if not POSSESSION_HEARING.search(hearing_type):
            logger.debug(f"Hearing type {hearing_type!r} is not a possession, skipped")
            return None

        case_details = lookup(row, column_map, CASE_DETAILS)
        tokens = case_details.split()
        claim_number = tokens[0] if tokens else ""

        parties = LEADING_CLAIM_TOKEN.sub("", case_details, count=1)
        if has_party_separator(parties, PARTY_SEPARATOR):
            claimant, defendant = split_parties(parties, PARTY_SEPARATOR)
        else:
            claimant, defendant = NOT_PROVIDED, NOT_PROVIDED

        return self.make_record(
            claim_number=claim_number,
            claimant=claimant,
            defendant=defendant,
            duration=lookup(row, column_map, DURATION),
            hearing_type=hearing_type,
            hearing_channel=lookup(row, column_map, HEARING_CHANNEL),
        )
