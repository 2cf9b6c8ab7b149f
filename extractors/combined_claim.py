"""
Extractor for lists with a combined "Claim Number Claimant" header.

These lists put the claim number and claimant under one visual header
and often spread a case over several rows: the first row carries the
claim number, following rows add further claimant or defendant names.
Rows are fed through CaseAccumulator, an explicit state machine:

    AWAITING_HEADER -> AWAITING_CASE -> ACCUMULATING_CASE -> FLUSHED

Some lists use an inline form instead of columns:
"Claim K00AB123: Acme Homes Ltd versus John Smith", with the hearing
time in its own bare "10.30" cell.
"""

import re
from dataclasses import dataclass
from enum import Enum

from bs4 import Tag

from extractors.base_extractor import BaseExtractor
from processors.column_mapper import (
    CLAIM_NUMBER,
    CLAIMANT,
    DEFENDANT,
    TIME,
    ColumnMap,
    logical_row,
    own_rows,
    lookup,
)
from processors.text_cleaner import clean_text
from storage.schemas import CaseRecord, LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)

PARAGRAPH_JOIN = " | "
INLINE_CLAIM = re.compile(r"^claim\s+(\w+):\s*(.*?)\s+versus\s+(.*)$", re.IGNORECASE)
BARE_TIME = re.compile(r"^\d{1,2}[.:]\d{2}$")


class CombinedState(str, Enum):
    """States of the combined-header row walk."""

    AWAITING_HEADER = "awaiting_header"
    AWAITING_CASE = "awaiting_case"
    ACCUMULATING_CASE = "accumulating_case"
    FLUSHED = "flushed"


@dataclass
class RowFields:
    """Values read from one data row."""

    time: str = ""
    claim_number: str = ""
    claimant: str = ""
    defendant: str = ""


@dataclass
class OpenCase:
    """A case whose rows are still being read."""

    claim_number: str
    claimant: str = ""
    defendant: str = ""
    time: str = ""

    def extend(self, claimant: str, defendant: str) -> None:
        """Append the party text of a continuation row."""
        self.claimant = clean_text(f"{self.claimant} {claimant}")
        self.defendant = clean_text(f"{self.defendant} {defendant}")


class CaseAccumulator:
    """State machine collecting cases from the rows of one table."""

    def __init__(self):
        self.state = CombinedState.AWAITING_HEADER
        self.last_time = ""
        self.open_case: OpenCase | None = None
        self.closed: list[OpenCase] = []

    def _transition(self, state: CombinedState) -> None:
        if state is not self.state:
            logger.debug(f"Combined layout: {self.state.value} -> {state.value}")
            self.state = state

    def _close_open_case(self) -> None:
        if self.open_case is not None:
            self.closed.append(self.open_case)
            self.open_case = None

    def header_found(self) -> None:
        self._transition(CombinedState.AWAITING_CASE)

    def see_time(self, time: str) -> None:
        """Remember the latest hearing time; later cases inherit it."""
        if time:
            self.last_time = time

    def start_case(self, claim_number: str, claimant: str, defendant: str) -> None:
        """Close the open case (if any) and open a new one."""
        self._close_open_case()
        self.open_case = OpenCase(claim_number, claimant, defendant, time=self.last_time)
        self._transition(CombinedState.ACCUMULATING_CASE)

    def continue_case(self, claimant: str, defendant: str) -> bool:
        """Add a continuation row to the open case.

        Returns:
            False if no case is open (the row is dropped).
        """
        if self.state is not CombinedState.ACCUMULATING_CASE or self.open_case is None:
            return False
        self.open_case.extend(claimant, defendant)
        return True

    def flush(self) -> list[OpenCase]:
        """Close the open case and finish; returns every collected case."""
        self._close_open_case()
        self._transition(CombinedState.FLUSHED)
        return self.closed


def _split_once(text: str) -> tuple[str, str]:
    if PARAGRAPH_JOIN in text:
        first, rest = text.split(PARAGRAPH_JOIN, 1)
        return first.strip(), rest.strip()
    return text.strip(), ""


class CombinedClaimExtractor(BaseExtractor):
    """Combined claim number/claimant header lists, with multi-row cases."""

    layout = LayoutKind.COMBINED_CLAIM_HEADER

    def paragraph_text(self, cell: Tag) -> str:
        """Cell text built from its paragraphs, joined by " | ".

        Falls back to the plain cell text when the cell has no paragraphs.
        """
        paragraphs = [clean_text(p.get_text()) for p in cell.find_all("p")]
        paragraphs = [text for text in paragraphs if text]
        if not paragraphs:
            return self.cell_text(cell)
        return PARAGRAPH_JOIN.join(paragraphs)

    def read_row(self, cells: list[Tag], column_map: ColumnMap) -> RowFields:
        """Read time, claim number and parties from one data row.

        Three cells: time, claim, parties. Either the claim cell holds
        "claim | claimant" and the third cell the defendant, or the third
        cell holds "claimant | defendant". Four cells: claimant and
        defendant are the last two. Anything else goes through the
        logical column map.
        """
        texts = [self.paragraph_text(cell) for cell in cells]
        row = logical_row(cells, texts)
        fields = RowFields(time=_split_once(lookup(row, column_map, TIME))[0])

        if len(cells) == 3:
            claim_cell, party_cell = texts[1], texts[2]
            if PARAGRAPH_JOIN in claim_cell:
                fields.claim_number, fields.claimant = _split_once(claim_cell)
                fields.defendant = party_cell
            else:
                fields.claim_number = claim_cell
                fields.claimant, fields.defendant = _split_once(party_cell)
        elif len(cells) == 4:
            fields.claim_number = _split_once(lookup(row, column_map, CLAIM_NUMBER))[0]
            fields.claimant, fields.defendant = texts[2], texts[3]
        else:
            fields.claim_number = _split_once(lookup(row, column_map, CLAIM_NUMBER))[0]
            fields.claimant = lookup(row, column_map, CLAIMANT)
            fields.defendant = lookup(row, column_map, DEFENDANT)

        return fields

    def read_inline_row(self, texts: list[str], accumulator: CaseAccumulator) -> bool:
        """Handle a row in the inline "Claim X: A versus B" form.

        Returns:
            True if the row was in the inline form.
        """
        matches = [INLINE_CLAIM.match(text) for text in texts]
        if not any(matches):
            return False

        for text, match in zip(texts, matches):
            if BARE_TIME.match(text):
                accumulator.see_time(text)
            elif match:
                claim_number, claimant, defendant = match.groups()
                accumulator.start_case(claim_number, claimant, defendant)
        return True

    def extract(self, table: Tag) -> list[CaseRecord]:
        accumulator = CaseAccumulator()
        column_map: ColumnMap = {}
        header_texts: list[str] | None = None

        for row in own_rows(table):
            cells = self.data_cells(row)
            texts = [self.cell_text(cell) for cell in cells]

            if not any(texts):
                continue

            if self.read_inline_row(texts, accumulator):
                continue

            if accumulator.state is CombinedState.AWAITING_HEADER:
                if self.mapper.is_header_row(texts):
                    column_map = self.mapper.map_header(cells)
                    header_texts = texts
                    accumulator.header_found()
                continue

            # Header repeated after a page break, not a hearing
            if texts == header_texts or not column_map or len(cells) < 2:
                continue

            fields = self.read_row(cells, column_map)
            accumulator.see_time(fields.time)

            if fields.claim_number:
                accumulator.start_case(fields.claim_number, fields.claimant, fields.defendant)
            elif not accumulator.continue_case(fields.claimant, fields.defendant):
                logger.debug(f"Continuation row before any case dropped: {texts}")

        records = []
        for case in accumulator.flush():
            record = self.make_record(case.claim_number, case.claimant, case.defendant)
            if record is not None:
                records.append(record)

        logger.debug(f"{self.layout.value}: {len(records)} record(s) from table")
        return records
