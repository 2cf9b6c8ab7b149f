"""
Map table header cells to logical fields.

Positions are logical column indices: a header cell with colspan N covers
N consecutive indices and its field is recorded at the first of them.
Data rows are expanded the same way (logical_row) before lookups, so a
ColumnMap index addresses the same column in both.
"""

import re
from dataclasses import dataclass

from bs4 import Tag

from config.sources import WELSH_HEADER_PREFIXES
from processors.text_cleaner import normalize
from storage.schemas import LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)

# Logical field names
TIME = "time"
CLAIM_NUMBER = "claim_number"
CLAIMANT = "claimant"
DEFENDANT = "defendant"
DURATION = "duration"
HEARING_TYPE = "hearing_type"
HEARING_CHANNEL = "hearing_channel"
CASE_DETAILS = "case_details"
CASE_REF = "case_ref"
CASE_NAME = "case_name"
CASE_TYPE = "case_type"

ColumnMap = dict[str, int]

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def bilingual_header(english: str, token: str) -> re.Pattern:
    """Pattern for an English header optionally preceded by its Welsh form."""
    welsh = WELSH_HEADER_PREFIXES.get(english)
    if not welsh:
        return re.compile(token)
    return re.compile(rf"(?:{welsh}\W*)?{token}")


@dataclass(frozen=True)
class HeaderRule:
    """Header text pattern and the field(s) it assigns.

    A rule with several fields describes one visual header cell that stands
    for several data columns ("Claim Number Claimant"): fields[k] goes to
    the cell's start index + k.
    """

    pattern: re.Pattern
    fields: tuple[str, ...]
    substring: bool = False  # Match anywhere instead of the whole text

    def matches(self, text: str) -> bool:
        if self.substring:
            return bool(self.pattern.search(text))
        return bool(self.pattern.fullmatch(text))


@dataclass(frozen=True)
class HeaderScheme:
    """Header vocabulary of one layout.

    A row is the header row when every signature rule matches some cell.
    """

    rules: tuple[HeaderRule, ...]
    signature: tuple[HeaderRule, ...]


def _rule(pattern: str | re.Pattern, *fields: str, substring: bool = False) -> HeaderRule:
    return HeaderRule(re.compile(pattern), fields, substring)


_TIME = _rule(r"time", TIME)
_CLAIM_NUMBER_ANYWHERE = _rule(r"claim\s*number", CLAIM_NUMBER, substring=True)
_CLAIMANT = _rule(r"(?:claimant|applicant|petitioner)s?", CLAIMANT)
_DEFENDANT = _rule(r"(?:defendant|respondent)s?", DEFENDANT)
_DURATION = _rule(r"duration", DURATION)
_HEARING_TYPE = _rule(r"hearing\s*type", HEARING_TYPE)
_START_TIME = _rule(bilingual_header("start time", r"start\s*time"), TIME)
_CASE_REF = _rule(r"case\s*ref(?:erence)?\.?", CASE_REF)

HEADER_SCHEMES: dict[LayoutKind, HeaderScheme] = {
    LayoutKind.SIMPLE_CLAIM: HeaderScheme(
        rules=(_CLAIM_NUMBER_ANYWHERE, _CLAIMANT, _DEFENDANT),
        signature=(_CLAIM_NUMBER_ANYWHERE,),
    ),
    LayoutKind.COMBINED_CLAIM_HEADER: HeaderScheme(
        rules=(
            _TIME,
            _rule(r"claim\s*number\s+claimant", CLAIM_NUMBER, CLAIMANT),
            _rule(r"claim\s*number", CLAIM_NUMBER),
            _CLAIMANT,
            _DEFENDANT,
        ),
        signature=(_CLAIM_NUMBER_ANYWHERE, _DEFENDANT),
    ),
    LayoutKind.POSSESSION_SCHEDULE: HeaderScheme(
        rules=(
            _START_TIME,
            _rule(bilingual_header("duration", r"duration"), DURATION),
            _rule(bilingual_header("case details", r"case\s*details?"), CASE_DETAILS),
            _rule(bilingual_header("hearing type", r"hearing\s*type"), HEARING_TYPE),
            _rule(bilingual_header("hearing channel", r"hearing\s*channel"), HEARING_CHANNEL),
        ),
        signature=(_START_TIME,),
    ),
    LayoutKind.CASE_REF: HeaderScheme(
        rules=(
            _TIME,
            _CASE_REF,
            _rule(r"case\s*name", CASE_NAME),
            _rule(r"case\s*type", CASE_TYPE),
            _DURATION,
            _HEARING_TYPE,
            _rule(r"hearing\s*(?:platform|channel)", HEARING_CHANNEL),
        ),
        signature=(_CASE_REF,),
    ),
}


def cell_span(cell: Tag) -> int:
    """Column span of a cell.

    Reads leading digits of the colspan attribute ("2", " 3px"); anything
    absent, non-numeric or below 1 counts as 1.
    """
    value = cell.get("colspan")
    if isinstance(value, list):
        value = value[0] if value else None
    match = _LEADING_DIGITS.match(value) if isinstance(value, str) else None
    if not match:
        return 1
    return max(1, int(match.group(1)))


def logical_row(cells: list[Tag], texts: list[str]) -> list[str]:
    """Spread cell texts over logical columns, repeating spanned cells."""
    expanded: list[str] = []
    for cell, text in zip(cells, texts):
        expanded.extend([text] * cell_span(cell))
    return expanded


def own_rows(table: Tag) -> list[Tag]:
    """Rows of a table itself, without rows of tables nested in its cells."""
    return [row for row in table.find_all("tr") if row.find_parent("table") is table]


def own_text(cell: Tag) -> str:
    """Text of a cell, leaving out any table nested inside it."""
    table = cell.find_parent("table")
    return " ".join(text for text in cell.strings if text.find_parent("table") is table)


def lookup(row: list[str], column_map: ColumnMap, field: str) -> str:
    """Text of a mapped field in a logical row, "" if unmapped or short."""
    index = column_map.get(field)
    if index is None or index >= len(row):
        return ""
    return row[index]


class ColumnMapper:
    """Resolve a table's header row into a ColumnMap for one layout."""

    def __init__(self, layout: LayoutKind):
        """Initialize column mapper.

        Args:
            layout: Layout whose header vocabulary applies.

        Raises:
            KeyError: If the layout has no header scheme (UNRECOGNIZED).
        """
        self.layout = layout
        self.scheme = HEADER_SCHEMES[layout]

    def is_header_row(self, texts: list[str]) -> bool:
        """Check whether a row's cell texts form this layout's header."""
        normalized = [normalize(text) for text in texts]
        return all(
            any(rule.matches(text) for text in normalized) for rule in self.scheme.signature
        )

    def resolve(self, header_text: str) -> HeaderRule | None:
        """First rule matching a normalized header text."""
        for rule in self.scheme.rules:
            if rule.matches(header_text):
                return rule
        return None

    def map_header(self, cells: list[Tag]) -> ColumnMap:
        """Build the ColumnMap from the header row's cells.

        Args:
            cells: Header row cells, left to right.

        Returns:
            Mapping of field name to logical column index.
        """
        column_map: ColumnMap = {}
        logical_index = 0

        for cell in cells:
            rule = self.resolve(normalize(cell.get_text(" ")))
            if rule:
                for offset, field in enumerate(rule.fields):
                    column_map[field] = logical_index + offset
            logical_index += cell_span(cell)

        logger.debug(f"Headers found ({self.layout.value}): {column_map}")
        return column_map


def build_column_map(rows: list[list[Tag]], layout: LayoutKind) -> tuple[int, ColumnMap]:
    """Find the header row of a table and map it.

    Only the first row satisfying the layout's header signature is used.

    Args:
        rows: Cells of each row, in table order.
        layout: Layout whose header vocabulary applies.

    Returns:
        (header row index, ColumnMap), or (-1, {}) when no header row exists.
    """
    mapper = ColumnMapper(layout)
    for index, cells in enumerate(rows):
        if mapper.is_header_row([cell.get_text(" ") for cell in cells]):
            return index, mapper.map_header(cells)
    return -1, {}
