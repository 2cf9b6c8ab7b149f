"""
Field normalizers for hearing list values.

Pure functions for court names, court dates and party names. Failures to
parse are per-record conditions: the date helpers return "" and log,
party splitting falls back to "Not Provided".
"""

import re
from datetime import date, datetime

from dateutil.parser import ParserError
from dateutil.parser import parse as parse_date

from config.settings import settings
from config.sources import WELSH_MONTHS, WELSH_WEEKDAYS
from processors.text_cleaner import clean_text, dedupe_words, strip_pipes
from storage.schemas import NOT_PROVIDED, CourtHeader
from utils.errors import ParseError
from utils.logger import get_logger

logger = get_logger(__name__)

ENGLISH_WEEKDAYS = r"monday|tuesday|wednesday|thursday|friday|saturday|sunday"
WEEKDAY = rf"(?:{ENGLISH_WEEKDAYS}|dydd\s+(?:{'|'.join(WELSH_WEEKDAYS)}))"

# "Tuesday, 18th October 2024" as a whole paragraph
COURT_DATE_LINE = re.compile(
    rf"^{WEEKDAY},\s+\d{{1,2}}(?:st|nd|rd|th)?\s+\w+\s+\d{{4}}$",
    re.IGNORECASE,
)
COURT_LOCATION_LINE = re.compile(r"court at|sitting at", re.IGNORECASE)

NUMERIC_DATE = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{2,4})\b")
TEXTUAL_DATE = re.compile(r"\b([A-Za-z]+,?\s*\d{1,2}(?:st|nd|rd|th)?\s+[A-Za-z]+\s+\d{4})\b")
ORDINAL_SUFFIX = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b", re.IGNORECASE)
WELSH_WEEKDAY_PREFIX = re.compile(
    rf"^dydd\s+(?:{'|'.join(WELSH_WEEKDAYS)})\b,?\s*", re.IGNORECASE
)
WELSH_MONTH = re.compile(rf"\b({'|'.join(WELSH_MONTHS)})\b", re.IGNORECASE)

# dateutil fills missing parts from its default; two disagreeing defaults expose them
MISSING_PART_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))

# Party separators. Case names use v/vs/versus; case details also use -v-/-vs-.
CASE_NAME_SEPARATOR = re.compile(r"\s+(?:versus|vs|v)\.?\s+", re.IGNORECASE)
PARTY_SEPARATOR = re.compile(r"\s+(?:-vs-|-v-|versus|vs|v)\.?\s+", re.IGNORECASE)


def extract_court_location(title: str) -> str:
    """Extract the court location from a page title.

    Tries "<marker>: <X> County Court", then "<marker>: <X>,", then
    "In The County Court at <X>".

    Args:
        title: Document title.

    Returns:
        Location name, or "" if the title has none.
    """
    marker = re.escape(settings.SOURCE_SITE_MARKER)
    patterns = [
        rf"{marker}:\s*(.*?)\s*County Court",
        rf"{marker}:\s*(.*?)\s*,",
        r"In The County Court at\s*(.*)",
    ]
    for pattern in patterns:
        match = re.search(pattern, title or "", re.IGNORECASE)
        if match and match.group(1).strip():
            return clean_text(match.group(1))
    return ""


def _translate_welsh(text: str) -> str:
    """Replace Welsh month names with English ones."""
    text = WELSH_WEEKDAY_PREFIX.sub("", text)
    return WELSH_MONTH.sub(lambda m: WELSH_MONTHS[m.group(1).lower()], text)


def _parse_complete(text: str, fuzzy: bool) -> date:
    """Parse text that must name a day, a month and a year itself.

    Raises:
        ParseError: If any part would come from the parser's default.
    """
    first, second = (
        parse_date(text, dayfirst=True, fuzzy=fuzzy, default=default).date()
        for default in MISSING_PART_DEFAULTS
    )
    if first != second:
        raise ParseError(f"Incomplete date {text!r}")
    return first


def parse_court_date(raw: str) -> date:
    """Parse a court date string.

    Accepts "d/m/yy(yy)" and textual forms such as
    "Tuesday, 18th October 2024", "15th November 2024" or
    "Dydd Mawrth, 15 Hydref 2024".

    Args:
        raw: Raw date text.

    Returns:
        Parsed date.

    Raises:
        ParseError: If no interpretation of the string yields a complete
            date (day, month and year all present in the text).
    """
    text = clean_text(raw)
    if not text:
        raise ParseError("Empty date string")

    numeric = NUMERIC_DATE.fullmatch(text)
    if numeric:
        day, month, year = numeric.groups()
        if len(year) == 2:
            year = "20" + year
        try:
            return date(int(year), int(month), int(day))
        except ValueError as e:
            raise ParseError(f"Invalid numeric date {raw!r}: {e}") from e

    # Drop the weekday: "Tuesday, 18th October 2024" -> "18th October 2024"
    date_part = text.split(",", 1)[1].strip() if "," in text else text
    date_part = ORDINAL_SUFFIX.sub(r"\1", _translate_welsh(date_part))

    candidates = [(date_part, False), (ORDINAL_SUFFIX.sub(r"\1", _translate_welsh(text)), True)]
    for candidate, fuzzy in candidates:
        try:
            return _parse_complete(candidate, fuzzy)
        except (ParseError, ParserError, ValueError, OverflowError):
            continue

    raise ParseError(f"Unparseable date {raw!r}")


def format_court_date(raw: str | None) -> str:
    """Format a court date as DD/MM/YYYY.

    Args:
        raw: Raw date text.

    Returns:
        Formatted date, or "" if the string cannot be parsed.
    """
    if not raw or not raw.strip():
        return ""
    try:
        return f"{parse_court_date(raw):%d/%m/%Y}"
    except ParseError as e:
        logger.warning(f"Court date left blank: {e}")
        return ""


def find_date_in_text(text: str) -> str:
    """Find the first date-shaped substring of text that parses.

    Numeric dates are tried before textual ones. Used to recover the court
    date from a page title when no dated paragraph exists.

    Args:
        text: Text to search (typically the page title).

    Returns:
        The matching substring, or "".
    """
    for pattern in (NUMERIC_DATE, TEXTUAL_DATE):
        for match in pattern.finditer(text or ""):
            candidate = match.group(0)
            try:
                parse_court_date(candidate)
            except ParseError:
                continue
            return candidate
    return ""


def scan_court_header(paragraphs: list[str]) -> CourtHeader:
    """Scan paragraph blocks for the court location and date lines.

    The last matching paragraph wins for each field.

    Args:
        paragraphs: Text of each paragraph-like block, in document order.

    Returns:
        CourtHeader with the location (repeated words removed) and raw date.
    """
    name = ""
    raw_date = ""

    for paragraph in paragraphs:
        text = clean_text(paragraph)
        if COURT_LOCATION_LINE.search(text):
            parts = COURT_LOCATION_LINE.split(text, maxsplit=1)
            if len(parts) > 1 and parts[1].strip():
                name = parts[1].strip()

        if COURT_DATE_LINE.match(text):
            raw_date = text

    return CourtHeader(name=dedupe_words(name), raw_date=raw_date)


def has_party_separator(text: str, separator: re.Pattern = PARTY_SEPARATOR) -> bool:
    """Check whether text contains a claimant/defendant separator."""
    return bool(separator.search(text or ""))


def split_parties(
    text: str,
    separator: re.Pattern = PARTY_SEPARATOR,
) -> tuple[str, str]:
    """Split a case name into claimant and defendant.

    Splits on the first separator token ("v", "vs", "versus", "-v-", ...)
    surrounded by whitespace.

    Args:
        text: Combined party string, e.g. "Smith v Jones".
        separator: Compiled separator pattern.

    Returns:
        (claimant, defendant). Without a separator the whole text is the
        claimant and the defendant is "Not Provided".
    """
    parts = separator.split(clean_text(text), maxsplit=1)
    claimant = strip_pipes(parts[0]) or NOT_PROVIDED
    if len(parts) < 2:
        return claimant, NOT_PROVIDED
    defendant = strip_pipes(parts[1]) or NOT_PROVIDED
    return claimant, defendant
