from .text_cleaner import clean_text, dedupe_words, normalize, strip_pipes
from .document import HearingDocument
from .field_normalizers import (
    extract_court_location,
    find_date_in_text,
    format_court_date,
    parse_court_date,
    scan_court_header,
    split_parties,
)
from .classifier import LAYOUT_RULES, DocumentSignals, classify, classify_html
from .table_locator import locate_tables
from .column_mapper import ColumnMap, ColumnMapper, build_column_map, cell_span
from .deduplicator import ClaimDeduplicator

__all__ = [
    "normalize",
    "clean_text",
    "strip_pipes",
    "dedupe_words",
    "HearingDocument",
    "extract_court_location",
    "parse_court_date",
    "format_court_date",
    "find_date_in_text",
    "scan_court_header",
    "split_parties",
    "LAYOUT_RULES",
    "DocumentSignals",
    "classify",
    "classify_html",
    "locate_tables",
    "ColumnMap",
    "ColumnMapper",
    "build_column_map",
    "cell_span",
    "ClaimDeduplicator",
]
