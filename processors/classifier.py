"""
Layout classifier for hearing list documents.

Layouts are checked in a fixed priority order and the first matching rule
wins. The checks overlap (a case-ref list usually also mentions a
duration), so the order of LAYOUT_RULES is the tie-break policy.
"""

import re
from dataclasses import dataclass
from typing import Callable

from config.settings import settings
from config.sources import KNOWN_SOURCE_FINGERPRINTS, VENUE_KEYWORDS
from processors.document import HearingDocument
from processors.text_cleaner import normalize
from storage.schemas import LayoutKind
from utils.logger import get_logger

logger = get_logger(__name__)

CASE_REF_TOKEN = re.compile(r"case\s*ref")
CASE_NAME_TOKEN = re.compile(r"case\s*name")
CLAIM_NUMBER_TOKEN = re.compile(r"claim\s*number")
POSSESSION_SCHEDULE_TOKENS = (
    re.compile(r"start\s*time"),
    re.compile(r"duration"),
    re.compile(r"case\s*details?"),
    re.compile(r"hearing\s*type"),
    re.compile(r"hearing\s*channel"),
)
VENUE_KEYWORD_PATTERN = re.compile("|".join(re.escape(k) for k in VENUE_KEYWORDS))


@dataclass(frozen=True)
class DocumentSignals:
    """Everything the layout rules look at, computed once per document."""

    body_text: str
    header_cells: frozenset[str]
    is_source_page: bool

    @classmethod
    def from_document(cls, document: HearingDocument) -> "DocumentSignals":
        """Collect signals from a parsed document."""
        return cls(
            body_text=document.body_text,
            header_cells=document.header_cells,
            is_source_page=normalize(settings.SOURCE_SITE_MARKER) in normalize(document.title),
        )

    def mentions(self, pattern: re.Pattern) -> bool:
        return bool(pattern.search(self.body_text))

    @property
    def has_time_header(self) -> bool:
        return "time" in self.header_cells

    @property
    def has_claim_claimant_header(self) -> bool:
        return "claim number claimant" in self.header_cells

    @property
    def has_defendant_header(self) -> bool:
        return "defendant" in self.header_cells

    @property
    def has_generic_keywords(self) -> bool:
        return self.mentions(VENUE_KEYWORD_PATTERN)

    @property
    def matches_known_source(self) -> bool:
        return any(fp.matches(self.body_text) for fp in KNOWN_SOURCE_FINGERPRINTS)


@dataclass(frozen=True)
class LayoutRule:
    """A layout and the predicate that selects it."""

    layout: LayoutKind
    description: str
    predicate: Callable[[DocumentSignals], bool]


def _is_case_ref(signals: DocumentSignals) -> bool:
    return signals.mentions(CASE_REF_TOKEN) and signals.mentions(CASE_NAME_TOKEN)


def _is_possession_schedule(signals: DocumentSignals) -> bool:
    return all(signals.mentions(token) for token in POSSESSION_SCHEDULE_TOKENS)


def _is_simple_claim(signals: DocumentSignals) -> bool:
    return signals.mentions(CLAIM_NUMBER_TOKEN) and signals.matches_known_source


def _is_combined_claim_header(signals: DocumentSignals) -> bool:
    full_header_match = (
        signals.is_source_page
        and signals.has_time_header
        and signals.has_claim_claimant_header
        and signals.has_defendant_header
        and signals.has_generic_keywords
    )
    return full_header_match or signals.mentions(CLAIM_NUMBER_TOKEN)


LAYOUT_RULES: tuple[LayoutRule, ...] = (
    LayoutRule(LayoutKind.CASE_REF, "case ref + case name", _is_case_ref),
    LayoutRule(
        LayoutKind.POSSESSION_SCHEDULE,
        "start time/duration/case details/hearing type/hearing channel",
        _is_possession_schedule,
    ),
    LayoutRule(LayoutKind.SIMPLE_CLAIM, "claim number + known source", _is_simple_claim),
    LayoutRule(
        LayoutKind.COMBINED_CLAIM_HEADER,
        "combined claim number/claimant header or any claim number",
        _is_combined_claim_header,
    ),
)


def classify(document: HearingDocument) -> LayoutKind:
    """Identify the layout of a hearing list document.

    Never raises; a document without any recognised signal is
    LayoutKind.UNRECOGNIZED.

    Args:
        document: Parsed document.

    Returns:
        Detected layout.
    """
    signals = DocumentSignals.from_document(document)

    for rule in LAYOUT_RULES:
        if rule.predicate(signals):
            logger.info(f"{document.source}: layout {rule.layout.value} ({rule.description})")
            return rule.layout

    logger.warning(f"{document.source}: layout not recognised")
    return LayoutKind.UNRECOGNIZED


def classify_html(html: str) -> LayoutKind:
    """Convenience wrapper: classify raw HTML markup."""
    return classify(HearingDocument.from_html(html))
