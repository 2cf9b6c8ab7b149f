from .settings import settings
from .sources import (
    KNOWN_SOURCE_FINGERPRINTS,
    SUMMARY_ROW_CLAIM_NUMBERS,
    VENUE_KEYWORDS,
    WELSH_HEADER_PREFIXES,
    WELSH_MONTHS,
    WELSH_WEEKDAYS,
    SourceFingerprint,
)

__all__ = [
    "settings",
    "SourceFingerprint",
    "KNOWN_SOURCE_FINGERPRINTS",
    "SUMMARY_ROW_CLAIM_NUMBERS",
    "VENUE_KEYWORDS",
    "WELSH_HEADER_PREFIXES",
    "WELSH_MONTHS",
    "WELSH_WEEKDAYS",
]
