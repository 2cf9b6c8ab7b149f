"""
Static heuristic tables for hearing list sources.

Keeps the literals observed in real published lists out of the
classification and extraction code:
- KNOWN_SOURCE_FINGERPRINTS: recurring sources recognised by fixed text fragments
- VENUE_KEYWORDS: venue/role phrases that mark a genuine hearing list page
- WELSH_*: bilingual tables for lists published in English and Welsh
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceFingerprint:
    """Text fragments that together identify one recurring source."""

    name: str
    description: str
    patterns: tuple[str, ...]

    def matches(self, text: str) -> bool:
        """Check whether every fragment of the fingerprint appears in text."""
        return all(re.search(pattern, text, re.IGNORECASE) for pattern in self.patterns)


# Sources whose lists use a single plain "Claim Number" table
KNOWN_SOURCE_FINGERPRINTS: list[SourceFingerprint] = [
    SourceFingerprint(
        name="nottingham_wigham_room_7",
        description="Nottingham County Court lists heard by DJ Wigham in Court Room 7",
        patterns=(r"nottingham", r"wigham", r"court\s*room\s*7"),
    ),
]

VENUE_KEYWORDS: tuple[str, ...] = (
    "hearing room",
    "deputy district judge",
    "sitting at",
    "court room",
    "magistrates court",
)

# Claim numbers that mark a summary row rather than a case
SUMMARY_ROW_CLAIM_NUMBERS: frozenset[str] = frozenset({"PCOL"})

# Welsh header text that may precede the English header in bilingual lists
WELSH_HEADER_PREFIXES: dict[str, str] = {
    "start time": r"amser\s*dechrau",
    "duration": r"hyd",
    "case details": r"manylion\s*yr?\s*achos",
    "hearing type": r"math\s*o\s*wrandawiad",
    "hearing channel": r"sianel\s*(?:y\s*)?(?:gwrandawiad|clyw)",
}

WELSH_MONTHS: dict[str, str] = {
    "ionawr": "January",
    "chwefror": "February",
    "mawrth": "March",
    "ebrill": "April",
    "mai": "May",
    "mehefin": "June",
    "gorffennaf": "July",
    "awst": "August",
    "medi": "September",
    "hydref": "October",
    "tachwedd": "November",
    "rhagfyr": "December",
}

WELSH_WEEKDAYS: tuple[str, ...] = (
    "llun",
    "mawrth",
    "mercher",
    "iau",
    "gwener",
    "sadwrn",
    "sul",
)
