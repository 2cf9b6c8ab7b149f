"""
Claim number deduplication.

A deduplicator is scoped by whoever creates it: one per document by
default, or one shared across a whole batch.
"""

from storage.schemas import CaseRecord
from utils.logger import get_logger

logger = get_logger(__name__)


class ClaimDeduplicator:
    """Keep the first record seen for each claim number."""

    def __init__(self):
        self.seen: set[str] = set()

    def accept(self, record: CaseRecord) -> bool:
        """Register a record.

        Args:
            record: Candidate record.

        Returns:
            True if its claim number was not seen before.
        """
        if record.claim_number in self.seen:
            logger.debug(f"Duplicate claim number dropped: {record.claim_number}")
            return False
        self.seen.add(record.claim_number)
        return True

    def filter(self, records: list[CaseRecord]) -> list[CaseRecord]:
        """Drop records whose claim number was already accepted, keeping order."""
        return [record for record in records if self.accept(record)]

    def __len__(self) -> int:
        return len(self.seen)
