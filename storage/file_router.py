"""
Route processed input files into checked/unprocessed directories.
"""

import shutil
from pathlib import Path

from config.settings import settings
from utils.logger import get_logger

logger = get_logger(__name__)


class FileRouter:
    """Move input documents out of the input directory once handled."""

    def __init__(self, checked_dir: Path | None = None, unprocessed_dir: Path | None = None):
        """Initialize router.

        Args:
            checked_dir: Destination for documents that yielded records.
            unprocessed_dir: Destination for documents that yielded none.
        """
        self.checked_dir = Path(checked_dir or settings.CHECKED_DIR)
        self.unprocessed_dir = Path(unprocessed_dir or settings.UNPROCESSED_DIR)

    def _move(self, path: Path, target_dir: Path) -> Path:
        target_dir.mkdir(parents=True, exist_ok=True)
        destination = target_dir / Path(path).name
        shutil.move(str(path), str(destination))
        logger.debug(f"Moved {path} -> {destination}")
        return destination

    def route_processed(self, path: Path) -> Path:
        """Move a document that yielded records to the checked directory."""
        return self._move(path, self.checked_dir)

    def route_unprocessed(self, path: Path) -> Path:
        """Move a document that yielded no records to the unprocessed directory."""
        return self._move(path, self.unprocessed_dir)

    def route(self, path: Path, has_records: bool) -> Path:
        """Move a document to the bucket matching its outcome."""
        if has_records:
            return self.route_processed(path)
        return self.route_unprocessed(path)
