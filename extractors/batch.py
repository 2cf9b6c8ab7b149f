"""
Batch runner: extract every hearing list in an input directory.
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from tqdm import tqdm

from config.settings import settings
from extractors.hearing_list import HearingListParser
from processors.classifier import classify
from processors.deduplicator import ClaimDeduplicator
from processors.document import HearingDocument
from storage.file_router import FileRouter
from storage.schemas import CaseRecord, ExtractionResult, LayoutKind
from utils.errors import DocumentReadError, InputDirectoryError
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class BatchSummary:
    """Outcome of one batch run."""

    documents: int = 0
    processed: int = 0  # Yielded at least one record
    unprocessed: int = 0  # Yielded nothing (includes unreadable files)
    unreadable: int = 0
    records: list[CaseRecord] = field(default_factory=list)
    results: list[ExtractionResult] = field(default_factory=list)
    layouts: Counter = field(default_factory=Counter)

    def record(self, result: ExtractionResult) -> None:
        """Add one document's outcome."""
        self.documents += 1
        self.results.append(result)
        self.layouts[result.layout.value] += 1
        if result.is_empty:
            self.unprocessed += 1
        else:
            self.processed += 1
            self.records.extend(result.records)


def list_input_files(input_dir: Path, pattern: str | None = None) -> list[Path]:
    """List input documents, sorted by name.

    Raises:
        InputDirectoryError: If the directory does not exist.
    """
    input_dir = Path(input_dir)
    if not input_dir.is_dir():
        raise InputDirectoryError(f"Input directory not found: {input_dir}")
    return sorted(path for path in input_dir.glob(pattern or settings.INPUT_GLOB) if path.is_file())


def _route(router: FileRouter | None, path: Path, has_records: bool) -> None:
    if router is None:
        return
    try:
        router.route(path, has_records)
    except OSError as e:
        logger.error(f"Could not move {path}: {e}")


def run_batch(
    input_dir: Path | None = None,
    dedup_scope: Literal["document", "batch"] | None = None,
    move_files: bool | None = None,
    router: FileRouter | None = None,
    parser: HearingListParser | None = None,
) -> BatchSummary:
    """Extract records from every document in a directory.

    Args:
        input_dir: Directory of HTML files. Defaults to settings.INPUT_DIR.
        dedup_scope: "document" (fresh deduplicator per file) or "batch"
            (one shared across all files). Defaults to settings.DEDUP_SCOPE.
        move_files: Route files to checked/unprocessed dirs after reading.
            Defaults to settings.MOVE_PROCESSED_FILES.
        router: File router to use when moving files.
        parser: Document parser (a default one is created).

    Returns:
        BatchSummary with the aggregated records.

    Raises:
        InputDirectoryError: If the input directory does not exist.
    """
    input_dir = Path(input_dir or settings.INPUT_DIR)
    dedup_scope = dedup_scope or settings.DEDUP_SCOPE
    move_files = settings.MOVE_PROCESSED_FILES if move_files is None else move_files
    router = (router or FileRouter()) if move_files else None
    parser = parser or HearingListParser()

    files = list_input_files(input_dir)
    logger.info(f"Processing {len(files)} file(s) from {input_dir} (dedup: {dedup_scope})")

    shared = ClaimDeduplicator() if dedup_scope == "batch" else None
    summary = BatchSummary()

    for path in tqdm(files, desc="hearing lists", unit="docs"):
        try:
            result = parser.parse_file(path, deduplicator=shared)
        except DocumentReadError as e:
            logger.error(f"Skipping {e.source}: {e}")
            summary.unreadable += 1
            summary.record(ExtractionResult(source=e.source, skip_reason="unreadable"))
            _route(router, path, has_records=False)
            continue

        summary.record(result)
        if result.is_empty:
            logger.warning(f"{path.name}: no records ({result.skip_reason or 'no matching rows'})")
        _route(router, path, has_records=not result.is_empty)

    logger.info(
        f"Batch done: {summary.processed} processed, {summary.unprocessed} unprocessed, "
        f"{len(summary.records)} record(s)"
    )
    return summary


def classify_batch(input_dir: Path | None = None) -> dict[str, LayoutKind]:
    """Classify every document in a directory without extracting.

    Unreadable files are logged and left out.

    Raises:
        InputDirectoryError: If the input directory does not exist.
    """
    layouts: dict[str, LayoutKind] = {}
    for path in list_input_files(Path(input_dir or settings.INPUT_DIR)):
        try:
            layouts[path.name] = classify(HearingDocument.from_file(path))
        except DocumentReadError as e:
            logger.error(f"Skipping {e.source}: {e}")
    return layouts
