"""
CSV output for extracted case records.

Header row unquoted; every data field trimmed and quoted, with embedded
quotes doubled. UTF-8, "\n" line endings.
"""

import csv
import io
from pathlib import Path

from storage.schemas import CSV_COLUMNS, CaseRecord
from utils.logger import get_logger

logger = get_logger(__name__)


def format_csv(records: list[CaseRecord]) -> str:
    """Serialize records to CSV text.

    Args:
        records: Records in output order.

    Returns:
        CSV document including the header row.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_COLUMNS) + "\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow([value.strip() for value in record.to_row()])

    return buffer.getvalue()


def save_to_csv(records: list[CaseRecord], path: Path) -> Path | None:
    """Write records to a CSV file.

    Args:
        records: Records to write.
        path: Output file path (parent directories are created).

    Returns:
        The written path, or None when there was nothing to write.
    """
    if not records:
        logger.warning("No records to write, CSV not created")
        return None

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_csv(records), encoding="utf-8", newline="")

    logger.info(f"Saved {len(records)} record(s) to {path}")
    return path
