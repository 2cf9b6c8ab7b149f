from .schemas import CSV_COLUMNS, NOT_PROVIDED, CaseRecord, CourtHeader, ExtractionResult, LayoutKind
from .csv_writer import format_csv, save_to_csv
from .file_router import FileRouter

__all__ = [
    "CSV_COLUMNS",
    "NOT_PROVIDED",
    "CaseRecord",
    "CourtHeader",
    "ExtractionResult",
    "LayoutKind",
    "format_csv",
    "save_to_csv",
    "FileRouter",
]
