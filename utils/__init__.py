from .logger import get_logger, get_script_logger, setup_root_logger
from .errors import DocumentReadError, ExtractionError, InputDirectoryError, ParseError

__all__ = [
    "get_logger",
    "get_script_logger",
    "setup_root_logger",
    "ExtractionError",
    "DocumentReadError",
    "ParseError",
    "InputDirectoryError",
]
