"""
Exception hierarchy for hearing list extraction.

Content problems inside a document (unknown layout, missing table, bad
date) are not exceptions: they are logged and yield fewer records. These
classes cover the cases a caller has to route or stop on.
"""


class ExtractionError(Exception):
    """Base exception for extraction errors."""

    pass


class DocumentReadError(ExtractionError):
    """Input document could not be read or decoded."""

    def __init__(self, message: str, source: str):
        """Initialize document read error.

        Args:
            message: Error message.
            source: Path or label of the unreadable document.
        """
        super().__init__(message)
        self.source = source


class ParseError(ExtractionError):
    """Error parsing a field value."""

    pass


class InputDirectoryError(ExtractionError):
    """Batch input directory is missing or not a directory."""

    pass
