"""
Parsed hearing list document.

Wraps a BeautifulSoup tree and exposes the views the classifier, table
locator and extractors read: title, body text, tables, paragraph blocks.
Built once per input and never modified afterwards.
"""

from functools import cached_property
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from processors.text_cleaner import clean_text, normalize
from utils.errors import DocumentReadError
from utils.logger import get_logger

logger = get_logger(__name__)


class HearingDocument:
    """Read-only view of one hearing list page."""

    def __init__(self, soup: BeautifulSoup, source: str = "<memory>"):
        """Initialize document.

        Args:
            soup: Parsed HTML tree.
            source: File path or label used in logs and results.
        """
        self._soup = soup
        self.source = source

    @classmethod
    def from_html(cls, html: str, source: str = "<memory>") -> "HearingDocument":
        """Parse HTML content.

        Args:
            html: HTML string to parse.
            source: File path or label for the document.

        Returns:
            HearingDocument instance.
        """
        return cls(BeautifulSoup(html, "lxml"), source=source)

    @classmethod
    def from_file(cls, path: Path) -> "HearingDocument":
        """Read and parse an HTML file.

        Args:
            path: Path to the HTML file.

        Returns:
            HearingDocument instance.

        Raises:
            DocumentReadError: If the file cannot be read or decoded.
        """
        try:
            html = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentReadError(f"Cannot read {path}: {e}", source=str(path)) from e
        return cls.from_html(html, source=str(path))

    @cached_property
    def title(self) -> str:
        """Page title, whitespace-collapsed."""
        if self._soup.title is None:
            return ""
        return clean_text(self._soup.title.get_text())

    @cached_property
    def body_text(self) -> str:
        """Normalized text of the whole body."""
        root = self._soup.body or self._soup
        return normalize(root.get_text(" "))

    @cached_property
    def tables(self) -> list[Tag]:
        """Every table element, in document order (nested tables included)."""
        return self._soup.find_all("table")

    @cached_property
    def paragraphs(self) -> list[str]:
        """Text of every paragraph block, whitespace-collapsed."""
        # No separator: inline markup must not split "Tuesday, 18th"
        return [clean_text(p.get_text()) for p in self._soup.find_all("p")]

    @cached_property
    def header_cells(self) -> frozenset[str]:
        """Normalized text of every th/td inside any table."""
        return frozenset(
            normalize(cell.get_text(" "))
            for table in self.tables
            for cell in table.find_all(["th", "td"])
        )

    def __repr__(self) -> str:
        return f"HearingDocument(source={self.source!r}, title={self.title!r})"
