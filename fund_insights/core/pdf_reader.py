"""PDF reader producing ExtractedDocument.

Pure Python + PyMuPDF. Embedded text only, no OCR.
"""

import logging
from pathlib import Path
from typing import Iterable, Sequence

import fitz  # PyMuPDF

from fund_insights.core.config import DocumentLimits
from fund_insights.core.errors import DocumentReadError, pdf_read_error
from fund_insights.pydantic_models.document import ExtractedDocument, PageText

logger = logging.getLogger(__name__)

# PyMuPDF word tuple: (x0, y0, x1, y1, text, block_no, line_no, word_no)
Word = Sequence


def group_words_into_lines(
    words: Iterable[Word],
    tolerance: float = DocumentLimits.LINE_Y_TOLERANCE,
) -> list[str]:
    """Group positioned words into visual lines, top to bottom.

    Words whose baselines are within `tolerance` points of the previous word
    belong to the same line. Table rows drawn as separate text blocks are
    rejoined this way, e.g. "TOTAL" and its amounts in different cells.

    Args:
        words: PyMuPDF word tuples (x0, y0, x1, y1, text, ...).
        tolerance: Maximum vertical distance within one line.

    Returns:
        One string per line, words joined by single spaces, left to right.
    """
    items = [w for w in words if str(w[4]).strip()]
    items.sort(key=lambda w: (w[3], w[0]))

    lines: list[list[Word]] = []
    current: list[Word] = []
    last_y: float | None = None

    for word in items:
        y = word[3]
        if last_y is not None and abs(y - last_y) > tolerance:
            lines.append(current)
            current = []
        current.append(word)
        last_y = y

    if current:
        lines.append(current)

    return [
        " ".join(str(w[4]) for w in sorted(line, key=lambda w: w[0]))
        for line in lines
    ]


class PDFReader:
    """PDF document reader producing line-grouped page text."""

    def __init__(self, path: str | Path):
        """Load a PDF document.

        Args:
            path: Path to the PDF file.

        Raises:
            FileNotFoundError: The file does not exist.
            DocumentReadError: PyMuPDF could not open the file.
        """
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"PDF not found: {self.path}")

        try:
            self._doc = fitz.open(str(self.path))
        except Exception as e:
            raise DocumentReadError(pdf_read_error(
                f"Failed to open PDF: {e}",
                source_name=self.filename,
                original=e,
            )) from e

    @property
    def page_count(self) -> int:
        """Total number of pages in the document."""
        return len(self._doc)

    @property
    def filename(self) -> str:
        """Filename without path."""
        return self.path.name

    def read_page_lines(self, page_num: int) -> list[str]:
        """Lines of a single page (1-indexed)."""
        page = self._doc[page_num - 1]
        return group_words_into_lines(page.get_text("words"))

    def extract(self) -> ExtractedDocument:
        """Extract every page into an ExtractedDocument.

        Raises:
            DocumentReadError: Text extraction failed.
        """
        pages = []
        try:
            for page_num in range(1, self.page_count + 1):
                lines = self.read_page_lines(page_num)
                pages.append(PageText(page_number=page_num, lines=lines, raw_text="\n".join(lines)))
        except Exception as e:
            raise DocumentReadError(pdf_read_error(
                f"Failed to extract text from PDF: {e}",
                source_name=self.filename,
                original=e,
            )) from e

        full_text = "\n\n".join(page.raw_text for page in pages).strip()
        logger.debug(f"Extracted {len(pages)} pages, {len(full_text)} chars from {self.filename}")

        return ExtractedDocument(full_text=full_text, pages=pages, source_name=self.filename)

    def close(self):
        """Close the document."""
        if self._doc:
            self._doc.close()
            self._doc = None

    def __enter__(self):
        return self

    def __exit__(self, _exc_type, _exc_val, _exc_tb):
        self.close()
        return False


def read_pdf(path: str | Path) -> ExtractedDocument:
    """Open, extract and close in one call."""
    with PDFReader(path) as reader:
        return reader.extract()
