"""Input boundary: text extracted from a PDF, page by page.

The core never reads files. A PDF text extractor (core/pdf_reader.py, or any
host-side equivalent) produces an ExtractedDocument and the parsers consume it.
"""

from pydantic import BaseModel, Field


class PageText(BaseModel):
    """Text of one PDF page, already grouped into visual lines."""

    page_number: int = Field(description="1-indexed page number")
    lines: list[str] = Field(default_factory=list, description="Lines top to bottom")
    raw_text: str = Field(default="", description="Lines joined with newlines")


class ExtractedDocument(BaseModel):
    """Full text of a PDF plus its per-page lines."""

    full_text: str = Field(default="", description="All pages joined with blank lines")
    pages: list[PageText] = Field(default_factory=list)
    source_name: str | None = Field(default=None, description="File name, for logs and errors")

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def all_lines(self) -> list[str]:
        """Every line of every page, in reading order."""
        return [line for page in self.pages for line in page.lines]

    @classmethod
    def from_pages(cls, pages: list[list[str]], source_name: str | None = None) -> "ExtractedDocument":
        """Build a document from per-page line lists.

        Example:
            ExtractedDocument.from_pages([["Asset Allocation", "TOTAL $1.00"]])
        """
        page_models = [
            PageText(page_number=i, lines=list(lines), raw_text="\n".join(lines))
            for i, lines in enumerate(pages, start=1)
        ]
        full_text = "\n\n".join(page.raw_text for page in page_models)
        return cls(full_text=full_text.strip(), pages=page_models, source_name=source_name)
