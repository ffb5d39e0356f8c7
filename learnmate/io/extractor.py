"""Plain text extraction from uploaded study material."""

import logging
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from learnmate.errors import ExtractionFailed, UnsupportedFormat

logger = logging.getLogger(__name__)

MAX_CONTENT_CHARS = 50_000

TEXT_SUFFIXES = {".txt", ".md"}
DOCX_SUFFIXES = {".docx"}
PDF_SUFFIXES = {".pdf"}


class FileContentExtractor:
    """
    Read text out of .txt, .md, .docx and .pdf files.

    The result is truncated to max_chars so a single large upload cannot
    blow up the generation prompt.
    """

    def __init__(self, max_chars: int = MAX_CONTENT_CHARS):
        self.max_chars = max_chars

    @property
    def supported_suffixes(self) -> set[str]:
        return TEXT_SUFFIXES | DOCX_SUFFIXES | PDF_SUFFIXES

    def extract(self, path: str | Path) -> str:
        """
        Extract the text of a document.

        Args:
            path: Path to the document

        Returns:
            Extracted text, at most max_chars long

        Raises:
            UnsupportedFormat: If the file type is not supported
            ExtractionFailed: If the file cannot be read or parsed
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix not in self.supported_suffixes:
            raise UnsupportedFormat(path.name)

        try:
            if suffix in TEXT_SUFFIXES:
                text = path.read_text(encoding="utf-8")
            elif suffix in DOCX_SUFFIXES:
                text = read_docx(path)
            else:
                text = read_pdf(path)
        except ExtractionFailed:
            raise
        except Exception as e:
            raise ExtractionFailed(path.name, str(e)) from e

        if len(text) > self.max_chars:
            logger.info(f"Truncating {path.name} from {len(text)} to {self.max_chars} characters")
        return text[: self.max_chars]


def read_docx(path: Path) -> str:
    """Join the paragraph text of a Word document."""
    doc = Document(str(path))
    return "\n".join(paragraph.text for paragraph in doc.paragraphs)


def read_pdf(path: Path) -> str:
    """Join the text of every page, one newline after each page."""
    reader = PdfReader(str(path))
    text = ""
    for page in reader.pages:
        text += (page.extract_text() or "") + "\n"
    return text
