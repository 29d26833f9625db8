"""Read back generated PDFs for logging and sanity checks."""

from __future__ import annotations

import logging
from typing import List

import fitz

from painguide.models.pdf import PdfSummary

logger = logging.getLogger(__name__)


def summarize_pdf(pdf_bytes: bytes) -> PdfSummary:
    """Return page count, byte size and embedded title of a PDF buffer."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        title = (doc.metadata or {}).get("title") or None
        return PdfSummary(page_count=doc.page_count, size_bytes=len(pdf_bytes), title=title)


def extract_text(pdf_bytes: bytes) -> List[str]:
    """Plain text of every page, in order."""
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return [page.get_text("text") for page in doc]
