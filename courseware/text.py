"""Helpers for extracting text from documents attached to courseware blocks."""

from __future__ import annotations

from os import PathLike

import structlog
from pypdf import PdfReader


logger = structlog.get_logger(__name__)


def extract_pdf_text(path: str | PathLike[str]) -> str:
    """Return the text of every page of the PDF at ``path``.

    Parse errors raised by :mod:`pypdf` are left to the caller.
    """

    reader = PdfReader(path)
    chunks = [page.extract_text() or "" for page in reader.pages]
    logger.debug(
        "pdf_text_extracted",
        path=str(path),
        pages=len(chunks),
        text_chars=sum(len(chunk) for chunk in chunks),
    )
    return "\n".join(chunks)
