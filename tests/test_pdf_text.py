"""Tests for PDF text extraction."""

from __future__ import annotations

from pathlib import Path

import pytest
from pypdf.errors import PdfReadError

from courseware import text as text_mod
from courseware.text import extract_pdf_text


def test_blank_pdf_has_no_text(blank_pdf: Path) -> None:
    assert extract_pdf_text(blank_pdf).strip() == ""


def test_pages_are_joined_with_newlines(monkeypatch) -> None:
    class _Page:
        def __init__(self, text):
            self._text = text

        def extract_text(self):
            return self._text

    class _Reader:
        def __init__(self, path):
            self.pages = [_Page("first"), _Page(None), _Page("third")]

    monkeypatch.setattr(text_mod, "PdfReader", _Reader)

    assert extract_pdf_text("doc.pdf") == "first\n\nthird"


def test_empty_file_raises(tmp_path: Path) -> None:
    target = tmp_path / "empty.pdf"
    target.write_bytes(b"")

    with pytest.raises(PdfReadError):
        extract_pdf_text(target)
