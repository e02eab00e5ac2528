"""Courseware page summaries and range scoped API key access."""

from .credentials import API_KEY_FIELD, get_api_key, store_api_key
from .formatting import format_summary, strip_tags
from .summary import SummaryBuilder, build_summary
from .text import extract_pdf_text

__all__ = [
    "API_KEY_FIELD",
    "SummaryBuilder",
    "build_summary",
    "extract_pdf_text",
    "format_summary",
    "get_api_key",
    "store_api_key",
    "strip_tags",
]
