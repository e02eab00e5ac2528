"""Build a plain-text summary of a courseware page.

The summary starts with the page title and continues with the text of every
block the builder can read, separated by blank lines. Blocks without readable
content (unknown type, missing fields, unresolved files) are skipped. Errors
raised while parsing a referenced PDF are not handled here.
"""

from __future__ import annotations

from typing import Callable

import structlog

from models import Block, DocumentPayload, Page, PageContext, decode_payload
from .formatting import format_summary
from .stores import FileStore
from .text import extract_pdf_text

logger = structlog.get_logger(__name__)

PdfExtractor = Callable[[str], str]


class SummaryBuilder:
    """Collect block texts of a page into a single summary string."""

    def __init__(
        self,
        file_store: FileStore | None = None,
        pdf_extractor: PdfExtractor = extract_pdf_text,
    ) -> None:
        self.file_store = file_store
        self.pdf_extractor = pdf_extractor

    def extract_fragment(self, block: Block) -> str:
        """Return the unformatted text ``block`` contributes to a summary."""

        payload = decode_payload(block)
        if payload is None:
            logger.debug("courseware_block_unsupported", block=block.id, block_type=block.block_type)
            return ""
        if isinstance(payload, DocumentPayload):
            return self._document_text(block, payload)
        return payload.raw_text()

    def _document_text(self, block: Block, payload: DocumentPayload) -> str:
        file_id = payload.pdf_file_id
        if file_id is None:
            return ""
        if self.file_store is None:
            logger.debug("courseware_document_no_store", block=block.id, file_id=file_id)
            return ""
        handle = self.file_store.resolve(file_id)
        if handle is None:
            logger.debug("courseware_document_unresolved", block=block.id, file_id=file_id)
            return ""
        return self.pdf_extractor(handle.path())

    def build(self, page: Page) -> str:
        return self.build_from(page.context, page.iter_blocks())

    def build_from(self, context: PageContext, blocks) -> str:
        """Summarise ``blocks`` of the page described by ``context``."""

        parts = [f"{context.title}\n\n"]
        used = 0
        for block in blocks:
            fragment = format_summary(self.extract_fragment(block))
            if fragment:
                parts.append(f"{fragment}\n\n")
                used += 1
        summary = "".join(parts).strip()
        logger.info(
            "courseware_summary_built",
            range_id=context.range_id,
            blocks_used=used,
            summary_chars=len(summary),
        )
        return summary


def build_summary(
    page: Page,
    *,
    file_store: FileStore | None = None,
    pdf_extractor: PdfExtractor = extract_pdf_text,
) -> str:
    """Return the summary text of ``page``."""

    return SummaryBuilder(file_store, pdf_extractor).build(page)
