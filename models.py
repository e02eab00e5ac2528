"""Pydantic models for courseware pages, containers and blocks.

Block payloads arrive from the host as JSON strings whose schema depends on
the block type. :func:`decode_payload` turns them into one of the typed
payload variants below; absent fields fall back to empty strings so the
summary extraction never fails on incomplete content.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any

import structlog
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

logger = structlog.get_logger(__name__)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_optional_text(value: Any) -> str | None:
    if value is None:
        return None
    return _as_text(value)


Text = Annotated[str, BeforeValidator(_as_text)]
OptionalText = Annotated[str | None, BeforeValidator(_as_optional_text)]


class BlockType(str, Enum):
    """Block type tags the summary builder knows how to read."""

    text = "text"
    code = "code"
    headline = "headline"
    key_point = "key-point"
    dialog_cards = "dialog-cards"
    typewriter = "typewriter"
    document = "document"


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def raw_text(self) -> str:
        return ""


class TextPayload(_Payload):
    text: Text = ""

    def raw_text(self) -> str:
        return self.text


class KeyPointPayload(TextPayload):
    """Key point blocks carry their message in ``text``."""


class TypewriterPayload(TextPayload):
    """Typewriter blocks carry the animated text in ``text``."""


class CodePayload(_Payload):
    lang: Text = ""
    content: OptionalText = None

    def raw_text(self) -> str:
        if self.content is None:
            return ""
        return f"{self.lang} code:\n{self.content}"


class HeadlinePayload(_Payload):
    title: Text = ""
    subtitle: Text = ""

    def raw_text(self) -> str:
        return f"{self.title}\n{self.subtitle}"


class DialogCard(BaseModel):
    model_config = ConfigDict(extra="ignore")

    front_text: Text = ""
    back_text: Text = ""


def _as_cards(value: Any) -> list[Any]:
    if not isinstance(value, list):
        return []
    return [card for card in value if isinstance(card, dict)]


class DialogCardsPayload(_Payload):
    cards: Annotated[list[DialogCard], BeforeValidator(_as_cards)] = Field(default_factory=list)

    def raw_text(self) -> str:
        return "".join(f"{card.front_text}\n{card.back_text}" for card in self.cards)


class DocumentPayload(_Payload):
    """Document blocks reference a stored file; only PDFs are summarised."""

    doc_type: Text = ""
    file_id: Text = ""

    @property
    def pdf_file_id(self) -> str | None:
        if self.doc_type != "pdf" or not self.file_id or self.file_id == "0":
            return None
        return self.file_id


PAYLOAD_MODELS: dict[BlockType, type[_Payload]] = {
    BlockType.text: TextPayload,
    BlockType.code: CodePayload,
    BlockType.headline: HeadlinePayload,
    BlockType.key_point: KeyPointPayload,
    BlockType.dialog_cards: DialogCardsPayload,
    BlockType.typewriter: TypewriterPayload,
    BlockType.document: DocumentPayload,
}


class Block(BaseModel):
    """Single typed content unit of a courseware page."""

    id: str | None = None
    block_type: str = Field(alias="type")
    payload: str | dict[str, Any] = "{}"

    model_config = ConfigDict(populate_by_name=True)

    def payload_mapping(self) -> dict[str, Any]:
        """Return the payload as a mapping, ``{}`` when it cannot be decoded."""

        if isinstance(self.payload, dict):
            return self.payload
        if not self.payload:
            return {}
        try:
            decoded = json.loads(self.payload)
        except (TypeError, ValueError) as exc:
            logger.warning("courseware_payload_undecodable", block=self.id, error=str(exc))
            return {}
        if not isinstance(decoded, dict):
            logger.warning(
                "courseware_payload_not_mapping",
                block=self.id,
                payload_type=type(decoded).__name__,
            )
            return {}
        return decoded


def decode_payload(block: Block) -> _Payload | None:
    """Return the typed payload of ``block`` or ``None`` for unknown types."""

    try:
        block_type = BlockType(block.block_type)
    except ValueError:
        return None
    return PAYLOAD_MODELS[block_type].model_validate(block.payload_mapping())


class Container(BaseModel):
    """Ordered group of blocks on a page."""

    id: str | None = None
    blocks: list[Block] = Field(default_factory=list)


class PageContext(BaseModel):
    """Read-only facts about a page needed while summarising its blocks."""

    range_id: str
    title: str = ""

    model_config = ConfigDict(frozen=True)


class Page(BaseModel):
    """Courseware page (structural element) with its containers."""

    id: str | None = None
    title: str = ""
    range_id: str
    containers: list[Container] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "42",
                "title": "Intro",
                "range_id": "a07535cf2f8a72df33c12ddfa4b53dde",
                "containers": [
                    {
                        "id": "1",
                        "blocks": [
                            {"type": "text", "payload": "{\"text\": \"<p>Hello</p>\"}"},
                        ],
                    }
                ],
            }
        },
    )

    @property
    def context(self) -> PageContext:
        return PageContext(range_id=self.range_id, title=self.title)

    def iter_blocks(self):
        for container in self.containers:
            yield from container.blocks
