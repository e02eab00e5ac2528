"""Access to the GPT API key configured for a courseware range."""

from __future__ import annotations

from typing import Protocol

from .stores import RangeConfigStore

API_KEY_FIELD = "COURSEWARE_GPT_API_KEY"


class HasRange(Protocol):
    @property
    def range_id(self) -> str: ...


def get_api_key(context: HasRange, store: RangeConfigStore) -> str | None:
    """Return the API key stored for the range of ``context`` or ``None``."""

    return store.get(context.range_id, API_KEY_FIELD)


def store_api_key(context: HasRange, api_key: str, store: RangeConfigStore) -> None:
    """Store ``api_key`` in the range config of ``context``."""

    store.store(context.range_id, API_KEY_FIELD, api_key)
