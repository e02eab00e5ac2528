"""Shared fixtures and fakes for the courseware tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog

from models import Block, Container, Page


class MemoryRangeConfig:
    """In-memory stand-in for the host range config store."""

    def __init__(self):
        self.values: dict[tuple[str, str], str] = {}

    def get(self, range_id: str, key: str):
        return self.values.get((range_id, key))

    def store(self, range_id: str, key: str, value: str) -> None:
        self.values[(range_id, key)] = value


class _Handle:
    def __init__(self, location: str):
        self._location = location

    def path(self) -> str:
        return self._location


class FakeFileStore:
    """File store resolving ids from a dict of id -> path."""

    def __init__(self, files: dict[str, str] | None = None):
        self.files = files or {}
        self.requested: list[str] = []

    def resolve(self, file_id: str):
        self.requested.append(file_id)
        location = self.files.get(file_id)
        if location is None:
            return None
        return _Handle(location)


class FakeCollection:
    """Minimal synchronous collection supporting ``_id`` lookups and ``$set``."""

    def __init__(self, docs: list[dict] | None = None):
        self.docs: dict = {doc["_id"]: doc for doc in docs or []}
        self.updates: list[tuple] = []

    def find_one(self, filter: dict, projection: dict | None = None):
        doc = self.docs.get(filter.get("_id"))
        return dict(doc) if doc is not None else None

    def update_one(self, filter: dict, update: dict, upsert: bool = False):
        self.updates.append((filter, update, upsert))
        doc = self.docs.get(filter["_id"])
        if doc is None:
            if not upsert:
                return
            doc = {"_id": filter["_id"]}
            self.docs[filter["_id"]] = doc
        for dotted, value in update.get("$set", {}).items():
            target = doc
            *parents, leaf = dotted.split(".")
            for name in parents:
                target = target.setdefault(name, {})
            target[leaf] = value


class FailingCollection:
    def find_one(self, *args, **kwargs):
        raise RuntimeError("mongo down")

    def update_one(self, *args, **kwargs):
        raise RuntimeError("mongo down")


class FakeDB:
    def __init__(self, **collections):
        self.collections = collections

    def __getitem__(self, name: str):
        return self.collections[name]


def make_block(block_type: str, payload) -> Block:
    if not isinstance(payload, str):
        payload = json.dumps(payload)
    return Block(type=block_type, payload=payload)


def make_page(*blocks: Block, title: str = "Intro", range_id: str = "range-1") -> Page:
    return Page(title=title, range_id=range_id, containers=[Container(blocks=list(blocks))])


@pytest.fixture
def range_config() -> MemoryRangeConfig:
    return MemoryRangeConfig()


@pytest.fixture
def blank_pdf(tmp_path: Path) -> Path:
    from pypdf import PdfWriter

    writer = PdfWriter()
    writer.add_blank_page(width=72, height=72)
    target = tmp_path / "blank.pdf"
    with target.open("wb") as fh:
        writer.write(fh)
    return target


@pytest.fixture(autouse=True)
def _structlog_through_stdlib():
    """Send structlog output to stdlib logging so it stays out of captured stdout."""
    structlog.configure(
        processors=[structlog.processors.JSONRenderer()],
        logger_factory=structlog.stdlib.LoggerFactory(),
    )
    yield
    structlog.reset_defaults()
