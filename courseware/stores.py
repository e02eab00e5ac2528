"""Range scoped configuration and file lookup used by the courseware tools.

The courseware platform owns both stores. The protocols below are the only
surface the summary builder and the credential helpers depend on; the MongoDB
and filesystem classes implement them for standalone use.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol
from urllib.parse import quote_plus

import structlog
from pymongo import MongoClient
from pymongo.database import Database

from settings import Settings, get_settings

logger = structlog.get_logger(__name__)


class RangeConfigStore(Protocol):
    def get(self, range_id: str, key: str) -> str | None: ...

    def store(self, range_id: str, key: str, value: str) -> None: ...


class FileHandle(Protocol):
    def path(self) -> str: ...


class FileStore(Protocol):
    def resolve(self, file_id: str) -> FileHandle | None: ...


class StoredFile:
    """File resolved from a store, located on the local filesystem."""

    def __init__(self, file_id: str, location: Path) -> None:
        self.file_id = file_id
        self._location = location

    def path(self) -> str:
        return str(self._location)

    def __repr__(self) -> str:
        return f"StoredFile({self.file_id!r}, {str(self._location)!r})"


def get_mongo_client(settings: Settings | None = None) -> MongoClient:
    """Return a synchronous MongoDB client using configured credentials if provided."""

    mongo = (settings or get_settings()).mongo
    if mongo.username and mongo.password:
        credentials = f"{quote_plus(mongo.username)}:{quote_plus(mongo.password)}@"
        auth_db = f"/{mongo.auth}"
    else:
        credentials = ""
        auth_db = ""

    url = f"mongodb://{credentials}{mongo.host}:{mongo.port}{auth_db}"
    logger.info("connect mongo", host=mongo.host)
    return MongoClient(url)


def get_mongo_database(settings: Settings | None = None) -> Database:
    settings = settings or get_settings()
    return get_mongo_client(settings)[settings.mongo.database]


class MongoRangeConfigStore:
    """Range config kept as one MongoDB document per range.

    Documents look like ``{"_id": range_id, "values": {key: value}}``.
    """

    def __init__(self, db: Database, collection: str | None = None) -> None:
        self.db = db
        self.collection = collection or get_settings().mongo.range_config

    def get(self, range_id: str, key: str) -> str | None:
        try:
            doc = self.db[self.collection].find_one({"_id": range_id}, {"values": True})
        except Exception as exc:
            logger.error("range_config_get_failed", range_id=range_id, key=key, error=str(exc))
            raise
        if not doc:
            return None
        values: dict[str, Any] = doc.get("values") or {}
        value = values.get(key)
        if value is None:
            return None
        return str(value)

    def store(self, range_id: str, key: str, value: str) -> None:
        try:
            self.db[self.collection].update_one(
                {"_id": range_id},
                {"$set": {f"values.{key}": value}},
                upsert=True,
            )
        except Exception as exc:
            logger.error("range_config_store_failed", range_id=range_id, key=key, error=str(exc))
            raise
        logger.info("range_config_stored", range_id=range_id, key=key)


class LocalFileStore:
    """Resolve file ids to regular files directly below ``root``."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def resolve(self, file_id: str) -> StoredFile | None:
        candidate = (self.root / file_id).resolve()
        if candidate.parent != self.root or not candidate.is_file():
            logger.debug("file_unresolved", file_id=file_id, root=str(self.root))
            return None
        return StoredFile(file_id, candidate)


class MongoFileStore:
    """Resolve file ids through file reference documents in MongoDB.

    Each document stores the file location in ``path``; relative locations are
    taken relative to ``storage_root``.
    """

    def __init__(
        self,
        db: Database,
        collection: str | None = None,
        storage_root: str | Path | None = None,
    ) -> None:
        settings = get_settings()
        self.db = db
        self.collection = collection or settings.mongo.file_refs
        self.storage_root = Path(storage_root or settings.file_storage_root)

    def resolve(self, file_id: str) -> StoredFile | None:
        try:
            doc = self.db[self.collection].find_one({"_id": file_id}, {"path": True})
        except Exception as exc:
            logger.error("file_ref_lookup_failed", file_id=file_id, error=str(exc))
            raise
        if not doc or not doc.get("path"):
            logger.debug("file_ref_missing", file_id=file_id)
            return None
        location = Path(str(doc["path"]))
        if not location.is_absolute():
            location = self.storage_root / location
        if not location.is_file():
            logger.warning("file_ref_dangling", file_id=file_id, path=str(location))
            return None
        return StoredFile(file_id, location)
