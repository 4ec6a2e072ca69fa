from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, TypedDict
from uuid import uuid4

from .data_dir import PROBE_PREFIX, DataDirectory
from .locks import PathLockTable

logger = logging.getLogger(__name__)

CURRENT_VERSION = 1
TEMP_PREFIX = ".tmp-"


class CollectionDocument(TypedDict):
    version: int
    records: List[Any]


class InvalidCollectionName(ValueError):
    pass


def empty_document() -> CollectionDocument:
    return {"version": CURRENT_VERSION, "records": []}


def _normalize_version(value) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return CURRENT_VERSION
    return value


def normalize_document(raw: Mapping[str, Any]) -> CollectionDocument:
    records = raw.get("records")
    return {
        "version": _normalize_version(raw.get("version")),
        "records": records if isinstance(records, list) else [],
    }


def _file_name(name: str) -> str:
    name = str(name or "")
    if (
        not name.strip()
        or name != name.strip()
        or name in (".", "..")
        or any(ch in name for ch in ("/", "\\", "\x00"))
    ):
        raise InvalidCollectionName(f"invalid collection name: {name!r}")
    return name if name.endswith(".json") else f"{name}.json"


def _write_atomic(path: Path, document: CollectionDocument) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_name(f"{TEMP_PREFIX}{path.name}-{time.time_ns()}-{uuid4().hex[:8]}")
    try:
        with tmp.open("w", encoding="utf-8") as f:
            json.dump(document, f, indent=2, ensure_ascii=False)
        os.replace(tmp, path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise


class JsonDb:
    """JSON-on-disk collections: one ``{version, records}`` file per collection.

    Reads are tolerant: a missing or corrupt file reads as an empty
    collection, and a missing one is created on first read. Writes replace
    the whole file through a sibling temp file and ``os.replace``. All
    operations on one file are serialized in arrival order.
    """

    def __init__(self, directory: Optional[DataDirectory] = None, locks: Optional[PathLockTable] = None):
        self.directory = directory
        self.locks = locks if locks is not None else PathLockTable()

    def init_app(self, app) -> None:
        self.directory = DataDirectory.from_config(app.config)
        app.extensions["json_db"] = self

    def resolve_data_directory(self) -> Path:
        if self.directory is None:
            raise RuntimeError("JsonDb has no data directory; call init_app() first")
        return self.directory.resolve()

    def collection_path(self, file_name: str) -> Path:
        return self.resolve_data_directory() / _file_name(file_name)

    def _read(self, path: Path) -> CollectionDocument:
        existed = path.exists()
        raw: Any = {}
        if existed:
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError, RecursionError) as e:
                logger.warning("Unreadable collection %s, treating as empty: %s", path, e)
                raw = {}
            if not isinstance(raw, dict):
                logger.warning("Collection %s is not a JSON object, treating as empty", path)
                raw = {}
        document = normalize_document(raw)
        if not existed:
            logger.debug("Seeding collection file %s", path)
            _write_atomic(path, document)
        return document

    def read_collection(self, file_name: str) -> CollectionDocument:
        path = self.collection_path(file_name)
        with self.locks.locked(path):
            return self._read(path)

    def write_collection(self, file_name: str, document: Mapping[str, Any]) -> None:
        if not isinstance(document, Mapping) or not isinstance(document.get("records"), list):
            raise TypeError("document must be a mapping with a records list")
        path = self.collection_path(file_name)
        with self.locks.locked(path):
            _write_atomic(path, normalize_document(document))

    def update_collection(
        self,
        file_name: str,
        mutator: Callable[[List[Any]], Optional[List[Any]]],
    ) -> CollectionDocument:
        """Read, transform and write back a collection under one lock hold.

        ``mutator`` gets the record list; a returned list replaces it, ``None``
        keeps the (possibly mutated in place) original.
        """
        path = self.collection_path(file_name)
        with self.locks.locked(path):
            document = self._read(path)
            result = mutator(document["records"])
            if result is not None:
                if not isinstance(result, list):
                    raise TypeError("mutator must return a list or None")
                document["records"] = result
            _write_atomic(path, document)
            return document

    def list_collections(self) -> List[str]:
        root = self.resolve_data_directory()
        return sorted(
            p.name
            for p in root.glob("*.json")
            if p.is_file() and not p.name.startswith((TEMP_PREFIX, PROBE_PREFIX))
        )

    def stats(self) -> List[Dict[str, Any]]:
        out = []
        for name in self.list_collections():
            doc = self.read_collection(name)
            out.append({"name": name, "version": doc["version"], "count": len(doc["records"])})
        return out
