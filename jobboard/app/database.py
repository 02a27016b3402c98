"""
Flat-file record store.

Each collection (users, jobs, applications) is one JSON array on disk under the
configured data directory. ``applications`` is reserved: nothing uses it yet, so
its file only appears once something writes to it. Every read loads the whole
collection and every write replaces the whole file, so this only suits small
data sets. Callers depend on ``RecordStore`` so a database-backed store can replace ``JsonFileStore`` later.

Writes go to a temp file in the same directory followed by ``os.replace``, so a
concurrent reader sees either the old or the new file, never a partial one.
Mutations must go through ``transaction()``, which holds the collection's lock
across the whole load-modify-save cycle. The locks are per process: running
several workers against one data directory brings back last-write-wins.
"""
import copy
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .utils.error_handlers import CorruptStoreError, StorageUnavailableError

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "jobs", "applications")


class RecordStore:
    """Interface for collection persistence."""

    def load(self, collection: str) -> list[dict]:
        raise NotImplementedError

    def save(self, collection: str, records: list[dict]) -> None:
        raise NotImplementedError

    def transaction(self, collection: str):
        """Context manager yielding the collection for a locked in-place update."""
        raise NotImplementedError


class JsonFileStore(RecordStore):
    def __init__(self, data_dir: str | Path, seeds: dict[str, list[dict]] | None = None):
        self.data_dir = Path(data_dir)
        self._seeds = seeds or {}
        self._locks = {name: threading.RLock() for name in COLLECTIONS}

    def path_for(self, collection: str) -> Path:
        self._check_collection(collection)
        return self.data_dir / f"{collection}.json"

    def load(self, collection: str) -> list[dict]:
        path = self.path_for(collection)
        with self._locks[collection]:
            records = self._read(path, collection)
            if records is None:
                return self._initialize(collection)
            return records

    def save(self, collection: str, records: list[dict]) -> None:
        path = self.path_for(collection)
        with self._locks[collection]:
            self._write_atomic(path, records, collection)

    @contextmanager
    def transaction(self, collection: str) -> Iterator[list[dict]]:
        """
        Load a collection, let the caller mutate the list in place, then save it.

        The collection lock is held for the whole block. If the block raises, nothing
        is written, and a block that leaves the list unchanged writes nothing. A
        collection with no file yet starts from its seed and is written once at the end.
        """
        path = self.path_for(collection)
        with self._locks[collection]:
            records = self._read(path, collection)
            missing = records is None
            if missing:
                records = copy.deepcopy(self._seeds.get(collection, []))
            snapshot = copy.deepcopy(records)
            yield records
            if missing or records != snapshot:
                self.save(collection, records)

    def _read(self, path: Path, collection: str) -> list[dict] | None:
        """Parsed collection, or None when its file does not exist yet."""
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageUnavailableError(f"Cannot read {collection}: {e}", collection) from e

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"{collection} is not valid JSON: {e}", collection) from e

        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise CorruptStoreError(f"{collection} is not a JSON array of objects", collection)
        return records

    def _initialize(self, collection: str) -> list[dict]:
        records = copy.deepcopy(self._seeds.get(collection, []))
        self._write_atomic(self.path_for(collection), records, collection)
        logger.info("Initialized %s collection with %d record(s)", collection, len(records))
        return records

    def _write_atomic(self, path: Path, records: list[dict], collection: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{collection}.", suffix=".tmp", dir=path.parent)
        except OSError as e:
            raise StorageUnavailableError(f"Cannot prepare {collection} for writing: {e}", collection) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StorageUnavailableError(f"Cannot write {collection}: {e}", collection) from e

    @staticmethod
    def _check_collection(collection: str) -> str:
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection: {collection!r}")
        return collection
