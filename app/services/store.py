"""
Record Store Service

A RecordStore owns one JSON document and the records inside it.

How It Works:
=============
Every operation re-reads the full document from disk and every mutation
rewrites the full document. Nothing is cached between requests, so memory
is bounded by document size and each request costs one read (plus one
write for mutations) and a linear scan.

Concurrency:
============
Route handlers are sync functions that FastAPI runs in a thread pool.
Each document path has one re-entrant lock shared by every RecordStore
pointing at it. Use transaction() for any read-check-write sequence
(duplicate checks, ownership checks) so two requests cannot interleave
between the check and the write.

Usage:
    store = RecordStore(settings.books_path, "books", Book)

    book = store.find_one(lambda b: b.id == book_id)

    with store.transaction() as books:
        books.append(new_book)
"""

import logging
import threading
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from app.database import DocumentDecodeError, read_json_file, write_json_file
from app.models.base import Record, utc_now

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def get_document_lock(path: Path) -> threading.RLock:
    """Return the process-wide lock for a document path."""
    key = Path(path).resolve()
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = threading.RLock()
            _locks[key] = lock
        return lock


class RecordStore(Generic[RecordT]):
    """
    Find, filter, insert, update and delete records of one document.

    Args:
        path: Location of the JSON document
        collection: Key holding the record array ("users" or "books")
        model: Record model used to validate each entry
    """

    def __init__(self, path: Path, collection: str, model: type[RecordT]) -> None:
        self.path = Path(path)
        self.collection = collection
        self.model = model
        self.lock = get_document_lock(self.path)

    # -------------------------------------------------------------------------
    # Document I/O
    # -------------------------------------------------------------------------
    def ensure_initialized(self) -> None:
        """
        Create the document with an empty collection if it does not exist.

        A document that exists but cannot be decoded is left untouched;
        the DocumentDecodeError propagates to the caller.
        """
        with self.lock:
            try:
                read_json_file(self.path)
            except FileNotFoundError:
                logger.info(f"Initializing empty document {self.path}")
                write_json_file(self.path, {self.collection: []})

    def load(self) -> list[RecordT]:
        """Read the document and validate every record."""
        with self.lock:
            self.ensure_initialized()
            data = read_json_file(self.path)

        raw_records = data.get(self.collection)
        if not isinstance(raw_records, list):
            raise DocumentDecodeError(
                self.path, f"'{self.collection}' is missing or not a list"
            )

        try:
            return [
                self.model.model_validate(raw, context={"stored": True})
                for raw in raw_records
            ]
        except ValidationError as e:
            raise DocumentDecodeError(self.path, str(e)) from e

    def save(self, records: list[RecordT]) -> None:
        """Overwrite the document with the given records."""
        content: dict[str, Any] = {
            self.collection: [record.to_document() for record in records]
        }
        with self.lock:
            write_json_file(self.path, content)

    @contextmanager
    def transaction(self) -> Iterator[list[RecordT]]:
        """
        Load the records and hold the document lock until the block ends.

        The (possibly modified) list is written back when the block exits
        without an exception. Raising inside the block discards changes.
        """
        with self.lock:
            records = self.load()
            yield records
            self.save(records)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------
    def find_all(self, predicate: Callable[[RecordT], bool] | None = None) -> list[RecordT]:
        records = self.load()
        if predicate is None:
            return records
        return [record for record in records if predicate(record)]

    def find_one(self, predicate: Callable[[RecordT], bool]) -> RecordT | None:
        for record in self.load():
            if predicate(record):
                return record
        return None

    def find_index(self, predicate: Callable[[RecordT], bool]) -> int:
        """Index of the first matching record, or -1."""
        return index_of(self.load(), predicate)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------
    def insert(self, record: RecordT) -> RecordT:
        """Append a record and persist the whole document."""
        with self.transaction() as records:
            records.append(record)
        return record

    def update_at(self, index: int, patch: dict[str, Any]) -> RecordT:
        """
        Merge patch fields into the record at index and persist.

        Only keys present in patch overwrite; updated_at is refreshed.

        Raises:
            IndexError: If index is out of range
        """
        with self.transaction() as records:
            updated = merge_patch(records[index], patch)
            records[index] = updated
        return updated

    def remove_at(self, index: int) -> RecordT:
        """
        Remove the record at index and persist.

        Raises:
            IndexError: If index is out of range
        """
        with self.transaction() as records:
            removed = records.pop(index)
        return removed


def merge_patch(record: RecordT, patch: dict[str, Any]) -> RecordT:
    """Return a copy of record with patch applied and updated_at refreshed."""
    return record.model_copy(update={**patch, "updated_at": utc_now()})


def index_of(records: Sequence[RecordT], predicate: Callable[[RecordT], bool]) -> int:
    """Index of the first record matching predicate, or -1."""
    for index, record in enumerate(records):
        if predicate(record):
            return index
    return -1
