"""Document store used to persist users, playlists, swipes and matches.

The matching core depends only on the small DocumentStore contract below
(create/get/update/query/delete), never on a particular backend's query
language. JsonDocumentStore is the bundled implementation: a single JSON file
laid out as

  {
    "collection": {
      "doc_id": { "id": "doc_id", ...fields },
      ...
    },
    ...
  }

Every write goes through write_json, so a record is either fully persisted or
not at all. create() enforces id uniqueness under a file lock shared by every
process using the file and raises ConflictError, which is how the
at-most-one-match-per-pair invariant is upheld.
"""

from abc import ABC, abstractmethod
from contextlib import ExitStack, contextmanager
from pathlib import Path
import threading
from typing import Any, Dict, Iterator, List, Mapping, Optional

from vibematch.config import STORE_FILE
from vibematch.core import (
    ConflictError,
    NotFoundError,
    TransientError,
    file_lock,
    lock_path_for,
    log_error,
    read_json,
    write_json,
)

Document = Dict[str, Any]


class DocumentStore(ABC):
    """
    Minimal CRUD + query contract over named collections.

    Documents are plain dicts; the store adds an "id" field holding the
    document id. Implementations must make each write atomic per record.
    """

    @abstractmethod
    def create(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> Document:
        """Insert a new document. Raises ConflictError if the id is taken."""
        raise NotImplementedError

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Document:
        """Return a document. Raises NotFoundError if it does not exist."""
        raise NotImplementedError

    @abstractmethod
    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> Document:
        """Merge fields into an existing document and return the result."""
        raise NotImplementedError

    @abstractmethod
    def query(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Document]:
        """Return the documents whose fields equal every filter value."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document. Raises NotFoundError if it does not exist."""
        raise NotImplementedError

    def find(self, collection: str, doc_id: str) -> Optional[Document]:
        """Like get(), but returns None for a missing document."""
        try:
            return self.get(collection, doc_id)
        except NotFoundError:
            return None


class JsonDocumentStore(DocumentStore):
    """
    DocumentStore backed by a single JSON file.

    Every operation runs under an exclusive lock on `<path>.lock`, so
    independent processes (or several store objects) sharing the file
    serialise their read-modify-write cycles and the uniqueness check in
    create() holds across all of them. A process-local lock keeps threads of
    one store object from queuing on the file lock with separate handles.

    Filesystem failures surface as TransientError. So does a store file that
    no longer decodes: it is left untouched and nothing is written over it
    until it has been repaired or restored.
    """

    def __init__(self, path: str | Path = STORE_FILE) -> None:
        self.path = Path(path)
        self.lock_path = lock_path_for(self.path)
        self._lock = threading.RLock()

    # ---------- raw file access ----------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock, ExitStack() as stack:
            try:
                stack.enter_context(file_lock(self.lock_path))
            except OSError as e:
                raise TransientError(f"Document store lock unavailable: {e}") from e
            yield

    def _load(self) -> Dict[str, Dict[str, Document]]:
        try:
            data = read_json(self.path, default={})
        except OSError as e:
            raise TransientError(f"Document store unavailable: {e}") from e
        except ValueError as e:
            log_error(f"Document store {self.path} is corrupted; refusing to use it.")
            raise TransientError(f"Document store {self.path} is corrupted: {e}") from e

        if not isinstance(data, dict) or not all(
            isinstance(docs, dict) for docs in data.values()
        ):
            log_error(f"Document store {self.path} has an invalid structure.")
            raise TransientError(f"Document store {self.path} has an invalid structure.")

        return data

    def _save(self, data: Dict[str, Dict[str, Document]]) -> None:
        try:
            write_json(self.path, data)
        except OSError as e:
            raise TransientError(f"Document store unavailable: {e}") from e

    # ---------- contract ----------

    def create(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> Document:
        with self._locked():
            data = self._load()
            docs = data.setdefault(collection, {})
            if doc_id in docs:
                raise ConflictError(f"{collection}/{doc_id} already exists.")

            document = dict(fields)
            document["id"] = doc_id
            docs[doc_id] = document
            self._save(data)
            return dict(document)

    def get(self, collection: str, doc_id: str) -> Document:
        with self._locked():
            docs = self._load().get(collection, {})
        document = docs.get(doc_id)
        if not isinstance(document, dict):
            raise NotFoundError(f"{collection}/{doc_id} does not exist.")
        return dict(document)

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> Document:
        with self._locked():
            data = self._load()
            document = data.get(collection, {}).get(doc_id)
            if not isinstance(document, dict):
                raise NotFoundError(f"{collection}/{doc_id} does not exist.")

            document.update(fields)
            document["id"] = doc_id
            self._save(data)
            return dict(document)

    def query(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Document]:
        filters = filters or {}
        with self._locked():
            docs = self._load().get(collection, {})

        return [
            dict(document)
            for document in docs.values()
            if isinstance(document, dict)
            and all(document.get(key) == value for key, value in filters.items())
        ]

    def delete(self, collection: str, doc_id: str) -> None:
        with self._locked():
            data = self._load()
            docs = data.get(collection, {})
            if doc_id not in docs:
                raise NotFoundError(f"{collection}/{doc_id} does not exist.")
            del docs[doc_id]
            self._save(data)
