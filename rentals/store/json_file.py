"""Document store persisted to a single JSON file."""

import json
import logging
import os
import tempfile
import uuid
from pathlib import Path
from typing import Any

from rentals.exceptions import (
    DocumentNotFoundError,
    PermissionDeniedError,
    StoreError,
    StoreUnavailableError,
)
from rentals.serialization import serialize_value
from rentals.store.base import Clock, Document, DocumentStore

logger = logging.getLogger(__name__)


class JsonFileDocumentStore(DocumentStore):
    """Document store backed by one JSON file holding every collection.

    The file is read on every call and rewritten on every write, so two
    processes pointing at the same path see each other's changes.
    Timestamps are stored as ISO 8601 strings.
    """

    def __init__(self, path: str | Path, clock: Clock | None = None, pretty: bool = True) -> None:
        """Initialize JSON file store.

        Parameters
        ----------
        path : str | Path
            File holding the collections. Created on first write.
        clock : Clock | None
            Source of server timestamps (default ``datetime.now``).
        pretty : bool
            Pretty-print the JSON file.
        """
        super().__init__(clock)
        self.path = Path(path)
        self.pretty = pretty

    async def create(self, collection: str, record: dict[str, Any]) -> str:
        collections = self._load()
        doc_id = uuid.uuid4().hex
        collections.setdefault(collection, {})[doc_id] = serialize_value(self._resolve(record))
        self._save(collections)
        logger.debug("Created %s/%s in %s", collection, doc_id, self.path)
        return doc_id

    async def query_all(
        self,
        collection: str,
        where: tuple[str, Any] | None = None,
    ) -> list[Document]:
        docs = self._load().get(collection, {})
        return [
            Document(id=doc_id, data=data)
            for doc_id, data in docs.items()
            if self._matches(data, where)
        ]

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> None:
        collections = self._load()
        data = collections.get(collection, {}).get(doc_id)
        if data is None:
            raise DocumentNotFoundError(f"Document {collection}/{doc_id} not found")
        self._check_expected(doc_id, data, serialize_value(expected) if expected else None)
        data.update(serialize_value(self._resolve(fields)))
        self._save(collections)

    def _load(self) -> dict[str, dict[str, dict[str, Any]]]:
        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError:
            return {}
        except PermissionError as exc:
            raise PermissionDeniedError(f"Cannot read {self.path}: {exc}") from exc
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {self.path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError(f"Store file {self.path} is corrupt: {exc}") from exc

        if not isinstance(payload, dict):
            raise StoreError(f"Store file {self.path} does not hold a JSON object")
        return payload

    def _save(self, collections: dict[str, dict[str, dict[str, Any]]]) -> None:
        """Replace the store file with ``collections``.

        The payload is serialized before anything touches disk and written
        to a sibling temp file that is renamed over the store, so a failed
        write leaves the previous file intact.
        """
        try:
            payload = json.dumps(collections, indent=2 if self.pretty else None, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Cannot serialize {self.path}: {exc}") from exc

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(payload)
            os.replace(tmp_name, self.path)
        except PermissionError as exc:
            raise PermissionDeniedError(f"Cannot write {self.path}: {exc}") from exc
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
