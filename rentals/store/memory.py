"""In-memory document store."""

import copy
import uuid
from typing import Any

from rentals.exceptions import DocumentNotFoundError
from rentals.store.base import Clock, Document, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Document store kept in a dict of collections.

    Reads return deep copies so callers never share state with the store.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        super().__init__(clock)
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def create(self, collection: str, record: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        self._collections.setdefault(collection, {})[doc_id] = self._resolve(record)
        return doc_id

    async def query_all(
        self,
        collection: str,
        where: tuple[str, Any] | None = None,
    ) -> list[Document]:
        docs = self._collections.get(collection, {})
        return [
            Document(id=doc_id, data=copy.deepcopy(data))
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
        data = self._collections.get(collection, {}).get(doc_id)
        if data is None:
            raise DocumentNotFoundError(f"Document {collection}/{doc_id} not found")
        self._check_expected(doc_id, data, expected)
        data.update(self._resolve(fields))

    def count(self, collection: str) -> int:
        """Number of documents in ``collection``."""
        return len(self._collections.get(collection, {}))
