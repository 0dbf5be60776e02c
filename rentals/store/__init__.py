"""Document stores holding the shared applications collection."""

from rentals.store.base import SERVER_TIMESTAMP, Document, DocumentStore
from rentals.store.json_file import JsonFileDocumentStore
from rentals.store.memory import InMemoryDocumentStore

__all__ = [
    "Document",
    "DocumentStore",
    "InMemoryDocumentStore",
    "JsonFileDocumentStore",
    "SERVER_TIMESTAMP",
]
