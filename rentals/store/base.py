"""Document store contract shared by all backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from rentals.exceptions import FailedPreconditionError


class _ServerTimestamp:
    """Placeholder replaced by the store clock when a record is written."""

    _instance: _ServerTimestamp | None = None

    def __new__(cls) -> _ServerTimestamp:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()

Clock = Callable[[], datetime]


@dataclass
class Document:
    """A stored record together with its store-assigned identifier."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    """Asynchronous document database used by the services.

    Every method is a single round trip. Implementations raise
    :class:`~rentals.exceptions.StoreError` subclasses on failure.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or datetime.now

    @abstractmethod
    async def create(self, collection: str, record: dict[str, Any]) -> str:
        """Append ``record`` to ``collection`` and return its generated id."""

    @abstractmethod
    async def query_all(
        self,
        collection: str,
        where: tuple[str, Any] | None = None,
    ) -> list[Document]:
        """Return every document, optionally filtered by ``field == value``."""

    @abstractmethod
    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> None:
        """Merge ``fields`` into an existing document.

        Parameters
        ----------
        collection : str
            Collection name.
        doc_id : str
            Identifier returned by :meth:`create`.
        fields : dict[str, Any]
            Fields to merge.
        expected : dict[str, Any] | None
            When given, the update is applied only if every listed field
            currently holds the given value; otherwise
            :class:`~rentals.exceptions.FailedPreconditionError` is raised.
        """

    def _resolve(self, record: dict[str, Any]) -> dict[str, Any]:
        """Copy ``record`` replacing server timestamp placeholders."""
        now = self._clock()
        return {key: now if value is SERVER_TIMESTAMP else value for key, value in record.items()}

    @staticmethod
    def _matches(data: dict[str, Any], where: tuple[str, Any] | None) -> bool:
        if where is None:
            return True
        key, value = where
        return data.get(key) == value

    @staticmethod
    def _check_expected(doc_id: str, data: dict[str, Any], expected: dict[str, Any] | None) -> None:
        if not expected:
            return
        for key, value in expected.items():
            if data.get(key) != value:
                raise FailedPreconditionError(
                    f"Document {doc_id} has {key}={data.get(key)!r}, expected {value!r}"
                )
