from __future__ import annotations

from typing import Protocol

from .document import Document


class DocumentStore(Protocol):
    """Durable store interface for the single persisted document.

    Note (DIP): the record service depends on this interface, not on a
    concrete storage medium.
    """

    def load(self) -> Document:
        """Return the persisted document, creating the default one if absent."""

        raise NotImplementedError

    def persist(self, document: Document) -> None:
        """Atomically replace the persisted document; raise StorageError on failure."""

        raise NotImplementedError
