"""In-memory document model.

A :class:`Document` holds the five named collections of the store. It does
no I/O and never triggers persistence or notification by itself; the record
service decides when a (staged) document is persisted and committed.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..core.constants import ATTENDANCE_KEY_FIELDS, IDENTITY_FIELD
from ..core.enums import ChangeKind, Collection

Record = Dict[str, Any]


class Document:
    """Root object of the store: one ordered list of records per collection.

    Every collection is always present (possibly empty), so readers never
    special-case a missing key. Other top-level keys found in stored data are
    carried through unchanged so a rewrite never drops them.
    """

    def __init__(self, collections: Optional[Mapping[str, Iterable[Record]]] = None):
        collections = collections or {}
        self._collections: Dict[Collection, List[Record]] = {
            c: [dict(r) for r in (collections.get(c.value) or [])] for c in Collection
        }
        known = {c.value for c in Collection}
        self._extra: Dict[str, Any] = {
            k: copy.deepcopy(v) for k, v in collections.items() if k not in known
        }

    @classmethod
    def empty(cls) -> "Document":
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Document":
        return cls(data)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = copy.deepcopy(self._extra)
        data.update({c.value: [dict(r) for r in records] for c, records in self._collections.items()})
        return data

    def copy(self) -> "Document":
        staged = Document()
        staged._collections = copy.deepcopy(self._collections)
        staged._extra = copy.deepcopy(self._extra)
        return staged

    def records(self, collection: Collection) -> Sequence[Record]:
        return self._collections[Collection(collection)]

    def find_by_identity(self, collection: Collection, id_value: str) -> Optional[Record]:
        for record in self.records(collection):
            if record.get(IDENTITY_FIELD) == id_value:
                return record
        return None

    def find_by_composite_key(self, collection: Collection, key: Mapping[str, Any]) -> Optional[Record]:
        for record in self.records(collection):
            if all(record.get(field) == value for field, value in key.items()):
                return record
        return None

    def find_by_field(self, collection: Collection, field: str, value: Any) -> Optional[Record]:
        return self.find_by_composite_key(collection, {field: value})

    def locate(self, collection: Collection, record: Mapping[str, Any]) -> Optional[Record]:
        """Find the stored record an incoming record would upsert into."""
        collection = Collection(collection)
        if collection == Collection.ATTENDANCE:
            key = {field: record.get(field) for field in ATTENDANCE_KEY_FIELDS}
            return self.find_by_composite_key(collection, key)
        return self.find_by_identity(collection, record.get(IDENTITY_FIELD))

    def upsert(
        self,
        collection: Collection,
        record: Mapping[str, Any],
        *,
        protected: Iterable[str] = (),
    ) -> Tuple[ChangeKind, Record]:
        """Merge into the matching record, or append as a new one.

        The merge is a shallow field overwrite: incoming fields replace or
        extend the stored ones, fields absent from ``record`` are left alone.
        ``protected`` fields are never overwritten on an existing record.
        """
        existing = self.locate(collection, record)
        if existing is None:
            stored = dict(record)
            self._collections[Collection(collection)].append(stored)
            return ChangeKind.CREATED, stored

        skip = set(protected)
        existing.update({k: v for k, v in record.items() if k not in skip})
        return ChangeKind.UPDATED, existing

    def remove_by_identity(self, collection: Collection, id_value: str) -> bool:
        collection = Collection(collection)
        before = self._collections[collection]
        after = [r for r in before if r.get(IDENTITY_FIELD) != id_value]
        self._collections[collection] = after
        return len(after) != len(before)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        sizes = ", ".join(f"{c.value}={len(r)}" for c, r in self._collections.items())
        return f"Document({sizes})"
