"""
In-memory document store.

Keeps the helper seam of a Mongo-backed service (create_document / get_documents)
but holds every collection as a plain list of dicts in process memory. Documents
are stored and returned as copies, so callers never mutate stored state by accident.
"""

import copy
from typing import Any, Dict, Iterable, List, Optional, Union

from bson import ObjectId
from pydantic import BaseModel

COLLECTIONS = ("turf", "user", "booking", "review")

Document = Dict[str, Any]


def new_id() -> str:
    return str(ObjectId())


def _to_document(data: Union[BaseModel, Document]) -> Document:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return copy.deepcopy(dict(data))


def _matches(doc: Document, filter_dict: Optional[Document]) -> bool:
    if not filter_dict:
        return True
    return all(doc.get(key) == value for key, value in filter_dict.items())


class InMemoryDatabase:
    def __init__(self, collections: Iterable[str] = COLLECTIONS):
        self._collections: Dict[str, List[Document]] = {name: [] for name in collections}

    def _collection(self, name: str) -> List[Document]:
        try:
            return self._collections[name]
        except KeyError:
            raise KeyError(f"Unknown collection: {name}") from None

    def list_collection_names(self) -> List[str]:
        return list(self._collections)

    def count_documents(self, collection: str, filter_dict: Optional[Document] = None) -> int:
        return sum(1 for doc in self._collection(collection) if _matches(doc, filter_dict))

    def create_document(self, collection: str, data: Union[BaseModel, Document]) -> str:
        """Append a document and return its id. A missing id is generated."""
        doc = _to_document(data)
        if not doc.get("id"):
            doc["id"] = new_id()
        self._collection(collection).append(doc)
        return doc["id"]

    def get_documents(
        self, collection: str, filter_dict: Optional[Document] = None, limit: Optional[int] = None
    ) -> List[Document]:
        """Matching documents in insertion order. Filters are exact-equality on each key."""
        items = [copy.deepcopy(doc) for doc in self._collection(collection) if _matches(doc, filter_dict)]
        if limit is not None:
            items = items[:limit]
        return items

    def find_document(self, collection: str, filter_dict: Document) -> Optional[Document]:
        for doc in self._collection(collection):
            if _matches(doc, filter_dict):
                return copy.deepcopy(doc)
        return None

    def update_document(self, collection: str, doc_id: str, fields: Document) -> bool:
        for doc in self._collection(collection):
            if doc.get("id") == doc_id:
                doc.update(copy.deepcopy(fields))
                return True
        return False

    def delete_documents(self, collection: str, filter_dict: Document) -> int:
        items = self._collection(collection)
        kept = [doc for doc in items if not _matches(doc, filter_dict)]
        removed = len(items) - len(kept)
        items[:] = kept
        return removed
