"""
In‑memory product store.

``ProductStore`` is the single authoritative holder of product
records for the lifetime of the process.  Records are kept in
insertion order in a plain list; lookups are linear scans, which is
fine for the expected catalog sizes.  The application creates one
store at startup and hands it to request handlers through
``app.state``; nothing lives in module globals.

Every operation runs under one re‑entrant lock so the store can be
shared between the event loop and FastAPI's worker threads.  Records
are frozen pydantic models, so values returned to callers can never
be used to modify the store behind its back.
"""

from __future__ import annotations

import threading
import uuid
from typing import Callable, List, Optional, Set

from product_catalog_api.app.core.errors import NotFoundError
from product_catalog_api.app.schemas.product import ProductCreate, ProductRead, ProductUpdate


def _uuid4_str() -> str:
    return str(uuid.uuid4())


class ProductStore:
    """Ordered collection of products with identity based access."""

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._records: List[ProductRead] = []
        # every id ever handed out, including deleted ones
        self._issued: Set[str] = set()
        self._id_factory = id_factory or _uuid4_str
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, product_id: object) -> bool:
        with self._lock:
            return any(r.id == product_id for r in self._records)

    def _new_id(self) -> str:
        product_id = str(self._id_factory())
        while product_id in self._issued:
            product_id = str(self._id_factory())
        self._issued.add(product_id)
        return product_id

    def _index_of(self, product_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == product_id:
                return index
        raise NotFoundError()

    def insert(self, data: ProductCreate) -> ProductRead:
        """Store a new product under a fresh identifier and return it.

        The product is appended at the end of the collection so the
        default listing order is the order of creation.
        """
        with self._lock:
            record = ProductRead(id=self._new_id(), **data.model_dump())
            self._records.append(record)
            return record

    def find_by_id(self, product_id: str) -> ProductRead:
        """Return the product with ``product_id`` or raise ``NotFoundError``."""
        with self._lock:
            return self._records[self._index_of(product_id)]

    def update(self, product_id: str, changes: ProductUpdate) -> ProductRead:
        """Merge the supplied fields of ``changes`` into a stored product.

        Fields the client did not send keep their current values and
        the identifier is never touched.  The merged record replaces
        the old one in the same position.
        """
        fields = changes.changes()
        with self._lock:
            index = self._index_of(product_id)
            merged = self._records[index].model_copy(update=fields)
            self._records[index] = merged
            return merged

    def delete(self, product_id: str) -> ProductRead:
        """Remove a product and return the removed record.

        Raises ``NotFoundError`` if the identifier is unknown, which
        includes identifiers that were already deleted.
        """
        with self._lock:
            index = self._index_of(product_id)
            return self._records.pop(index)

    def list_all(self) -> List[ProductRead]:
        """Return all products in insertion order as a new list."""
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        """Drop every record.  Issued identifiers stay retired."""
        with self._lock:
            self._records.clear()
