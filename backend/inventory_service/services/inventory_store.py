"""
Inventory Service — In-Memory Inventory Store
===============================================

What:  Ordered collection of inventory items plus the id generator.
How:   A list preserves insertion order for listing; a counter hands out ids
       and only ever increments, so ids are never reused after a delete.
Who:   One instance per application, created by create_app() and injected
       into route handlers through app.state.

Concurrency:
    Every public method runs under a single lock, so each operation is one
    atomic unit even when handlers execute on a worker thread pool.

    The store never touches the filesystem. set_photo() hands back the
    previous reference so the caller can discard the old file.

    Records returned to callers are copies; the only way to change an item
    is through the methods below.
"""

import logging
import threading
from dataclasses import replace
from typing import List, Optional, Tuple

from inventory_service.exceptions import NotFoundError, ValidationError
from inventory_service.models.item import InventoryItem

logger = logging.getLogger(__name__)


class InventoryStore:
    """
    Memory-resident item collection.

    Responsibilities:
        - create(): validate the name, assign the next id, append
        - list() / get(): insertion-ordered listing and lookup by id
        - update(): apply name/description changes that are present
        - set_photo(): swap the photo reference, returning the old one
        - delete(): remove and return an item
    """

    def __init__(self) -> None:
        self._items: List[InventoryItem] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _find(self, item_id: int) -> InventoryItem:
        # Caller holds the lock
        for item in self._items:
            if item.id == item_id:
                return item
        raise NotFoundError(resource="item", resource_id=item_id)

    def create(
        self,
        name: Optional[str],
        description: Optional[str] = "",
        photo_reference: Optional[str] = None,
    ) -> InventoryItem:
        """
        Register a new item.

        Raises:
            ValidationError: name is missing, or empty after trimming whitespace.
        """
        if name is None or not name.strip():
            raise ValidationError(
                message="inventory_name is required",
                field="inventory_name",
            )

        with self._lock:
            item = InventoryItem(
                id=self._next_id,
                name=name.strip(),
                description=description or "",
                photo_reference=photo_reference,
            )
            self._next_id += 1
            self._items.append(item)

        logger.info("Item %d registered (photo=%s)", item.id, item.has_photo)
        return replace(item)

    def list(self) -> List[InventoryItem]:
        with self._lock:
            return [replace(item) for item in self._items]

    def get(self, item_id: int) -> InventoryItem:
        with self._lock:
            return replace(self._find(item_id))

    def update(
        self,
        item_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> InventoryItem:
        """
        Apply a partial update. A None argument leaves that field unchanged.
        """
        with self._lock:
            item = self._find(item_id)
            if name is not None:
                item.name = name
            if description is not None:
                item.description = description
            snapshot = replace(item)

        logger.info("Item %d updated", item_id)
        return snapshot

    def set_photo(
        self, item_id: int, photo_reference: Optional[str]
    ) -> Tuple[InventoryItem, Optional[str]]:
        """
        Replace the photo reference of an item.

        Returns:
            Tuple of (updated item, previous reference or None).
        """
        with self._lock:
            item = self._find(item_id)
            previous = item.photo_reference
            item.photo_reference = photo_reference
            snapshot = replace(item)

        logger.info("Item %d photo set to %s (was %s)", item_id, photo_reference, previous)
        return snapshot, previous

    def delete(self, item_id: int) -> InventoryItem:
        with self._lock:
            item = self._find(item_id)
            self._items.remove(item)

        logger.info("Item %d deleted", item_id)
        return item
