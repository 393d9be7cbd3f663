"""
Inventory Service — Inventory Item Record
===========================================

What:  The internal record for a single inventory item.
Who:   Owned by InventoryStore; converted to DTOs by the schemas module.

Field notes:
    - id: assigned by the store's counter, never reused
    - name: trimmed at creation; exposed as `inventory_name` in the API
    - photo_reference: basename of a file in the cache directory, or None
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class InventoryItem:
    id: int
    name: str
    description: str = ""
    photo_reference: Optional[str] = None

    @property
    def has_photo(self) -> bool:
        return self.photo_reference is not None

    @property
    def photo_url(self) -> Optional[str]:
        """Public URL of the photo route, or None when no photo was uploaded."""
        if not self.has_photo:
            return None
        return f"/inventory/{self.id}/photo"
