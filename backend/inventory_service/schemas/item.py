"""
Inventory Service — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract.
How:   FastAPI serializes responses through these models and generates the
       OpenAPI documentation from them.

Schemas are separate from the InventoryItem record: the API exposes the name
as `inventory_name` and derives `photoUrl` from the stored photo reference,
which itself is never exposed.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from inventory_service.models.item import InventoryItem


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class DeletedItemResponse(BaseModel):
    """
    What:  Item representation returned by DELETE /inventory/{id}.
    Why:   The photo route is gone once the item is, so no photoUrl is sent.
    """
    id: int = Field(description="Item identifier")
    inventory_name: str = Field(description="Item name")
    description: str = Field(description="Free-text description (may be empty)")

    @classmethod
    def from_item(cls, item: InventoryItem) -> "DeletedItemResponse":
        return cls(id=item.id, inventory_name=item.name, description=item.description)


class ItemResponse(DeletedItemResponse):
    """
    What:  The item DTO used by every other JSON route.

    Example:
        {
            "id": 1,
            "inventory_name": "Drill",
            "description": "Cordless",
            "photoUrl": "/inventory/1/photo"
        }
    """
    photo_url: Optional[str] = Field(
        default=None,
        alias="photoUrl",
        description="URL of the item photo, null when no photo was uploaded",
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def from_item(cls, item: InventoryItem) -> "ItemResponse":
        return cls(
            id=item.id,
            inventory_name=item.name,
            description=item.description,
            photo_url=item.photo_url,
        )


class ErrorResponse(BaseModel):
    """Error body for the JSON routes: `{"error": "not found"}`."""
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy or degraded")
    version: str = Field(description="Application version")
    items: int = Field(description="Number of items currently in the inventory")
    cache: str = Field(description="Cache directory status: writable or unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ItemUpdate(BaseModel):
    """
    What:  Partial update for PUT /inventory/{id}.

    Each field is either a string (apply it) or None (leave unchanged).
    Absent keys, explicit nulls and values of any other type all end up as
    None, so a wrong-typed field is ignored rather than rejected. Unknown
    keys are dropped.
    """
    inventory_name: Optional[str] = None
    description: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("inventory_name", "description", mode="before")
    @classmethod
    def ignore_non_strings(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @classmethod
    def from_payload(cls, payload: Any) -> "ItemUpdate":
        """Build an update from a decoded request body of any shape."""
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)
