"""
Inventory Service — Request Dependencies
==========================================

What:  FastAPI dependency providers for the store, photo storage and settings.
How:   create_app() puts one instance of each on app.state; these providers
       hand them to route handlers via Depends(). Tests get full isolation by
       building a fresh app.
"""

import re
from typing import Optional

from fastapi import Request

from inventory_service.config import Settings
from inventory_service.exceptions import ValidationError
from inventory_service.services.inventory_store import InventoryStore
from inventory_service.services.photo_storage import PhotoStorage

_ITEM_ID_PATTERN = re.compile(r"[+-]?\d+")


def get_store(request: Request) -> InventoryStore:
    return request.app.state.store


def get_photo_storage(request: Request) -> PhotoStorage:
    return request.app.state.photo_storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_item_id(raw: Optional[str]) -> int:
    """
    Parse a path or query id as a base-10 integer (surrounding whitespace allowed).

    Raises:
        ValidationError: the value is missing or not an integer.
    """
    value = (raw or "").strip()
    if not _ITEM_ID_PATTERN.fullmatch(value):
        raise ValidationError(message="invalid id", field="id", context={"value": raw})
    return int(value)
