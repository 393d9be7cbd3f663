"""
Inventory Service — Registration Route
========================================

What:  POST /register, creating an item from a form submission.
How:   Form fields `inventory_name` (required) and `description` (optional),
       plus an optional file in the field `photo`. A JSON object with the
       same two fields is accepted too, without a photo.
Who:   Called by RegisterForm.html and by API clients.

Request Flow:
    1. Store the uploaded photo, if any, under a generated name
    2. Create the item (the store trims and validates the name)
    3. On a validation failure, discard the stored photo and answer 400
    4. Return 201 Created with the item DTO
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from inventory_service.dependencies import get_photo_storage, get_store
from inventory_service.exceptions import ValidationError
from inventory_service.routes.inventory import has_upload, read_update
from inventory_service.schemas.item import ErrorResponse, ItemResponse
from inventory_service.services.inventory_store import InventoryStore
from inventory_service.services.photo_storage import PhotoStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Registration"])


@router.post(
    "/register",
    status_code=201,
    response_model=ItemResponse,
    responses={
        201: {"description": "Item registered", "model": ItemResponse},
        400: {"description": "inventory_name missing or blank", "model": ErrorResponse},
    },
    summary="Register a new inventory item",
)
async def register_item(
    request: Request,
    inventory_name: Optional[str] = Form(None, description="Item name (required, trimmed)"),
    description: Optional[str] = Form(None, description="Item description"),
    photo: Optional[UploadFile] = File(None, description="Optional item photo"),
    store: InventoryStore = Depends(get_store),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
) -> ItemResponse:
    if "json" in request.headers.get("content-type", "").lower():
        fields = await read_update(request)
        inventory_name, description = fields.inventory_name, fields.description

    reference: Optional[str] = None
    try:
        if has_upload(photo):
            reference = await photo_storage.store(await photo.read())
    finally:
        if photo is not None:
            await photo.close()

    try:
        item = store.create(inventory_name, description or "", reference)
    except ValidationError:
        if reference is not None:
            logger.info("Registration rejected; discarding uploaded photo %s", reference)
            await photo_storage.discard(reference)
        raise

    return ItemResponse.from_item(item)
