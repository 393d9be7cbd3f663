"""
Inventory Service — Inventory Resource Routes
===============================================

What:  JSON CRUD over items plus photo retrieval and replacement.

    GET     /inventory               list all items
    GET     /inventory/{id}          one item
    PUT     /inventory/{id}          partial update (name/description)
    DELETE  /inventory/{id}          remove an item
    GET     /inventory/{id}/photo    photo file as image/jpeg
    PUT     /inventory/{id}/photo    replace the photo (multipart field "photo")

Errors are raised (ValidationError, NotFoundError, FileStorageError) and
rendered as `{"error": ...}` by the handlers in main.py.
"""

import json
import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Request, UploadFile
from fastapi.responses import FileResponse

from inventory_service.config import Settings
from inventory_service.dependencies import (
    get_app_settings,
    get_photo_storage,
    get_store,
    parse_item_id,
)
from inventory_service.exceptions import NotFoundError, ValidationError
from inventory_service.schemas.item import (
    DeletedItemResponse,
    ErrorResponse,
    ItemResponse,
    ItemUpdate,
)
from inventory_service.services.inventory_store import InventoryStore
from inventory_service.services.photo_storage import PhotoStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/inventory", tags=["Inventory"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def has_upload(upload: Optional[UploadFile]) -> bool:
    """
    True when the request carried an actual file.

    Browsers submit an empty part with filename="" when no file is chosen;
    that counts as no upload.
    """
    return upload is not None and bool(upload.filename or upload.size)


async def read_update(request: Request) -> ItemUpdate:
    """
    Decode the body of PUT /inventory/{id} into an ItemUpdate.

    JSON and urlencoded/multipart forms are accepted. Any other content type,
    an empty body, or a JSON value that is not an object is an empty update.

    Raises:
        ValidationError: the body claims to be JSON but does not parse.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return ItemUpdate.from_payload(
            {key: value for key, value in form.items() if isinstance(value, str)}
        )

    if content_type and "json" not in content_type:
        return ItemUpdate()

    body = await request.body()
    if not body.strip():
        return ItemUpdate()

    try:
        payload = json.loads(body)
    except ValueError:
        raise ValidationError(message="invalid JSON body", field="body")
    return ItemUpdate.from_payload(payload)


@router.get(
    "",
    response_model=List[ItemResponse],
    summary="List all items",
    description="Returns every item in registration order.",
)
async def list_items(
    store: InventoryStore = Depends(get_store),
) -> List[ItemResponse]:
    return [ItemResponse.from_item(item) for item in store.list()]


@router.get(
    "/{item_id}",
    response_model=ItemResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
    },
    summary="Get a single item",
)
async def get_item(
    item_id: str,
    store: InventoryStore = Depends(get_store),
) -> ItemResponse:
    item = store.get(parse_item_id(item_id))
    return ItemResponse.from_item(item)


@router.put(
    "/{item_id}",
    response_model=ItemResponse,
    responses={
        400: {"description": "Malformed id or JSON body", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
    },
    summary="Update item name and/or description",
    description=(
        "Applies `inventory_name` and `description` when they are strings. "
        "Missing, null, or non-string fields are left unchanged; unknown fields are ignored."
    ),
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": ItemUpdate.model_json_schema()}},
        }
    },
)
async def update_item(
    item_id: str,
    request: Request,
    store: InventoryStore = Depends(get_store),
) -> ItemResponse:
    parsed_id = parse_item_id(item_id)
    changes = await read_update(request)
    item = store.update(
        parsed_id,
        name=changes.inventory_name,
        description=changes.description,
    )
    return ItemResponse.from_item(item)


@router.delete(
    "/{item_id}",
    response_model=DeletedItemResponse,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
    },
    summary="Delete an item",
    description=(
        "Removes the item and returns it without a photo URL. "
        "The photo file stays in the cache directory unless purging is enabled."
    ),
)
async def delete_item(
    item_id: str,
    background_tasks: BackgroundTasks,
    store: InventoryStore = Depends(get_store),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
    settings: Settings = Depends(get_app_settings),
) -> DeletedItemResponse:
    item = store.delete(parse_item_id(item_id))

    if item.has_photo:
        if settings.purge_photos_on_delete:
            background_tasks.add_task(photo_storage.discard, item.photo_reference)
        else:
            logger.debug("Item %d deleted; photo %s kept", item.id, item.photo_reference)

    return DeletedItemResponse.from_item(item)


@router.get(
    "/{item_id}/photo",
    response_class=FileResponse,
    responses={
        200: {"description": "Photo file", "content": {"image/jpeg": {}}},
        404: {"description": "Item, photo, or photo file not found", "model": ErrorResponse},
    },
    summary="Download an item's photo",
)
async def get_photo(
    item_id: str,
    store: InventoryStore = Depends(get_store),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
) -> FileResponse:
    parsed_id = parse_item_id(item_id)
    try:
        item = store.get(parsed_id)
    except NotFoundError:
        raise NotFoundError(message="photo not found", resource="photo", resource_id=parsed_id)

    path = photo_storage.resolve(item.photo_reference)
    if path is None:
        raise NotFoundError(message="photo not found", resource="photo", resource_id=parsed_id)

    # Served as JPEG whatever was uploaded
    return FileResponse(path=str(path), media_type="image/jpeg")


@router.put(
    "/{item_id}/photo",
    response_model=ItemResponse,
    responses={
        400: {"description": "No photo file in the request", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
    },
    summary="Replace an item's photo",
    description=(
        "Upload a single file in the multipart field `photo`. The previous photo "
        "file, if any, is removed after the response is sent."
    ),
)
async def replace_photo(
    item_id: str,
    background_tasks: BackgroundTasks,
    photo: Optional[UploadFile] = File(None, description="New photo file"),
    store: InventoryStore = Depends(get_store),
    photo_storage: PhotoStorage = Depends(get_photo_storage),
) -> ItemResponse:
    try:
        parsed_id = parse_item_id(item_id)
        try:
            store.get(parsed_id)
        except NotFoundError:
            if has_upload(photo):
                logger.info("Discarding photo upload for missing item %d", parsed_id)
            raise

        if not has_upload(photo):
            raise ValidationError(message="photo file is required", field="photo")

        reference = await photo_storage.store(await photo.read())
    finally:
        if photo is not None:
            await photo.close()

    try:
        item, previous = store.set_photo(parsed_id, reference)
    except NotFoundError:
        # Item was deleted while the upload was being written
        await photo_storage.discard(reference)
        raise

    if previous is not None and previous != reference:
        background_tasks.add_task(photo_storage.discard, previous)

    return ItemResponse.from_item(item)
