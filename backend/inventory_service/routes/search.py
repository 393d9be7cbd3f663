"""
Inventory Service — Search Page Route
=======================================

What:  GET /search?id=<id>[&includePhoto], an HTML page for one item.
Who:   The target of SearchForm.html.

Unlike the JSON routes, errors here are answered in plain text by the
handler itself:
    400 "Invalid id"       id missing or not an integer
    404 "Item not found"   no item with that id

With `includePhoto` present (any value, even empty) and a photo on the item,
a photo link is appended to the description and the image is embedded.
"""

import html
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from inventory_service.dependencies import get_store, parse_item_id
from inventory_service.exceptions import NotFoundError, ValidationError
from inventory_service.models.item import InventoryItem
from inventory_service.services.inventory_store import InventoryStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Search"])

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Search result</title>
</head>
<body>
  <h1>Search result</h1>
  <p><strong>ID:</strong> {id}</p>
  <p><strong>Name:</strong> {name}</p>
  <p><strong>Description:</strong><br>{description}</p>
  {photo_block}
  <p><a href="/SearchForm.html">Back to search</a></p>
</body>
</html>
"""

PHOTO_BLOCK_TEMPLATE = """<p>
    <img src="{url}" alt="photo of {name}" style="max-width:300px;">
  </p>"""


def render_item_page(item: InventoryItem, include_photo: bool) -> str:
    """Render the search result page. Item text is HTML-escaped."""
    name = html.escape(item.name)
    description = html.escape(item.description or "")
    photo_block = ""

    if include_photo and item.has_photo:
        url = item.photo_url
        if description:
            description += "<br>"
        description += f'Photo link: <a href="{url}">{url}</a>'
        photo_block = PHOTO_BLOCK_TEMPLATE.format(url=url, name=name)

    return PAGE_TEMPLATE.format(
        id=item.id,
        name=name,
        description=description,
        photo_block=photo_block,
    )


@router.get(
    "/search",
    response_class=HTMLResponse,
    responses={
        200: {"description": "Item page", "content": {"text/html": {}}},
        400: {"description": "Invalid id", "content": {"text/plain": {}}},
        404: {"description": "Item not found", "content": {"text/plain": {}}},
    },
    summary="Look up one item as an HTML page",
)
async def search_item(
    id: Optional[str] = Query(None, description="Item id"),
    include_photo: Optional[str] = Query(
        None,
        alias="includePhoto",
        description="Present (with any value) to include the item photo",
    ),
    store: InventoryStore = Depends(get_store),
) -> Response:
    try:
        item_id = parse_item_id(id)
    except ValidationError:
        return PlainTextResponse("Invalid id", status_code=400)

    try:
        item = store.get(item_id)
    except NotFoundError:
        logger.info("Search for unknown item %d", item_id)
        return PlainTextResponse("Item not found", status_code=404)

    return HTMLResponse(render_item_page(item, include_photo is not None))
