"""
Inventory Service — Static Form Pages
=======================================

Serves the two HTML forms shipped in inventory_service/static verbatim.
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

router = APIRouter(tags=["Forms"], include_in_schema=False)


@router.get("/RegisterForm.html", response_class=FileResponse)
async def register_form() -> FileResponse:
    return FileResponse(STATIC_DIR / "RegisterForm.html", media_type="text/html")


@router.get("/SearchForm.html", response_class=FileResponse)
async def search_form() -> FileResponse:
    return FileResponse(STATIC_DIR / "SearchForm.html", media_type="text/html")
