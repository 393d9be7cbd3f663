"""
Inventory Service — Application Package Initializer
====================================================

What: Marks `inventory_service` as a Python package and exposes its version.
Who:  Imported by uvicorn, the CLI entry point, and pytest.

Architecture Note:
    The service is a single-tier CRUD API over an in-memory store:

    ┌─────────────────────────────────────┐
    │        Routes (HTTP Layer)          │  ← verbs, paths, status codes
    ├─────────────────────────────────────┤
    │   Services (Store + Photo Storage)  │  ← item records, cache directory
    ├─────────────────────────────────────┤
    │     Models & Schemas (Data)         │  ← records + Pydantic DTOs
    └─────────────────────────────────────┘

    The store never touches the filesystem; every disk operation goes
    through the photo storage service, which only the routes call.
"""

__version__ = "1.0.0"
