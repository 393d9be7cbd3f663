# Middleware package init
"""
Inventory Service — Middleware Package
========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID: correlation id stored in a ContextVar and echoed back
    - Logging: one access log line per request with status and duration
    - CORS: FastAPI's CORSMiddleware
"""
