"""
FastAPI API routes and endpoints.

- routes_quotes.py: Quote endpoints (POST /api/v1/quote, GET /api/v1/quotes, GET /api/v1/tags)
- routes_system.py: Operational endpoints (GET /healthz)
- frontend.py: Static frontend (/, /style.css, /app.js, /static/*)
- dependencies.py: AppContext and dependency injection for client, store, metrics
- models.py: API-specific request/response models
- error_handlers.py: Exception handlers for structured error responses
"""

from quotebox.api import dependencies, error_handlers, models
from quotebox.api.routes_quotes import router as quotes_router
from quotebox.api.routes_system import router as system_router

__all__ = [
    "quotes_router",
    "system_router",
    "dependencies",
    "error_handlers",
    "models",
]
