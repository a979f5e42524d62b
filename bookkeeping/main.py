"""
Bookkeeping Ledger: FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bookkeeping.config import get_settings
from bookkeeping.errors import BookkeepingError
from bookkeeping.logging_config import configure_logging
from bookkeeping.api.health import router as health_router
from bookkeeping.api.accounts import router as accounts_router
from bookkeeping.api.line_items import router as line_items_router
from bookkeeping.api.vouchers import router as vouchers_router
from bookkeeping.api.reports import router as reports_router

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Double-entry bookkeeping ledger with voucher corrections",
)


@app.exception_handler(BookkeepingError)
async def bookkeeping_error_handler(request: Request, exc: BookkeepingError):
    """Fallback for engine errors a router did not translate itself."""
    if exc.status_code >= 500:
        logger.error("Unhandled engine error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc), "error": exc.code},
    )


# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(line_items_router)
app.include_router(vouchers_router)
app.include_router(reports_router)
