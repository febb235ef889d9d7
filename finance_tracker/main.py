"""
Finance Tracker FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from finance_tracker.config import get_settings
from finance_tracker.logging_config import configure_logging
from finance_tracker.api.health import router as health_router
from finance_tracker.api.accounts import router as accounts_router
from finance_tracker.api.categories import router as categories_router
from finance_tracker.api.transactions import router as transactions_router
from finance_tracker.api.summary import router as summary_router
from finance_tracker.api.stocks import router as stocks_router
from finance_tracker.api.financial_freedom import router as freedom_router
from finance_tracker.api.api_keys import router as api_keys_router

settings = get_settings()
configure_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Personal finance tracking with a consistent account ledger",
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(categories_router)
app.include_router(transactions_router)
app.include_router(summary_router)
app.include_router(stocks_router)
app.include_router(freedom_router)
app.include_router(api_keys_router)
