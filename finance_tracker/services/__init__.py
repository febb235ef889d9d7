"""Business logic services."""

from finance_tracker.services.api_key_gate import ApiKeyGate, OwnerScope
from finance_tracker.services.ledger_service import LedgerService
from finance_tracker.services.account_service import AccountService
from finance_tracker.services.category_service import CategoryService
from finance_tracker.services.report_service import ReportService
from finance_tracker.services.stock_service import StockService, QuoteClient
from finance_tracker.services.financial_freedom_service import (
    FinancialFreedomService,
)

__all__ = [
    "ApiKeyGate",
    "OwnerScope",
    "LedgerService",
    "AccountService",
    "CategoryService",
    "ReportService",
    "StockService",
    "QuoteClient",
    "FinancialFreedomService",
]
