"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from finance_tracker.models.base import Base
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.audit_log import AuditLog
from finance_tracker.models.account import Account
from finance_tracker.models.category import Category
from finance_tracker.models.transaction import Transaction
from finance_tracker.models.stock import StockHolding
from finance_tracker.models.api_key import ApiKey
from finance_tracker.models.financial_freedom import FinancialFreedomEntry

__all__ = [
    "Base",
    "TransactionType",
    "AuditLog",
    "Account",
    "Category",
    "Transaction",
    "StockHolding",
    "ApiKey",
    "FinancialFreedomEntry",
]
