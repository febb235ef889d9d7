"""
Shared enumerations for database models.

Mapped to database enums so that only valid values can be
stored.
"""

import enum


class TransactionType(str, enum.Enum):
    """Direction of money for transactions and categories."""
    INCOME = "income"
    EXPENSE = "expense"
