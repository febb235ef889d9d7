"""
Balance adjustment calculator.

Maps a transaction's (type, amount) to the signed change it
makes to its account balance. Pure functions, no database.
"""

from decimal import Decimal, InvalidOperation

from finance_tracker.errors import InvalidAmount
from finance_tracker.models.enums import TransactionType


def validate_amount(amount) -> Decimal:
    """
    Return amount as a Decimal, or raise InvalidAmount.

    Accepts anything Decimal understands. Zero, negative,
    NaN and infinite values are rejected.
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmount(f"Amount must be a number, got {amount!r}")
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise InvalidAmount(f"Amount must be a number, got {amount!r}")

    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {amount!r}")
    if value <= 0:
        raise InvalidAmount(f"Amount must be positive, got {value}")
    return value


def delta(type: TransactionType, amount: Decimal) -> Decimal:
    """
    Signed balance change for a transaction.

    income  -> +amount
    expense -> -amount
    """
    if TransactionType(type) == TransactionType.INCOME:
        return amount
    return -amount
