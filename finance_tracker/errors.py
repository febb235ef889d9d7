"""
Error taxonomy for ledger operations.

Validation errors are raised before anything is written.
Store failures abort the whole unit of work and say which
half of the mutation failed. PartialMutation means the ledger
itself is inconsistent and must never be swallowed.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Base class for every error raised by the services."""


class InvalidAmount(LedgerError, ValueError):
    """Amount is zero, negative, or not a finite number."""


class NotFound(LedgerError, ValueError):
    """Referenced row is absent or belongs to another owner."""


class Conflict(LedgerError, ValueError):
    """Row cannot be removed while other rows still reference it."""


class Unauthorized(LedgerError):
    """Missing or unresolvable API key."""


class UpstreamFailure(LedgerError):
    """
    The store or the quote service failed.

    stage names the step that failed: "transaction" for the
    transaction row, "balance" for the account balance update,
    "quote" for the price webhook.
    """

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage} step failed: {message}")


class PartialMutation(LedgerError):
    """Stored balance disagrees with the transaction log."""

    def __init__(self, account_id: int, stored: Decimal, expected: Decimal):
        self.account_id = account_id
        self.stored = stored
        self.expected = expected
        super().__init__(
            f"Account {account_id} balance is {stored}, "
            f"transaction log says {expected}"
        )
