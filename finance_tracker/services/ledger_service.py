"""
Ledger service: the only path that creates or deletes
transactions.

This service enforces the fundamental rule:

    account.balance == account.opening_balance
                       + sum(delta(t) for t in account's transactions)

It does so by:
1. Validating everything before the first write
2. Writing the transaction row and the balance change in the
   same database transaction
3. Changing the balance with a single
   UPDATE accounts SET balance = balance + :delta
   statement, never by reading the balance and writing it back

The caller commits. If a store call fails, the session is
rolled back here and UpstreamFailure names the failing step.
"""

from datetime import date
from decimal import Decimal

import structlog
from sqlalchemy import select, update, delete, func, case
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.util import identity_key

from finance_tracker.errors import NotFound, PartialMutation, UpstreamFailure
from finance_tracker.models.account import Account
from finance_tracker.models.category import Category
from finance_tracker.models.enums import TransactionType
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.transaction import TransactionCreate
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.audit import record_event
from finance_tracker.services.balance import delta, validate_amount

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.0001")


class LedgerService:
    """
    All balance-affecting operations pass through this service.

    The service takes a database session as a constructor
    argument. The caller controls the commit.
    """

    def __init__(self, db: Session):
        self.db = db

    # --- Lookups ---

    def _get_owned_account(self, scope: OwnerScope, account_id: int) -> Account:
        account = self.db.get(Account, account_id)
        if not account or account.owner_id != scope.owner_id:
            raise NotFound(f"Account {account_id} not found")
        return account

    def _get_owned_category(self, scope: OwnerScope, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if not category or category.owner_id != scope.owner_id:
            raise NotFound(f"Category {category_id} not found")
        return category

    def _get_owned_transaction(
        self, scope: OwnerScope, transaction_id: int
    ) -> Transaction:
        txn = self.db.execute(
            select(Transaction).where(
                Transaction.id == transaction_id,
                Transaction.owner_id == scope.owner_id,
            )
        ).scalar_one_or_none()
        if not txn:
            raise NotFound(f"Transaction {transaction_id} not found")
        return txn

    # --- Store primitives ---

    def _shift_balance(self, account_id: int, change: Decimal) -> bool:
        """
        Atomically add change to an account balance.

        Runs as one UPDATE statement so concurrent callers are
        serialized by the database. Returns False when no row
        matched (the account is gone).
        """
        result = self.db.execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + change)
            .execution_options(synchronize_session=False)
        )

        self._expire_cached_balance(account_id)
        return result.rowcount == 1

    def _expire_cached_balance(self, account_id: int) -> None:
        # An Account already loaded in this session no longer matches the row
        cached = self.db.identity_map.get(identity_key(Account, account_id))
        if cached is not None:
            self.db.expire(cached, ["balance"])

    def _fail(self, stage: str, error: SQLAlchemyError, **context) -> UpstreamFailure:
        self.db.rollback()
        logger.error(
            "ledger_mutation_failed",
            stage=stage,
            error=str(error),
            **context,
        )
        return UpstreamFailure(stage, str(error))

    # --- Mutations ---

    def create_transaction(
        self, scope: OwnerScope, request: TransactionCreate
    ) -> Transaction:
        """
        Record a transaction and apply its delta to the account.

        Raises InvalidAmount or NotFound before anything is
        written. Raises UpstreamFailure (session rolled back)
        if either write fails.
        """
        amount = validate_amount(request.amount)
        txn_type = TransactionType(request.type)

        category = self._get_owned_category(scope, request.category_id)
        account = None
        if request.account_id is not None:
            account = self._get_owned_account(scope, request.account_id)

        change = delta(txn_type, amount)

        txn = Transaction(
            owner_id=scope.owner_id,
            account_id=account.id if account else None,
            category_id=category.id,
            type=txn_type,
            amount=amount,
            title=request.title,
            date=request.date or date.today(),
        )

        try:
            self.db.add(txn)
            self.db.flush()
        except SQLAlchemyError as e:
            raise self._fail(
                "transaction", e, owner_id=scope.owner_id, operation="create"
            ) from e

        if account is not None:
            try:
                applied = self._shift_balance(account.id, change)
            except SQLAlchemyError as e:
                raise self._fail(
                    "balance", e,
                    owner_id=scope.owner_id,
                    operation="create",
                    account_id=account.id,
                ) from e

            if not applied:
                # Account deleted between the lookup and the update
                self.db.rollback()
                raise NotFound(f"Account {request.account_id} not found")

        record_event(
            self.db,
            "transaction_created",
            scope.owner_id,
            transaction_id=txn.id,
            account_id=txn.account_id,
            type=txn_type.value,
            amount=amount,
            delta=change,
        )
        self.db.flush()
        return txn

    def delete_transaction(self, scope: OwnerScope, transaction_id: int) -> None:
        """
        Delete a transaction and reverse its delta.

        If the account it pointed at no longer exists, only the
        transaction row is removed. Deleting the same id twice
        raises NotFound the second time, including when the two
        deletes overlap: only the request whose DELETE removes the
        row reverses the balance.
        """
        txn = self._get_owned_transaction(scope, transaction_id)
        account_id = txn.account_id
        reversal = -delta(txn.type, txn.amount)

        try:
            removed = self.db.execute(
                delete(Transaction)
                .where(
                    Transaction.id == transaction_id,
                    Transaction.owner_id == scope.owner_id,
                )
                .execution_options(synchronize_session=False)
            ).rowcount
        except SQLAlchemyError as e:
            raise self._fail(
                "transaction", e,
                owner_id=scope.owner_id,
                operation="delete",
                transaction_id=transaction_id,
            ) from e

        # The loaded row is gone from the table either way
        self.db.expunge(txn)

        if removed != 1:
            # Another request deleted it after our lookup
            self.db.rollback()
            raise NotFound(f"Transaction {transaction_id} not found")

        applied = False
        if account_id is not None:
            try:
                applied = self._shift_balance(account_id, reversal)
            except SQLAlchemyError as e:
                raise self._fail(
                    "balance", e,
                    owner_id=scope.owner_id,
                    operation="delete",
                    account_id=account_id,
                ) from e

            if not applied:
                logger.info(
                    "balance_adjustment_skipped",
                    transaction_id=transaction_id,
                    account_id=account_id,
                    reason="account no longer exists",
                )

        record_event(
            self.db,
            "transaction_deleted",
            scope.owner_id,
            transaction_id=transaction_id,
            account_id=account_id,
            delta=reversal if applied else Decimal("0"),
        )
        self.db.flush()

    # --- Reconciliation ---

    def recompute_balance(self, scope: OwnerScope, account_id: int) -> Decimal:
        """
        Rebuild an account balance from its transaction log.

        opening_balance + income - expense, in one aggregate query.
        """
        account = self._get_owned_account(scope, account_id)

        signed_amount = case(
            (Transaction.type == TransactionType.INCOME, Transaction.amount),
            else_=-Transaction.amount,
        )
        total = self.db.execute(
            select(func.coalesce(func.sum(signed_amount), 0)).where(
                Transaction.account_id == account.id
            )
        ).scalar()

        expected = Decimal(str(account.opening_balance)) + Decimal(str(total))
        return expected.quantize(CENTS)

    def stored_balance(self, scope: OwnerScope, account_id: int) -> Decimal:
        """Balance as currently committed, bypassing the session cache."""
        self._get_owned_account(scope, account_id)
        stored = self.db.execute(
            select(Account.balance).where(Account.id == account_id)
        ).scalar_one()
        return Decimal(str(stored)).quantize(CENTS)

    def verify_balance(self, scope: OwnerScope, account_id: int) -> Decimal:
        """
        Check the stored balance against the transaction log.

        Returns the balance when they agree. On disagreement an
        audit row is added to the session and PartialMutation is
        raised; the caller should commit so the audit row is kept.
        """
        stored = self.stored_balance(scope, account_id)
        expected = self.recompute_balance(scope, account_id)

        if stored != expected:
            logger.error(
                "ledger_inconsistency_detected",
                owner_id=scope.owner_id,
                account_id=account_id,
                stored=str(stored),
                expected=str(expected),
            )
            record_event(
                self.db,
                "ledger_inconsistency",
                scope.owner_id,
                account_id=account_id,
                stored=stored,
                expected=expected,
            )
            self.db.flush()
            raise PartialMutation(account_id, stored, expected)

        return stored

    def repair_balance(self, scope: OwnerScope, account_id: int) -> Decimal:
        """Overwrite the stored balance with the one rebuilt from the log."""
        stored = self.stored_balance(scope, account_id)
        expected = self.recompute_balance(scope, account_id)

        if stored != expected:
            self.db.execute(
                update(Account)
                .where(Account.id == account_id)
                .values(balance=expected)
                .execution_options(synchronize_session=False)
            )
            self._expire_cached_balance(account_id)

            record_event(
                self.db,
                "balance_repaired",
                scope.owner_id,
                account_id=account_id,
                previous=stored,
                repaired=expected,
            )
            self.db.flush()

        return expected
