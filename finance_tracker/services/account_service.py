"""
Account service: create, list and delete accounts.

Balances are never written here after creation; that is the
ledger service's job.
"""

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from finance_tracker.errors import NotFound
from finance_tracker.models.account import Account
from finance_tracker.models.transaction import Transaction
from finance_tracker.schemas.account import AccountCreate
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.audit import record_event


class AccountService:

    def __init__(self, db: Session):
        self.db = db

    def create_account(self, scope: OwnerScope, request: AccountCreate) -> Account:
        """
        Create an account with an opening balance.

        The opening balance is kept separately so the balance can
        always be rebuilt from the transaction log.
        """
        account = Account(
            owner_id=scope.owner_id,
            name=request.name,
            balance=request.balance,
            opening_balance=request.balance,
            color=request.color,
            icon=request.icon,
        )
        self.db.add(account)
        self.db.flush()
        record_event(
            self.db,
            "account_created",
            scope.owner_id,
            account_id=account.id,
            opening_balance=request.balance,
        )
        return account

    def get_account(self, scope: OwnerScope, account_id: int) -> Account:
        account = self.db.get(Account, account_id)
        if not account or account.owner_id != scope.owner_id:
            raise NotFound(f"Account {account_id} not found")
        return account

    def list_accounts(self, scope: OwnerScope) -> list[Account]:
        """Owner's accounts ordered by name."""
        accounts = self.db.execute(
            select(Account)
            .where(Account.owner_id == scope.owner_id)
            .order_by(Account.name)
        ).scalars().all()
        return list(accounts)

    def delete_account(self, scope: OwnerScope, account_id: int) -> None:
        """
        Delete an account.

        Transactions that referenced it are kept, with their
        account_id cleared. Nothing cascades.
        """
        account = self.get_account(scope, account_id)

        orphaned = self.db.execute(
            update(Transaction)
            .where(Transaction.account_id == account.id)
            .values(account_id=None)
            .execution_options(synchronize_session=False)
        ).rowcount
        # Loaded transactions still point at the account
        self.db.expire_all()

        self.db.delete(account)
        self.db.flush()
        record_event(
            self.db,
            "account_deleted",
            scope.owner_id,
            account_id=account_id,
            orphaned_transactions=orphaned,
        )
