"""
Account API endpoints.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_tracker.api.deps import commit, require_owner, to_http_error
from finance_tracker.errors import LedgerError, PartialMutation
from finance_tracker.models.base import get_db
from finance_tracker.services.account_service import AccountService
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.ledger_service import LedgerService
from finance_tracker.schemas.account import (
    AccountCreate,
    AccountResponse,
    BalanceCheckResponse,
)

router = APIRouter(prefix="/v1/accounts", tags=["Accounts"])


@router.get("", response_model=list[AccountResponse])
def list_accounts(
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """List the owner's accounts ordered by name."""
    return AccountService(db).list_accounts(scope)


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Create an account. balance in the body is the opening balance."""
    service = AccountService(db)
    try:
        account = service.create_account(scope, request)
        commit(db)
        return account
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: int,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Delete an account. Its transactions are kept, unlinked."""
    service = AccountService(db)
    try:
        service.delete_account(scope, account_id)
        commit(db)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)
    return Response(status_code=204)


@router.get("/{account_id}/reconcile", response_model=BalanceCheckResponse)
def reconcile_account(
    account_id: int,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """
    Compare the stored balance with the transaction log.

    A mismatch is recorded in the audit log and answered with 500.
    """
    service = LedgerService(db)
    try:
        balance = service.verify_balance(scope, account_id)
    except PartialMutation as e:
        # Keep the audit row describing the inconsistency
        commit(db)
        raise to_http_error(e)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)

    return BalanceCheckResponse(
        account_id=account_id,
        stored_balance=balance,
        expected_balance=balance,
        consistent=True,
    )


@router.post("/{account_id}/repair", response_model=BalanceCheckResponse)
def repair_account(
    account_id: int,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Rewrite the stored balance from the transaction log."""
    service = LedgerService(db)
    try:
        stored = service.stored_balance(scope, account_id)
        repaired = service.repair_balance(scope, account_id)
        commit(db)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)

    return BalanceCheckResponse(
        account_id=account_id,
        stored_balance=stored,
        expected_balance=repaired,
        consistent=stored == repaired,
    )
