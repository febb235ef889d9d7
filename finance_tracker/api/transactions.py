"""
Transaction API endpoints.

Creating and deleting go through the LedgerService so the
account balance moves in the same commit as the transaction
row.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from finance_tracker.api.deps import commit, require_owner, to_http_error
from finance_tracker.errors import InvalidAmount, LedgerError
from finance_tracker.models.base import get_db
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.balance import validate_amount
from finance_tracker.services.ledger_service import LedgerService
from finance_tracker.services.report_service import ReportService
from finance_tracker.schemas.transaction import (
    TransactionBody,
    TransactionPage,
    TransactionResponse,
)

router = APIRouter(prefix="/v1/transactions", tags=["Transactions"])

MISSING_FIELDS_DETAIL = (
    "Missing required fields "
    "(amount, type, category_id, account_id, title/description)"
)


@router.get(
    "",
    response_model=list[TransactionResponse] | TransactionPage,
)
def list_transactions(
    limit: int = Query(default=20, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    date_from: date | None = Query(default=None, alias="from"),
    date_to: date | None = Query(default=None, alias="to"),
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """
    List transactions, newest first.

    With from/to the response also carries totals over the
    whole filtered range.
    """
    service = ReportService(db)
    transactions = [
        TransactionResponse.model_validate(t)
        for t in service.list_transactions(
            scope, limit, offset, date_from, date_to
        )
    ]
    if date_from is None and date_to is None:
        return transactions

    return TransactionPage(
        transactions=transactions,
        summary=service.summarize(scope, date_from, date_to),
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    body: TransactionBody,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Record a transaction and apply it to the account balance."""
    missing = body.missing_fields()
    if missing:
        raise HTTPException(status_code=400, detail=MISSING_FIELDS_DETAIL)

    try:
        request = body.to_create(validate_amount(body.amount))
    except InvalidAmount as e:
        raise to_http_error(e)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    service = LedgerService(db)
    try:
        txn = service.create_transaction(scope, request)
        commit(db)
        return txn
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: int,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Delete a transaction and reverse it on the account balance."""
    service = LedgerService(db)
    try:
        service.delete_transaction(scope, transaction_id)
        commit(db)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)
    return Response(status_code=204)
