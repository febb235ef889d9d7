"""
Stock portfolio endpoints.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_tracker.api.deps import commit, require_owner, to_http_error
from finance_tracker.errors import LedgerError
from finance_tracker.models.base import get_db
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.stock_service import (
    QuoteClient,
    StockService,
    open_quote_client,
)
from finance_tracker.schemas.stock import (
    StockCreate,
    StockResponse,
    PortfolioResponse,
)

router = APIRouter(prefix="/v1/stocks", tags=["Stocks"])


def get_quote_client():
    """One quote client per request, closed when the response is sent."""
    with open_quote_client() as quotes:
        yield quotes


@router.get("", response_model=list[StockResponse])
def list_stocks(
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    return StockService(db).list_holdings(scope)


@router.post("", response_model=StockResponse, status_code=201)
def add_stock(
    request: StockCreate,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    service = StockService(db)
    try:
        holding = service.add_holding(scope, request)
        commit(db)
        return holding
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)


@router.get("/portfolio", response_model=PortfolioResponse)
def get_portfolio(
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
    quotes: QuoteClient = Depends(get_quote_client),
):
    """Value holdings at the latest quotes. 502 if the quote service fails."""
    try:
        return StockService(db, quotes).portfolio(scope)
    except LedgerError as e:
        raise to_http_error(e)


@router.delete("/{holding_id}", status_code=204)
def delete_stock(
    holding_id: int,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    service = StockService(db)
    try:
        service.delete_holding(scope, holding_id)
        commit(db)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)
    return Response(status_code=204)
