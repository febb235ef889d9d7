"""
Financial freedom calculator endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_tracker.api.deps import commit, require_owner, to_http_error
from finance_tracker.errors import LedgerError
from finance_tracker.models.base import get_db
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.financial_freedom_service import (
    FinancialFreedomService,
)
from finance_tracker.schemas.financial_freedom import (
    FinancialFreedomInput,
    FinancialFreedomResponse,
)

router = APIRouter(prefix="/v1/financial-freedom", tags=["Financial Freedom"])


@router.get("", response_model=FinancialFreedomResponse)
def get_latest_entry(
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Most recently saved calculator inputs."""
    try:
        return FinancialFreedomService(db).latest(scope)
    except LedgerError as e:
        raise to_http_error(e)


@router.post("", response_model=FinancialFreedomResponse, status_code=201)
def save_entry(
    request: FinancialFreedomInput,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    service = FinancialFreedomService(db)
    try:
        entry = service.save(scope, request)
        commit(db)
        return entry
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)
