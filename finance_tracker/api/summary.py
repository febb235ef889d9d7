"""
Dashboard summary endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_tracker.api.deps import require_owner
from finance_tracker.models.base import get_db
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.report_service import ReportService
from finance_tracker.schemas.summary import SummaryResponse

router = APIRouter(prefix="/v1/summary", tags=["Summary"])


@router.get("", response_model=SummaryResponse)
def get_summary(
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Total balance, account count and the five latest transactions."""
    return ReportService(db).dashboard(scope)
