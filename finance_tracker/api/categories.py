"""
Category API endpoints.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_tracker.api.deps import commit, require_owner, to_http_error
from finance_tracker.errors import LedgerError
from finance_tracker.models.base import get_db
from finance_tracker.models.enums import TransactionType
from finance_tracker.services.api_key_gate import OwnerScope
from finance_tracker.services.category_service import CategoryService
from finance_tracker.schemas.category import CategoryCreate, CategoryResponse

router = APIRouter(prefix="/v1/categories", tags=["Categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(
    type: TransactionType | None = None,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    return CategoryService(db).list_categories(scope, type)


@router.post("", response_model=CategoryResponse, status_code=201)
def create_category(
    request: CategoryCreate,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    service = CategoryService(db)
    try:
        category = service.create_category(scope, request)
        commit(db)
        return category
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)


@router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: int,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Delete a category. Refused with 409 while transactions use it."""
    service = CategoryService(db)
    try:
        service.delete_category(scope, category_id)
        commit(db)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)
    return Response(status_code=204)
