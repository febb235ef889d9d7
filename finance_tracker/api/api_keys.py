"""
API key management endpoints.

Authenticated with an existing key; a key can list, mint and
revoke keys for its own owner only.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from finance_tracker.api.deps import commit, require_owner, to_http_error
from finance_tracker.errors import LedgerError
from finance_tracker.models.base import get_db
from finance_tracker.services.api_key_gate import ApiKeyGate, OwnerScope
from finance_tracker.schemas.api_key import (
    ApiKeyCreate,
    ApiKeyIssued,
    ApiKeyResponse,
)

router = APIRouter(prefix="/v1/api-keys", tags=["API Keys"])


@router.get("", response_model=list[ApiKeyResponse])
def list_api_keys(
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    return ApiKeyGate(db).list_keys(scope)


@router.post("", response_model=ApiKeyIssued, status_code=201)
def create_api_key(
    request: ApiKeyCreate,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    """Mint a new key. The raw key is in this response only."""
    gate = ApiKeyGate(db)
    try:
        api_key, raw_key = gate.issue(scope.owner_id, request.name)
        commit(db)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)

    return ApiKeyIssued(
        id=api_key.id,
        name=api_key.name,
        key_prefix=api_key.key_prefix,
        created_at=api_key.created_at,
        last_used_at=api_key.last_used_at,
        raw_key=raw_key,
    )


@router.delete("/{key_id}", status_code=204)
def revoke_api_key(
    key_id: int,
    scope: OwnerScope = Depends(require_owner),
    db: Session = Depends(get_db),
):
    gate = ApiKeyGate(db)
    try:
        gate.revoke(scope, key_id)
        commit(db)
    except LedgerError as e:
        db.rollback()
        raise to_http_error(e)
    return Response(status_code=204)
