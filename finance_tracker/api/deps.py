"""
Shared API dependencies.

require_owner resolves the x-api-key header into an OwnerScope.
to_http_error maps service errors to HTTP status codes so each
route can stay a thin try/except around one service call.
"""

import structlog
from fastapi import Depends, Header, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finance_tracker.errors import (
    Conflict,
    InvalidAmount,
    LedgerError,
    NotFound,
    PartialMutation,
    Unauthorized,
    UpstreamFailure,
)
from finance_tracker.models.base import get_db
from finance_tracker.services.api_key_gate import ApiKeyGate, OwnerScope

logger = structlog.get_logger(__name__)

STATUS_BY_ERROR = [
    (InvalidAmount, 400),
    (NotFound, 404),
    (Conflict, 409),
    (Unauthorized, 401),
    (UpstreamFailure, 502),
    (PartialMutation, 500),
]


def require_owner(
    x_api_key: str | None = Header(default=None),
    db: Session = Depends(get_db),
) -> OwnerScope:
    """Validate the API key and commit its last_used_at stamp."""
    try:
        scope = ApiKeyGate(db).validate(x_api_key)
        db.commit()
        return scope
    except Unauthorized as e:
        db.rollback()
        raise HTTPException(status_code=401, detail=str(e))


def commit(db: Session) -> None:
    """Commit the unit of work; a failed commit leaves nothing written."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("commit_failed", error=str(e))
        raise UpstreamFailure("commit", str(e)) from e


def to_http_error(error: LedgerError) -> HTTPException:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_class):
            if isinstance(error, PartialMutation):
                logger.critical("ledger_corruption", error=str(error))
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
