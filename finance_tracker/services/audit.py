"""
Audit trail helper.

Adds an AuditLog row to the caller's session, so the record
commits or rolls back together with the change it describes,
and mirrors the event to the structured log.
"""

import json

import structlog
from sqlalchemy.orm import Session

from finance_tracker.models.audit_log import AuditLog

logger = structlog.get_logger(__name__)


def record_event(
    db: Session, event_type: str, owner_id: str | None, **details
) -> AuditLog:
    entry = AuditLog(
        event_type=event_type,
        owner_id=owner_id,
        details=json.dumps(details, default=str, sort_keys=True),
    )
    db.add(entry)
    logger.info(event_type, owner_id=owner_id, **details)
    return entry
