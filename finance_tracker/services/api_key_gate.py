"""
API key gate.

Turns a raw key presented in the x-api-key header into an
OwnerScope. Every service operation reached through the
external API takes that scope, never an owner id supplied by
the caller.

Keys are stored as SHA-256 hashes. The raw key only exists in
the response to issue().
"""

import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from finance_tracker.config import get_settings
from finance_tracker.errors import NotFound, Unauthorized
from finance_tracker.models.api_key import ApiKey

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class OwnerScope:
    """Capability handle for one owner's data."""
    owner_id: str
    api_key_id: int | None = None


def hash_key(raw_key: str) -> str:
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


class ApiKeyGate:

    def __init__(self, db: Session):
        self.db = db

    def validate(self, raw_key: str | None) -> OwnerScope:
        """
        Resolve a raw key to its owner.

        Stamps last_used_at on the key. The caller commits.
        """
        if not raw_key:
            raise Unauthorized("Missing API Key")

        api_key = self.db.execute(
            select(ApiKey).where(ApiKey.key_hash == hash_key(raw_key))
        ).scalar_one_or_none()

        if not api_key:
            logger.warning("api_key_rejected", key_prefix=raw_key[:8])
            raise Unauthorized("Invalid API Key")

        api_key.last_used_at = datetime.utcnow()
        self.db.flush()
        return OwnerScope(owner_id=api_key.owner_id, api_key_id=api_key.id)

    def issue(self, owner_id: str, name: str) -> tuple[ApiKey, str]:
        """Create a key for owner_id. Returns the row and the raw key."""
        raw_key = f"{get_settings().API_KEY_PREFIX}{secrets.token_urlsafe(24)}"
        api_key = ApiKey(
            owner_id=owner_id,
            name=name,
            key_hash=hash_key(raw_key),
            key_prefix=raw_key[:8],
        )
        self.db.add(api_key)
        self.db.flush()
        logger.info("api_key_issued", owner_id=owner_id, api_key_id=api_key.id)
        return api_key, raw_key

    def list_keys(self, scope: OwnerScope) -> list[ApiKey]:
        """Owner's keys, newest first."""
        keys = self.db.execute(
            select(ApiKey)
            .where(ApiKey.owner_id == scope.owner_id)
            .order_by(ApiKey.created_at.desc(), ApiKey.id.desc())
        ).scalars().all()
        return list(keys)

    def revoke(self, scope: OwnerScope, key_id: int) -> None:
        api_key = self.db.get(ApiKey, key_id)
        if not api_key or api_key.owner_id != scope.owner_id:
            raise NotFound(f"API key {key_id} not found")
        self.db.delete(api_key)
        self.db.flush()
        logger.info("api_key_revoked", owner_id=scope.owner_id, api_key_id=key_id)
