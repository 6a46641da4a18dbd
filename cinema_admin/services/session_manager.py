import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

import pydantic
from pydantic import BaseModel
from redis.asyncio import Redis
from redis.exceptions import RedisError

from cinema_admin.core.exceptions import SessionExpiredError, SessionNotFoundError, SessionStoreUnavailableError
from cinema_admin.core.security import generate_session_token
from cinema_admin.models.mixins.timestamp import utcnow


logger = logging.getLogger(__name__)


class SessionRecord(BaseModel):
    session_id: str
    user_id: int
    role_id: int
    created_at: datetime
    expires_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class SessionManager:
    """
    Opaque bearer-token sessions kept in Redis.

    Each session is one JSON document under ``session:<token>`` whose Redis
    expiry matches ``expires_at``. A record is valid while ``now < expires_at``.
    Every Redis or (de)serialization failure is raised as
    SessionStoreUnavailableError; callers decide how to degrade.
    """

    KEY_PREFIX = "session:"

    def __init__(self, redis: Redis, clock: Optional[Callable[[], datetime]] = None):
        self.redis = redis
        self.clock = clock or utcnow

    def _key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def _save(self, record: SessionRecord) -> None:
        # redis refuses EX <= 0
        seconds = (record.expires_at - self.clock()).total_seconds()
        try:
            await self.redis.set(self._key(record.session_id), record.model_dump_json(), ex=max(1, int(seconds)))
        except RedisError as e:
            logger.error(f"failed to save session: {e}", exc_info=True)
            raise SessionStoreUnavailableError()

    async def create_session(self, user_id: int, role_id: int, client_ip: Optional[str],
                             user_agent: Optional[str], ttl: timedelta) -> SessionRecord:
        now = self.clock()
        record = SessionRecord(
            session_id=generate_session_token(),
            user_id=user_id,
            role_id=role_id,
            created_at=now,
            expires_at=now + ttl,
            ip_address=client_ip,
            user_agent=user_agent,
        )
        await self._save(record)
        return record

    async def validate_session(self, session_id: str) -> SessionRecord:
        try:
            raw = await self.redis.get(self._key(session_id))
        except RedisError as e:
            logger.error(f"failed to read session: {e}", exc_info=True)
            raise SessionStoreUnavailableError()
        if raw is None:
            raise SessionNotFoundError()

        try:
            record = SessionRecord.model_validate_json(raw)
        except pydantic.ValidationError as e:
            logger.error(f"corrupt session record: {e}")
            raise SessionStoreUnavailableError()

        if self.clock() >= record.expires_at:
            try:
                await self.redis.delete(self._key(session_id))
            except RedisError as e:
                logger.warning(f"failed to delete expired session: {e}")
            raise SessionExpiredError()
        return record

    async def extend_session(self, session_id: str, record: SessionRecord, ttl: timedelta) -> SessionRecord:
        """Push expires_at to now + ttl. An expiry already further out is kept."""
        expires_at = max(record.expires_at, self.clock() + ttl)
        extended = record.model_copy(update={"session_id": session_id, "expires_at": expires_at})
        await self._save(extended)
        return extended

    async def revoke_session(self, session_id: str) -> None:
        try:
            await self.redis.delete(self._key(session_id))
        except RedisError as e:
            logger.error(f"failed to revoke session: {e}", exc_info=True)
            raise SessionStoreUnavailableError()

    async def revoke_user_sessions(self, user_id: int) -> int:
        """Delete every session owned by user_id. Returns how many were removed."""
        try:
            keys = await self.redis.keys(f"{self.KEY_PREFIX}*")
            owned = []
            for key in keys:
                raw = await self.redis.get(key)
                if raw is None:
                    continue
                try:
                    record = SessionRecord.model_validate_json(raw)
                except pydantic.ValidationError:
                    logger.warning(f"skipping unreadable session {key}")
                    continue
                if record.user_id == user_id:
                    owned.append(key)
            if owned:
                await self.redis.delete(*owned)
            return len(owned)
        except RedisError as e:
            logger.error(f"failed to revoke sessions of user {user_id}: {e}", exc_info=True)
            raise SessionStoreUnavailableError()
