# coursehub/repositories/session_repository.py
from typing import Optional

import redis

from coursehub.config.database import get_redis_client


class SessionRepository:
    """
    Cache of verified bearer tokens in Redis.
    Key: session:{token} -> user id, expiring with the token itself.
    """

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client if client is not None else get_redis_client()

    def get_user_id(self, token: str) -> Optional[str]:
        value = self.client.get(f"session:{token}")
        if value is None:
            return None
        # decode if bytes
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def cache(self, token: str, user_id: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            return
        self.client.set(f"session:{token}", user_id, ex=ttl_seconds)
