import threading

import redis

from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#compare-and-delete in lua, redis runs the script atomically
#nobody can slip in between GET and DEL
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""


class LockService:
    """
    -per-coupon redemption lock (SET NX EX)
    -release only by the owner token
    """

    def __init__(self, url: str | None = None):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @staticmethod
    def coupon_key(coupon_id: int) -> str:
        return f"coupon:{coupon_id}:redeem"

    @redis_retry()
    def acquire_coupon_lock(self, coupon_id: int, token: str, ttl: int) -> bool:
        key = self.coupon_key(coupon_id)
        logger.info(f"Acquire lock {key} for {token}")
        #SET coupon:1:redeem "7:42" NX EX 5
        return bool(
            self.redis.set(
                name=key,
                value=token,
                nx=True,
                ex=ttl,  # expires on its own if the holder dies
            )
        )

    @redis_retry()
    def release_coupon_lock(self, coupon_id: int, token: str) -> bool:
        key = self.coupon_key(coupon_id)
        logger.info(f"Release lock {key} for {token}")
        res = self.redis.eval(_RELEASE_LUA, 1, key, token)
        return bool(res)


class LocalLockService:
    """
    In-process per-coupon lock, used without Redis.
    Same interface as LockService, but a held lock is waited on (up to ttl)
    instead of refused. Locks are shared by every instance in the process.
    """

    _guard = threading.Lock()
    _locks: dict[int, threading.Lock] = {}
    _owners: dict[int, str] = {}

    def _lock_for(self, coupon_id: int) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(coupon_id, threading.Lock())

    def acquire_coupon_lock(self, coupon_id: int, token: str, ttl: int) -> bool:
        logger.info(f"Acquire local lock coupon:{coupon_id} for {token}")
        if not self._lock_for(coupon_id).acquire(timeout=ttl):
            return False
        with self._guard:
            self._owners[coupon_id] = token
        return True

    def release_coupon_lock(self, coupon_id: int, token: str) -> bool:
        with self._guard:
            if self._owners.get(coupon_id) != token:
                return False
            del self._owners[coupon_id]
        logger.info(f"Release local lock coupon:{coupon_id} for {token}")
        self._lock_for(coupon_id).release()
        return True


def build_lock_service() -> LockService | LocalLockService:
    # no REDIS_URL -> single process, redemptions are serialized in memory
    if not REDIS_URL:
        return LocalLockService()
    return LockService(REDIS_URL)
