"""Per-address login throttling backed by redis counters."""
import redis.asyncio as redis

from store_api.config import LOGIN_BLOCK_SECONDS, LOGIN_MAX_ATTEMPTS, REDIS_HOST, REDIS_PORT

redis_client = redis.Redis(host=REDIS_HOST, port=int(REDIS_PORT), decode_responses=True)


def _attempts_key(ip: str) -> str:
    return f"login_attempts:{ip}"


async def failed_attempts(ip: str) -> int:
    value = await redis_client.get(_attempts_key(ip))
    return int(value) if value is not None else 0


async def is_blocked(ip: str) -> bool:
    return await failed_attempts(ip) >= LOGIN_MAX_ATTEMPTS


async def register_failed_attempt(ip: str) -> int:
    """Count a failed login and return how many attempts the address has left."""
    key = _attempts_key(ip)
    attempts = await redis_client.incr(key)
    # the block window starts with the first failure
    if attempts == 1:
        await redis_client.expire(key, LOGIN_BLOCK_SECONDS)
    return max(LOGIN_MAX_ATTEMPTS - attempts, 0)


async def reset_attempts(ip: str):
    await redis_client.delete(_attempts_key(ip))
