from redis.asyncio import Redis
from redis.asyncio.connection import ConnectionPool


def build_redis(redis_url: str) -> Redis:
    """Session records are JSON text, so responses are decoded to str."""
    redis_pool = ConnectionPool.from_url(redis_url, decode_responses=True)
    return Redis(connection_pool=redis_pool)


async def close_redis(redis_client: Redis):
    """Close Redis connections on app shutdown."""
    await redis_client.aclose()
    await redis_client.connection_pool.disconnect()
