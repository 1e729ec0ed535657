from functools import wraps
import json
import redis
from typing import Callable
from fastapi.encoders import jsonable_encoder
from store_locator.core.config import settings
from store_locator.logger import logging


# Redis client setup
redis_client = redis.Redis.from_url(settings.REDIS_URL, decode_responses=False)


def _cache_key(prefix: str, kwargs: dict) -> str:
    # Only plain values take part in the key; sessions, requests and users do not
    parts = [
        f"{key}={value}"
        for key, value in sorted(kwargs.items())
        if isinstance(value, (str, int, float, bool)) or value is None
    ]
    return f"{prefix}:" + ":".join(parts)


# Cache decorator
def cache(prefix: str, expire: int = 60):
    def decorator(func: Callable):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            cache_key = _cache_key(prefix, kwargs)

            # Try to get data from cache
            try:
                cached_data = redis_client.get(cache_key)
            except redis.RedisError as e:
                logging.error(f"Cache read failed for {cache_key}: {e}")
                cached_data = None
            if cached_data:
                return json.loads(cached_data)

            # If not in cache, call the function
            result = jsonable_encoder(await func(*args, **kwargs))

            # Store the result in cache
            try:
                redis_client.setex(name=cache_key, time=expire, value=json.dumps(result))
            except redis.RedisError as e:
                logging.error(f"Cache write failed for {cache_key}: {e}")

            return result
        return wrapper
    return decorator


def invalidate(prefix: str) -> None:
    try:
        keys = redis_client.keys(f"{prefix}:*")
        if keys:
            redis_client.delete(*keys)
    except redis.RedisError as e:
        logging.error(f"Cache invalidation failed for {prefix}: {e}")
