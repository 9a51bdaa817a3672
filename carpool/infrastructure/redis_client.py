"""Redis async clients for the ``redis`` store backend."""

from __future__ import annotations

from typing import Optional

import redis.asyncio as aioredis

from carpool.config import settings

_pools: dict[str, aioredis.ConnectionPool] = {}


def get_redis(url: Optional[str] = None) -> aioredis.Redis:
    """Return a client sharing one lazily created pool per URL."""
    url = url or settings.redis_url
    pool = _pools.get(url)
    if pool is None:
        pool = _pools[url] = aioredis.ConnectionPool.from_url(
            url, decode_responses=True
        )
    return aioredis.Redis(connection_pool=pool)
