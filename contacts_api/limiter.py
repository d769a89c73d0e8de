"""Redis-backed request rate limiting."""

import logging

import redis.asyncio as redis
from fastapi import Request, Response
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter
from redis.exceptions import RedisError

from .core import Settings

logger = logging.getLogger(__name__)


async def init_limiter(settings: Settings) -> bool:
    """
    Initialise :class:`FastAPILimiter` against the configured Redis.

    Args:
        settings (Settings): Application settings.

    Returns:
        bool: ``True`` when limits will be enforced.
    """
    if not settings.RATE_LIMIT_ENABLED:
        logger.info("Rate limiting disabled by configuration")
        return False

    redis_client = redis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=2,
    )
    try:
        await redis_client.ping()
        await FastAPILimiter.init(redis_client)
    except (RedisError, OSError) as exc:
        logger.warning(
            "Redis unavailable at %s, rate limiting off: %s", settings.REDIS_URL, exc
        )
        await redis_client.aclose()
        return False
    logger.info("Rate limiting enabled")
    return True


async def close_limiter() -> None:
    if FastAPILimiter.redis is not None:
        await FastAPILimiter.close()


class RouteRateLimiter(RateLimiter):
    """
    :class:`RateLimiter` keyed by request method and matched route path.

    The key comes from the route Starlette matched for this request, so
    ``app.routes`` is never scanned. Nothing is enforced while the limiter
    is not initialised.
    """

    async def __call__(self, request: Request, response: Response):
        if FastAPILimiter.redis is None:
            return None
        route = request.scope.get("route")
        route_path = getattr(route, "path", None) or request.scope["path"]
        identifier = self.identifier or FastAPILimiter.identifier
        callback = self.callback or FastAPILimiter.http_callback
        rate_key = await identifier(request)
        key = f"{FastAPILimiter.prefix}:{rate_key}:{request.method}:{route_path}"
        pexpire = await FastAPILimiter.redis.evalsha(
            FastAPILimiter.lua_sha, 1, key, str(self.times), str(self.milliseconds)
        )
        if pexpire != 0:
            return await callback(request, response, pexpire)
        return None


def rate_limit(times: int, seconds: int) -> RouteRateLimiter:
    """Build a route dependency enforcing ``times`` requests per ``seconds``."""
    return RouteRateLimiter(times=times, seconds=seconds)
