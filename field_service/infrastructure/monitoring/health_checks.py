"""
Health check implementations for the application.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, Optional

import redis.asyncio as redis

from field_service.config.database import get_database_health
from field_service.config.logging import get_logger
from field_service.config.settings import settings

logger = get_logger(__name__)


async def get_redis_health(redis_url: Optional[str] = None) -> Dict[str, Any]:
    """Ping the Celery broker's Redis instance."""
    client = redis.from_url(redis_url or settings.REDIS_URL)
    start_time = time.time()
    try:
        await client.ping()
        return {
            "status": "healthy",
            "response_time_ms": (time.time() - start_time) * 1000,
        }
    except redis.RedisError as e:
        logger.error("Redis health check failed", error=str(e))
        return {"status": "unhealthy", "error": str(e)}
    finally:
        await client.aclose()


class HealthChecker:
    """Health checker for application components."""

    def __init__(
        self,
        checks: Optional[Dict[str, Callable[[], Awaitable[Dict[str, Any]]]]] = None,
        timeout: Optional[float] = None,
    ):
        self.timeout = timeout or settings.HEALTH_CHECK_TIMEOUT
        self.checks = checks or {
            "database": get_database_health,
            "redis": get_redis_health,
        }

    async def run_health_checks(self) -> Dict[str, Any]:
        """Run all health checks."""
        results = {}

        for check_name, check_func in self.checks.items():
            try:
                results[check_name] = await asyncio.wait_for(
                    check_func(), timeout=self.timeout
                )
            except asyncio.TimeoutError:
                logger.error("Health check timed out", check_name=check_name)
                results[check_name] = {"status": "unhealthy", "error": "timeout"}

        return results

    async def check_readiness(self) -> Dict[str, Any]:
        """Report overall readiness plus per-component results."""
        components = await self.run_health_checks()
        ready = all(c.get("status") == "healthy" for c in components.values())
        return {"ready": ready, "components": components}
