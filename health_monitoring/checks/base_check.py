"""Base health check class."""

import asyncio
import time
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

from time_utils import utc_now
from ..models import HealthResult, HealthStatus


class BaseHealthCheck(ABC):
    """Abstract base class for health checks."""

    def __init__(self, name: str, timeout: float = 5.0):
        """Initialize the health check.

        Args:
            name: Name of the health check
            timeout: Maximum time allowed for the check in seconds
        """
        self.name = name
        self.timeout = timeout
        self.last_result: Optional[HealthResult] = None
        self.last_check_time: Optional[datetime] = None

    @abstractmethod
    async def check(self) -> HealthResult:
        """Perform the health check.

        Returns:
            HealthResult with status and details
        """

    def should_check(self, cache_ttl: timedelta) -> bool:
        """True when there is no cached result or it is older than cache_ttl."""
        if self.last_check_time is None or self.last_result is None:
            return True
        return utc_now() - self.last_check_time > cache_ttl

    async def run_with_timeout(self) -> HealthResult:
        """Run the health check with timeout protection."""
        start_time = time.time()

        try:
            result = await asyncio.wait_for(self.check(), timeout=self.timeout)
        except asyncio.TimeoutError:
            return HealthResult(
                name=self.name,
                status=HealthStatus.UNHEALTHY,
                message=f"Health check timed out after {self.timeout}s",
                details={'error': 'timeout', 'timeout_seconds': self.timeout},
                duration_ms=self.timeout * 1000,
            )
        except Exception as e:
            return HealthResult.from_error(self.name, e, self._elapsed_ms(start_time))

        self.last_result = result
        self.last_check_time = utc_now()
        return result

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return round((time.time() - start_time) * 1000, 2)
