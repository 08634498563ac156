"""Health check manager implementation."""

import asyncio
import logging
from datetime import timedelta
from typing import Callable, Dict, List, Optional

from .models import HealthResult, HealthStatus
from .checks import RepositoryHealthCheck, SystemHealthCheck

logger = logging.getLogger(__name__)


class HealthCheckManager:
    """Manages all health checks."""

    def __init__(self, config, repository_provider: Callable, checks: Optional[List] = None):
        """Initialize health check manager.

        Args:
            config: Application configuration
            repository_provider: Callable returning the current IncidentRepository
            checks: Explicit list of checks (defaults to storage and system checks)
        """
        self.config = config
        self.cache_ttl = timedelta(seconds=getattr(config, 'health_cache_timeout', 30))
        self.enabled = getattr(config, 'health_check_enabled', True)

        if checks is not None:
            self.checks = list(checks)
        elif self.enabled:
            self.checks = [
                RepositoryHealthCheck(repository_provider),
                SystemHealthCheck()
            ]
        else:
            self.checks = []
            logger.info("Health checks disabled by configuration")

        logger.info(f"Initialized {len(self.checks)} health checks: {[c.name for c in self.checks]}")

    async def run_checks(self, check_types: Optional[List[str]] = None) -> Dict[str, HealthResult]:
        """Run health checks concurrently.

        Args:
            check_types: Optional list of check names to run. If None, runs all checks.

        Returns:
            Dictionary mapping check names to results
        """
        if not self.enabled:
            return {
                'health_monitoring': HealthResult(
                    name='health_monitoring',
                    status=HealthStatus.DEGRADED,
                    message='Health monitoring disabled',
                    details={'enabled': False}
                )
            }

        if check_types is None:
            checks_to_run = self.checks
        else:
            checks_to_run = [c for c in self.checks if c.name in check_types]

        if not checks_to_run:
            logger.warning(f"No health checks found for types: {check_types}")
            return {}

        results = await asyncio.gather(
            *(self._run_single_check(check) for check in checks_to_run),
            return_exceptions=True
        )

        result_dict = {}
        for check, result in zip(checks_to_run, results):
            if isinstance(result, Exception):
                logger.error(f"Error running health check {check.name}: {result}")
                result_dict[check.name] = HealthResult.from_error(check.name, result)
            else:
                result_dict[check.name] = result
        return result_dict

    async def _run_single_check(self, check) -> HealthResult:
        """Run a check, reusing its cached result while still fresh."""
        if not check.should_check(self.cache_ttl):
            return check.last_result
        return await check.run_with_timeout()

    def get_overall_status(self, results: Dict[str, HealthResult]) -> HealthStatus:
        """Determine overall system health status.

        Any unhealthy check makes the system unhealthy; otherwise any degraded
        check makes it degraded.
        """
        if not results:
            return HealthStatus.UNHEALTHY

        statuses = [result.status for result in results.values()]

        if HealthStatus.UNHEALTHY in statuses:
            return HealthStatus.UNHEALTHY
        if HealthStatus.DEGRADED in statuses:
            return HealthStatus.DEGRADED
        return HealthStatus.HEALTHY
