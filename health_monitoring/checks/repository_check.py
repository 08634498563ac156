"""Incident storage health check implementation."""

import time
from typing import Callable

from .base_check import BaseHealthCheck
from ..models import HealthResult, HealthStatus


class RepositoryHealthCheck(BaseHealthCheck):
    """Check that the incident repository answers queries."""

    def __init__(self, repository_provider: Callable):
        """Initialize storage health check.

        Args:
            repository_provider: Callable returning the current IncidentRepository
        """
        super().__init__("storage", timeout=5.0)
        self.repository_provider = repository_provider

    async def check(self) -> HealthResult:
        """Check storage health by counting stored incidents."""
        start_time = time.time()

        try:
            repository = self.repository_provider()
            incident_count = repository.count()
        except Exception as e:
            return HealthResult(
                name=self.name,
                status=HealthStatus.UNHEALTHY,
                message=f"Incident storage unavailable: {e}",
                details={'error': str(e), 'error_type': type(e).__name__},
                duration_ms=self._elapsed_ms(start_time),
            )

        details = {
            'backend': getattr(repository, 'backend_name', type(repository).__name__),
            'incident_count': incident_count,
        }
        database = getattr(repository, 'database', None)
        if database is not None:
            details['db_path'] = database.db_path

        return HealthResult(
            name=self.name,
            status=HealthStatus.HEALTHY,
            message=f"Incident storage healthy with {incident_count} incidents",
            details=details,
            duration_ms=self._elapsed_ms(start_time),
        )
