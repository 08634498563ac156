"""System resource health check implementation."""

import time

import psutil

from .base_check import BaseHealthCheck
from ..models import HealthResult, HealthStatus

CPU_THRESHOLD_PERCENT = 80
MEMORY_THRESHOLD_PERCENT = 85
DISK_THRESHOLD_PERCENT = 90


class SystemHealthCheck(BaseHealthCheck):
    """Check host CPU, memory and disk headroom."""

    def __init__(self):
        super().__init__("system", timeout=2.0)

    async def check(self) -> HealthResult:
        """Check system health."""
        start_time = time.time()
        details = {}

        cpu_percent = psutil.cpu_percent(interval=0.1)
        details['cpu_percent'] = round(cpu_percent, 1)
        details['cpu_count'] = psutil.cpu_count()

        memory = psutil.virtual_memory()
        details['memory_total_gb'] = round(memory.total / (1024**3), 2)
        details['memory_available_gb'] = round(memory.available / (1024**3), 2)
        details['memory_percent_used'] = round(memory.percent, 1)

        disk = psutil.disk_usage('.')
        disk_percent_used = round((1 - disk.free / disk.total) * 100, 1)
        details['disk_free_gb'] = round(disk.free / (1024**3), 2)
        details['disk_percent_used'] = disk_percent_used

        process = psutil.Process()
        details['process_memory_mb'] = round(process.memory_info().rss / (1024**2), 2)

        status = HealthStatus.HEALTHY
        message = "System resources healthy"

        if cpu_percent > CPU_THRESHOLD_PERCENT:
            status = HealthStatus.DEGRADED
            message = f"High CPU usage: {cpu_percent}%"
        elif memory.percent > MEMORY_THRESHOLD_PERCENT:
            status = HealthStatus.DEGRADED
            message = f"High memory usage: {memory.percent}%"
        elif disk_percent_used > DISK_THRESHOLD_PERCENT:
            status = HealthStatus.DEGRADED
            message = f"Low disk space: {disk_percent_used}% used"

        return HealthResult(
            name=self.name,
            status=status,
            message=message,
            details=details,
            duration_ms=self._elapsed_ms(start_time),
        )
