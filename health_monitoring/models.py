"""Health check data models."""

from datetime import datetime
from typing import Dict, Any
from dataclasses import dataclass, field
from enum import Enum

from time_utils import format_instant, utc_now


class HealthStatus(Enum):
    """Health status enumeration."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class HealthResult:
    """Result of a health check."""
    name: str
    status: HealthStatus
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    duration_ms: float = 0.0
    timestamp: datetime = field(default_factory=utc_now)

    @classmethod
    def from_error(cls, name: str, error: Exception, duration_ms: float = 0.0) -> 'HealthResult':
        """Build an unhealthy result describing an exception."""
        return cls(
            name=name,
            status=HealthStatus.UNHEALTHY,
            message=f"Health check error: {error}",
            details={'error': str(error), 'error_type': type(error).__name__},
            duration_ms=duration_ms,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'name': self.name,
            'status': self.status.value,
            'message': self.message,
            'details': self.details,
            'duration_ms': self.duration_ms,
            'timestamp': format_instant(self.timestamp)
        }

    @property
    def is_healthy(self) -> bool:
        return self.status == HealthStatus.HEALTHY

    @property
    def is_unhealthy(self) -> bool:
        return self.status == HealthStatus.UNHEALTHY
