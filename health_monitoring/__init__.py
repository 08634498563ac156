"""Health monitoring module for the Incident Tracker API."""

from .health_manager import HealthCheckManager
from .models import HealthStatus, HealthResult
from .health_routes import health_bp, init_health_monitoring

__all__ = ['HealthCheckManager', 'HealthStatus', 'HealthResult', 'health_bp', 'init_health_monitoring']
