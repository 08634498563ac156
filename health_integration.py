"""Integration layer for health monitoring in the Flask application."""

from dependencies import get_container
from health_monitoring.health_routes import init_health_monitoring


def _current_incident_repository():
    # Resolved per check so a reset container is picked up
    return get_container().get_incident_repository()


def setup_health_monitoring(app, config):
    """Setup health monitoring for the Flask application.

    Args:
        app: Flask application instance
        config: Application configuration
    """
    init_health_monitoring(app, config, _current_incident_repository)
