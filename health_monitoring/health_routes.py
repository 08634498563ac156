"""Flask routes for health monitoring."""

import asyncio
import logging

from flask import Blueprint, current_app, jsonify

from time_utils import format_instant, utc_now
from .health_manager import HealthCheckManager
from .models import HealthStatus

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__, url_prefix='/health')


def init_health_monitoring(app, config, repository_provider):
    """Initialize health monitoring.

    Args:
        app: Flask application instance
        config: Application configuration
        repository_provider: Callable returning the current IncidentRepository
    """
    app.extensions['health_manager'] = HealthCheckManager(config, repository_provider)
    app.register_blueprint(health_bp)
    app.logger.info("Health monitoring initialized successfully")


def _manager() -> HealthCheckManager:
    return current_app.extensions['health_manager']


@health_bp.route('', methods=['GET'])
def basic_health():
    """Liveness endpoint; answers as long as the process serves requests."""
    return 'OK', 200, {'Content-Type': 'text/plain; charset=utf-8'}


@health_bp.route('/ready')
def readiness_probe():
    """Readiness probe: ready unless a check is unhealthy."""
    try:
        results = asyncio.run(_manager().run_checks())
    except Exception as e:
        logger.exception(f"Readiness probe error: {e}")
        return jsonify({
            'status': 'not_ready',
            'message': 'Readiness probe error',
            'timestamp': format_instant(utc_now())
        }), 503

    unhealthy_checks = [
        name for name, result in results.items()
        if result.status == HealthStatus.UNHEALTHY
    ]
    degraded_checks = [
        name for name, result in results.items()
        if result.status == HealthStatus.DEGRADED
    ]

    if unhealthy_checks:
        return jsonify({
            'status': 'not_ready',
            'failed_checks': unhealthy_checks,
            'degraded_checks': degraded_checks,
            'details': {name: result.message for name, result in results.items()},
            'timestamp': format_instant(utc_now())
        }), 503

    return jsonify({
        'status': 'ready' if not degraded_checks else 'ready_degraded',
        'degraded_checks': degraded_checks,
        'timestamp': format_instant(utc_now())
    })


@health_bp.route('/deep')
def deep_health_check():
    """Comprehensive health check with every check's details."""
    manager = _manager()
    try:
        results = asyncio.run(manager.run_checks())
    except Exception as e:
        logger.exception(f"Deep health check error: {e}")
        return jsonify({
            'status': HealthStatus.UNHEALTHY.value,
            'message': 'Deep health check error',
            'checks': {}
        }), 503

    overall_status = manager.get_overall_status(results)
    status_code = 503 if overall_status == HealthStatus.UNHEALTHY else 200

    return jsonify({
        'status': overall_status.value,
        'timestamp': format_instant(utc_now()),
        'checks': {name: result.to_dict() for name, result in results.items()}
    }), status_code
