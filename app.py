"""
Flask Web Application for the Incident Tracker API

Exposes CRUD endpoints for incidents plus health monitoring.
"""

import logging
from logging.handlers import RotatingFileHandler
import os
import sys

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_cors import CORS
from flask_talisman import Talisman

from config import get_config
from error_handlers import register_error_handlers
from health_integration import setup_health_monitoring
from health_monitoring.health_routes import health_bp
from incident_routes import incidents_bp

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_logging_configured = False


def configure_logging(app, config):
    """Attach console and (outside debug/testing) rotating file handlers to the root logger."""
    global _logging_configured

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    # Handlers are process-wide; create_app may run more than once
    if _logging_configured:
        return
    _logging_configured = True

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    if not app.debug and not config.testing and not config.flask_debug:
        os.makedirs(os.path.dirname(config.log_file) or '.', exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file,
            maxBytes=config.log_max_bytes,
            backupCount=config.log_backup_count
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        root_logger.addHandler(file_handler)
        logger.info('Incident Tracker API startup')


def create_app(app_config=None) -> Flask:
    """Build the Flask application.

    Args:
        app_config: AppConfig to use (defaults to the global configuration)

    Returns:
        Configured Flask application
    """
    config = app_config or get_config()

    app = Flask(__name__)
    app.secret_key = config.flask_secret_key
    app.config['TESTING'] = config.testing

    configure_logging(app, config)

    limiter = Limiter(
        key_func=get_remote_address,
        app=app,
        default_limits=[],  # Opt-in per blueprint below
        storage_uri="memory://",
        strategy="fixed-window",
        enabled=config.rate_limit_enabled
    )

    if config.cors_enabled:
        CORS(app,
             origins=config.get_cors_origins(),
             methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS'],
             allow_headers=['Content-Type', 'Authorization'],
             max_age=600)

    talisman = None
    debug_mode = '--debug' in sys.argv or config.flask_debug
    if not config.testing and not debug_mode and config.https_enabled:
        talisman = Talisman(
            app,
            force_https=True,
            strict_transport_security=True,
            strict_transport_security_max_age=31536000,  # 1 year
            content_security_policy={'default-src': ["'self'"]}
        )
        logger.info('HTTPS enforcement enabled with Talisman')
    elif config.testing:
        logger.debug('HTTPS enforcement disabled (testing mode)')
    elif debug_mode:
        logger.info('HTTPS enforcement disabled (debug mode)')
    else:
        logger.info('HTTPS enforcement disabled by configuration (HTTPS_ENABLED=false)')

    register_error_handlers(app)
    app.register_blueprint(incidents_bp)
    setup_health_monitoring(app, config)

    # Health probes are never limited
    limiter.exempt(health_bp)
    if config.rate_limit_enabled:
        limiter.limit(config.rate_limit_default,
                      exempt_when=lambda: app.config.get('TESTING', False))(incidents_bp)
        logger.info(f'Rate limiting enabled for incident endpoints ({config.rate_limit_default})')

    # Liveness probes must answer over plain HTTP
    if talisman is not None:
        exempt_from_https = talisman(force_https=False)
        for endpoint, view in app.view_functions.items():
            if endpoint.startswith(f'{health_bp.name}.'):
                exempt_from_https(view)

    return app


app = create_app()


if __name__ == '__main__':
    config = get_config()
    debug_mode = '--debug' in sys.argv or config.flask_debug

    logger.info(f'Starting Incident Tracker API on http://{config.flask_host}:{config.flask_port}')
    logger.info(f'Debug mode: {debug_mode}, incident store: {config.incident_store}')

    if debug_mode:
        logger.warning('Running in DEBUG mode - not suitable for production!')

    problems = config.validate_storage()
    if problems:
        logger.error(f'Invalid storage configuration: {"; ".join(problems)}')
        sys.exit(1)

    app.run(debug=debug_mode, host=config.flask_host, port=config.flask_port)
