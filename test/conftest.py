"""
Pytest configuration for all tests.
Sets up environment variables and fixtures used across test modules.
"""

import os
from datetime import datetime, timedelta, timezone

import pytest


# Set environment variables BEFORE any other imports
# This must happen at module import time to affect config.py initialization
os.environ['TESTING'] = 'true'
os.environ['INCIDENT_STORE'] = 'memory'


@pytest.fixture(autouse=True)
def reset_container():
    """Reset the dependency injection container before each test."""
    from dependencies import reset_container
    reset_container()
    yield
    reset_container()


@pytest.fixture
def app():
    """Create a fresh Flask application in testing mode."""
    from app import create_app
    flask_app = create_app()
    flask_app.config['TESTING'] = True
    return flask_app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    with app.test_client() as client:
        yield client


def build_production_app(**overrides):
    """Create the application with testing mode off, as it is deployed."""
    from app import create_app
    from config import AppConfig
    settings = dict(_env_file=None, testing=False, flask_debug=False)
    settings.update(overrides)
    return create_app(AppConfig(**settings))


@pytest.fixture
def production_client(tmp_path, monkeypatch):
    """Test client for an application built from the shipped defaults."""
    monkeypatch.chdir(tmp_path)  # keep any log file out of the source tree
    with build_production_app().test_client() as client:
        yield client


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start=None, step=timedelta(seconds=1)):
        self.current = start or datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def payment_incident_payload():
    """Request body for the canonical payment outage example."""
    return {
        'title': 'Payment API Down',
        'description': '500 errors',
        'severity': 'CRITICAL',
        'serviceName': 'payment-processor',
        'errorType': 'NETWORK',
        'correlationId': 'req-abc-123'
    }
