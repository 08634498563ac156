"""
Dependency Injection Container for the Incident Tracker API.

This module wires the configured storage backend into the services. Routes
ask the container for services at request time, so tests can swap in their
own repositories or reset everything between runs.
"""

import logging
from typing import Optional

from config import get_config
from incident_database import IncidentDatabase
from incident_repository import (
    IncidentRepository,
    InMemoryIncidentRepository,
    SqliteIncidentRepository,
)
from diagnostics_repository import (
    DiagnosticsRepository,
    InMemoryDiagnosticsRepository,
    SqliteDiagnosticsRepository,
)
from incident_service import IncidentService
from diagnostics_service import DiagnosticsService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Dependency injection container for managing application services.

    Services are created lazily and cached, so every request shares the same
    repositories for the lifetime of the container.
    """

    def __init__(self, app_config=None):
        """Initialize the service container with empty caches."""
        self._config = app_config
        self._database = None
        self._incident_repository = None
        self._diagnostics_repository = None
        self._incident_service = None
        self._diagnostics_service = None

    def get_config(self):
        """Get the application configuration (singleton)."""
        if self._config is None:
            self._config = get_config()
        return self._config

    def _uses_sqlite(self) -> bool:
        return self.get_config().incident_store.lower() == 'sqlite'

    def get_database(self) -> IncidentDatabase:
        """
        Get the SQLite database (singleton).

        Only used when INCIDENT_STORE=sqlite.
        """
        if self._database is None:
            self._database = IncidentDatabase(self.get_config().incident_db_path)
        return self._database

    def get_incident_repository(self) -> IncidentRepository:
        """
        Get the incident repository for the configured backend (singleton).

        Raises:
            ValueError: If INCIDENT_STORE names an unknown backend
        """
        if self._incident_repository is None:
            problems = self.get_config().validate_storage()
            if problems:
                raise ValueError("; ".join(problems))

            if self._uses_sqlite():
                self._incident_repository = SqliteIncidentRepository(self.get_database())
            else:
                self._incident_repository = InMemoryIncidentRepository()
            logger.info(f"Incident repository initialized ({self._incident_repository.backend_name})")
        return self._incident_repository

    def get_diagnostics_repository(self) -> DiagnosticsRepository:
        """Get the diagnostics repository for the configured backend (singleton)."""
        if self._diagnostics_repository is None:
            if self._uses_sqlite():
                self._diagnostics_repository = SqliteDiagnosticsRepository(self.get_database())
            else:
                self._diagnostics_repository = InMemoryDiagnosticsRepository()
        return self._diagnostics_repository

    def get_incident_service(self) -> IncidentService:
        """Get the incident service (singleton)."""
        if self._incident_service is None:
            self._incident_service = IncidentService(self.get_incident_repository())
        return self._incident_service

    def get_diagnostics_service(self) -> DiagnosticsService:
        """Get the diagnostics service (singleton)."""
        if self._diagnostics_service is None:
            self._diagnostics_service = DiagnosticsService(
                self.get_diagnostics_repository(),
                self.get_incident_service()
            )
        return self._diagnostics_service

    def set_incident_repository(self, repository: IncidentRepository):
        """
        Use a specific incident repository, e.g. a mock in tests.

        Services built from the previous repository are discarded.
        """
        self._incident_repository = repository
        self._incident_service = None
        self._diagnostics_service = None

    def reset(self):
        """
        Reset all cached instances. Useful for testing.

        This forces recreation of all services on next access.
        """
        if self._database is not None:
            self._database.close_all()

        self._config = None
        self._database = None
        self._incident_repository = None
        self._diagnostics_repository = None
        self._incident_service = None
        self._diagnostics_service = None
        logger.debug("Service container reset")


# Global container instance
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """
    Get the global service container instance (singleton).

    Returns:
        ServiceContainer instance
    """
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container():
    """
    Reset the global container. Useful for testing.

    Forces recreation of all services on next access.
    """
    global _container
    if _container is not None:
        _container.reset()
    _container = None
