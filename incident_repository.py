"""
Persistence for incidents.

IncidentRepository is the storage contract consumed by IncidentService. Two
implementations are provided: an in-memory store (the default) and a SQLite
store backed by IncidentDatabase.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from incident_database import IncidentDatabase
from models import ErrorType, Incident, IncidentStatus, Severity
from time_utils import format_instant, parse_instant

logger = logging.getLogger(__name__)


class IncidentRepository(ABC):
    """Storage contract for incidents."""

    backend_name = "abstract"

    @abstractmethod
    def find_all(self) -> List[Incident]:
        """Return every stored incident in storage order."""

    @abstractmethod
    def find_by_id(self, incident_id: str) -> Optional[Incident]:
        """Return the incident with this id, or None when there is none."""

    @abstractmethod
    def save(self, incident: Incident) -> Incident:
        """Insert or replace an incident and return the stored value."""

    @abstractmethod
    def delete_by_id(self, incident_id: str) -> bool:
        """Remove an incident. Returns True when something was removed."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored incidents."""


class InMemoryIncidentRepository(IncidentRepository):
    """
    Thread-safe dictionary store keyed by incident id.

    Iteration order is insertion order; re-saving an existing id keeps its
    position. Copies are stored and returned so callers never share state
    with the store.
    """

    backend_name = "memory"

    def __init__(self):
        self._incidents: Dict[str, Incident] = {}
        self._lock = threading.Lock()

    def find_all(self) -> List[Incident]:
        with self._lock:
            return [incident.model_copy() for incident in self._incidents.values()]

    def find_by_id(self, incident_id: str) -> Optional[Incident]:
        with self._lock:
            incident = self._incidents.get(incident_id)
            return incident.model_copy() if incident is not None else None

    def save(self, incident: Incident) -> Incident:
        with self._lock:
            self._incidents[incident.id] = incident.model_copy()
            return incident.model_copy()

    def delete_by_id(self, incident_id: str) -> bool:
        with self._lock:
            return self._incidents.pop(incident_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._incidents)

    def clear(self):
        """Remove every stored incident. Useful for testing."""
        with self._lock:
            self._incidents.clear()


class SqliteIncidentRepository(IncidentRepository):
    """Incident store persisted in the ``incidents`` table."""

    backend_name = "sqlite"

    def __init__(self, database: IncidentDatabase):
        self.database = database

    def find_all(self) -> List[Incident]:
        cursor = self.database.conn.execute("SELECT * FROM incidents ORDER BY rowid")
        return [self._row_to_incident(row) for row in cursor.fetchall()]

    def find_by_id(self, incident_id: str) -> Optional[Incident]:
        cursor = self.database.conn.execute(
            "SELECT * FROM incidents WHERE id = ?", (incident_id,)
        )
        row = cursor.fetchone()
        return self._row_to_incident(row) if row is not None else None

    def save(self, incident: Incident) -> Incident:
        conn = self.database.conn
        # Upsert in place so the row keeps its rowid (and list position)
        conn.execute("""
            INSERT INTO incidents (
                id, title, description, severity, status,
                created_at, updated_at, service_name, error_type, correlation_id
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title = excluded.title,
                description = excluded.description,
                severity = excluded.severity,
                status = excluded.status,
                created_at = excluded.created_at,
                updated_at = excluded.updated_at,
                service_name = excluded.service_name,
                error_type = excluded.error_type,
                correlation_id = excluded.correlation_id
        """, (
            incident.id,
            incident.title,
            incident.description,
            incident.severity.value if incident.severity else None,
            incident.status.value,
            format_instant(incident.created_at),
            format_instant(incident.updated_at),
            incident.service_name,
            incident.error_type.value if incident.error_type else None,
            incident.correlation_id,
        ))
        conn.commit()
        logger.debug(f"Saved incident {incident.id} to {self.database.db_path}")
        return incident.model_copy()

    def delete_by_id(self, incident_id: str) -> bool:
        conn = self.database.conn
        cursor = conn.execute("DELETE FROM incidents WHERE id = ?", (incident_id,))
        conn.commit()
        return cursor.rowcount > 0

    def count(self) -> int:
        return self.database.conn.execute("SELECT COUNT(*) FROM incidents").fetchone()[0]

    @staticmethod
    def _row_to_incident(row) -> Incident:
        return Incident(
            id=row['id'],
            title=row['title'],
            description=row['description'],
            severity=Severity(row['severity']) if row['severity'] else None,
            status=IncidentStatus(row['status']),
            created_at=parse_instant(row['created_at']),
            updated_at=parse_instant(row['updated_at']),
            service_name=row['service_name'],
            error_type=ErrorType(row['error_type']) if row['error_type'] else None,
            correlation_id=row['correlation_id'],
        )
