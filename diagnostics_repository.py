"""Persistence for diagnostic records."""

import threading
from abc import ABC, abstractmethod
from typing import List

from incident_database import IncidentDatabase
from models import DiagnosticRecord
from time_utils import format_instant, parse_instant


class DiagnosticsRepository(ABC):
    """Storage contract for diagnostic records."""

    @abstractmethod
    def find_by_incident_id(self, incident_id: str) -> List[DiagnosticRecord]:
        """Records referencing the incident, oldest first."""

    @abstractmethod
    def save(self, record: DiagnosticRecord) -> DiagnosticRecord:
        """Insert or replace a record and return the stored value."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored records."""


class InMemoryDiagnosticsRepository(DiagnosticsRepository):
    """Thread-safe list store for diagnostic records."""

    def __init__(self):
        self._records: List[DiagnosticRecord] = []
        self._lock = threading.Lock()

    def find_by_incident_id(self, incident_id: str) -> List[DiagnosticRecord]:
        with self._lock:
            return [r.model_copy() for r in self._records if r.incident_id == incident_id]

    def save(self, record: DiagnosticRecord) -> DiagnosticRecord:
        with self._lock:
            self._records = [r for r in self._records if r.id != record.id]
            self._records.append(record.model_copy())
            return record.model_copy()

    def count(self) -> int:
        with self._lock:
            return len(self._records)


class SqliteDiagnosticsRepository(DiagnosticsRepository):
    """Diagnostic store persisted in the ``diagnostics`` table."""

    def __init__(self, database: IncidentDatabase):
        self.database = database

    def find_by_incident_id(self, incident_id: str) -> List[DiagnosticRecord]:
        cursor = self.database.conn.execute(
            "SELECT * FROM diagnostics WHERE incident_id = ? ORDER BY rowid",
            (incident_id,)
        )
        return [
            DiagnosticRecord(
                id=row['id'],
                incident_id=row['incident_id'],
                source=row['source'],
                data=row['data'],
                timestamp=parse_instant(row['timestamp']),
            )
            for row in cursor.fetchall()
        ]

    def save(self, record: DiagnosticRecord) -> DiagnosticRecord:
        conn = self.database.conn
        conn.execute("""
            INSERT OR REPLACE INTO diagnostics (id, incident_id, source, data, timestamp)
            VALUES (?, ?, ?, ?, ?)
        """, (
            record.id,
            record.incident_id,
            record.source,
            record.data,
            format_instant(record.timestamp),
        ))
        conn.commit()
        return record.model_copy()

    def count(self) -> int:
        return self.database.conn.execute("SELECT COUNT(*) FROM diagnostics").fetchone()[0]
