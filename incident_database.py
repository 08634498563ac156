"""
SQLite database for incident and diagnostic records.

This module owns the connection handling and schema for the SQLite storage
backend. The repository classes in incident_repository and
diagnostics_repository build their queries on top of it.
"""

import sqlite3
import logging
import threading

logger = logging.getLogger(__name__)


class IncidentDatabase:
    """
    SQLite database holding the ``incidents`` and ``diagnostics`` tables.

    Connections are thread-local so the database can be shared by the Flask
    worker threads. Timestamps are stored as ISO-8601 UTC text.
    """

    def __init__(self, db_path: str = "incidents.db"):
        """
        Initialize the database and create the schema if needed.

        Args:
            db_path: Path to SQLite database file (created if it doesn't exist)
        """
        self.db_path = db_path
        self._local = threading.local()
        self._connections = []
        self._connections_lock = threading.Lock()
        logger.info(f"Initializing incident database: {db_path}")
        self.connect()

    @property
    def conn(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if getattr(self._local, 'connection', None) is None:
            self._local.connection = sqlite3.connect(self.db_path, check_same_thread=False)
            self._local.connection.row_factory = sqlite3.Row
            with self._connections_lock:
                self._connections.append(self._local.connection)
            logger.debug(f"Created new database connection for thread {threading.current_thread().ident}")
        return self._local.connection

    def connect(self):
        """Open database connection and create schema if needed."""
        _ = self.conn
        self._create_schema()

    def close(self):
        """Close database connection for current thread."""
        if getattr(self._local, 'connection', None) is not None:
            connection = self._local.connection
            with self._connections_lock:
                if connection in self._connections:
                    self._connections.remove(connection)
            connection.close()
            self._local.connection = None
            logger.debug(f"Database connection closed for thread {threading.current_thread().ident}")

    def close_all(self):
        """Close the connections opened by every thread.

        Any thread that queries afterwards opens a fresh connection.
        """
        with self._connections_lock:
            connections, self._connections = self._connections, []
        for connection in connections:
            connection.close()
        self._local = threading.local()
        logger.debug(f"Closed {len(connections)} database connection(s)")

    def _create_schema(self):
        """Create the tables and indexes used by the repositories."""
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS incidents (
                id TEXT PRIMARY KEY,
                title TEXT,
                description TEXT,
                severity TEXT,
                status TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                service_name TEXT,
                error_type TEXT,
                correlation_id TEXT
            )
        """)

        # No foreign key: diagnostics reference incidents but are not deleted with them
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS diagnostics (
                id TEXT PRIMARY KEY,
                incident_id TEXT NOT NULL,
                source TEXT,
                data TEXT,
                timestamp TEXT NOT NULL
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_diagnostics_incident
            ON diagnostics(incident_id)
        """)

        self.conn.commit()
        logger.info("Incident database schema created/verified")
