"""Diagnostics service: diagnostic records attached to existing incidents."""

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from diagnostics_repository import DiagnosticsRepository
from errors import IncidentNotFoundError
from incident_service import IncidentService
from models import DiagnosticRecord, DiagnosticRequest
from time_utils import utc_now

logger = logging.getLogger(__name__)


class DiagnosticsService:
    """Store and look up diagnostics for an incident."""

    def __init__(self, repository: DiagnosticsRepository, incident_service: IncidentService,
                 clock: Optional[Callable[[], datetime]] = None):
        self.repository = repository
        self.incident_service = incident_service
        self.clock = clock or utc_now

    def get_diagnostics_by_incident(self, incident_id: str) -> List[DiagnosticRecord]:
        """
        Get the diagnostics recorded for an incident, oldest first.

        Raises:
            IncidentNotFoundError: If the incident does not exist
        """
        self._check_incident(incident_id)
        return self.repository.find_by_incident_id(incident_id)

    def save_diagnostic(self, incident_id: str, request: DiagnosticRequest) -> DiagnosticRecord:
        """
        Record a diagnostic payload against an incident.

        Raises:
            IncidentNotFoundError: If the incident does not exist
        """
        self._check_incident(incident_id)
        record = DiagnosticRecord(
            id=str(uuid.uuid4()),
            incident_id=incident_id,
            source=request.source,
            data=request.data,
            timestamp=self.clock(),
        )
        record = self.repository.save(record)
        logger.info(f"Saved diagnostic {record.id} for incident {incident_id} (source={record.source})")
        return record

    def _check_incident(self, incident_id: str):
        if not self.incident_service.exists(incident_id):
            raise IncidentNotFoundError(incident_id)
