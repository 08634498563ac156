"""
Incident service for the incident tracker API.

Maps between the request/response models and the stored Incident entity and
applies the lifecycle defaults: generated ids, OPEN status on creation, and
created/updated timestamps.
"""

import logging
import uuid
from typing import Callable, List, Optional
from datetime import datetime

from errors import IncidentNotFoundError
from incident_repository import IncidentRepository
from models import Incident, IncidentRequest, IncidentResponse, IncidentStatus
from time_utils import utc_now

logger = logging.getLogger(__name__)


class IncidentService:
    """CRUD operations on incidents backed by an IncidentRepository."""

    def __init__(self, repository: IncidentRepository, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the incident service.

        Args:
            repository: Storage backend for incidents
            clock: Callable returning the current UTC instant (defaults to utc_now)
        """
        self.repository = repository
        self.clock = clock or utc_now

    def list_incidents(self) -> List[IncidentResponse]:
        """
        Get every incident in storage order.

        Returns:
            List of incidents (empty when nothing is stored)
        """
        return [self.to_response(incident) for incident in self.repository.find_all()]

    def get_incident(self, incident_id: str) -> IncidentResponse:
        """
        Get a single incident.

        Raises:
            IncidentNotFoundError: If no incident has this id
        """
        return self.to_response(self._require(incident_id))

    def create_incident(self, request: IncidentRequest) -> IncidentResponse:
        """
        Create a new incident from user-supplied fields.

        The id, status and timestamps are always system-assigned. Both
        timestamps come from a single clock reading so they are identical.
        """
        now = self.clock()
        incident = Incident(
            id=str(uuid.uuid4()),
            status=IncidentStatus.OPEN,
            created_at=now,
            updated_at=now,
            **self._user_fields(request),
        )

        incident = self.repository.save(incident)
        logger.info(
            f"Created incident {incident.id} "
            f"(severity={incident.severity.value if incident.severity else None}, "
            f"service={incident.service_name})"
        )
        return self.to_response(incident)

    def update_incident(self, incident_id: str, request: IncidentRequest) -> IncidentResponse:
        """
        Replace the user-supplied fields of an incident.

        Missing fields in the request overwrite the stored values with null.
        The id, status and creation time are preserved.

        Raises:
            IncidentNotFoundError: If no incident has this id
        """
        existing = self._require(incident_id)

        # Never move updated_at backwards, even if the clock does
        updated_at = max(self.clock(), existing.updated_at, existing.created_at)
        incident = existing.model_copy(update={**self._user_fields(request), 'updated_at': updated_at})

        incident = self.repository.save(incident)
        logger.info(f"Updated incident {incident.id}")
        return self.to_response(incident)

    def delete_incident(self, incident_id: str) -> None:
        """Delete an incident. Deleting an unknown id is a no-op."""
        removed = self.repository.delete_by_id(incident_id)
        if removed:
            logger.info(f"Deleted incident {incident_id}")
        else:
            logger.debug(f"Delete requested for unknown incident {incident_id}")

    def exists(self, incident_id: str) -> bool:
        return self.repository.find_by_id(incident_id) is not None

    @staticmethod
    def to_response(incident: Incident) -> IncidentResponse:
        """Copy every field of a stored incident into the response model."""
        return IncidentResponse(
            id=incident.id,
            title=incident.title,
            description=incident.description,
            severity=incident.severity,
            status=incident.status,
            created_at=incident.created_at,
            updated_at=incident.updated_at,
            service_name=incident.service_name,
            error_type=incident.error_type,
            correlation_id=incident.correlation_id,
        )

    def _require(self, incident_id: str) -> Incident:
        incident = self.repository.find_by_id(incident_id)
        if incident is None:
            logger.debug(f"Incident {incident_id} not found")
            raise IncidentNotFoundError(incident_id)
        return incident

    @staticmethod
    def _user_fields(request: IncidentRequest) -> dict:
        return {
            'title': request.title,
            'description': request.description,
            'severity': request.severity,
            'service_name': request.service_name,
            'error_type': request.error_type,
            'correlation_id': request.correlation_id,
        }
