"""Model for incidents returned by the API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .error_type import ErrorType
from .incident_status import IncidentStatus
from .severity import Severity


class IncidentResponse(BaseModel):
    """Outgoing incident shape, serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique identifier")
    title: Optional[str] = Field(default=None, description="Short incident summary")
    description: Optional[str] = Field(default=None, description="Detailed incident description")
    severity: Optional[Severity] = Field(default=None, description="Business impact ranking")
    status: IncidentStatus = Field(..., description="Lifecycle stage")
    created_at: datetime = Field(..., description="Creation instant (UTC)")
    updated_at: datetime = Field(..., description="Last modification instant (UTC)")
    service_name: Optional[str] = Field(default=None, description="Affected service")
    error_type: Optional[ErrorType] = Field(default=None, description="Cause classification")
    correlation_id: Optional[str] = Field(default=None, description="Cross-service tracing id")

    def to_json(self) -> dict:
        """Convert to a JSON-ready dictionary, keeping null fields."""
        return self.model_dump(by_alias=True, mode="json")
