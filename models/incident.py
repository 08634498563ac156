"""Model for a stored incident."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .error_type import ErrorType
from .incident_status import IncidentStatus
from .severity import Severity


class Incident(BaseModel):
    """Canonical representation of an incident as held by a repository."""
    id: str = Field(..., description="System-generated unique identifier")
    title: Optional[str] = Field(default=None, description="Short incident summary")
    description: Optional[str] = Field(default=None, description="Detailed incident description")
    severity: Optional[Severity] = Field(default=None, description="Business impact ranking")
    status: IncidentStatus = Field(default=IncidentStatus.OPEN, description="Lifecycle stage")
    created_at: datetime = Field(..., description="When the incident was created (UTC)")
    updated_at: datetime = Field(..., description="When the incident was last modified (UTC)")
    service_name: Optional[str] = Field(default=None, description="Affected service")
    error_type: Optional[ErrorType] = Field(default=None, description="Cause classification")
    correlation_id: Optional[str] = Field(default=None, description="Cross-service tracing id")
