"""Model for incident create/update payloads."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .error_type import ErrorType
from .severity import Severity


class IncidentRequest(BaseModel):
    """
    User-supplied incident fields.

    Used for both POST and PUT. Every field is optional because PUT replaces
    the stored values wholesale: a missing field becomes null. Keys such as
    ``id``, ``status`` or timestamps are ignored.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: Optional[str] = Field(default=None, description="Short incident summary")
    description: Optional[str] = Field(default=None, description="Detailed incident description")
    severity: Optional[Severity] = Field(default=None, description="Business impact ranking")
    service_name: Optional[str] = Field(default=None, description="Affected service")
    error_type: Optional[ErrorType] = Field(default=None, description="Cause classification")
    correlation_id: Optional[str] = Field(default=None, description="Cross-service tracing id")
