"""Model for diagnostic data attached to an incident."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiagnosticRecord(BaseModel):
    """A diagnostic payload that references (but is not owned by) an incident."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="System-generated unique identifier")
    incident_id: str = Field(..., description="Referenced incident")
    source: Optional[str] = Field(default=None, description="Where the data came from")
    data: Optional[str] = Field(default=None, description="Opaque diagnostic payload")
    timestamp: datetime = Field(..., description="When the record was captured (UTC)")
