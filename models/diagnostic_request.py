"""Model for a diagnostic submission."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiagnosticRequest(BaseModel):
    """Incoming diagnostic payload."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    source: Optional[str] = Field(default=None, description="Where the data came from")
    data: Optional[str] = Field(default=None, description="Opaque diagnostic payload")
