"""
Data models for the incident tracker.

This package contains the incident entity, its enumerations and the Pydantic
request/response models used at the HTTP boundary.
"""

from .severity import Severity
from .incident_status import IncidentStatus
from .error_type import ErrorType
from .incident import Incident
from .incident_request import IncidentRequest
from .incident_response import IncidentResponse
from .diagnostic_record import DiagnosticRecord
from .diagnostic_request import DiagnosticRequest

__all__ = [
    'Severity',
    'IncidentStatus',
    'ErrorType',
    'Incident',
    'IncidentRequest',
    'IncidentResponse',
    'DiagnosticRecord',
    'DiagnosticRequest',
]
