"""Model for the categorical cause of an incident."""

from enum import Enum


class ErrorType(str, Enum):
    """Cause classification used for triage routing."""
    NETWORK = "NETWORK"
    APPLICATION = "APPLICATION"
    CONFIGURATION = "CONFIGURATION"
    RESOURCE = "RESOURCE"
