"""Model for incident lifecycle status."""

from enum import Enum


class IncidentStatus(str, Enum):
    """
    Lifecycle stage of an incident.

    OPEN -> INVESTIGATING -> MITIGATED -> RESOLVED

    Every incident starts as OPEN. Updates through the API never change the
    status.
    """
    OPEN = "OPEN"
    INVESTIGATING = "INVESTIGATING"
    MITIGATED = "MITIGATED"
    RESOLVED = "RESOLVED"

    @property
    def stage(self) -> int:
        """Position in the lifecycle, starting at 0 for OPEN."""
        return _LIFECYCLE.index(self)

    @property
    def is_terminal(self) -> bool:
        return self is IncidentStatus.RESOLVED


_LIFECYCLE = (
    IncidentStatus.OPEN,
    IncidentStatus.INVESTIGATING,
    IncidentStatus.MITIGATED,
    IncidentStatus.RESOLVED,
)
