"""Model for incident severity."""

from enum import Enum


class Severity(str, Enum):
    """
    How serious an incident is in terms of business and user impact.

    Priority order: CRITICAL > HIGH > MEDIUM > LOW

    - CRITICAL: Service completely down, revenue impact
    - HIGH: Major functionality broken, significant user impact
    - MEDIUM: Performance issues, some users affected
    - LOW: Minor problems, monitoring alerts only
    """
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        """Numeric rank, higher is more severe."""
        return _SEVERITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}
