"""Typed application errors translated to HTTP responses by error_handlers."""


class ApiException(Exception):
    """Application error carrying the HTTP status code it should produce."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class IncidentNotFoundError(ApiException):
    """Raised when an incident id does not resolve to a stored incident."""

    def __init__(self, incident_id: str):
        super().__init__(f"Incident not found: {incident_id}", 404)
        self.incident_id = incident_id


class InvalidRequestError(ApiException):
    """Raised when a request body cannot be turned into a valid payload."""

    def __init__(self, message: str):
        super().__init__(message, 400)
