"""Flask routes for incidents and their diagnostics."""

import logging

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from dependencies import get_container
from errors import InvalidRequestError
from models import DiagnosticRequest, IncidentRequest

logger = logging.getLogger(__name__)

incidents_bp = Blueprint('incidents', __name__, url_prefix='/incidents')


def _read_payload(model_cls):
    """Parse the JSON request body into a Pydantic model.

    Raises:
        InvalidRequestError: If the body is not a JSON object or fails validation
    """
    if not request.is_json:
        raise InvalidRequestError("Content-Type must be application/json")

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequestError("Invalid JSON format")

    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidRequestError(f"Invalid request: {errors}") from e


@incidents_bp.route('', methods=['GET'])
def list_incidents():
    """List every incident."""
    incidents = get_container().get_incident_service().list_incidents()
    logger.debug(f"Listing {len(incidents)} incidents")
    return jsonify([incident.to_json() for incident in incidents])


@incidents_bp.route('/<incident_id>', methods=['GET'])
def get_incident(incident_id):
    """Get a single incident."""
    incident = get_container().get_incident_service().get_incident(incident_id)
    return jsonify(incident.to_json())


@incidents_bp.route('', methods=['POST'])
def create_incident():
    """Create an incident from the request body."""
    payload = _read_payload(IncidentRequest)
    incident = get_container().get_incident_service().create_incident(payload)
    return jsonify(incident.to_json())


@incidents_bp.route('/<incident_id>', methods=['PUT'])
def update_incident(incident_id):
    """Replace the user-supplied fields of an incident."""
    payload = _read_payload(IncidentRequest)
    incident = get_container().get_incident_service().update_incident(incident_id, payload)
    return jsonify(incident.to_json())


@incidents_bp.route('/<incident_id>', methods=['DELETE'])
def delete_incident(incident_id):
    """Delete an incident; always answers 204."""
    get_container().get_incident_service().delete_incident(incident_id)
    return '', 204


@incidents_bp.route('/<incident_id>/diagnostics', methods=['GET'])
def list_diagnostics(incident_id):
    """List the diagnostics recorded for an incident."""
    records = get_container().get_diagnostics_service().get_diagnostics_by_incident(incident_id)
    return jsonify([record.model_dump(by_alias=True, mode='json') for record in records])


@incidents_bp.route('/<incident_id>/diagnostics', methods=['POST'])
def create_diagnostic(incident_id):
    """Attach a diagnostic record to an incident."""
    payload = _read_payload(DiagnosticRequest)
    record = get_container().get_diagnostics_service().save_diagnostic(incident_id, payload)
    return jsonify(record.model_dump(by_alias=True, mode='json'))
