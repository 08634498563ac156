"""
Tests for the Flask application (app.py)

Tests cover:
- Incident CRUD endpoints
- Diagnostics endpoints
- Error translation (404, 400, 500)
- Health endpoint
- Shipped configuration and optional middleware
"""

from unittest.mock import Mock

import pytest

from conftest import build_production_app
from dependencies import get_container
from error_handlers import INTERNAL_ERROR_MESSAGE
from incident_repository import IncidentRepository


def create(client, payload):
    response = client.post('/incidents', json=payload)
    assert response.status_code == 200
    return response.get_json()


class TestHealth:

    def test_health_returns_ok(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_data(as_text=True) == 'OK'


class TestIncidentEndpoints:

    def test_list_empty(self, client):
        response = client.get('/incidents')
        assert response.status_code == 200
        assert response.get_json() == []

    def test_create_incident(self, client, payment_incident_payload):
        data = create(client, payment_incident_payload)

        assert data['id']
        assert data['status'] == 'OPEN'
        assert data['createdAt'] == data['updatedAt']
        assert data['createdAt'].endswith('Z')
        for key, value in payment_incident_payload.items():
            assert data[key] == value

    def test_create_then_get_round_trip(self, client, payment_incident_payload):
        created = create(client, payment_incident_payload)

        response = client.get(f"/incidents/{created['id']}")

        assert response.status_code == 200
        fetched = response.get_json()
        assert fetched == created
        assert fetched['status'] == 'OPEN'
        assert fetched['createdAt'] == fetched['updatedAt']

    def test_create_ignores_system_fields(self, client):
        data = create(client, {'id': 'mine', 'status': 'RESOLVED', 'title': 'Latency spike'})

        assert data['id'] != 'mine'
        assert data['status'] == 'OPEN'

    def test_null_fields_serialize_as_null(self, client):
        data = create(client, {'title': 'Unclassified failure'})

        assert data['correlationId'] is None
        assert data['errorType'] is None
        assert 'severity' in data

    def test_get_unknown_returns_404(self, client):
        response = client.get('/incidents/does-not-exist')

        assert response.status_code == 404
        assert response.mimetype == 'text/plain'
        assert response.get_data(as_text=True) == 'Incident not found: does-not-exist'

    def test_list_contains_created_incidents(self, client):
        a = create(client, {'title': 'A', 'severity': 'LOW', 'errorType': 'CONFIGURATION'})
        b = create(client, {'title': 'B', 'severity': 'HIGH', 'errorType': 'RESOURCE'})

        listed = {item['id']: item for item in client.get('/incidents').get_json()}

        assert listed == {a['id']: a, b['id']: b}

    def test_update_incident(self, client, payment_incident_payload):
        created = create(client, payment_incident_payload)

        response = client.put(f"/incidents/{created['id']}", json={
            'title': 'Payment API recovering',
            'description': 'Error rate falling',
            'severity': 'HIGH',
            'serviceName': 'payment-processor',
            'errorType': 'APPLICATION'
        })

        assert response.status_code == 200
        updated = response.get_json()
        assert updated['id'] == created['id']
        assert updated['status'] == 'OPEN'
        assert updated['createdAt'] == created['createdAt']
        assert updated['updatedAt'] >= created['updatedAt']
        assert updated['title'] == 'Payment API recovering'
        assert updated['severity'] == 'HIGH'
        assert updated['errorType'] == 'APPLICATION'
        assert updated['correlationId'] is None

    def test_update_unknown_returns_404(self, client, payment_incident_payload):
        response = client.put('/incidents/does-not-exist', json=payment_incident_payload)
        assert response.status_code == 404

    def test_delete_incident(self, client, payment_incident_payload):
        created = create(client, payment_incident_payload)

        response = client.delete(f"/incidents/{created['id']}")

        assert response.status_code == 204
        assert response.get_data() == b''
        assert client.get(f"/incidents/{created['id']}").status_code == 404

    def test_delete_unknown_returns_204(self, client):
        response = client.delete('/incidents/does-not-exist')
        assert response.status_code == 204


class TestRequestValidation:

    def test_invalid_enum_returns_400(self, client):
        response = client.post('/incidents', json={'title': 'x', 'severity': 'SEVERE'})

        assert response.status_code == 400
        assert 'severity' in response.get_data(as_text=True)

    def test_non_json_body_returns_400(self, client):
        response = client.post('/incidents', data='title=x', content_type='text/plain')

        assert response.status_code == 400
        assert response.get_data(as_text=True) == 'Content-Type must be application/json'

    def test_json_array_body_returns_400(self, client):
        response = client.post('/incidents', json=[{'title': 'x'}])

        assert response.status_code == 400
        assert response.get_data(as_text=True) == 'Invalid JSON format'

    def test_invalid_update_leaves_incident_unchanged(self, client):
        created = create(client, {'title': 'Original', 'errorType': 'NETWORK'})

        response = client.put(f"/incidents/{created['id']}", json={'errorType': 'DNS'})

        assert response.status_code == 400
        assert client.get(f"/incidents/{created['id']}").get_json() == created


class TestErrorTranslation:

    @pytest.fixture
    def broken_repository(self):
        repository = Mock(spec=IncidentRepository)
        repository.find_all.side_effect = RuntimeError('connection string with password=hunter2')
        get_container().set_incident_repository(repository)
        return repository

    def test_unexpected_error_returns_generic_500(self, client, broken_repository):
        response = client.get('/incidents')

        assert response.status_code == 500
        body = response.get_data(as_text=True)
        assert body == INTERNAL_ERROR_MESSAGE
        assert 'hunter2' not in body

    def test_unexpected_error_is_logged(self, client, broken_repository, caplog):
        with caplog.at_level('ERROR', logger='error_handlers'):
            client.get('/incidents')

        assert any('hunter2' in record.getMessage() for record in caplog.records)

    def test_unknown_route_is_404(self, client):
        assert client.get('/no-such-route').status_code == 404

    def test_unsupported_method_is_405(self, client):
        assert client.patch('/incidents/abc', json={}).status_code == 405


class TestDiagnosticsEndpoints:

    def test_add_and_list_diagnostics(self, client):
        incident = create(client, {'title': 'Pod crash loop'})

        response = client.post(
            f"/incidents/{incident['id']}/diagnostics",
            json={'source': 'kubectl', 'data': 'OOMKilled'}
        )
        assert response.status_code == 200
        record = response.get_json()
        assert record['incidentId'] == incident['id']
        assert record['source'] == 'kubectl'

        listed = client.get(f"/incidents/{incident['id']}/diagnostics").get_json()
        assert listed == [record]

    def test_diagnostics_for_unknown_incident_returns_404(self, client):
        assert client.get('/incidents/does-not-exist/diagnostics').status_code == 404
        response = client.post('/incidents/does-not-exist/diagnostics', json={'source': 'x'})
        assert response.status_code == 404


class TestShippedConfiguration:
    """Route table served by an application built with testing mode off."""

    def test_incident_routes(self, production_client, payment_incident_payload):
        created = production_client.post('/incidents', json=payment_incident_payload)
        assert created.status_code == 200
        incident_id = created.get_json()['id']

        assert production_client.get('/incidents').status_code == 200
        assert production_client.get(f'/incidents/{incident_id}').status_code == 200

        updated = production_client.put(f'/incidents/{incident_id}', json={'title': 'Payment API degraded'})
        assert updated.status_code == 200
        assert updated.get_json()['title'] == 'Payment API degraded'

        deleted = production_client.delete(f'/incidents/{incident_id}')
        assert deleted.status_code == 204
        assert deleted.get_data() == b''
        assert production_client.get(f'/incidents/{incident_id}').status_code == 404

    def test_health_returns_ok(self, production_client):
        response = production_client.get('/health')

        assert response.status_code == 200
        assert response.get_data(as_text=True) == 'OK'

    def test_no_rate_limit_by_default(self, production_client):
        codes = {production_client.get('/incidents').status_code for _ in range(105)}

        assert codes == {200}


class TestOptionalMiddleware:
    """Rate limiting and HTTPS redirection when switched on explicitly."""

    @pytest.fixture(autouse=True)
    def _in_tmp_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

    def test_https_redirect_spares_health(self):
        client = build_production_app(https_enabled=True).test_client()

        health = client.get('/health')
        incidents = client.get('/incidents')

        assert health.status_code == 200
        assert health.get_data(as_text=True) == 'OK'
        assert incidents.status_code == 302
        assert incidents.headers['Location'].startswith('https://')

    def test_rate_limit_applies_to_incidents_only(self):
        client = build_production_app(rate_limit_enabled=True, rate_limit_default='2 per minute').test_client()

        codes = [client.get('/incidents').status_code for _ in range(3)]
        health_codes = {client.get('/health').status_code for _ in range(5)}

        assert codes == [200, 200, 429]
        assert health_codes == {200}
