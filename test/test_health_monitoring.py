"""Unit tests for health monitoring system."""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from dependencies import get_container
from health_monitoring.checks.base_check import BaseHealthCheck
from health_monitoring.checks.repository_check import RepositoryHealthCheck
from health_monitoring.checks.system_check import SystemHealthCheck
from health_monitoring.health_manager import HealthCheckManager
from health_monitoring.models import HealthResult, HealthStatus
from incident_repository import IncidentRepository, InMemoryIncidentRepository


def make_config(**overrides):
    values = {'health_cache_timeout': 30, 'health_check_enabled': True}
    values.update(overrides)
    return SimpleNamespace(**values)


class StaticCheck(BaseHealthCheck):
    """Check returning a fixed status and counting invocations."""

    def __init__(self, name, status):
        super().__init__(name, timeout=1.0)
        self.status = status
        self.calls = 0

    async def check(self):
        self.calls += 1
        return HealthResult(name=self.name, status=self.status, message=self.status.value)


class TestHealthResult:

    def test_to_dict(self):
        result = HealthResult(
            name='storage',
            status=HealthStatus.HEALTHY,
            message='All good',
            details={'incident_count': 5}
        )

        data = result.to_dict()

        assert data['status'] == 'healthy'
        assert data['details'] == {'incident_count': 5}
        assert data['timestamp'].endswith('Z')
        assert result.is_healthy is True

    def test_from_error(self):
        result = HealthResult.from_error('storage', ValueError('boom'))

        assert result.is_unhealthy is True
        assert result.details['error_type'] == 'ValueError'


class TestRepositoryHealthCheck:

    @pytest.mark.asyncio
    async def test_healthy_repository(self):
        repository = InMemoryIncidentRepository()
        check = RepositoryHealthCheck(lambda: repository)

        result = await check.run_with_timeout()

        assert result.status == HealthStatus.HEALTHY
        assert result.details['backend'] == 'memory'
        assert result.details['incident_count'] == 0

    @pytest.mark.asyncio
    async def test_failing_repository(self):
        repository = Mock(spec=IncidentRepository)
        repository.count.side_effect = OSError('disk I/O error')
        check = RepositoryHealthCheck(lambda: repository)

        result = await check.run_with_timeout()

        assert result.status == HealthStatus.UNHEALTHY
        assert 'disk I/O error' in result.message


class TestSystemHealthCheck:

    @pytest.mark.asyncio
    async def test_high_cpu_is_degraded(self):
        with patch('health_monitoring.checks.system_check.psutil') as mock_psutil:
            mock_psutil.cpu_percent.return_value = 95.0
            mock_psutil.cpu_count.return_value = 4
            mock_psutil.virtual_memory.return_value = SimpleNamespace(total=8 * 1024**3, available=4 * 1024**3, percent=50.0)
            mock_psutil.disk_usage.return_value = SimpleNamespace(total=100, free=50)
            mock_psutil.Process.return_value.memory_info.return_value = SimpleNamespace(rss=100 * 1024**2)

            result = await SystemHealthCheck().check()

        assert result.status == HealthStatus.DEGRADED
        assert 'CPU' in result.message


class TestHealthCheckManager:

    @pytest.mark.asyncio
    async def test_overall_status(self):
        manager = HealthCheckManager(make_config(), Mock(), checks=[
            StaticCheck('a', HealthStatus.HEALTHY),
            StaticCheck('b', HealthStatus.DEGRADED),
        ])

        results = await manager.run_checks()

        assert set(results) == {'a', 'b'}
        assert manager.get_overall_status(results) == HealthStatus.DEGRADED

    def test_unhealthy_wins(self):
        manager = HealthCheckManager(make_config(), Mock(), checks=[])
        results = {
            'a': HealthResult('a', HealthStatus.DEGRADED, 'slow'),
            'b': HealthResult('b', HealthStatus.UNHEALTHY, 'down'),
        }

        assert manager.get_overall_status(results) == HealthStatus.UNHEALTHY
        assert manager.get_overall_status({}) == HealthStatus.UNHEALTHY

    @pytest.mark.asyncio
    async def test_results_are_cached(self):
        check = StaticCheck('a', HealthStatus.HEALTHY)
        manager = HealthCheckManager(make_config(), Mock(), checks=[check])

        await manager.run_checks()
        await manager.run_checks()
        assert check.calls == 1

        manager.cache_ttl = timedelta(seconds=-1)
        await manager.run_checks()
        assert check.calls == 2

    @pytest.mark.asyncio
    async def test_filter_by_name(self):
        manager = HealthCheckManager(make_config(), Mock(), checks=[
            StaticCheck('a', HealthStatus.HEALTHY),
            StaticCheck('b', HealthStatus.HEALTHY),
        ])

        results = await manager.run_checks(['b'])

        assert list(results) == ['b']

    @pytest.mark.asyncio
    async def test_disabled(self):
        manager = HealthCheckManager(make_config(health_check_enabled=False), Mock())

        results = await manager.run_checks()

        assert manager.checks == []
        assert results['health_monitoring'].status == HealthStatus.DEGRADED

    def test_default_checks(self):
        manager = HealthCheckManager(make_config(), Mock())
        assert [c.name for c in manager.checks] == ['storage', 'system']


class TestHealthEndpoints:

    def test_ready(self, client):
        response = client.get('/health/ready')

        assert response.status_code == 200
        assert response.get_json()['status'] in ('ready', 'ready_degraded')

    def test_not_ready_when_storage_fails(self, client):
        repository = Mock(spec=IncidentRepository)
        repository.count.side_effect = RuntimeError('database is locked')
        get_container().set_incident_repository(repository)

        response = client.get('/health/ready')

        assert response.status_code == 503
        data = response.get_json()
        assert data['status'] == 'not_ready'
        assert 'storage' in data['failed_checks']

    def test_deep(self, client):
        client.post('/incidents', json={'title': 'Counted'})

        response = client.get('/health/deep')

        assert response.status_code == 200
        checks = response.get_json()['checks']
        assert checks['storage']['details']['incident_count'] == 1
        assert 'system' in checks
