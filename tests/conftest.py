from datetime import datetime

import pytest

from svclogger.core.config import SnapshotConfig
from svclogger.core.errors import QueryError
from svclogger.core.logger import SnapshotLogger
from svclogger.core.models import ServiceRecord, ServiceStatus


class FakeProvider:
    """Fournisseur d'inventaire en mémoire"""

    def __init__(self, records=None, error=None):
        self.records = list(records or [])
        self.error = error
        self.calls = 0

    def list_services(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.records)


@pytest.fixture
def snapshot_logger(request):
    """Provide a logger isolated per test."""
    return SnapshotLogger(name=f"svclogger-test-{request.node.name}")


@pytest.fixture
def log_path(tmp_path):
    """Provide a log path whose parent directories do not exist yet."""
    return str(tmp_path / "logs" / "nested" / "StoppedServices.log")


@pytest.fixture
def make_config(tmp_path):
    """Provide a factory of configurations that never read system files."""
    def _make(log_path, buffer_size=100):
        config = SnapshotConfig(str(tmp_path / "absent.ini"))
        config.set('inventory', 'log_path', log_path)
        config.set('inventory', 'buffer_size', buffer_size)
        return config
    return _make


@pytest.fixture
def run_time():
    return datetime(2026, 10, 19, 8, 15, 2, 123456)


@pytest.fixture
def mixed_inventory():
    return [
        ServiceRecord("Alpha", "Alpha Svc", ServiceStatus.STOPPED),
        ServiceRecord("Zeta", "Zeta Svc", ServiceStatus.STOPPED),
        ServiceRecord("Beta", "Beta Svc", ServiceStatus.RUNNING),
    ]


@pytest.fixture
def fake_provider_factory():
    return FakeProvider


@pytest.fixture
def query_error():
    return QueryError("Accès refusé au gestionnaire de services")
