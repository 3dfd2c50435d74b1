import subprocess

import psutil
import pytest

from svclogger.collectors import base
from svclogger.collectors.platform import get_service_provider
from svclogger.collectors.platform.linux import LinuxServiceProvider
from svclogger.collectors.platform.macos import MacOSServiceProvider
from svclogger.collectors.platform.windows import WindowsServiceProvider
from svclogger.core.errors import QueryError
from svclogger.core.models import ServiceRecord, ServiceStatus

SYSTEMCTL_OUTPUT = """\
cron.service                 loaded    active   running Regular background program processing daemon
cups.service                 loaded    inactive dead    CUPS Scheduler
● apparmor.service           loaded    failed   failed  Load AppArmor profiles
nfs-server.service           not-found inactive dead    nfs-server.service
networkd-dispatcher.service  loaded    activating start Dispatcher daemon for systemd-networkd
ssh.service                  loaded    deactivating stop-sigterm OpenBSD Secure Shell server
bare.service                 loaded    inactive dead
dbus.socket                  loaded    active   running D-Bus System Message Bus Socket
"""

UNIT_FILES_OUTPUT = """\
cron.service                 enabled  enabled
cups.service                 enabled  enabled
rsync.service                disabled enabled
getty@.service               enabled  enabled
sshd.service                 alias    -
dbus.socket                  static   -
"""

LAUNCHCTL_OUTPUT = (
    "PID\tStatus\tLabel\n"
    "412\t0\tcom.apple.Finder\n"
    "-\t0\tcom.apple.backupd\n"
    "-\t78\tcom.example.broken\n"
)


class FakeWindowsService:
    def __init__(self, name, display_name, status):
        self._name = name
        self._display_name = display_name
        self._status = status

    def name(self):
        return self._name

    def display_name(self):
        return self._display_name

    def status(self):
        return self._status


@pytest.fixture
def linux_provider(snapshot_logger):
    return LinuxServiceProvider(snapshot_logger)


@pytest.fixture
def windows_provider(snapshot_logger):
    return WindowsServiceProvider(snapshot_logger)


def systemctl_outputs(units, unit_files=""):
    """Return a fake command runner answering each systemctl sub-command."""
    def _execute(command):
        return unit_files if command[1] == "list-unit-files" else units
    return _execute


def test_linux_provider_maps_systemd_states(linux_provider, monkeypatch):
    """Doit convertir la colonne ACTIVE de systemctl en ServiceStatus."""
    monkeypatch.setattr(linux_provider, "_execute_command", systemctl_outputs(SYSTEMCTL_OUTPUT))

    records = linux_provider.list_services()

    assert records == [
        ServiceRecord("cron", "Regular background program processing daemon", ServiceStatus.RUNNING),
        ServiceRecord("cups", "CUPS Scheduler", ServiceStatus.STOPPED),
        ServiceRecord("apparmor", "Load AppArmor profiles", ServiceStatus.STOPPED),
        ServiceRecord("networkd-dispatcher", "Dispatcher daemon for systemd-networkd", ServiceStatus.START_PENDING),
        ServiceRecord("ssh", "OpenBSD Secure Shell server", ServiceStatus.STOP_PENDING),
        ServiceRecord("bare", "bare", ServiceStatus.STOPPED),
    ]


def test_linux_provider_adds_unloaded_unit_files_as_stopped(linux_provider, monkeypatch):
    """Doit ajouter comme arrêtés les fichiers d'unité installés mais non chargés."""
    monkeypatch.setattr(
        linux_provider, "_execute_command",
        systemctl_outputs(SYSTEMCTL_OUTPUT, UNIT_FILES_OUTPUT)
    )

    records = linux_provider.list_services()
    by_name = {record.name: record for record in records}

    assert by_name["rsync"] == ServiceRecord("rsync", "rsync", ServiceStatus.STOPPED)
    assert by_name["cron"].status is ServiceStatus.RUNNING
    assert by_name["cups"].display_name == "CUPS Scheduler"
    assert "getty@" not in by_name
    assert "sshd" not in by_name
    assert len(records) == len(by_name) == 7


def test_linux_provider_queries_all_service_units(linux_provider, monkeypatch):
    commands = []

    def fake_execute(command):
        commands.append(command)
        return ""

    monkeypatch.setattr(linux_provider, "_execute_command", fake_execute)

    assert linux_provider.list_services() == []
    assert linux_provider.list_services() == []
    assert [command[1] for command in commands] == ["list-units", "list-unit-files"] * 2
    assert "--all" in commands[0] and "--type=service" in commands[0]
    assert "--type=service" in commands[1]


def test_linux_provider_rejects_unknown_state(linux_provider, monkeypatch):
    """Doit échouer avec QueryError sur un état inconnu."""
    monkeypatch.setattr(
        linux_provider, "_execute_command",
        systemctl_outputs("odd.service loaded hibernating zzz Odd service\n")
    )

    with pytest.raises(QueryError, match="hibernating"):
        linux_provider.list_services()


def test_execute_command_missing_binary_raises_query_error(linux_provider, monkeypatch):
    def missing(*args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "systemctl")

    monkeypatch.setattr(base.subprocess, "run", missing)

    with pytest.raises(QueryError):
        linux_provider.list_services()


def test_execute_command_non_zero_exit_raises_query_error(linux_provider, monkeypatch):
    monkeypatch.setattr(
        base.subprocess, "run",
        lambda command, **kwargs: subprocess.CompletedProcess(command, 1, "", "Access denied")
    )

    with pytest.raises(QueryError, match="Access denied"):
        linux_provider.list_services()


def test_execute_command_timeout_raises_query_error(linux_provider, monkeypatch):
    def too_slow(command, **kwargs):
        raise subprocess.TimeoutExpired(command, kwargs.get("timeout"))

    monkeypatch.setattr(base.subprocess, "run", too_slow)

    with pytest.raises(QueryError, match="Timeout"):
        linux_provider.list_services()


def test_execute_command_returns_stdout(linux_provider, monkeypatch):
    def fake_run(command, **kwargs):
        stdout = UNIT_FILES_OUTPUT if command[1] == "list-unit-files" else SYSTEMCTL_OUTPUT
        return subprocess.CompletedProcess(command, 0, stdout, "")

    monkeypatch.setattr(base.subprocess, "run", fake_run)

    assert len(linux_provider.list_services()) == 7


def test_windows_provider_maps_psutil_states(windows_provider, monkeypatch):
    services = [
        FakeWindowsService("Spooler", "Print Spooler", "stopped"),
        FakeWindowsService("wuauserv", "Windows Update", "running"),
        FakeWindowsService("BITS", "Background Intelligent Transfer", "start_pending"),
        FakeWindowsService("Themes", "Themes", "pause_pending"),
        FakeWindowsService("Fax", "Fax", "paused"),
    ]
    monkeypatch.setattr(psutil, "win_service_iter", lambda: iter(services), raising=False)

    records = windows_provider.list_services()

    assert [r.status for r in records] == [
        ServiceStatus.STOPPED,
        ServiceStatus.RUNNING,
        ServiceStatus.START_PENDING,
        ServiceStatus.UNKNOWN,
        ServiceStatus.PAUSED,
    ]
    assert records[0] == ServiceRecord("Spooler", "Print Spooler", ServiceStatus.STOPPED)


def test_windows_provider_rejects_unknown_state(windows_provider, monkeypatch):
    monkeypatch.setattr(
        psutil, "win_service_iter",
        lambda: iter([FakeWindowsService("Odd", "Odd", "exploded")]),
        raising=False
    )

    with pytest.raises(QueryError):
        windows_provider.list_services()


def test_windows_provider_access_denied_raises_query_error(windows_provider, monkeypatch):
    def denied():
        raise psutil.AccessDenied()

    monkeypatch.setattr(psutil, "win_service_iter", denied, raising=False)

    with pytest.raises(QueryError, match="Accès refusé"):
        windows_provider.list_services()


def test_windows_provider_unavailable_off_windows(windows_provider, monkeypatch):
    """Doit échouer immédiatement si l'API Windows est absente."""
    monkeypatch.delattr(psutil, "win_service_iter", raising=False)

    with pytest.raises(QueryError):
        windows_provider.list_services()


def test_macos_provider_uses_pid_for_state(snapshot_logger, monkeypatch):
    provider = MacOSServiceProvider(snapshot_logger)
    monkeypatch.setattr(provider, "_execute_command", lambda command: LAUNCHCTL_OUTPUT)

    assert provider.list_services() == [
        ServiceRecord("com.apple.Finder", "com.apple.Finder", ServiceStatus.RUNNING),
        ServiceRecord("com.apple.backupd", "com.apple.backupd", ServiceStatus.STOPPED),
        ServiceRecord("com.example.broken", "com.example.broken", ServiceStatus.STOPPED),
    ]


@pytest.mark.parametrize("platform, expected", [
    ("win32", WindowsServiceProvider),
    ("linux", LinuxServiceProvider),
    ("darwin", MacOSServiceProvider),
])
def test_get_service_provider_by_platform(snapshot_logger, platform, expected):
    assert isinstance(get_service_provider(snapshot_logger, platform), expected)


def test_get_service_provider_unsupported_platform(snapshot_logger):
    with pytest.raises(QueryError, match="sunos5"):
        get_service_provider(snapshot_logger, "sunos5")
