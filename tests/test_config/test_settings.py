"""Tests for environment settings."""

import os

import pytest

from sshfs_monitor.config.settings import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove any SSHFS_* variables leaking in from the test environment."""
    for key in list(os.environ):
        if key.startswith("SSHFS_"):
            monkeypatch.delenv(key)


def test_defaults() -> None:
    settings = Settings.from_env()

    assert settings.hosts_file == "./sshfs_hosts.txt"
    assert settings.mount_base == "/root"
    assert settings.probe_timeout == 3
    assert settings.probe_method == "icmp"
    assert settings.check_interval == 30
    assert settings.watch_interval == 3
    assert settings.enrich is True
    assert settings.known_hosts is None
    assert settings.log_file == "/var/log/sshfs-monitor.log"
    assert settings.pid_file == "/var/run/sshfs-monitor.pid"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSHFS_HOSTS_FILE", "/etc/sshfs/hosts")
    monkeypatch.setenv("SSHFS_CHECK_INTERVAL", "60")
    monkeypatch.setenv("SSHFS_SETTLE_DELAY", "0.5")
    monkeypatch.setenv("SSHFS_PROBE_METHOD", "TCP")
    monkeypatch.setenv("SSHFS_LOG_LEVEL", "debug")

    settings = Settings.from_env()

    assert settings.hosts_file == "/etc/sshfs/hosts"
    assert settings.check_interval == 60
    assert settings.settle_delay == 0.5
    assert settings.probe_method == "tcp"
    assert settings.log_level == "DEBUG"


def test_invalid_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    """Invalid numeric values log a warning and use the default."""
    monkeypatch.setenv("SSHFS_CHECK_INTERVAL", "soon")
    monkeypatch.setenv("SSHFS_MOUNT_TIMEOUT", "forever")

    settings = Settings.from_env()

    assert settings.check_interval == 30
    assert settings.mount_timeout == 30.0


def test_unknown_probe_method_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSHFS_PROBE_METHOD", "carrier-pigeon")

    assert Settings.from_env().probe_method == "icmp"


@pytest.mark.parametrize(
    ("value", "expected"),
    [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("off", False)],
)
def test_bool_parsing(monkeypatch: pytest.MonkeyPatch, value: str, expected: bool) -> None:
    monkeypatch.setenv("SSHFS_ENRICH", value)

    assert Settings.from_env().enrich is expected


def test_empty_known_hosts_means_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SSHFS_KNOWN_HOSTS", "")

    assert Settings.from_env().known_hosts is None


def test_cycle_timeout_sums_every_bound() -> None:
    settings = Settings(
        probe_timeout=1,
        inspect_timeout=1.0,
        unmount_timeout=2.0,
        mount_timeout=4.0,
        settle_delay=0.5,
        ssh_connect_timeout=1.0,
        ssh_command_timeout=1.0,
    )

    # probe 1 + classify 2 + broken check 1 + recovery 3 * 5.5
    # + final inspect 2 + directory and sshfs 8 + enrichment 5
    assert settings.cycle_timeout == 35.5


def test_default_cycle_timeout_covers_mount_and_recovery() -> None:
    settings = Settings()

    assert settings.cycle_timeout > settings.mount_timeout + 3 * settings.unmount_timeout
