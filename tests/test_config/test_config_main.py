"""Tests for the Config aggregate."""

from pathlib import Path

import pytest

from sshfs_monitor.config import Config, HostsFileParser, Settings
from sshfs_monitor.errors import HostsFileError


def make_config(hosts_file: Path, tmp_path: Path) -> Config:
    settings = Settings(hosts_file=str(hosts_file), mount_base=str(tmp_path))
    return Config(settings=settings, parser=HostsFileParser(hosts_file, tmp_path))


def test_get_hosts_caches(tmp_path: Path) -> None:
    """Hosts are parsed once and served from cache afterwards."""
    hosts_file = tmp_path / "hosts.txt"
    hosts_file.write_text("10.0.0.1\n")
    config = make_config(hosts_file, tmp_path)

    first = config.get_hosts()
    hosts_file.write_text("10.0.0.1\n10.0.0.2\n")

    assert config.get_hosts() == first


def test_reload_picks_up_changes(tmp_path: Path) -> None:
    hosts_file = tmp_path / "hosts.txt"
    hosts_file.write_text("10.0.0.1\n")
    config = make_config(hosts_file, tmp_path)
    config.get_hosts()

    hosts_file.write_text("10.0.0.1\n10.0.0.2\n")

    assert len(config.reload_hosts()) == 2


def test_reload_failure_keeps_cache(tmp_path: Path) -> None:
    """A broken hosts file during a reload keeps the previous registry."""
    hosts_file = tmp_path / "hosts.txt"
    hosts_file.write_text("10.0.0.1\n")
    config = make_config(hosts_file, tmp_path)
    config.get_hosts()

    hosts_file.unlink()

    assert [h.address for h in config.reload_hosts()] == ["10.0.0.1"]


def test_reload_failure_without_cache_raises(tmp_path: Path) -> None:
    config = make_config(tmp_path / "missing.txt", tmp_path)

    with pytest.raises(HostsFileError):
        config.reload_hosts()


def test_delegates_to_settings(tmp_path: Path) -> None:
    config = make_config(tmp_path / "hosts.txt", tmp_path)

    assert config.hosts_file == str(tmp_path / "hosts.txt")
    assert config.check_interval == 30
    assert config.watch_interval == 3
    assert config.log_file == "/var/log/sshfs-monitor.log"
    assert config.pid_file == "/var/run/sshfs-monitor.pid"
    assert config.stop_grace == config.settings.cycle_timeout + 5.0
