"""Configuration module for sshfs-monitor.

Provides focused classes for different configuration concerns:
- Config: Main configuration class (aggregates all components)
- HostsFileParser: Parses the sshfs hosts file
- Settings: Environment variable configuration
"""

from sshfs_monitor.config.main import Config
from sshfs_monitor.config.parser import HostsFileParser
from sshfs_monitor.config.settings import Settings

__all__ = ["Config", "HostsFileParser", "Settings"]
